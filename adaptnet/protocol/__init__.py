"""Protocol synthesis engines and per-connection adaptation."""

from adaptnet.protocol.adaptation import ProtocolAdapter, transfer_time
from adaptnet.protocol.engine import (
    DynamicProtocolEngine,
    GeneratedProtocol,
    ProtocolEngine,
    ProtocolFamily,
)
from adaptnet.protocol.models import PhysicsModel, default_physics_models

__all__ = [
    "DynamicProtocolEngine",
    "GeneratedProtocol",
    "PhysicsModel",
    "ProtocolAdapter",
    "ProtocolEngine",
    "ProtocolFamily",
    "default_physics_models",
    "transfer_time",
]
