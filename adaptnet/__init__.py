"""Adaptive network protocol simulation."""

from adaptnet.config import ConfigurationError, SimulationConfig
from adaptnet.core.simulator import NetworkSimulation

__all__ = [
    "ConfigurationError",
    "NetworkSimulation",
    "SimulationConfig",
]
