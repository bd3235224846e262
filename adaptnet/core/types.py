"""Core type aliases for the simulation."""

from typing import NewType, TypeAlias

# Node identification - sequential integer assigned at topology build time
NodeId = NewType("NodeId", int)

# Stable index of a connection in the connection table
ConnectionHandle = NewType("ConnectionHandle", int)

# Unordered node pair, smaller id first
ConnectionKey: TypeAlias = tuple[NodeId, NodeId]
