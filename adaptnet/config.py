"""Simulation configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ConfigurationError(ValueError):
    """Raised when a simulation cannot be built from the given parameters."""


# 10 MB payload expressed in kilobits
DEFAULT_FILE_SIZE_KB = 10.0 * 1024.0 * 8.0


@dataclass(frozen=True)
class SimulationConfig:
    """Configuration for the adaptive network simulation."""

    # Network topology
    node_count: int = 100
    connection_density: float = 0.2  # fraction of all possible node pairs

    # Timing (seconds of wall clock)
    duration: float = 120.0  # split evenly between baseline and adaptation passes
    tick_interval: float = 0.1
    ticks_per_scenario: int | None = None  # overrides duration-based runs when set

    # Simulation parameters
    seed: int = 42
    enable_mobility: bool = True

    # Transfer time model
    file_size_kb: float = DEFAULT_FILE_SIZE_KB

    @classmethod
    def from_toml(cls, path: Path) -> SimulationConfig:
        import tomllib

        with path.open("rb") as f:
            data = tomllib.load(f)

        network = data.get("network", {})
        timing = data.get("timing", {})
        simulation = data.get("simulation", {})

        kwargs: dict[str, object] = {}
        for key in ("node_count", "connection_density"):
            if key in network:
                kwargs[key] = network[key]
        for key in ("duration", "tick_interval", "ticks_per_scenario"):
            if key in timing:
                kwargs[key] = timing[key]
        for key in ("seed", "enable_mobility", "file_size_kb"):
            if key in simulation:
                kwargs[key] = simulation[key]

        return cls(**kwargs)  # type: ignore[arg-type]


def validate_config(config: SimulationConfig) -> tuple[bool, list[str]]:
    errors: list[str] = []

    if config.node_count < 2:
        errors.append(f"node_count ({config.node_count}) < 2")

    if not 0.0 <= config.connection_density <= 1.0:
        errors.append(f"connection_density ({config.connection_density}) not in [0, 1]")

    if config.tick_interval <= 0:
        errors.append(f"tick_interval ({config.tick_interval}) <= 0")

    if config.duration < 0:
        errors.append(f"duration ({config.duration}) < 0")

    if config.ticks_per_scenario is not None and config.ticks_per_scenario < 0:
        errors.append(f"ticks_per_scenario ({config.ticks_per_scenario}) < 0")

    if config.file_size_kb <= 0:
        errors.append(f"file_size_kb ({config.file_size_kb}) <= 0")

    return (len(errors) == 0, errors)


def ensure_valid(config: SimulationConfig) -> None:
    """Raise ConfigurationError listing every problem with the config."""
    is_valid, errors = validate_config(config)
    if not is_valid:
        raise ConfigurationError("; ".join(errors))
