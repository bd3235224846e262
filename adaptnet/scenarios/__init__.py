"""Network scenarios and the baseline-vs-adaptation comparison."""

from .catalog import PREDEFINED_SCENARIOS, Scenario, ScenarioCatalog

__all__ = [
    "PREDEFINED_SCENARIOS",
    "Scenario",
    "ScenarioCatalog",
]
