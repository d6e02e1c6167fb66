"""Configuration helpers."""

from .config_validator import (
    EndpointConfigValidator,
    RoutePolicyConfigValidator,
    ScenarioConfigValidator,
    load_config_file,
    validate_scenario_file,
)

__all__ = [
    "EndpointConfigValidator",
    "RoutePolicyConfigValidator",
    "ScenarioConfigValidator",
    "load_config_file",
    "validate_scenario_file",
]
