"""
Configuration validation for instrumentation scenarios.

This module provides validation for:
- Metric endpoint configurations
- Route policy configurations
- Route definitions
- Complete scenario configurations
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from ..core.units import DurationUnit
from ..naming.resolver import NAME_TOKEN, ROUTE_ID_TOKEN, TYPE_TOKEN
from ..producers.models import TimerAction
from ..registry.models import MeterType

logger = logging.getLogger(__name__)

SUPPORTED_METRIC_TYPES = {
    MeterType.COUNTER.value,
    MeterType.TIMER.value,
    MeterType.DISTRIBUTION_SUMMARY.value,
}
KNOWN_DISTRIBUTIONS = {"Constant", "Fixed", "Exponential", "Uniform", "Normal", "LogNormal", "Gamma"}


class EndpointConfigValidator:
    """Validates a metric endpoint configuration."""

    @classmethod
    def validate(cls, config: Dict[str, Any], location: str = "endpoint") -> List[str]:
        errors = []

        metric_type = config.get("type")
        if metric_type is None:
            errors.append(f"{location}: missing metric type")
        elif metric_type not in SUPPORTED_METRIC_TYPES:
            errors.append(
                f"{location}: unknown metric type '{metric_type}' "
                f"(must be one of {sorted(SUPPORTED_METRIC_TYPES)})"
            )

        if not config.get("name"):
            errors.append(f"{location}: missing metric name")

        for numeric in ("increment", "decrement", "value"):
            if numeric in config and not isinstance(config[numeric], (int, float)):
                errors.append(f"{location}: {numeric} must be a number, got {config[numeric]!r}")

        if "action" in config and TimerAction.parse(config["action"]) is None:
            errors.append(f"{location}: invalid timer action '{config['action']}' (must be start/stop)")
        if metric_type == MeterType.TIMER.value and "action" not in config:
            logger.warning(f"{location}: timer without a static action relies on message headers")

        for mapping in ("tags", "header_tags"):
            if mapping in config and not isinstance(config[mapping], dict):
                errors.append(f"{location}: {mapping} must be a mapping")

        return errors


class RoutePolicyConfigValidator:
    """Validates the route policy factory configuration."""

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> List[str]:
        errors = []

        if "duration_unit" in config:
            try:
                DurationUnit.parse(config["duration_unit"])
            except ValueError as e:
                errors.append(f"route_policy: {e}")

        pattern = config.get("name_pattern")
        if pattern is not None:
            if not isinstance(pattern, str) or not pattern:
                errors.append("route_policy: name_pattern must be a non-empty string")
            else:
                for token in (NAME_TOKEN, TYPE_TOKEN):
                    if token not in pattern:
                        errors.append(
                            f"route_policy: name_pattern must contain {token}, "
                            f"route meters would collide"
                        )
                if ROUTE_ID_TOKEN not in pattern:
                    logger.warning("route_policy: name_pattern has no ##routeId## token, routes will share meter names")

        if "tags" in config and not isinstance(config["tags"], dict):
            errors.append("route_policy: tags must be a mapping")

        return errors


class ScenarioConfigValidator:
    """Validates complete scenario configuration."""

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> Tuple[bool, List[str]]:
        all_errors = []

        required_top = {"simulation", "routes"}
        missing_top = required_top - set(config.keys())
        if missing_top:
            all_errors.append(f"Missing top-level fields: {missing_top}")
            return False, all_errors

        all_errors.extend(cls._validate_simulation(config["simulation"]))
        all_errors.extend(RoutePolicyConfigValidator.validate(config.get("route_policy", {})))

        routes = config["routes"]
        if not routes:
            all_errors.append("At least one route must be configured")

        route_ids = set()
        for i, route in enumerate(routes):
            route_id = route.get("route_id")
            if not route_id:
                all_errors.append(f"Route {i} missing route_id")
            elif route_id in route_ids:
                all_errors.append(f"Duplicate route_id: {route_id}")
            route_ids.add(route_id)
            all_errors.extend(cls._validate_route(route, route_id or str(i)))

        return len(all_errors) == 0, all_errors

    @classmethod
    def _validate_route(cls, route: Dict[str, Any], route_id: str) -> List[str]:
        errors = []

        arrival = route.get("inter_arrival_time_dist_config")
        if arrival is None:
            errors.append(f"Route {route_id} missing inter_arrival_time_dist_config")
        else:
            errors.extend(cls._validate_distribution(arrival, f"Route {route_id} arrivals"))
            if (
                arrival.get("type") in ("Constant", "Fixed")
                and arrival.get("value", 0.0) <= 0
                and route.get("total_exchanges") is None
            ):
                errors.append(
                    f"Route {route_id}: zero inter-arrival time needs total_exchanges, "
                    f"simulated time would never advance"
                )

        probability = route.get("failure_probability", 0.0)
        if not 0.0 <= probability <= 1.0:
            errors.append(f"Route {route_id}: failure_probability {probability} not in [0, 1]")

        for j, step in enumerate(route.get("steps", [])):
            location = f"Route {route_id} step {j}"
            if "delay" not in step and "metric" not in step:
                errors.append(f"{location}: needs a delay or a metric")
            if "delay" in step:
                errors.extend(cls._validate_distribution(step["delay"], location))
            if "metric" in step:
                errors.extend(EndpointConfigValidator.validate(step["metric"], location))

        return errors

    @classmethod
    def _validate_distribution(cls, dist: Dict[str, Any], location: str) -> List[str]:
        if "type" not in dist:
            return [f"{location}: distribution missing type"]
        if dist["type"] not in KNOWN_DISTRIBUTIONS:
            return [f"{location}: unknown distribution type '{dist['type']}'"]
        if dist["type"] == "Exponential" and dist.get("rate", 1.0) <= 0:
            return [f"{location}: Exponential rate must be positive"]
        return []

    @classmethod
    def _validate_simulation(cls, simulation: Dict[str, Any]) -> List[str]:
        errors = []

        if "max_simulation_time" not in simulation:
            errors.append("Simulation missing max_simulation_time")
        elif simulation["max_simulation_time"] <= 0:
            errors.append(f"Invalid max_simulation_time: {simulation['max_simulation_time']}")

        return errors


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Load a YAML or JSON scenario file into a dict."""
    config_file = Path(config_path)

    with open(config_file) as f:
        if config_file.suffix in [".yaml", ".yml"]:
            return yaml.safe_load(f)
        return json.load(f)


def validate_scenario_file(config_path: str) -> Tuple[bool, List[str], Optional[Dict[str, Any]]]:
    """
    Load and validate a scenario file.

    Returns:
        (is_valid, errors, config)
    """
    config = load_config_file(config_path)

    is_valid, errors = ScenarioConfigValidator.validate(config)

    if not is_valid:
        logger.warning(f"Configuration has {len(errors)} validation errors")
        for error in errors[:10]:
            logger.warning(f"  - {error}")
        if len(errors) > 10:
            logger.warning(f"  ... and {len(errors) - 10} more errors")

    return is_valid, errors, config
