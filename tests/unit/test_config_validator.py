"""
Unit tests for configuration validation system.
"""

import json

import pytest
import yaml

from routemeter.utils.config_validator import (
    EndpointConfigValidator,
    RoutePolicyConfigValidator,
    ScenarioConfigValidator,
    load_config_file,
    validate_scenario_file,
)


def make_scenario():
    return {
        "simulation": {"max_simulation_time": 10},
        "routes": [
            {
                "route_id": "orders",
                "inter_arrival_time_dist_config": {"type": "Constant", "value": 1.0},
                "steps": [
                    {"metric": {"type": "timer", "name": "orders.timer", "action": "start"}},
                    {"delay": {"type": "Constant", "value": 0.5}},
                    {"metric": {"type": "timer", "name": "orders.timer", "action": "stop"}},
                ],
            }
        ],
    }


class TestEndpointConfigValidator:
    """Test metric endpoint validation."""

    def test_valid_counter(self):
        errors = EndpointConfigValidator.validate({"type": "counter", "name": "c", "increment": 1})
        assert errors == []

    def test_missing_type_and_name(self):
        errors = EndpointConfigValidator.validate({})
        assert len(errors) == 2

    def test_unknown_type(self):
        errors = EndpointConfigValidator.validate({"type": "gauge", "name": "g"})
        assert any("unknown metric type" in e for e in errors)

    def test_non_numeric_increment(self):
        errors = EndpointConfigValidator.validate({"type": "counter", "name": "c", "increment": "one"})
        assert any("increment must be a number" in e for e in errors)

    def test_invalid_action(self):
        errors = EndpointConfigValidator.validate({"type": "timer", "name": "t", "action": "pause"})
        assert any("invalid timer action" in e for e in errors)

    def test_tags_must_be_mapping(self):
        errors = EndpointConfigValidator.validate({"type": "counter", "name": "c", "tags": ["a"]})
        assert errors == ["endpoint: tags must be a mapping"]


class TestRoutePolicyConfigValidator:
    """Test route policy validation."""

    def test_empty_config_valid(self):
        assert RoutePolicyConfigValidator.validate({}) == []

    def test_unknown_duration_unit(self):
        errors = RoutePolicyConfigValidator.validate({"duration_unit": "fortnights"})
        assert len(errors) == 1

    def test_empty_name_pattern(self):
        errors = RoutePolicyConfigValidator.validate({"name_pattern": ""})
        assert errors == ["route_policy: name_pattern must be a non-empty string"]

    @pytest.mark.parametrize(
        "pattern,missing",
        [
            ("##prefix##.##name##.##routeId##", "##type##"),
            ("##prefix##.##routeId##.##type##", "##name##"),
        ],
    )
    def test_name_pattern_missing_token(self, pattern, missing):
        """Test that patterns which would merge route meters are rejected."""
        errors = RoutePolicyConfigValidator.validate({"name_pattern": pattern})
        assert len(errors) == 1
        assert missing in errors[0]

    def test_name_pattern_without_route_id_only_warns(self):
        assert RoutePolicyConfigValidator.validate({"name_pattern": "##name##.##type##"}) == []


class TestScenarioConfigValidator:
    """Test complete scenario validation."""

    def test_valid_scenario(self):
        is_valid, errors = ScenarioConfigValidator.validate(make_scenario())
        assert is_valid
        assert errors == []

    def test_missing_top_level(self):
        is_valid, errors = ScenarioConfigValidator.validate({"routes": []})
        assert not is_valid
        assert "Missing top-level fields" in errors[0]

    def test_no_routes(self):
        config = make_scenario()
        config["routes"] = []
        is_valid, errors = ScenarioConfigValidator.validate(config)
        assert not is_valid

    def test_duplicate_route_ids(self):
        config = make_scenario()
        config["routes"].append(dict(config["routes"][0]))
        is_valid, errors = ScenarioConfigValidator.validate(config)
        assert "Duplicate route_id: orders" in errors

    @pytest.mark.parametrize("probability", [-0.1, 1.5])
    def test_failure_probability_range(self, probability):
        config = make_scenario()
        config["routes"][0]["failure_probability"] = probability
        is_valid, _ = ScenarioConfigValidator.validate(config)
        assert not is_valid

    def test_unknown_distribution(self):
        config = make_scenario()
        config["routes"][0]["inter_arrival_time_dist_config"] = {"type": "Poisson"}
        is_valid, errors = ScenarioConfigValidator.validate(config)
        assert any("unknown distribution type" in e for e in errors)

    def test_zero_inter_arrival_without_bound(self):
        """Test that an unbounded route with zero inter-arrival time is rejected."""
        config = make_scenario()
        config["routes"][0]["inter_arrival_time_dist_config"] = {"type": "Constant", "value": 0.0}
        is_valid, errors = ScenarioConfigValidator.validate(config)
        assert not is_valid
        assert any("zero inter-arrival time" in e for e in errors)

    def test_zero_inter_arrival_with_bound(self):
        """Test that a bounded burst of simultaneous exchanges is allowed."""
        config = make_scenario()
        config["routes"][0]["inter_arrival_time_dist_config"] = {"type": "Constant", "value": 0.0}
        config["routes"][0]["total_exchanges"] = 3
        assert ScenarioConfigValidator.validate(config) == (True, [])

    def test_empty_step(self):
        config = make_scenario()
        config["routes"][0]["steps"].append({})
        is_valid, errors = ScenarioConfigValidator.validate(config)
        assert any("needs a delay or a metric" in e for e in errors)

    def test_step_endpoint_errors_reported(self):
        config = make_scenario()
        config["routes"][0]["steps"][0]["metric"]["type"] = "meter"
        is_valid, errors = ScenarioConfigValidator.validate(config)
        assert not is_valid
        assert errors[0].startswith("Route orders step 0")

    def test_invalid_simulation_time(self):
        config = make_scenario()
        config["simulation"]["max_simulation_time"] = 0
        is_valid, errors = ScenarioConfigValidator.validate(config)
        assert "Invalid max_simulation_time: 0" in errors


class TestConfigFiles:
    """Test loading scenario files."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "scenario.yaml"
        path.write_text(yaml.dump(make_scenario()))
        assert load_config_file(str(path)) == make_scenario()

    def test_load_json(self, tmp_path):
        path = tmp_path / "scenario.json"
        path.write_text(json.dumps(make_scenario()))
        assert load_config_file(str(path)) == make_scenario()

    def test_validate_scenario_file(self, tmp_path):
        config = make_scenario()
        del config["simulation"]
        path = tmp_path / "scenario.yaml"
        path.write_text(yaml.dump(config))

        is_valid, errors, loaded = validate_scenario_file(str(path))

        assert not is_valid
        assert loaded == config
