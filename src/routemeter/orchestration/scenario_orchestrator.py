"""Scenario orchestrator wiring registry, route policies and simulated routes."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..core.errors import ConfigurationError
from ..registry import MeterRegistry
from ..routepolicy import RoutePolicyFactory
from ..simulation import (
    DistributionSampler,
    RouteDefinition,
    RouteSimulator,
    RouteStep,
    SimulationEnvironment,
)
from ..utils.config_validator import ScenarioConfigValidator

logger = logging.getLogger(__name__)


class ScenarioOrchestrator:
    """Main entry point to set up and run an instrumentation scenario."""

    def __init__(self, config_data: Dict[str, Any]):
        """Initialize the orchestrator with scenario configuration.

        Args:
            config_data: Complete scenario configuration dictionary
        """
        self.config = config_data
        self._validate_config()

        # Component instances (initialized in setup_simulation)
        self.sim_env_wrapper: Optional[SimulationEnvironment] = None
        self.meter_registry: Optional[MeterRegistry] = None
        self.policy_factory: Optional[RoutePolicyFactory] = None
        self.route_simulators: List[RouteSimulator] = []

        logger.info("ScenarioOrchestrator initialized")

    def _validate_config(self) -> None:
        is_valid, errors = ScenarioConfigValidator.validate(self.config)
        if not is_valid:
            raise ConfigurationError(f"Invalid scenario configuration: {'; '.join(errors)}")
        logger.info("Configuration validated successfully")

    def setup_simulation(self) -> None:
        """Initialize all simulation components."""
        logger.info("Setting up simulation components...")

        simulation_config = self.config["simulation"]
        self.sim_env_wrapper = SimulationEnvironment(simulation_config)

        self.meter_registry = MeterRegistry(
            clock=self.sim_env_wrapper.clock,
            config=self.config.get("metrics_config", {}),
        )
        self.policy_factory = RoutePolicyFactory.from_config(
            self.config.get("route_policy", {}), self.meter_registry
        )

        sampler = DistributionSampler(simulation_config.get("random_seed"))
        self.route_simulators = []
        for route_config in self.config["routes"]:
            route = self._parse_route(route_config)
            simulator = RouteSimulator(
                self.sim_env_wrapper.env,
                route,
                self.policy_factory.create_route_policy(route.route_id),
                self.meter_registry,
                sampler,
            )
            self.route_simulators.append(simulator)

        logger.info("Simulation setup complete")

    def _parse_route(self, route_config: Dict[str, Any]) -> RouteDefinition:
        steps = [
            RouteStep(
                delay_dist_config=step.get("delay"),
                metric_config=step.get("metric"),
                headers=step.get("headers", {}),
            )
            for step in route_config.get("steps", [])
        ]
        return RouteDefinition(
            route_id=route_config["route_id"],
            steps=steps,
            inter_arrival_time_dist_config=route_config["inter_arrival_time_dist_config"],
            failure_probability=route_config.get("failure_probability", 0.0),
            total_exchanges=route_config.get("total_exchanges"),
        )

    def run(self) -> Dict[str, Any]:
        """Run the complete scenario.

        Returns:
            Summary report dictionary
        """
        if self.sim_env_wrapper is None:
            self.setup_simulation()

        logger.info("=" * 60)
        logger.info("STARTING SCENARIO")
        logger.info("=" * 60)

        generation_duration = self.config["simulation"].get("generation_duration", float("inf"))
        for simulator in self.route_simulators:
            self.sim_env_wrapper.schedule_process(
                simulator.generate_exchanges_process, generation_duration
            )

        self.sim_env_wrapper.run()

        for simulator in self.route_simulators:
            simulator.policy.on_route_stop()

        summary_report = self.generate_summary_report()
        self._save_outputs(summary_report)

        logger.info("=" * 60)
        logger.info("SCENARIO COMPLETED")
        logger.info("=" * 60)

        return summary_report

    def generate_summary_report(self) -> Dict[str, Any]:
        metrics_config = self.config.get("metrics_config", {})
        routes = {sim.route.route_id: sim.summary() for sim in self.route_simulators}

        summary = {
            "simulation": {"duration_s": self.sim_env_wrapper.now()},
            "exchanges": {
                "generated": sum(r["generated"] for r in routes.values()),
                "completed": sum(r["completed"] for r in routes.values()),
                "failed": sum(r["failed"] for r in routes.values()),
            },
            "routes": routes,
            "meters": self.meter_registry.summary_report(
                metrics_config.get("percentiles_to_calculate"),
                self.policy_factory.duration_unit,
            ),
        }

        logger.info(
            f"Exchanges: {summary['exchanges']['generated']} generated, "
            f"{summary['exchanges']['completed']} completed, "
            f"{summary['exchanges']['failed']} failed"
        )
        return summary

    def _save_outputs(self, summary_report: Dict[str, Any]) -> None:
        metrics_config = self.config.get("metrics_config", {})

        summary_path = metrics_config.get("output_summary_json_path")
        if summary_path:
            summary_file = Path(summary_path)
            summary_file.parent.mkdir(parents=True, exist_ok=True)
            with open(summary_file, "w") as f:
                json.dump(
                    summary_report, f, indent=2 if self.policy_factory.pretty_print else None
                )
            logger.info(f"Saved summary report to {summary_file}")

        csv_path = metrics_config.get("output_meters_csv_path")
        if csv_path:
            csv_file = Path(csv_path)
            csv_file.parent.mkdir(parents=True, exist_ok=True)
            df = self.meter_registry.to_dataframe(self.policy_factory.duration_unit)
            df.to_csv(csv_file, index=False)
            logger.info(f"Saved meter snapshot to {csv_file}")

    @classmethod
    def from_yaml_file(cls, config_path: str) -> "ScenarioOrchestrator":
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f)

        return cls(config_data)

    @classmethod
    def from_json_file(cls, config_path: str) -> "ScenarioOrchestrator":
        with open(config_path, "r") as f:
            config_data = json.load(f)

        return cls(config_data)
