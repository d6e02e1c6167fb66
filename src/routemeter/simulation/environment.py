"""Simulation environment wrapper around SimPy."""

import logging
from typing import Any, Callable, Dict

import simpy

from ..core.clock import SimulationClock

logger = logging.getLogger(__name__)


class SimulationEnvironment:
    """Wrapper around simpy.Environment that also provides the simulated clock.

    Meters created against ``clock`` see simulated time, so durations recorded
    while exchanges wait on ``env.timeout`` are exact.
    """

    def __init__(self, config: Dict[str, Any]) -> None:
        """Initialize the simulation environment.

        Args:
            config: Simulation-specific configuration containing:
                - max_simulation_time: Maximum duration in simulated seconds
                - random_seed (optional): Random seed for reproducibility
        """
        self.env: simpy.Environment = simpy.Environment()
        self.config: Dict[str, Any] = config
        self.clock = SimulationClock(self.env)
        self.active_processes: list = []

        logger.info("SimulationEnvironment initialized")

    def schedule_process(self, process_generator_func: Callable, *args, **kwargs) -> simpy.Process:
        """Schedule a SimPy process (a generator function)."""
        process = self.env.process(process_generator_func(*args, **kwargs))
        self.active_processes.append(process)
        logger.debug(f"Scheduled process: {process_generator_func.__name__}")
        return process

    def run(self) -> None:
        """Run until max_simulation_time is reached or no more events are scheduled."""
        max_simulation_time = self.config.get("max_simulation_time", float("inf"))

        logger.info(f"Starting simulation (max time: {max_simulation_time}s)")

        try:
            self.env.run(until=max_simulation_time)
            logger.info(f"Simulation completed successfully at time {self.env.now}")
        except Exception as e:
            logger.error(f"Error during simulation at time {self.env.now}: {e}")
            raise
        finally:
            logger.info(f"Simulation ended at time {self.env.now}")

    def now(self) -> float:
        return self.env.now
