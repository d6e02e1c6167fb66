"""Clock abstractions used to start and stop timer samples."""

import time
from abc import ABC, abstractmethod

import simpy


class Clock(ABC):
    """Source of monotonic time, in seconds."""

    @abstractmethod
    def now(self) -> float:
        """Get the current time in seconds."""
        pass


class SystemClock(Clock):
    """Wall clock backed by the high resolution performance counter."""

    def now(self) -> float:
        return time.perf_counter()


class SimulationClock(Clock):
    """Clock driven by a SimPy environment.

    Time only advances when the environment runs, which makes elapsed
    durations exact and reproducible in tests and simulations.
    """

    def __init__(self, simpy_env: simpy.Environment) -> None:
        self.simpy_env = simpy_env

    def now(self) -> float:
        return float(self.simpy_env.now)
