"""Meter implementations held by the MeterRegistry."""

import logging
import threading
from typing import Callable, List

from ..core.clock import Clock
from .models import MeterId

logger = logging.getLogger(__name__)


class Meter:
    """Base class for all meters."""

    def __init__(self, meter_id: MeterId):
        self.id = meter_id
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.id.name}, {self.id.tags})"


class Counter(Meter):
    """Cumulative value that may be moved in either direction."""

    def __init__(self, meter_id: MeterId):
        super().__init__(meter_id)
        self._count = 0.0

    def increment(self, amount: float = 1.0) -> None:
        with self._lock:
            self._count += amount

    def decrement(self, amount: float = 1.0) -> None:
        self.increment(-amount)

    def count(self) -> float:
        return self._count


class Timer(Meter):
    """Records durations, in seconds."""

    def __init__(self, meter_id: MeterId):
        super().__init__(meter_id)
        self._durations: List[float] = []
        self._total = 0.0
        self._max = 0.0

    def record(self, duration_s: float) -> None:
        if duration_s < 0:
            logger.debug(f"Ignoring negative duration {duration_s} for timer {self.id.name}")
            return
        with self._lock:
            self._durations.append(duration_s)
            self._total += duration_s
            self._max = max(self._max, duration_s)

    def count(self) -> int:
        return len(self._durations)

    def total_time(self) -> float:
        return self._total

    def max(self) -> float:
        return self._max

    def durations(self) -> List[float]:
        """Copy of all recorded durations in seconds."""
        with self._lock:
            return list(self._durations)


class DistributionSummary(Meter):
    """Records the distribution of arbitrary sample values."""

    def __init__(self, meter_id: MeterId):
        super().__init__(meter_id)
        self._values: List[float] = []
        self._total = 0.0

    def record(self, value: float) -> None:
        with self._lock:
            self._values.append(value)
            self._total += value

    def count(self) -> int:
        return len(self._values)

    def total_amount(self) -> float:
        return self._total

    def values(self) -> List[float]:
        with self._lock:
            return list(self._values)


class Gauge(Meter):
    """Reports the current value of a supplier function when sampled."""

    def __init__(self, meter_id: MeterId, supplier: Callable[[], float]):
        super().__init__(meter_id)
        self.supplier = supplier

    def value(self) -> float:
        return float(self.supplier())


class TimerSample:
    """In-flight timing handle.

    Captures the start instant from a clock; ``stop`` records the elapsed
    time into a timer using the same clock.
    """

    __slots__ = ("clock", "start_time")

    def __init__(self, clock: Clock, start_time: float):
        self.clock = clock
        self.start_time = start_time

    @classmethod
    def start(cls, clock: Clock) -> "TimerSample":
        return cls(clock, clock.now())

    def stop(self, timer: Timer) -> float:
        """Record the elapsed time into ``timer`` and return it in seconds."""
        elapsed = self.clock.now() - self.start_time
        timer.record(elapsed)
        return elapsed

    def __repr__(self) -> str:
        return f"TimerSample(start_time={self.start_time})"


