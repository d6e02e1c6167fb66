"""Meter registry and meter implementations."""

from .meters import Counter, DistributionSummary, Gauge, Meter, Timer, TimerSample
from .models import MeterId, MeterType
from .registry import MeterRegistry

__all__ = [
    "Counter",
    "DistributionSummary",
    "Gauge",
    "Meter",
    "Timer",
    "TimerSample",
    "MeterId",
    "MeterType",
    "MeterRegistry",
]
