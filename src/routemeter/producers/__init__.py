"""Metric producers invoked by instrumented route steps."""

from .base import AbstractMetricsProducer
from .counter import CounterProducer
from .models import TimerAction, resolve_timer_action
from .summary import DistributionSummaryProducer
from .timer import TimerProducer

__all__ = [
    "AbstractMetricsProducer",
    "CounterProducer",
    "DistributionSummaryProducer",
    "TimerAction",
    "TimerProducer",
    "resolve_timer_action",
]
