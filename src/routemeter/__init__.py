"""RouteMeter: metrics instrumentation for message-routing engines."""

from .core import Exchange, Message, SimulationClock, SystemClock
from .endpoint import MetricsEndpoint
from .naming import NameResolver, TagBuilder, Tags, resolve_metric_name
from .producers import CounterProducer, DistributionSummaryProducer, TimerAction, TimerProducer
from .registry import MeterRegistry
from .routepolicy import RoutePolicy, RoutePolicyFactory

__version__ = "0.1.0"

__all__ = [
    "Exchange",
    "Message",
    "SimulationClock",
    "SystemClock",
    "MetricsEndpoint",
    "NameResolver",
    "TagBuilder",
    "Tags",
    "resolve_metric_name",
    "CounterProducer",
    "DistributionSummaryProducer",
    "TimerAction",
    "TimerProducer",
    "MeterRegistry",
    "RoutePolicy",
    "RoutePolicyFactory",
]
