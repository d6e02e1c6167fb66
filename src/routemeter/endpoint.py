"""Static configuration of one instrumented route step."""

import logging
from typing import Any, Dict, Mapping, Optional

from .core.errors import ConfigurationError
from .naming.resolver import resolve_metric_name
from .producers import (
    AbstractMetricsProducer,
    CounterProducer,
    DistributionSummaryProducer,
    TimerAction,
    TimerProducer,
)
from .registry import MeterRegistry, MeterType

logger = logging.getLogger(__name__)

# Producer class mapping
PRODUCER_CLASS_MAP = {
    MeterType.COUNTER: CounterProducer,
    MeterType.TIMER: TimerProducer,
    MeterType.DISTRIBUTION_SUMMARY: DistributionSummaryProducer,
}


class MetricsEndpoint:
    """A metric type and name plus the static values its producer falls back on."""

    def __init__(
        self,
        metric_type: Any,
        metric_name: str,
        registry: MeterRegistry,
        tags: Optional[Mapping[str, Any]] = None,
        header_tags: Optional[Mapping[str, str]] = None,
        name_pattern: Optional[str] = None,
        prefix: Optional[str] = None,
        increment: Optional[float] = None,
        decrement: Optional[float] = None,
        value: Optional[float] = None,
        action: Any = None,
    ):
        """Initialize the endpoint.

        Args:
            metric_type: "counter", "timer" or "summary" (or a MeterType)
            metric_name: Metric name, used as the ``##name##`` token when a
                name pattern is set
            registry: Meter registry the producers write to
            tags: Static tags; None means no tags were configured
            header_tags: Tag key -> header name, read per message
            name_pattern: Optional naming pattern; without one the metric name
                is used verbatim
            prefix: Value of the ``##prefix##`` token
            increment: Static counter increment
            decrement: Static counter decrement
            value: Static summary value
            action: Static timer action ("start"/"stop")
        """
        try:
            self.metric_type = MeterType(metric_type)
        except ValueError:
            raise ConfigurationError(f"Unknown metric type: {metric_type}")
        if self.metric_type not in PRODUCER_CLASS_MAP:
            raise ConfigurationError(f"No producer available for metric type: {self.metric_type.value}")
        if not metric_name:
            raise ConfigurationError("Metric name must not be empty")

        self.metric_name = metric_name
        self.registry = registry
        self.tags = dict(tags) if tags is not None else None
        self.header_tags: Dict[str, str] = dict(header_tags or {})
        self.name_pattern = name_pattern
        self.prefix = prefix
        self.increment = increment
        self.decrement = decrement
        self.value = value
        self.action = TimerAction.parse(action)
        if action is not None and self.action is None:
            logger.warning(f"Unknown timer action {action!r} for {metric_name}, ignoring it")

    def resolve_name(self, name: str, route_id: Optional[str] = None) -> str:
        if self.name_pattern is None:
            return name
        return resolve_metric_name(
            self.name_pattern, self.prefix, name, route_id, self.metric_type.value
        )

    def create_producer(self) -> AbstractMetricsProducer:
        return PRODUCER_CLASS_MAP[self.metric_type](self)

    @classmethod
    def from_config(cls, config: Dict[str, Any], registry: MeterRegistry) -> "MetricsEndpoint":
        """Create an endpoint from a configuration dict.

        Expected keys: ``type`` and ``name``; optional ``tags``,
        ``header_tags``, ``name_pattern``, ``prefix``, ``increment``,
        ``decrement``, ``value`` and ``action``.
        """
        if "type" not in config or "name" not in config:
            raise ConfigurationError(f"Metric endpoint requires 'type' and 'name': {config}")

        return cls(
            metric_type=config["type"],
            metric_name=config["name"],
            registry=registry,
            tags=config.get("tags"),
            header_tags=config.get("header_tags"),
            name_pattern=config.get("name_pattern"),
            prefix=config.get("prefix"),
            increment=config.get("increment"),
            decrement=config.get("decrement"),
            value=config.get("value"),
            action=config.get("action"),
        )

    def __repr__(self) -> str:
        return f"MetricsEndpoint({self.metric_type.value}:{self.metric_name})"
