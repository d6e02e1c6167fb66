"""Abstract base class for metric producers."""

import logging
from abc import ABC, abstractmethod
from typing import Any

from ..core.constants import HEADER_METRIC_NAME, HEADER_PREFIX
from ..core.exchange import Exchange
from ..naming.tags import TagBuilder, Tags

logger = logging.getLogger(__name__)


class AbstractMetricsProducer(ABC):
    """Turns one exchange passing an instrumented step into registry calls.

    Subclasses implement ``do_process`` for a single meter type. ``process``
    resolves the metric name (the RouteMeterName header overrides the
    endpoint's name) and the tag set, then clears every RouteMeter* header
    so per-message overrides apply to exactly one step.
    """

    def __init__(self, endpoint: Any):
        """Initialize the producer.

        Args:
            endpoint: MetricsEndpoint carrying the static configuration and
                the meter registry
        """
        self.endpoint = endpoint
        self.tag_builder = TagBuilder(endpoint.tags, endpoint.header_tags)

    @property
    def registry(self):
        return self.endpoint.registry

    def process(self, exchange: Exchange) -> None:
        message = exchange.message
        name = message.get_header(HEADER_METRIC_NAME, self.endpoint.metric_name, as_type=str)
        metric_name = self.endpoint.resolve_name(name, exchange.from_route_id)
        tags = self.tag_builder.build(exchange)

        try:
            self.do_process(exchange, metric_name, tags)
        finally:
            message.remove_headers(HEADER_PREFIX)

    @abstractmethod
    def do_process(self, exchange: Exchange, metric_name: str, tags: Tags) -> None:
        """Apply this producer's meter operation for one exchange."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.endpoint.metric_name})"
