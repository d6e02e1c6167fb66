"""Counter producer: applies increment/decrement deltas to a named counter."""

import logging
from typing import Optional

from ..core.constants import HEADER_COUNTER_DECREMENT, HEADER_COUNTER_INCREMENT
from ..core.exchange import Exchange
from ..naming.tags import Tags
from .base import AbstractMetricsProducer

logger = logging.getLogger(__name__)


class CounterProducer(AbstractMetricsProducer):
    """Updates a counter from static deltas or per-message header overrides."""

    def do_process(self, exchange: Exchange, metric_name: str, tags: Tags) -> None:
        message = exchange.message
        self.emit(
            metric_name,
            tags,
            self.endpoint.increment,
            self.endpoint.decrement,
            message.get_header(HEADER_COUNTER_INCREMENT, as_type=float),
            message.get_header(HEADER_COUNTER_DECREMENT, as_type=float),
        )

    def emit(
        self,
        metric_name: str,
        tags: Tags,
        static_increment: Optional[float],
        static_decrement: Optional[float],
        message_increment: Optional[float] = None,
        message_decrement: Optional[float] = None,
    ) -> None:
        """Apply the effective increment, then the effective decrement.

        A message value replaces the matching static value. When neither an
        increment nor a decrement is in effect the registry is not touched.
        """
        increment = message_increment if message_increment is not None else static_increment
        decrement = message_decrement if message_decrement is not None else static_decrement
        if increment is None and decrement is None:
            return

        counter = self.registry.counter(metric_name, tags)
        if increment is not None:
            counter.increment(increment)
        if decrement is not None:
            counter.decrement(decrement)
        logger.debug(f"Counter {metric_name}: +{increment} -{decrement}")
