"""Timer producer: correlates start and stop events on an exchange.

Each (exchange, metric name) pair is either idle (no sample stored) or
running (a TimerSample stored under ``timer:<metric name>``). A start always
replaces the stored sample; a stop without a stored sample does nothing.
Re-entrant or out-of-order flows therefore never raise from here.

The slot is keyed by metric name only: two tag sets sharing one metric name
share one in-flight sample.
"""

import logging
from typing import Any, Optional

from ..core.constants import HEADER_TIMER_ACTION, PROPERTY_SEPARATOR, TIMER_PROPERTY_PREFIX
from ..core.exchange import Exchange
from ..naming.tags import Tags
from ..registry.meters import TimerSample
from .base import AbstractMetricsProducer
from .models import TimerAction, resolve_timer_action

logger = logging.getLogger(__name__)


class TimerProducer(AbstractMetricsProducer):
    """Starts or stops a timer depending on the effective action."""

    def do_process(self, exchange: Exchange, metric_name: str, tags: Tags) -> None:
        self.handle(
            exchange,
            metric_name,
            tags,
            self.endpoint.action,
            exchange.message.get_header(HEADER_TIMER_ACTION),
        )

    def handle(
        self,
        exchange: Exchange,
        metric_name: str,
        tags: Tags,
        static_action: Any,
        message_action: Any = None,
    ) -> Optional[float]:
        """Run one step of the start/stop state machine.

        Returns:
            The recorded duration in seconds when a running sample was
            stopped, otherwise None
        """
        action = resolve_timer_action(static_action, message_action)

        if action is TimerAction.START:
            self._handle_start(exchange, metric_name)
        elif action is TimerAction.STOP:
            return self._handle_stop(exchange, metric_name, tags)
        else:
            logger.warning(f'No action provided for timer "{metric_name}"')
        return None

    def _handle_start(self, exchange: Exchange, metric_name: str) -> None:
        property_name = self.get_property_name(metric_name)
        if self.get_timer_sample_from_exchange(exchange, property_name) is not None:
            logger.debug(f"Restarting timer {metric_name} on {exchange}")
        exchange.set_property(property_name, TimerSample.start(self.registry.clock))

    def _handle_stop(self, exchange: Exchange, metric_name: str, tags: Tags) -> Optional[float]:
        property_name = self.get_property_name(metric_name)
        sample = self.get_timer_sample_from_exchange(exchange, property_name)
        if sample is None:
            logger.debug(f"Timer {metric_name} stopped on {exchange} without a start")
            return None

        timer = self.registry.timer(metric_name, tags)
        elapsed = sample.stop(timer)
        exchange.remove_property(property_name)
        return elapsed

    @staticmethod
    def get_property_name(metric_name: str) -> str:
        return TIMER_PROPERTY_PREFIX + PROPERTY_SEPARATOR + metric_name

    @staticmethod
    def get_timer_sample_from_exchange(exchange: Exchange, property_name: str) -> Optional[TimerSample]:
        sample = exchange.get_property(property_name)
        return sample if isinstance(sample, TimerSample) else None
