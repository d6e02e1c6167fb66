"""Route policy gathering per-route lifecycle and exchange metrics."""

import logging
import threading
from typing import Any, Mapping, Optional

from ..core.constants import (
    EXCHANGES_METRIC_NAME,
    PROPERTY_SEPARATOR,
    ROUTE_ID_TAG,
    ROUTE_PROPERTY_PREFIX,
    ROUTES_METRIC_NAME,
)
from ..core.errors import MeterRegistryError
from ..core.exchange import Exchange
from ..naming.resolver import NameResolver
from ..naming.tags import Tags
from ..registry import MeterRegistry, TimerSample

logger = logging.getLogger(__name__)


class InflightTracker:
    """Number of exchanges currently inside a route.

    Registered as the in-flight gauge supplier, so every policy created for
    the same route on the same registry shares one count.
    """

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> None:
        with self._lock:
            self._value += 1

    def decrement(self) -> bool:
        """Lower the count; returns False when it was already zero."""
        with self._lock:
            if self._value == 0:
                return False
            self._value -= 1
            return True

    def __call__(self) -> int:
        return self._value


class RoutePolicy:
    """Hooks called by the routing engine for a single route.

    Route start and stop each bump their own counter and are not paired.
    Every exchange entering the route raises the in-flight value and stores
    a TimerSample under ``route:<route id>``; leaving the route lowers it,
    counts the exchange, counts failures separately and records the elapsed
    time into the route timer.
    """

    def __init__(
        self,
        route_id: str,
        registry: MeterRegistry,
        name_resolver: NameResolver,
        tags: Optional[Mapping[str, Any]] = None,
    ):
        self.route_id = route_id
        self.registry = registry
        self.name_resolver = name_resolver
        self.tags = Tags(tags).and_({ROUTE_ID_TAG: route_id})

        self.routes_added_name = self._name(ROUTES_METRIC_NAME, "added")
        self.routes_removed_name = self._name(ROUTES_METRIC_NAME, "removed")
        self.inflight_name = self._name(EXCHANGES_METRIC_NAME, "inflight")
        self.total_name = self._name(EXCHANGES_METRIC_NAME, "total")
        self.failures_name = self._name(EXCHANGES_METRIC_NAME, "failures")
        self.timer_name = self._name(EXCHANGES_METRIC_NAME, "timer")

        gauge = self.registry.gauge(self.inflight_name, self.tags, InflightTracker())
        if not isinstance(gauge.supplier, InflightTracker):
            raise MeterRegistryError(
                f"Gauge {self.inflight_name} is already registered with a foreign supplier"
            )
        self._inflight: InflightTracker = gauge.supplier

        logger.debug(f"Created route policy for {route_id}")

    def _name(self, name: str, metric_type: str) -> str:
        return self.name_resolver.resolve(name, self.route_id, metric_type)

    def inflight(self) -> int:
        return self._inflight()

    def get_property_name(self) -> str:
        return ROUTE_PROPERTY_PREFIX + PROPERTY_SEPARATOR + self.route_id

    def on_route_start(self) -> None:
        self.registry.counter(self.routes_added_name, self.tags).increment()
        logger.info(f"Route {self.route_id} started")

    def on_route_stop(self) -> None:
        self.registry.counter(self.routes_removed_name, self.tags).increment()
        logger.info(f"Route {self.route_id} stopped")

    def on_exchange_begin(self, exchange: Exchange) -> None:
        self._inflight.increment()
        exchange.set_property(self.get_property_name(), TimerSample.start(self.registry.clock))

    def on_exchange_complete(self, exchange: Exchange) -> None:
        self._on_exchange_end(exchange, failed=False)

    def on_exchange_failed(self, exchange: Exchange) -> None:
        self._on_exchange_end(exchange, failed=True)

    def on_exchange_done(self, exchange: Exchange) -> None:
        self._on_exchange_end(exchange, failed=exchange.failed)

    def _on_exchange_end(self, exchange: Exchange, failed: bool) -> None:
        if not self._inflight.decrement():
            logger.debug(f"Exchange {exchange.exchange_id} left {self.route_id} without a begin")

        self.registry.counter(self.total_name, self.tags).increment()
        if failed:
            self.registry.counter(self.failures_name, self.tags).increment()

        sample = exchange.remove_property(self.get_property_name())
        if isinstance(sample, TimerSample):
            sample.stop(self.registry.timer(self.timer_name, self.tags))

    def __repr__(self) -> str:
        return f"RoutePolicy({self.route_id})"
