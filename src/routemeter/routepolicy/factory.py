"""Factory creating a metrics route policy for each route."""

import logging
import threading
from typing import Any, Dict, Mapping, Optional, Union

from ..core.constants import DEFAULT_NAME_PATTERN, HEADER_PREFIX
from ..core.units import DurationUnit
from ..naming.resolver import NameResolver
from ..registry import MeterRegistry
from .policy import RoutePolicy

logger = logging.getLogger(__name__)

_shared_registry: Optional[MeterRegistry] = None
_shared_registry_lock = threading.Lock()


def get_shared_registry() -> MeterRegistry:
    """Registry used by factories that were not given one."""
    global _shared_registry
    with _shared_registry_lock:
        if _shared_registry is None:
            _shared_registry = MeterRegistry()
            logger.info("Created shared MeterRegistry")
        return _shared_registry


class RoutePolicyFactory:
    """Creates RoutePolicy instances sharing one registry and naming setup.

    ``pretty_print`` and ``duration_unit`` only affect how the registry is
    exported (see ``export_json``), never what is recorded.
    """

    def __init__(
        self,
        meter_registry: Optional[MeterRegistry] = None,
        pretty_print: bool = True,
        duration_unit: Union[str, DurationUnit] = DurationUnit.MILLISECONDS,
        prefix: str = HEADER_PREFIX,
        name_pattern: str = DEFAULT_NAME_PATTERN,
        tags: Optional[Mapping[str, Any]] = None,
    ):
        self._meter_registry = meter_registry
        self.pretty_print = pretty_print
        self.duration_unit = DurationUnit.parse(duration_unit)
        self.prefix = prefix
        self.name_pattern = name_pattern
        self.tags = dict(tags or {})

    @property
    def meter_registry(self) -> MeterRegistry:
        if self._meter_registry is None:
            self._meter_registry = get_shared_registry()
        return self._meter_registry

    @meter_registry.setter
    def meter_registry(self, registry: MeterRegistry) -> None:
        self._meter_registry = registry

    def create_route_policy(self, route_id: str) -> RoutePolicy:
        policy = RoutePolicy(
            route_id,
            self.meter_registry,
            NameResolver(self.name_pattern, self.prefix),
            self.tags,
        )
        logger.info(f"Created metrics route policy for route {route_id}")
        return policy

    def export_json(self, path: str) -> Any:
        return self.meter_registry.dump_json(path, self.pretty_print, self.duration_unit)

    @classmethod
    def from_config(
        cls, config: Dict[str, Any], meter_registry: Optional[MeterRegistry] = None
    ) -> "RoutePolicyFactory":
        """Create a factory from a route policy configuration dict."""
        return cls(
            meter_registry=meter_registry,
            pretty_print=config.get("pretty_print", True),
            duration_unit=config.get("duration_unit", DurationUnit.MILLISECONDS),
            prefix=config.get("prefix", HEADER_PREFIX),
            name_pattern=config.get("name_pattern", DEFAULT_NAME_PATTERN),
            tags=config.get("tags"),
        )
