"""Route policies collecting route lifecycle and exchange metrics."""

from .factory import RoutePolicyFactory, get_shared_registry
from .policy import InflightTracker, RoutePolicy

__all__ = ["InflightTracker", "RoutePolicy", "RoutePolicyFactory", "get_shared_registry"]
