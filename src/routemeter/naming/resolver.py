"""Metric name template expansion."""

from typing import Optional

from ..core.constants import DEFAULT_NAME_PATTERN

PREFIX_TOKEN = "##prefix##"
NAME_TOKEN = "##name##"
ROUTE_ID_TOKEN = "##routeId##"
TYPE_TOKEN = "##type##"


def resolve_metric_name(
    pattern: str,
    prefix: Optional[str],
    name: Optional[str],
    route_id: Optional[str] = None,
    metric_type: Optional[str] = None,
) -> str:
    """Expand a naming pattern into a metric name.

    Known tokens are replaced by their value, or by the empty string when the
    value is None. Any other ``##...##`` text is left untouched.

    Example:
        >>> resolve_metric_name("##prefix##.##name##.##routeId##.##type##",
        ...                     "camel", "orders", "route1", "timer")
        'camel.orders.route1.timer'
    """
    substitutions = (
        (PREFIX_TOKEN, prefix),
        (NAME_TOKEN, name),
        (ROUTE_ID_TOKEN, route_id),
        (TYPE_TOKEN, metric_type),
    )

    resolved = pattern
    for token, value in substitutions:
        resolved = resolved.replace(token, "" if value is None else str(value))
    return resolved


class NameResolver:
    """Resolves metric names against a fixed pattern and prefix."""

    def __init__(self, pattern: str = DEFAULT_NAME_PATTERN, prefix: Optional[str] = None):
        self.pattern = pattern
        self.prefix = prefix

    def resolve(
        self,
        name: Optional[str],
        route_id: Optional[str] = None,
        metric_type: Optional[str] = None,
    ) -> str:
        return resolve_metric_name(self.pattern, self.prefix, name, route_id, metric_type)

    def __repr__(self) -> str:
        return f"NameResolver(pattern={self.pattern!r}, prefix={self.prefix!r})"
