"""Data models for route simulation."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RouteStep:
    """One step of a simulated route: either a processing delay or a metric call."""

    delay_dist_config: Optional[Dict[str, Any]] = None
    metric_config: Optional[Dict[str, Any]] = None
    headers: Dict[str, Any] = field(default_factory=dict)  # Set on the message before the metric call


@dataclass
class RouteDefinition:
    """A simulated route and the exchange stream flowing into it."""

    route_id: str
    steps: List[RouteStep]
    inter_arrival_time_dist_config: Dict[str, Any]
    failure_probability: float = 0.0
    total_exchanges: Optional[int] = None


@dataclass
class ExchangeRecord:
    """Outcome of one simulated exchange."""

    exchange_id: str
    route_id: str
    begin_time_sim: float
    end_time_sim: Optional[float] = None
    failed: bool = False
