"""SimPy-driven simulation of instrumented routes."""

from .environment import SimulationEnvironment
from .models import ExchangeRecord, RouteDefinition, RouteStep
from .route_simulator import RouteSimulator, SimulatedFailure
from .sampler import DistributionSampler

__all__ = [
    "SimulationEnvironment",
    "ExchangeRecord",
    "RouteDefinition",
    "RouteStep",
    "RouteSimulator",
    "SimulatedFailure",
    "DistributionSampler",
]
