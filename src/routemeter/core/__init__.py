"""Core types shared by all instrumentation components."""

from .clock import Clock, SimulationClock, SystemClock
from .errors import (
    ConfigurationError,
    MeterRegistryError,
    MeterTypeConflictError,
    RouteMeterError,
)
from .exchange import Exchange, Message
from .units import DurationUnit

__all__ = [
    "Clock",
    "SimulationClock",
    "SystemClock",
    "ConfigurationError",
    "MeterRegistryError",
    "MeterTypeConflictError",
    "RouteMeterError",
    "Exchange",
    "Message",
    "DurationUnit",
]
