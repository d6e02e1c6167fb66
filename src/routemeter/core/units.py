"""Duration units used when exporting timer values."""

from enum import Enum
from typing import Union


class DurationUnit(Enum):
    """Time unit with its size expressed in seconds."""

    NANOSECONDS = 1e-9
    MICROSECONDS = 1e-6
    MILLISECONDS = 1e-3
    SECONDS = 1.0
    MINUTES = 60.0

    @property
    def suffix(self) -> str:
        return {
            "NANOSECONDS": "ns",
            "MICROSECONDS": "us",
            "MILLISECONDS": "ms",
            "SECONDS": "s",
            "MINUTES": "min",
        }[self.name]

    def from_seconds(self, seconds: float) -> float:
        """Convert a duration in seconds into this unit."""
        return seconds / self.value

    @classmethod
    def parse(cls, value: Union[str, "DurationUnit"]) -> "DurationUnit":
        """Accept a DurationUnit or its case-insensitive name ("milliseconds", "ms")."""
        if isinstance(value, cls):
            return value

        key = str(value).strip().upper()
        for unit in cls:
            if key == unit.name or key == unit.suffix.upper():
                return unit
        raise ValueError(f"Unknown duration unit: {value}")
