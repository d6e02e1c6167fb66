"""Data models for meter identity."""

from dataclasses import dataclass, field
from enum import Enum

from ..naming.tags import Tags


class MeterType(Enum):
    COUNTER = "counter"
    TIMER = "timer"
    DISTRIBUTION_SUMMARY = "summary"
    GAUGE = "gauge"


@dataclass(frozen=True)
class MeterId:
    """Identity of a registered meter: name plus tag set plus type."""

    name: str
    tags: Tags = field(default_factory=Tags.empty)
    type: MeterType = MeterType.COUNTER

    @property
    def key(self):
        """Registry lookup key; the type is not part of it."""
        return (self.name, self.tags)
