"""Data models for metric producers."""

from enum import Enum
from typing import Any, Optional


class TimerAction(Enum):
    START = "start"
    STOP = "stop"

    @classmethod
    def parse(cls, value: Any) -> Optional["TimerAction"]:
        """Coerce a configured or header value into an action.

        Accepts a TimerAction or a case-insensitive "start"/"stop" string.
        Anything else yields None, which callers treat as "no action".
        """
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None


def resolve_timer_action(static_action: Any, message_action: Any) -> Optional[TimerAction]:
    """Per-message action wins over the static one whenever it is present."""
    if message_action is not None:
        return TimerAction.parse(message_action)
    return TimerAction.parse(static_action)
