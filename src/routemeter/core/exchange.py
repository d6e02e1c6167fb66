"""Message context passed through an instrumented route."""

import logging
import uuid
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


class Message:
    """Message headers used for per-message metric overrides."""

    def __init__(self, body: Any = None, headers: Optional[Dict[str, Any]] = None):
        self.body = body
        self.headers: Dict[str, Any] = dict(headers or {})

    def get_header(
        self,
        name: str,
        default: Any = None,
        as_type: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        """Get a header value, falling back to ``default`` when it is absent.

        Args:
            name: Header name
            default: Value returned when the header is missing or None
            as_type: Optional converter applied to a present header value. If
                the conversion fails the header is ignored and ``default`` is
                returned.

        Returns:
            The (converted) header value or the default
        """
        value = self.headers.get(name)
        if value is None:
            return default
        if as_type is None:
            return value

        try:
            return as_type(value)
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring header {name}={value!r}: {e}")
            return default

    def set_header(self, name: str, value: Any) -> None:
        self.headers[name] = value

    def remove_header(self, name: str) -> Any:
        return self.headers.pop(name, None)

    def remove_headers(self, prefix: str) -> int:
        """Remove all headers whose name starts with ``prefix``."""
        names = [name for name in self.headers if name.startswith(prefix)]
        for name in names:
            del self.headers[name]
        return len(names)


class Exchange:
    """Per-message scratch space owned by the routing engine.

    Instrumentation only reads, writes and removes named property slots; the
    exchange lifecycle belongs to the host. An exchange is never shared
    between concurrently processed messages.
    """

    def __init__(
        self,
        message: Optional[Message] = None,
        exchange_id: Optional[str] = None,
        from_route_id: Optional[str] = None,
    ):
        self.message = message if message is not None else Message()
        self.exchange_id = exchange_id or uuid.uuid4().hex
        self.from_route_id = from_route_id
        self.properties: Dict[str, Any] = {}
        self.exception: Optional[BaseException] = None

    @property
    def failed(self) -> bool:
        return self.exception is not None

    def get_property(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    def set_property(self, key: str, value: Any) -> None:
        self.properties[key] = value

    def remove_property(self, key: str) -> Any:
        return self.properties.pop(key, None)

    def __repr__(self) -> str:
        return f"Exchange(id={self.exchange_id}, route={self.from_route_id})"
