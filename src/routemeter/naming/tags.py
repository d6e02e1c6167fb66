"""Tag sets attached to meters and the builder that merges them."""

import logging
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from ..core.constants import HEADER_METRIC_TAGS

logger = logging.getLogger(__name__)

TagsLike = Union["Tags", Mapping[str, Any], Iterable[Tuple[str, Any]]]


class Tags:
    """Immutable key/value label set.

    Pairs are kept sorted by key so that equal inputs always produce the same
    sequence, whatever order the keys were supplied in. Tags are hashable and
    are used as part of a meter's identity.
    """

    __slots__ = ("_pairs",)

    def __init__(self, tags: Optional[TagsLike] = None):
        if tags is None:
            items: Iterable[Tuple[str, Any]] = ()
        elif isinstance(tags, Tags):
            items = tags._pairs
        elif isinstance(tags, Mapping):
            items = tags.items()
        else:
            items = tags

        merged: Dict[str, str] = {}
        for key, value in items:
            merged[str(key)] = str(value)
        self._pairs: Tuple[Tuple[str, str], ...] = tuple(sorted(merged.items()))

    @classmethod
    def empty(cls) -> "Tags":
        return cls()

    @classmethod
    def of(cls, **tags: Any) -> "Tags":
        return cls(tags)

    def and_(self, other: Optional[TagsLike]) -> "Tags":
        """Return a new tag set with ``other`` overriding keys of this one."""
        if other is None:
            return self
        merged = dict(self._pairs)
        merged.update(Tags(other)._pairs)
        return Tags(merged)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._pairs)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Tags) and self._pairs == other._pairs

    def __hash__(self) -> int:
        return hash(self._pairs)

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v}" for k, v in self._pairs)
        return f"Tags({inner})"


class TagBuilder:
    """Builds the tag set for one metric invocation.

    Static tags come from the endpoint configuration. Per-message tags come
    from headers named in ``header_tags`` (tag key -> header name) and from a
    mapping carried in the RouteMeterTags header; they override static tags
    with the same key.
    """

    def __init__(
        self,
        static_tags: Optional[TagsLike] = None,
        header_tags: Optional[Mapping[str, str]] = None,
    ):
        self.static_tags = None if static_tags is None else Tags(static_tags)
        self.header_tags: Dict[str, str] = dict(header_tags or {})

    def build(self, exchange: Any = None) -> Tags:
        tags = self.static_tags if self.static_tags is not None else Tags.empty()
        if exchange is None:
            return tags

        message = exchange.message
        from_headers = {}
        for tag_key, header_name in self.header_tags.items():
            value = message.get_header(header_name)
            if value is not None:
                from_headers[tag_key] = value
        tags = tags.and_(from_headers)

        extra = message.get_header(HEADER_METRIC_TAGS)
        if extra is not None:
            try:
                tags = tags.and_(extra)
            except (TypeError, ValueError) as e:
                logger.warning(f"Ignoring malformed {HEADER_METRIC_TAGS} header {extra!r}: {e}")
        return tags
