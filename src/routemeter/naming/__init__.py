"""Metric naming and tagging."""

from .resolver import NameResolver, resolve_metric_name
from .tags import TagBuilder, Tags

__all__ = ["NameResolver", "resolve_metric_name", "TagBuilder", "Tags"]
