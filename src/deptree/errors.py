"""Error types raised by deptree.

Truncation (depth / node caps) and dangling references are recovered locally
and never raise. Only configuration mistakes and canvas sizes that cannot be
drawn surface to the caller.
"""

from __future__ import annotations


class DependencyTreeError(Exception):
    """Base class for all deptree errors."""


class ConfigError(DependencyTreeError):
    """A configuration value is out of range."""


class UnrenderableSizeError(DependencyTreeError):
    """The computed canvas extent cannot be allocated by a drawing surface."""

    def __init__(self, width: int, height: int, namespace: str | None = None) -> None:
        self.width = width
        self.height = height
        self.namespace = namespace
        where = f" for {namespace}" if namespace else ""
        super().__init__(f"Canvas dimensions {width}x{height}{where} exceed limits even with compact layout")
