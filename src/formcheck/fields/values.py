"""Alternate value sources.

A field may read its value from a named reference instead of its own
content (option ``value``). References are dotted paths into a table of
registered sources, e.g. ``checkout.total`` resolves ``sources["checkout"]``
then its ``total`` key or attribute. A registered callable is called to
produce the current value.
"""

from collections.abc import Callable, Mapping
from typing import Any

from formcheck.validation.errors import UnknownValueSourceError


class ValueSources:
    """Table of named values a field can read from."""

    def __init__(self, sources: Mapping[str, Any] | None = None):
        self._sources: dict[str, Any] = dict(sources or {})

    def register(self, name: str, source: Any | Callable[[], Any]) -> None:
        """Register (or replace) a named source."""
        self._sources[name] = source

    def resolve(self, reference: str) -> Any:
        """Resolve a dotted reference to its current value.

        Raises:
            UnknownValueSourceError: If any step of the path is missing
        """
        head, *rest = reference.split(".")
        if head not in self._sources:
            raise UnknownValueSourceError(f"Value source '{reference}' is not registered")

        node = self._sources[head]
        for part in rest:
            if callable(node):
                node = node()
            if isinstance(node, Mapping) and part in node:
                node = node[part]
            elif hasattr(node, part):
                node = getattr(node, part)
            else:
                raise UnknownValueSourceError(f"Value source '{reference}' has no '{part}'")

        return node() if callable(node) else node
