"""Error container identifiers.

Each field's errors are shown in a container named by a stable identifier.
The identifier is generated lazily, once, then stored on the field (option
``hash``) and reused on every later lookup. Sources never hand out the same
identifier twice within a process.
"""

import secrets
from typing import Protocol

from formcheck.fields.adapter import FieldAdapter

CONTAINER_OPTION = "hash"


class IdentifierSource(Protocol):
    def next_id(self) -> str:
        ...


class RandomIdentifierSource:
    """Random identifiers (``formcheck-<digits>``), re-drawn on collision."""

    def __init__(self, prefix: str = "formcheck-"):
        self.prefix = prefix
        self._issued: set[str] = set()

    def next_id(self) -> str:
        while True:
            candidate = f"{self.prefix}{secrets.randbelow(10**16):016d}"
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate


class SequentialIdentifierSource:
    """Deterministic identifiers (``field-1``, ``field-2``, ...) for tests."""

    def __init__(self, prefix: str = "field-", start: int = 1):
        self.prefix = prefix
        self._next = start

    def next_id(self) -> str:
        identifier = f"{self.prefix}{self._next}"
        self._next += 1
        return identifier


class ContainerIdentifiers:
    """Get-or-create lookup of a field's container identifier."""

    def __init__(self, source: IdentifierSource | None = None):
        self.source = source or RandomIdentifierSource()

    def get(self, field: FieldAdapter) -> str:
        identifier = field.get_option(CONTAINER_OPTION)
        if identifier is None:
            identifier = self.source.next_id()
            field.set_option(CONTAINER_OPTION, identifier)
        return str(identifier)
