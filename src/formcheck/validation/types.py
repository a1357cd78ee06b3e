"""Core types for the formcheck validation engine.

This module defines the values that flow between the engine's layers:
- Detection: a constraint detector turns field configuration into a Validator
- Execution: a Validator turns the field value into an Outcome
- Aggregation: a ValidationPass of outcomes folds into a Verdict
"""

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Protocol


class MessageKey(str, Enum):
    """Dotted catalog key for each constraint message.

    The value is the path into the message catalog, so ``MessageKey.TYPE_EMAIL``
    compares equal to ``"type.email"``.
    """

    REQUIRED = "required"
    NOTNULL = "notnull"
    NOTBLANK = "notblank"
    REGEXP = "regexp"
    MIN = "min"
    MAX = "max"
    RANGE = "range"
    MINLENGTH = "minlength"
    MAXLENGTH = "maxlength"
    RANGELENGTH = "rangelength"
    TYPE_ALPHANUM = "type.alphanum"
    TYPE_DATE_ISO = "type.dateIso"
    TYPE_DIGITS = "type.digits"
    TYPE_EMAIL = "type.email"
    TYPE_NUMBER = "type.number"
    TYPE_PHONE = "type.phone"
    TYPE_URL = "type.url"
    TYPE_URLSTRICT = "type.urlstrict"

    @classmethod
    def for_type(cls, type_name: str) -> "MessageKey":
        """Message key for a type-catalog entry (e.g. ``email`` -> TYPE_EMAIL)."""
        return cls(f"type.{type_name}")


class Verdict(Enum):
    """Pass-level result.

    UNKNOWN: no applicable constraint produced an outcome
    VALID: every outcome is valid
    INVALID: at least one outcome is invalid
    """

    UNKNOWN = "unknown"
    VALID = "valid"
    INVALID = "invalid"


class FieldState(Enum):
    """Field-level presentation state."""

    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Outcome:
    """Result of one constraint on one value.

    Attributes:
        constraint: Name of the constraint that produced this outcome
        valid: Whether the value satisfies the constraint
        message_key: Catalog key of the message to show when invalid
        params: Values substituted into the message template
    """

    constraint: str
    valid: bool
    message_key: MessageKey
    params: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "constraint": self.constraint,
            "valid": self.valid,
            "messageKey": self.message_key.value,
            "params": dict(self.params),
        }


# A bound check: value -> Outcome
Validator = Callable[[Any], Outcome]


class FieldView(Protocol):
    """Read-only view of a field's configuration, as seen by detectors."""

    tag: str

    def get_option(self, name: str) -> Any:
        ...

    def get_attribute(self, name: str) -> Any:
        ...

    def has_flag(self, name: str) -> bool:
        ...

    def declared_type(self) -> str | None:
        ...


# A constraint detector: field configuration -> Validator, or None when the
# constraint does not apply to this field.
ConstraintDetector = Callable[[FieldView], Validator | None]


class ValidationPass(Mapping[str, Outcome]):
    """Ordered, read-only mapping of constraint name -> Outcome for one run."""

    def __init__(self, outcomes: Mapping[str, Outcome] | None = None):
        self._outcomes: Mapping[str, Outcome] = MappingProxyType(dict(outcomes or {}))

    def __getitem__(self, name: str) -> Outcome:
        return self._outcomes[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)

    def __repr__(self) -> str:
        return f"ValidationPass({dict(self._outcomes)!r})"

    @property
    def failed(self) -> list[Outcome]:
        return [o for o in self._outcomes.values() if not o.valid]

    @property
    def verdict(self) -> Verdict:
        if not self._outcomes:
            return Verdict.UNKNOWN
        if self.failed:
            return Verdict.INVALID
        return Verdict.VALID

    def to_dict(self) -> dict[str, Any]:
        return {name: outcome.to_dict() for name, outcome in self._outcomes.items()}
