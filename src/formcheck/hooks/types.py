"""Plugin hook types for formcheck.

Defines the data structures of the validation hook system:
- Event: the interaction that asked for validation
- HookContext: runtime state passed to every hook
- PluginHooks: the optional before/after hooks one plugin contributes
- HookDecision / ChainDecision: veto results
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from formcheck.fields.adapter import FieldAdapter
from formcheck.validation.types import ValidationPass


class HookDecision(Enum):
    """Result of a beforeValidate hook."""

    PROCEED = "proceed"
    VETO = "veto"


@dataclass(frozen=True)
class Event:
    """An interaction event.

    Attributes:
        type: Event type ("keyup", "change", "blur", or the manual trigger)
        target: The element the event happened on, if known
    """

    type: str
    target: Any = None


@dataclass
class HookContext:
    """Runtime context passed to every hook.

    Attributes:
        field: The field being validated
        event: The triggering event, or None for a direct call
        value: The field value read at the start of the call
    """

    field: FieldAdapter
    event: Event | None = None
    value: Any = None


@dataclass
class PluginContext:
    """Services available to plugin factories.

    Attributes:
        find_field: Resolves a field reference (name or ``#id``) to a field
    """

    find_field: Callable[[str], FieldAdapter | None] = lambda reference: None


# Hook signatures. A before hook returning None counts as PROCEED.
BeforeHook = Callable[[HookContext], HookDecision | None]
AfterHook = Callable[[HookContext, ValidationPass], None]


@dataclass
class PluginHooks:
    """Hooks contributed by one plugin for one field. Either may be absent."""

    before_validate: BeforeHook | None = None
    after_validate: AfterHook | None = None


# Plugin factory: builds the hooks for one field
PluginFactory = Callable[[FieldAdapter, PluginContext], PluginHooks]


@dataclass
class ChainDecision:
    """Combined result of every beforeValidate hook.

    Attributes:
        proceed: False if any plugin vetoed
        vetoed_by: Names of the plugins that vetoed, in registration order
    """

    proceed: bool = True
    vetoed_by: list[str] = field(default_factory=list)
