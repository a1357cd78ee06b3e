"""Presentation contract and an in-memory implementation.

The engine never renders anything itself. It drives a Presenter keyed by
the field's container identifier. Every Presenter operation must be
idempotent: removing an absent error is a no-op, adding an error twice
replaces the first message.
"""

from typing import Protocol

from formcheck.validation.aggregator import (
    AddError,
    Instruction,
    RemoveAllErrors,
    RemoveError,
    SetFieldState,
)
from formcheck.validation.types import FieldState


class Presenter(Protocol):
    def add_error(self, field_id: str, constraint: str, message: str) -> None:
        ...

    def remove_error(self, field_id: str, constraint: str) -> None:
        ...

    def remove_all_errors(self, field_id: str) -> None:
        ...

    def set_field_state(self, field_id: str, state: FieldState | None) -> None:
        ...


class RecordingPresenter:
    """Keeps each field's error entries (in insertion order) and state."""

    def __init__(self) -> None:
        self.errors: dict[str, dict[str, str]] = {}
        self.states: dict[str, FieldState] = {}

    def add_error(self, field_id: str, constraint: str, message: str) -> None:
        entries = self.errors.setdefault(field_id, {})
        entries.pop(constraint, None)
        entries[constraint] = message

    def remove_error(self, field_id: str, constraint: str) -> None:
        entries = self.errors.get(field_id)
        if entries is None:
            return
        entries.pop(constraint, None)
        if not entries:
            del self.errors[field_id]

    def remove_all_errors(self, field_id: str) -> None:
        self.errors.pop(field_id, None)

    def set_field_state(self, field_id: str, state: FieldState | None) -> None:
        """Record the state; None clears it."""
        if state is None:
            self.states.pop(field_id, None)
        else:
            self.states[field_id] = state

    def messages(self, field_id: str) -> list[str]:
        return list(self.errors.get(field_id, {}).values())


def apply_instructions(
    presenter: Presenter,
    field_id: str,
    instructions: list[Instruction],
) -> None:
    """Replay aggregator instructions against a presenter."""
    for instruction in instructions:
        if isinstance(instruction, AddError):
            presenter.add_error(field_id, instruction.constraint, instruction.message)
        elif isinstance(instruction, RemoveError):
            presenter.remove_error(field_id, instruction.constraint)
        elif isinstance(instruction, RemoveAllErrors):
            presenter.remove_all_errors(field_id)
        elif isinstance(instruction, SetFieldState):
            presenter.set_field_state(field_id, instruction.state)
