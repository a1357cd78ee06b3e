"""Result aggregation: from a ValidationPass to a Verdict and error changes.

The aggregator emits presentation instructions rather than touching the
presentation layer itself:
- AddError / RemoveError for each outcome, in pass order
- RemoveAllErrors + SetFieldState(SUCCESS) when the pass is valid
- SetFieldState(ERROR) when the pass is invalid
- nothing at all when no constraint applied
"""

from dataclasses import dataclass, field

from formcheck.validation.messages import MessageCatalog
from formcheck.validation.types import FieldState, ValidationPass, Verdict


@dataclass(frozen=True)
class AddError:
    constraint: str
    message: str


@dataclass(frozen=True)
class RemoveError:
    constraint: str


@dataclass(frozen=True)
class RemoveAllErrors:
    pass


@dataclass(frozen=True)
class SetFieldState:
    state: FieldState


Instruction = AddError | RemoveError | RemoveAllErrors | SetFieldState


@dataclass
class AggregateResult:
    """Verdict for a pass plus the instructions that present it."""

    verdict: Verdict
    instructions: list[Instruction] = field(default_factory=list)


class ValidationResultAggregator:
    """Folds outcomes into a verdict and error add/remove instructions."""

    def __init__(self, catalog: MessageCatalog):
        self.catalog = catalog

    def aggregate(self, validation_pass: ValidationPass) -> AggregateResult:
        verdict = validation_pass.verdict
        if verdict is Verdict.UNKNOWN:
            return AggregateResult(verdict=verdict)

        instructions: list[Instruction] = []
        for name, outcome in validation_pass.items():
            if outcome.valid:
                instructions.append(RemoveError(name))
            else:
                instructions.append(AddError(name, self.catalog.render(outcome)))

        if verdict is Verdict.VALID:
            instructions.append(RemoveAllErrors())
            instructions.append(SetFieldState(FieldState.SUCCESS))
        else:
            instructions.append(SetFieldState(FieldState.ERROR))

        return AggregateResult(verdict=verdict, instructions=instructions)
