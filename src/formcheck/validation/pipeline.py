"""Validator pipeline: ordering and execution of bound validators."""

import logging
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

from formcheck.validation.constraints import PRESENCE_CONSTRAINTS, is_empty
from formcheck.validation.registry import ConstraintRegistry
from formcheck.validation.types import FieldView, Outcome, ValidationPass, Validator

logger = logging.getLogger(__name__)


class EmptyValuePolicy(Enum):
    """How an empty value is treated when no presence constraint applies.

    SKIP: the pass is empty, so an optional field left empty shows nothing
    (a whitespace-only value is not empty and is validated)
    STRICT: every constraint still runs (an empty typed field is invalid)
    """

    SKIP = "skip"
    STRICT = "strict"


def validator_order(field: FieldView) -> list[str]:
    """Explicit constraint order declared by the field's ``validators`` option."""
    declared = field.get_option("validators")
    if not declared:
        return []
    return [name for name in re.split(r"\s+", str(declared)) if name]


def order_validators(
    validators: Mapping[str, Validator],
    order: list[str],
) -> dict[str, Validator]:
    """Apply a declared order to the applicable validators.

    With no declared order the registry order is kept. Otherwise only names
    that are both declared and applicable run, in declared order.
    """
    if not order:
        return dict(validators)

    sorted_validators: dict[str, Validator] = {}
    for name in order:
        if name in validators and name not in sorted_validators:
            sorted_validators[name] = validators[name]
    return sorted_validators


class ValidatorPipeline:
    """Detects, orders and runs the validators for one field value.

    Every selected validator runs, even after an earlier one fails, so that
    all active errors can be shown at once.
    """

    def __init__(
        self,
        registry: ConstraintRegistry,
        empty_value_policy: EmptyValuePolicy = EmptyValuePolicy.SKIP,
    ):
        self.registry = registry
        self.empty_value_policy = empty_value_policy

    def select(self, field: FieldView) -> dict[str, Validator]:
        """Applicable validators for the field, in run order."""
        return order_validators(self.registry.detect(field), validator_order(field))

    def run(self, validators: Mapping[str, Validator], value: Any) -> ValidationPass:
        """Run each validator against the value and collect the outcomes."""
        if (
            self.empty_value_policy is EmptyValuePolicy.SKIP
            and is_empty(value)
            and not PRESENCE_CONSTRAINTS.intersection(validators)
        ):
            logger.debug("Empty optional value, skipping %d constraint(s)", len(validators))
            return ValidationPass()

        outcomes: dict[str, Outcome] = {}
        for name, validator in validators.items():
            outcomes[name] = validator(value)
        return ValidationPass(outcomes)

    def execute(self, field: FieldView, value: Any) -> ValidationPass:
        return self.run(self.select(field), value)
