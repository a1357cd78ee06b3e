"""formcheck validation engine core.

Usage:
    from formcheck.validation import (
        ValidatorPipeline,
        ValidationResultAggregator,
        MessageCatalog,
        create_default_registry,
    )

    pipeline = ValidatorPipeline(create_default_registry())
    validation_pass = pipeline.execute(field.snapshot(), field.get_value())
"""

from formcheck.validation.aggregator import (
    AddError,
    AggregateResult,
    Instruction,
    RemoveAllErrors,
    RemoveError,
    SetFieldState,
    ValidationResultAggregator,
)
from formcheck.validation.constraints import (
    PRESENCE_CONSTRAINTS,
    create_default_registry,
    register_builtin_constraints,
)
from formcheck.validation.errors import (
    ConfigurationError,
    InvalidParameterError,
    InvalidPatternError,
    MissingMessageError,
    UnknownTypeError,
    UnknownValueSourceError,
)
from formcheck.validation.messages import DEFAULT_MESSAGES, MessageCatalog, format_message
from formcheck.validation.pipeline import EmptyValuePolicy, ValidatorPipeline, validator_order
from formcheck.validation.registry import ConstraintRegistry
from formcheck.validation.types import (
    ConstraintDetector,
    FieldState,
    FieldView,
    MessageKey,
    Outcome,
    ValidationPass,
    Validator,
    Verdict,
)

__all__ = [
    # Types
    "ConstraintDetector",
    "FieldState",
    "FieldView",
    "MessageKey",
    "Outcome",
    "ValidationPass",
    "Validator",
    "Verdict",
    # Errors
    "ConfigurationError",
    "InvalidParameterError",
    "InvalidPatternError",
    "MissingMessageError",
    "UnknownTypeError",
    "UnknownValueSourceError",
    # Registry
    "ConstraintRegistry",
    "PRESENCE_CONSTRAINTS",
    "create_default_registry",
    "register_builtin_constraints",
    # Pipeline
    "EmptyValuePolicy",
    "ValidatorPipeline",
    "validator_order",
    # Aggregation
    "AddError",
    "AggregateResult",
    "Instruction",
    "RemoveAllErrors",
    "RemoveError",
    "SetFieldState",
    "ValidationResultAggregator",
    # Messages
    "DEFAULT_MESSAGES",
    "MessageCatalog",
    "format_message",
]
