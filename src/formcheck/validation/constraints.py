"""Built-in constraint detectors.

Each detector reads a field's configuration and returns a Validator closed
over the parameters it found, or None when the constraint does not apply:
- required / notnull / notblank: presence of a value
- regexp: custom pattern (HTML ``pattern`` attribute or ``regexp`` option)
- min / max / range: numeric bounds
- minlength / maxlength / rangelength: length bounds
- type: format from the type catalog (email, url, digits, ...)

Native HTML attributes take precedence over declared options of the same
meaning.
"""

import re
from typing import Any

from formcheck.validation.errors import (
    InvalidParameterError,
    InvalidPatternError,
    UnknownTypeError,
)
from formcheck.validation.patterns import TYPE_PATTERNS, matches_type
from formcheck.validation.registry import ConstraintRegistry
from formcheck.validation.types import FieldView, MessageKey, Outcome, Validator

# Native input types that honour the min/max attributes
NUMERIC_INPUT_TYPES = ("number", "range")

# Native HTML types with no catalog format; declaring one is not an error
NATIVE_INPUT_TYPES = frozenset({
    "text", "password", "search", "hidden", "checkbox", "radio", "file",
    "color", "date", "datetime-local", "month", "week", "time", "tel",
    "range", "submit", "button", "reset", "image", "textarea", "select",
})

# Constraints that test whether a value is present at all
PRESENCE_CONSTRAINTS = frozenset({"required", "notnull", "notblank"})

# Plain decimal notation; rejects "1_0", "inf" and "nan" which float() accepts
NUMERIC_VALUE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

REGEXP_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "g": 0,  # global matching has no meaning for a single test
}


# =============================================================================
# Value helpers
# =============================================================================


def is_blank(value: Any) -> bool:
    """True when a value is missing or only whitespace."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def is_empty(value: Any) -> bool:
    """True when a value is missing or empty. Whitespace is not empty."""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False


def value_length(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, (str, list, tuple)):
        return len(value)
    return len(str(value))


def value_as_number(value: Any) -> float | None:
    """Numeric reading of a field value, or None if it is not a number."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    if not NUMERIC_VALUE.fullmatch(text):
        return None
    return float(text)


def parse_number(raw: Any, constraint: str) -> int | float:
    """Parse a declared numeric parameter.

    Raises:
        InvalidParameterError: If the parameter is not a number
    """
    if isinstance(raw, bool):
        raise InvalidParameterError(f"Constraint '{constraint}' expects a number, got {raw!r}")
    if isinstance(raw, (int, float)):
        return raw
    text = str(raw).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise InvalidParameterError(
            f"Constraint '{constraint}' expects a number, got {raw!r}"
        ) from None


def parse_bounds(raw: Any, constraint: str) -> tuple[int | float, int | float]:
    """Parse a two-element ``[min, max]`` parameter (list or ``"a,b"``).

    Raises:
        InvalidParameterError: If the parameter is not two numbers with min <= max
    """
    if isinstance(raw, str):
        raw = [part for part in raw.strip("[] ").split(",") if part.strip()]
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise InvalidParameterError(
            f"Constraint '{constraint}' expects a [min, max] pair, got {raw!r}"
        )
    low = parse_number(raw[0], constraint)
    high = parse_number(raw[1], constraint)
    if low > high:
        raise InvalidParameterError(
            f"Constraint '{constraint}' has min {low} greater than max {high}"
        )
    return low, high


def compile_pattern(pattern: str, flags: str | None) -> re.Pattern[str]:
    """Compile a declared pattern with JavaScript-style flag letters.

    Raises:
        InvalidPatternError: If a flag is unknown or the pattern does not compile
    """
    compiled_flags = 0
    for letter in flags or "":
        if letter not in REGEXP_FLAGS:
            raise InvalidPatternError(f"Unknown regexp flag '{letter}' in {flags!r}")
        compiled_flags |= REGEXP_FLAGS[letter]

    try:
        return re.compile(pattern, compiled_flags)
    except re.error as e:
        raise InvalidPatternError(f"Invalid regexp {pattern!r}: {e}") from e


def _declared(field: FieldView, name: str, attribute_applies: bool = True) -> Any:
    """Attribute value if present (and applicable), else the declared option."""
    if attribute_applies:
        value = field.get_attribute(name)
        if value is not None:
            return value
    return field.get_option(name)


def _outcome(
    constraint: str,
    valid: bool,
    key: MessageKey,
    params: dict[str, Any] | None = None,
) -> Outcome:
    return Outcome(constraint=constraint, valid=valid, message_key=key, params=params or {})


# =============================================================================
# Presence
# =============================================================================


def detect_required(field: FieldView) -> Validator | None:
    if not (field.has_flag("required") or field.get_option("required") is True):
        return None

    def validate(value: Any) -> Outcome:
        return _outcome("required", not is_blank(value), MessageKey.REQUIRED)

    return validate


def detect_notnull(field: FieldView) -> Validator | None:
    if field.get_option("notnull") is not True:
        return None

    def validate(value: Any) -> Outcome:
        return _outcome("notnull", value_length(value) > 0, MessageKey.NOTNULL)

    return validate


def detect_notblank(field: FieldView) -> Validator | None:
    if field.get_option("notblank") is not True:
        return None

    def validate(value: Any) -> Outcome:
        valid = isinstance(value, str) and value.strip() != ""
        return _outcome("notblank", valid, MessageKey.NOTBLANK)

    return validate


# =============================================================================
# Pattern
# =============================================================================


def detect_regexp(field: FieldView) -> Validator | None:
    pattern = field.get_attribute("pattern") or field.get_option("regexp")
    if not pattern:
        return None

    compiled = compile_pattern(str(pattern), field.get_option("regexp-flag"))

    def validate(value: Any) -> Outcome:
        text = "" if value is None else str(value)
        valid = compiled.search(text) is not None
        return _outcome("regexp", valid, MessageKey.REGEXP, {"regexp": compiled.pattern})

    return validate


# =============================================================================
# Numeric bounds
# =============================================================================


def detect_min(field: FieldView) -> Validator | None:
    numeric_input = field.get_attribute("type") in NUMERIC_INPUT_TYPES
    raw = _declared(field, "min", attribute_applies=numeric_input)
    if raw is None:
        return None

    minimum = parse_number(raw, "min")

    def validate(value: Any) -> Outcome:
        number = value_as_number(value)
        valid = number is not None and number >= minimum
        return _outcome("min", valid, MessageKey.MIN, {"min": minimum})

    return validate


def detect_max(field: FieldView) -> Validator | None:
    numeric_input = field.get_attribute("type") in NUMERIC_INPUT_TYPES
    raw = _declared(field, "max", attribute_applies=numeric_input)
    if raw is None:
        return None

    maximum = parse_number(raw, "max")

    def validate(value: Any) -> Outcome:
        number = value_as_number(value)
        valid = number is not None and number <= maximum
        return _outcome("max", valid, MessageKey.MAX, {"max": maximum})

    return validate


def detect_range(field: FieldView) -> Validator | None:
    raw = field.get_option("range")
    if raw is None:
        return None

    minimum, maximum = parse_bounds(raw, "range")

    def validate(value: Any) -> Outcome:
        number = value_as_number(value)
        valid = number is not None and minimum <= number <= maximum
        return _outcome("range", valid, MessageKey.RANGE, {"min": minimum, "max": maximum})

    return validate


# =============================================================================
# Length bounds
# =============================================================================


def detect_minlength(field: FieldView) -> Validator | None:
    raw = _declared(field, "minlength")
    if raw is None:
        return None

    minimum = parse_number(raw, "minlength")

    def validate(value: Any) -> Outcome:
        valid = value_length(value) >= minimum
        return _outcome("minlength", valid, MessageKey.MINLENGTH, {"minlength": minimum})

    return validate


def detect_maxlength(field: FieldView) -> Validator | None:
    raw = _declared(field, "maxlength")
    if raw is None:
        return None

    maximum = parse_number(raw, "maxlength")

    def validate(value: Any) -> Outcome:
        valid = value_length(value) <= maximum
        return _outcome("maxlength", valid, MessageKey.MAXLENGTH, {"maxlength": maximum})

    return validate


def detect_rangelength(field: FieldView) -> Validator | None:
    raw = field.get_option("rangelength")
    if raw is None:
        return None

    minimum, maximum = parse_bounds(raw, "rangelength")

    def validate(value: Any) -> Outcome:
        valid = minimum <= value_length(value) <= maximum
        return _outcome(
            "rangelength", valid, MessageKey.RANGELENGTH, {"min": minimum, "max": maximum}
        )

    return validate


# =============================================================================
# Type format
# =============================================================================


def detect_type(field: FieldView) -> Validator | None:
    type_name = field.declared_type()

    if type_name not in TYPE_PATTERNS:
        # Native types such as "text" simply have no format. An explicit
        # type option has no fallback, so an unknown name there is a mistake.
        override = field.get_option("type")
        if override is not None and override not in NATIVE_INPUT_TYPES:
            raise UnknownTypeError(
                f"Unknown field type {override!r}. "
                "Supported types: " + ", ".join(TYPE_PATTERNS)
            )
        return None

    key = MessageKey.for_type(type_name)

    def validate(value: Any) -> Outcome:
        return _outcome("type", matches_type(value, type_name), key, {"type": type_name})

    return validate


# =============================================================================
# Default registry
# =============================================================================

BUILTIN_DETECTORS = (
    ("required", detect_required),
    ("notnull", detect_notnull),
    ("notblank", detect_notblank),
    ("regexp", detect_regexp),
    ("min", detect_min),
    ("max", detect_max),
    ("range", detect_range),
    ("minlength", detect_minlength),
    ("maxlength", detect_maxlength),
    ("rangelength", detect_rangelength),
    ("type", detect_type),
)


def register_builtin_constraints(registry: ConstraintRegistry) -> None:
    """Register the built-in detectors, in their default run order."""
    for name, detector in BUILTIN_DETECTORS:
        registry.register(name, detector)


def create_default_registry() -> ConstraintRegistry:
    """A new registry holding every built-in detector."""
    registry = ConstraintRegistry()
    register_builtin_constraints(registry)
    return registry
