"""Configuration errors raised by the validation engine.

A configuration error means a field declaration is broken (bad pattern,
unknown type, missing message). It is raised to the caller; it is never
reported as a failed validation.
"""


class ConfigurationError(ValueError):
    """A field or engine declaration cannot be honoured."""
    pass


class InvalidPatternError(ConfigurationError):
    """A declared regular expression (or its flags) does not compile."""
    pass


class UnknownTypeError(ConfigurationError):
    """A field declares a type that is not in the pattern catalog."""
    pass


class InvalidParameterError(ConfigurationError):
    """A constraint parameter (min, max, range, ...) has the wrong shape."""
    pass


class MissingMessageError(ConfigurationError):
    """The message catalog has no entry for a message key."""
    pass


class UnknownValueSourceError(ConfigurationError):
    """A field reads its value from a reference that is not registered."""
    pass
