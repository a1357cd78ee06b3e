"""Constraint registry for formcheck.

Provides registration and lookup of constraint detectors. A detector looks
at a field's configuration and either declines (the constraint does not
apply) or returns a Validator bound to the parameters it found.
"""

import logging

from formcheck.validation.types import ConstraintDetector, FieldView, Validator

logger = logging.getLogger(__name__)


class ConstraintRegistry:
    """Ordered table of named constraint detectors.

    Insertion order is significant: it is the order validators run in when a
    field does not declare its own ordering.

    Example:
        registry = ConstraintRegistry()
        registry.register("required", detect_required)

        # Later, per validation pass
        validators = registry.detect(field)
    """

    def __init__(self) -> None:
        self._detectors: dict[str, ConstraintDetector] = {}

    def register(self, name: str, detector: ConstraintDetector) -> None:
        """Register a detector by name.

        Idempotent - re-registering the same name is a no-op.

        Args:
            name: Constraint name (e.g., "required", "min")
            detector: Function returning a Validator or None
        """
        if name in self._detectors:
            return  # Already registered, no-op
        self._detectors[name] = detector

    def get(self, name: str) -> ConstraintDetector:
        """Get a registered detector by name.

        Raises:
            ValueError: If no detector is registered under that name
        """
        if name not in self._detectors:
            raise ValueError(
                f"Constraint '{name}' is not registered. "
                "Available constraints: " + ", ".join(self.list_registered())
            )
        return self._detectors[name]

    def detect(self, field: FieldView) -> dict[str, Validator]:
        """Run every detector once and collect the applicable validators.

        Args:
            field: The field configuration to inspect

        Returns:
            Mapping of constraint name -> bound Validator, in registration order
        """
        validators: dict[str, Validator] = {}
        for name, detector in self._detectors.items():
            validator = detector(field)
            if validator is not None:
                validators[name] = validator

        logger.debug("Applicable constraints: %s", ", ".join(validators) or "none")
        return validators

    def is_registered(self, name: str) -> bool:
        """Check if a detector is registered."""
        return name in self._detectors

    def list_registered(self) -> list[str]:
        """List registered constraint names in registration order."""
        return list(self._detectors)

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._detectors.clear()
