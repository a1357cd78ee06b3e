"""Engine configuration.

Settings come from (highest precedence first): explicit arguments, a YAML
settings file, environment variables, built-in defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from formcheck.validation.errors import ConfigurationError
from formcheck.validation.pipeline import EmptyValuePolicy

DEFAULT_MANUAL_TRIGGER = "validate"


@dataclass
class EngineSettings:
    """Engine-wide settings.

    Attributes:
        manual_trigger: Event type that requests validation explicitly; always
            accepted as a trigger and never delayed
        empty_value_policy: What to do with an empty value when no presence
            constraint applies (see EmptyValuePolicy)
        option_defaults: Values returned by ``get_option`` when a field has no
            explicit option of that name
        messages_path: Optional YAML file overriding the message catalog
    """

    manual_trigger: str = DEFAULT_MANUAL_TRIGGER
    empty_value_policy: EmptyValuePolicy = EmptyValuePolicy.SKIP
    option_defaults: dict[str, Any] = field(default_factory=dict)
    messages_path: Path | None = None

    @classmethod
    def from_env(cls) -> EngineSettings:
        """Create settings from environment variables.

        FORMCHECK_MANUAL_TRIGGER: manual trigger event type
        FORMCHECK_EMPTY_VALUE_POLICY: "skip" or "strict"
        FORMCHECK_MESSAGES: path to a YAML message catalog override
        """
        settings = cls()

        manual_trigger = os.environ.get("FORMCHECK_MANUAL_TRIGGER")
        if manual_trigger:
            settings.manual_trigger = manual_trigger

        policy = os.environ.get("FORMCHECK_EMPTY_VALUE_POLICY")
        if policy:
            settings.empty_value_policy = _parse_policy(policy)

        messages = os.environ.get("FORMCHECK_MESSAGES")
        if messages:
            settings.messages_path = Path(messages)

        return settings

    @classmethod
    def from_yaml(cls, path: Path) -> EngineSettings:
        """Load settings from a YAML file, falling back to the environment.

        Recognised keys: manualTrigger, emptyValuePolicy, defaults, messages.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {path} must be a mapping")

        settings = cls.from_env()
        settings.update(data, base_path=path.parent)
        return settings

    def update(self, data: dict[str, Any], base_path: Path | None = None) -> None:
        """Apply a settings mapping (the keys of a settings file) in place."""
        if "manualTrigger" in data:
            self.manual_trigger = str(data["manualTrigger"])
        if "emptyValuePolicy" in data:
            self.empty_value_policy = _parse_policy(str(data["emptyValuePolicy"]))
        if "defaults" in data:
            self.option_defaults = dict(data["defaults"] or {})
        if "messages" in data:
            # Relative catalog paths are resolved against the declaring file
            self.messages_path = (base_path or Path.cwd()) / data["messages"]


def _parse_policy(value: str) -> EmptyValuePolicy:
    try:
        return EmptyValuePolicy(value.lower())
    except ValueError:
        raise ConfigurationError(
            f"Unknown empty value policy '{value}'. Expected one of: "
            + ", ".join(p.value for p in EmptyValuePolicy)
        ) from None
