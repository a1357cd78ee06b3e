"""Message catalog and formatting.

Messages are looked up by dotted key (``type.email`` is the ``email`` entry
under ``type``) and rendered by substituting ``{name}`` placeholders with an
outcome's parameters.
"""

import copy
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from formcheck.validation.errors import ConfigurationError, MissingMessageError
from formcheck.validation.types import MessageKey, Outcome

DEFAULT_MESSAGES: dict[str, Any] = {
    "defaultMessage": "This value seems to be invalid.",
    "type": {
        "alphanum": "This value should be alphanumeric.",
        "dateIso": "This value should be a valid date (YYYY-MM-DD).",
        "digits": "This value should be digits.",
        "email": "This value should be a valid email.",
        "number": "This value should be a valid number.",
        "phone": "This value should be a valid phone number.",
        "url": "This value should be a valid url.",
        "urlstrict": "This value should be a valid url.",
    },
    "required": "This value is required.",
    "notnull": "This value should not be null.",
    "notblank": "This value should not be blank.",
    "regexp": "This value seems to be invalid.",
    "min": "This value should be greater than or equal to {min}.",
    "max": "This value should be lower than or equal to {max}.",
    "range": "This value should be between {min} and {max}.",
    "minlength": "This value is too short. It should have {minlength} characters or more.",
    "maxlength": "This value is too long. It should have {maxlength} characters or less.",
    "rangelength": "This value length is invalid. It should be between {min} and {max} characters long.",
}


def _display(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_message(template: str, params: Mapping[str, Any]) -> str:
    """Substitute ``{name}`` placeholders from ``params``.

    Each key replaces its first placeholder only; keys are treated as literal
    text, never as patterns. Placeholders without a matching key are left
    as they are.

    > format_message("Hi {name}!", {"name": "Brad"})
    'Hi Brad!'
    """
    formatted = template
    for name, value in params.items():
        replacement = _display(value)
        formatted = re.sub(
            "\\{" + re.escape(str(name)) + "\\}",
            lambda _match: replacement,
            formatted,
            count=1,
        )
    return formatted


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class MessageCatalog:
    """Nested mapping of message templates.

    Example:
        catalog = MessageCatalog.default()
        catalog.template("type.email")
        catalog.render(outcome)
    """

    def __init__(self, entries: Mapping[str, Any]):
        self.entries = dict(entries)

    @classmethod
    def default(cls) -> "MessageCatalog":
        return cls(copy.deepcopy(DEFAULT_MESSAGES))

    @classmethod
    def from_yaml(cls, path: Path, base: "MessageCatalog | None" = None) -> "MessageCatalog":
        """Load a YAML override file on top of ``base`` (defaults if omitted).

        Raises:
            ConfigurationError: If the file does not hold a mapping
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Message catalog {path} must be a mapping")

        base = base or cls.default()
        return cls(_deep_merge(base.entries, data))

    def template(self, key: MessageKey | str) -> str:
        """Look up a template by dotted key.

        Raises:
            MissingMessageError: If no string entry exists at that path
        """
        path = key.value if isinstance(key, MessageKey) else key
        node: Any = self.entries
        for part in path.split("."):
            if not isinstance(node, Mapping) or part not in node:
                raise MissingMessageError(f"No message for key '{path}'")
            node = node[part]

        if not isinstance(node, str):
            raise MissingMessageError(f"Message key '{path}' does not name a message")
        return node

    def render(self, outcome: Outcome) -> str:
        return format_message(self.template(outcome.message_key), outcome.params)

    def keys(self) -> list[str]:
        """All dotted keys that name a message."""
        found: list[str] = []

        def walk(node: Mapping[str, Any], prefix: str) -> None:
            for name, value in node.items():
                path = f"{prefix}{name}"
                if isinstance(value, Mapping):
                    walk(value, path + ".")
                else:
                    found.append(path)

        walk(self.entries, "")
        return found
