"""Field adapter: the engine's view over one form element.

A Field is a transient wrapper built per validation call. Its identity is
the underlying FormElement; the only state it persists lives in the
element's options (``validated-once`` and the error container ``hash``).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol

from formcheck.config import EngineSettings
from formcheck.fields.coerce import coerce
from formcheck.fields.values import ValueSources

# Always a trigger, so an invalid field re-validates as the user types
KEY_TRIGGERS = ("keyup",)


@dataclass(eq=False)
class FormElement:
    """An interactive element: its tag, HTML attributes and declared options.

    Attributes:
        tag: Element tag ("input", "select", "textarea")
        name: Element name, used for lookups within a form
        attributes: Native HTML attributes (type, required, min, pattern, class, ...)
        data: Declared options, keyed without the ``data-`` prefix
        value: The element's literal content
    """

    tag: str = "input"
    name: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    data: dict[str, Any] = field(default_factory=dict)
    value: Any = ""

    @property
    def id(self) -> str | None:
        return self.attributes.get("id")


class FieldAdapter(Protocol):
    """Contract the engine consumes for a field."""

    tag: str
    manual_trigger: str

    def get_option(self, name: str) -> Any:
        ...

    def set_option(self, name: str, value: Any) -> None:
        ...

    def get_attribute(self, name: str) -> Any:
        ...

    def has_flag(self, name: str) -> bool:
        ...

    def get_value(self) -> Any:
        ...

    def declared_type(self) -> str | None:
        ...

    def declared_triggers(self) -> frozenset[str]:
        ...

    def triggers(self) -> frozenset[str]:
        ...

    def snapshot(self) -> FieldConfiguration:
        ...


class _FieldReads:
    """Configuration reads shared by live fields and their snapshots."""

    tag: str
    manual_trigger: str

    def get_option(self, name: str) -> Any:
        raise NotImplementedError

    def get_attribute(self, name: str) -> Any:
        raise NotImplementedError

    def has_flag(self, name: str) -> bool:
        """True for a present boolean attribute or a matching class name."""
        value = self.get_attribute(name)
        if value is not None and value is not False:
            return True
        classes = str(self.get_attribute("class") or "").split()
        return name in classes

    def declared_type(self) -> str | None:
        """Native type, overridden by the ``type`` option when declared."""
        override = self.get_option("type")
        if override:
            return str(override)
        native = self.get_attribute("type")
        return str(native) if native is not None else None

    def declared_triggers(self) -> frozenset[str]:
        """Event types explicitly listed in the ``trigger`` option."""
        declared = str(self.get_option("trigger") or "").strip()
        return frozenset(name for name in re.split(r"\s+", declared) if name)

    def triggers(self) -> frozenset[str]:
        """Every event type that may trigger validation of this field."""
        triggers = set(self.declared_triggers())
        triggers.update(KEY_TRIGGERS)
        if self.tag == "select":
            triggers.add("change")
        triggers.add(self.manual_trigger)
        return frozenset(triggers)


@dataclass(frozen=True)
class FieldConfiguration(_FieldReads):
    """Immutable snapshot of a field's configuration, taken at call start."""

    tag: str
    attributes: Mapping[str, Any]
    options: Mapping[str, Any]
    manual_trigger: str

    def get_option(self, name: str) -> Any:
        return self.options.get(name)

    def get_attribute(self, name: str) -> Any:
        return self.attributes.get(name)


class Field(_FieldReads):
    """Live FieldAdapter over a FormElement.

    Example:
        element = FormElement(attributes={"type": "email", "required": True})
        field = Field(element)
        field.get_value()
    """

    def __init__(
        self,
        element: FormElement,
        settings: EngineSettings | None = None,
        value_sources: ValueSources | None = None,
    ):
        self.element = element
        self.settings = settings or EngineSettings()
        self.value_sources = value_sources or ValueSources()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Field) and other.element is self.element

    def __hash__(self) -> int:
        return id(self.element)

    def __repr__(self) -> str:
        return f"Field(tag={self.tag!r}, name={self.element.name!r})"

    @property
    def tag(self) -> str:
        return self.element.tag

    @property
    def manual_trigger(self) -> str:
        return self.settings.manual_trigger

    def get_option(self, name: str) -> Any:
        """Decoded option value, or the engine-wide default when not declared."""
        if name in self.element.data:
            return coerce(self.element.data[name])
        return self.settings.option_defaults.get(name)

    def set_option(self, name: str, value: Any) -> None:
        self.element.data[name] = value

    def get_attribute(self, name: str) -> Any:
        return self.element.attributes.get(name)

    def get_value(self) -> Any:
        """Current value: a registered value source if declared, else the content.

        Raises:
            UnknownValueSourceError: If the declared source is not registered
        """
        reference = self.get_option("value")
        if reference is not None:
            return self.value_sources.resolve(str(reference))
        return self.element.value

    def snapshot(self) -> FieldConfiguration:
        options = dict(self.settings.option_defaults)
        options.update({name: coerce(value) for name, value in self.element.data.items()})
        return FieldConfiguration(
            tag=self.tag,
            attributes=MappingProxyType(dict(self.element.attributes)),
            options=MappingProxyType(options),
            manual_trigger=self.manual_trigger,
        )
