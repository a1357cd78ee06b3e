"""Forms: named collections of elements, and field discovery.

Field finders decide whether an interaction target is (part of) a field.
Each finder takes a target and returns the field's element, or None. The
first finder to answer wins.
"""

from collections.abc import Callable
from typing import Any

from formcheck.config import EngineSettings
from formcheck.fields.adapter import Field, FormElement
from formcheck.fields.values import ValueSources

FieldFinder = Callable[[Any], FormElement | None]

HTML_FIELD_TAGS = ("input", "select", "textarea")


def html_finder(target: Any) -> FormElement | None:
    """Field finder for the builtin form inputs."""
    if isinstance(target, FormElement) and target.tag in HTML_FIELD_TAGS:
        return target
    return None


DEFAULT_FINDERS: dict[str, FieldFinder] = {
    "html": html_finder,
}


class Form:
    """A named set of elements sharing settings and value sources.

    Example:
        form = Form("signup", [FormElement(name="email", attributes={"type": "email"})])
        field = form.find_field("email")
    """

    def __init__(
        self,
        name: str,
        elements: list[FormElement] | None = None,
        settings: EngineSettings | None = None,
        value_sources: ValueSources | None = None,
        finders: dict[str, FieldFinder] | None = None,
    ):
        self.name = name
        self.elements: list[FormElement] = list(elements or [])
        self.settings = settings or EngineSettings()
        self.value_sources = value_sources or ValueSources()
        self.finders = dict(finders if finders is not None else DEFAULT_FINDERS)

    def add(self, element: FormElement) -> FormElement:
        self.elements.append(element)
        return element

    def element(self, reference: str) -> FormElement | None:
        """Look up an element by name, or by id with a ``#`` prefix."""
        if reference.startswith("#"):
            wanted = reference[1:]
            return next((e for e in self.elements if e.id == wanted), None)
        return next((e for e in self.elements if e.name == reference), None)

    def wrap(self, element: FormElement) -> Field:
        return Field(element, settings=self.settings, value_sources=self.value_sources)

    def find_field(self, target: Any) -> Field | None:
        """Resolve an interaction target (element or reference) to its field."""
        if isinstance(target, str):
            target = self.element(target)
            if target is None:
                return None

        for finder in self.finders.values():
            element = finder(target)
            if element is not None:
                return self.wrap(element)
        return None

    def field(self, reference: str) -> Field:
        """Like find_field, but a missing field is an error.

        Raises:
            KeyError: If no field matches the reference
        """
        found = self.find_field(reference)
        if found is None:
            raise KeyError(f"Form '{self.name}' has no field '{reference}'")
        return found

    def fields(self) -> list[Field]:
        """Every element that is a field, in declaration order."""
        found = (self.find_field(element) for element in self.elements)
        return [f for f in found if f is not None]
