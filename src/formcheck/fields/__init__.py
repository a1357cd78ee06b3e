"""Field adapters and their collaborators."""

from formcheck.fields.adapter import Field, FieldAdapter, FieldConfiguration, FormElement
from formcheck.fields.coerce import coerce
from formcheck.fields.identifiers import (
    ContainerIdentifiers,
    IdentifierSource,
    RandomIdentifierSource,
    SequentialIdentifierSource,
)
from formcheck.fields.values import ValueSources

__all__ = [
    "ContainerIdentifiers",
    "Field",
    "FieldAdapter",
    "FieldConfiguration",
    "FormElement",
    "IdentifierSource",
    "RandomIdentifierSource",
    "SequentialIdentifierSource",
    "ValueSources",
    "coerce",
]
