"""Form definitions: element collections, YAML loading and schema checks."""

from formcheck.forms.form import DEFAULT_FINDERS, FieldFinder, Form, html_finder
from formcheck.forms.loader import FormLoader
from formcheck.forms.schema import FormIssue, validate_form_data, validate_form_file

__all__ = [
    "DEFAULT_FINDERS",
    "FieldFinder",
    "Form",
    "FormIssue",
    "FormLoader",
    "html_finder",
    "validate_form_data",
    "validate_form_file",
]
