"""
forms/schema.py — JSON Schema validation for form definition files.

Usage:
    from formcheck.forms.schema import validate_form_file

    issues = validate_form_file(Path("forms/signup.yaml"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "form.schema.json"


@dataclass
class FormIssue:
    """A single schema finding for a form definition file."""

    file: Path
    message: str
    path: str = ""          # Location within the document, e.g. "fields[0]/options"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


def load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open() as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def validate_form_data(data: Any, file: Path) -> list[FormIssue]:
    """Validate an already-parsed form definition."""
    validator = Draft202012Validator(load_schema())
    return [
        FormIssue(file=file, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(data), key=_json_path)
    ]


def validate_form_file(path: Path) -> list[FormIssue]:
    """
    Validate a form definition YAML file against the form schema.

    Returns:
        A list of :class:`FormIssue` objects (empty on success).
    """
    try:
        with path.open() as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [FormIssue(file=path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return [FormIssue(file=path, message="File is empty or contains only whitespace")]

    issues = validate_form_data(raw, path)
    if issues:
        logger.debug("%d schema issue(s) in %s", len(issues), path)
    return issues
