"""Load form definitions from YAML files."""

from dataclasses import replace
from pathlib import Path
from typing import Any

import yaml

from formcheck.config import EngineSettings
from formcheck.fields.adapter import FormElement
from formcheck.fields.values import ValueSources
from formcheck.forms.form import Form


class FormLoader:
    """Loads a form definition (``form:``, ``settings:``, ``sources:``, ``fields:``).

    Example YAML:
        form: signup
        fields:
          - name: email
            attributes: {type: email, required: true}
            options: {trigger: blur}
    """

    def __init__(self, path: Path, settings: EngineSettings | None = None):
        self.path = path
        self.settings = settings

    def load(self) -> Form:
        with open(self.path) as f:
            data = yaml.safe_load(f)
        if not data or "form" not in data:
            raise ValueError(f"{self.path} is not a form definition (missing 'form')")
        return self.resolve(data)

    def resolve(self, data: dict[str, Any]) -> Form:
        """Build a Form from a parsed definition."""
        settings = self._resolve_settings(data.get("settings") or {})
        elements = [self._resolve_element(f) for f in data.get("fields", [])]

        names = [e.name for e in elements]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(
                f"Form '{data['form']}' declares duplicate fields: {', '.join(duplicates)}"
            )

        return Form(
            name=data["form"],
            elements=elements,
            settings=settings,
            value_sources=ValueSources(data.get("sources") or {}),
        )

    def _resolve_settings(self, data: dict[str, Any]) -> EngineSettings:
        settings = replace(self.settings) if self.settings else EngineSettings.from_env()
        settings.update(data, base_path=self.path.parent)
        return settings

    def _resolve_element(self, data: dict[str, Any]) -> FormElement:
        if "name" not in data:
            raise ValueError(f"Field without a name in {self.path}")
        return FormElement(
            tag=data.get("tag", "input"),
            name=data["name"],
            attributes=dict(data.get("attributes") or {}),
            data=dict(data.get("options") or {}),
            value=data.get("value", ""),
        )
