"""Validation engine: one validation attempt for one field.

Flow of ``validate(field, event)``:
1. Snapshot the field configuration and read its value
2. Build the field's plugins and run every beforeValidate hook (any veto
   ends the attempt with no verdict)
3. Detect, order and run the applicable validators
4. Aggregate the pass into a verdict, rendering every error message
5. Run every afterValidate hook on the resulting pass
6. Apply the error changes to the presenter under the field's container
   identifier

An empty pass (nothing applied, or an empty optional value skipped) emits
no instructions, so errors shown by an earlier pass stay until the next
pass that produces outcomes, or until ``reset``.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from formcheck.config import EngineSettings
from formcheck.fields.adapter import FieldAdapter
from formcheck.fields.identifiers import ContainerIdentifiers
from formcheck.hooks import (
    VALIDATED_ONCE,
    Event,
    HookContext,
    PluginContext,
    PluginHookChain,
    PluginRegistry,
    create_default_plugins,
)
from formcheck.presentation import Presenter, RecordingPresenter, apply_instructions
from formcheck.validation import (
    ConfigurationError,
    ConstraintRegistry,
    Instruction,
    MessageCatalog,
    ValidationPass,
    ValidationResultAggregator,
    ValidatorPipeline,
    Verdict,
    create_default_registry,
)

logger = logging.getLogger(__name__)

FieldLookup = Callable[[Any], FieldAdapter | None]


@dataclass
class ValidationReport:
    """Result of one validation attempt.

    Attributes:
        verdict: VALID / INVALID, or UNKNOWN when vetoed or nothing applied
        validation_pass: Outcomes by constraint (empty when vetoed)
        vetoed_by: Plugins that vetoed the attempt
        instructions: Error changes applied to the presenter
        field_id: Container identifier, set when instructions were applied
    """

    verdict: Verdict
    validation_pass: ValidationPass = field(default_factory=ValidationPass)
    vetoed_by: list[str] = field(default_factory=list)
    instructions: list[Instruction] = field(default_factory=list)
    field_id: str | None = None

    @property
    def vetoed(self) -> bool:
        return bool(self.vetoed_by)

    @property
    def valid(self) -> bool | None:
        """True, False, or None for "no verdict"."""
        if self.verdict is Verdict.VALID:
            return True
        if self.verdict is Verdict.INVALID:
            return False
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "verdict": self.verdict.value,
            "valid": self.valid,
            "vetoedBy": list(self.vetoed_by),
            "outcomes": self.validation_pass.to_dict(),
            "fieldId": self.field_id,
        }


class ValidationEngine:
    """Runs validation attempts and drives the presenter.

    Example:
        form = FormLoader(path).load()
        engine = ValidationEngine.for_form(form)
        report = engine.validate(form.field("email"), Event("validate"))
    """

    def __init__(
        self,
        registry: ConstraintRegistry | None = None,
        plugins: PluginRegistry | None = None,
        catalog: MessageCatalog | None = None,
        presenter: Presenter | None = None,
        identifiers: ContainerIdentifiers | None = None,
        settings: EngineSettings | None = None,
        find_field: FieldLookup | None = None,
    ):
        self.settings = settings or EngineSettings()
        self.registry = registry or create_default_registry()
        self.plugins = plugins or create_default_plugins()
        self.catalog = catalog or self._load_catalog(self.settings)
        self.presenter = presenter or RecordingPresenter()
        self.identifiers = identifiers or ContainerIdentifiers()
        self.find_field: FieldLookup = find_field or (lambda target: None)
        self.pipeline = ValidatorPipeline(self.registry, self.settings.empty_value_policy)
        self.aggregator = ValidationResultAggregator(self.catalog)

    @classmethod
    def for_form(cls, form: Any, **kwargs: Any) -> "ValidationEngine":
        """Engine bound to a form's settings and field lookup."""
        kwargs.setdefault("settings", form.settings)
        kwargs.setdefault("find_field", form.find_field)
        return cls(**kwargs)

    @staticmethod
    def _load_catalog(settings: EngineSettings) -> MessageCatalog:
        if settings.messages_path is not None:
            return MessageCatalog.from_yaml(settings.messages_path)
        return MessageCatalog.default()

    def validate(self, field: FieldAdapter, event: Event | None = None) -> ValidationReport:
        """Run one validation attempt.

        Raises:
            ConfigurationError: If the field's declaration is broken
        """
        try:
            return self._validate(field, event)
        except ConfigurationError as e:
            logger.error("Configuration error while validating %r: %s", field, e)
            raise

    def _validate(self, field: FieldAdapter, event: Event | None) -> ValidationReport:
        configuration = field.snapshot()
        value = field.get_value()

        chain = PluginHookChain.build(
            self.plugins, field, PluginContext(find_field=self.find_field)
        )
        ctx = HookContext(field=field, event=event, value=value)

        decision = chain.before_validate(ctx)
        if not decision.proceed:
            return ValidationReport(verdict=Verdict.UNKNOWN, vetoed_by=decision.vetoed_by)

        validation_pass = self.pipeline.execute(configuration, value)
        # A missing message must not leave the field marked as validated
        result = self.aggregator.aggregate(validation_pass)
        chain.after_validate(ctx, validation_pass)

        report = ValidationReport(
            verdict=result.verdict,
            validation_pass=validation_pass,
            instructions=result.instructions,
        )

        if result.instructions:
            report.field_id = self.identifiers.get(field)
            apply_instructions(self.presenter, report.field_id, result.instructions)

        logger.debug(
            "Validated %r: %s (%d outcome(s))", field, result.verdict.value, len(validation_pass)
        )
        return report

    def handle_event(self, event: Event) -> ValidationReport | None:
        """Validate the field an event happened on, if its target is a field."""
        field = self.find_field(event.target)
        if field is None:
            return None
        return self.validate(field, event)

    def reset(self, field: FieldAdapter) -> None:
        """Forget a field's errors, state and first-pass flag."""
        field_id = self.identifiers.get(field)
        self.presenter.remove_all_errors(field_id)
        self.presenter.set_field_state(field_id, None)
        field.set_option(VALIDATED_ONCE, False)
