"""End-to-end tests for the validation engine."""

import logging

import pytest

from formcheck.config import EngineSettings
from formcheck.engine import ValidationEngine
from formcheck.fields.adapter import Field, FormElement
from formcheck.fields.identifiers import ContainerIdentifiers, SequentialIdentifierSource
from formcheck.forms.form import Form
from formcheck.hooks import VALIDATED_ONCE, Event, PluginHooks, create_default_plugins
from formcheck.presentation import RecordingPresenter
from formcheck.validation import (
    EmptyValuePolicy,
    FieldState,
    InvalidPatternError,
    MissingMessageError,
    MessageCatalog,
    RemoveAllErrors,
    Verdict,
)

MANUAL = Event("validate")


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def engine(presenter):
    return ValidationEngine(
        presenter=presenter,
        identifiers=ContainerIdentifiers(SequentialIdentifierSource()),
    )


def make_field(attributes: dict | None = None, options: dict | None = None, value="") -> Field:
    return Field(FormElement(attributes=attributes or {}, data=options or {}, value=value))


# =============================================================================
# Verdicts
# =============================================================================


class TestVerdicts:
    def test_no_applicable_constraints_gives_no_verdict(self, engine, presenter):
        report = engine.validate(make_field(value="anything"), MANUAL)
        assert report.verdict is Verdict.UNKNOWN
        assert report.valid is None
        assert report.instructions == []
        assert report.field_id is None
        assert presenter.errors == {}
        assert presenter.states == {}

    def test_invalid_email(self, engine, presenter):
        field = make_field(attributes={"type": "email"}, value="not-an-email")
        report = engine.validate(field, MANUAL)

        assert report.valid is False
        outcome = report.validation_pass["type"]
        assert outcome.valid is False
        assert outcome.message_key == "type.email"
        assert presenter.messages(report.field_id) == ["This value should be a valid email."]
        assert presenter.states[report.field_id] is FieldState.ERROR

    def test_valid_email(self, engine, presenter):
        field = make_field(attributes={"type": "email"}, value="a@b.co")
        report = engine.validate(field, MANUAL)
        assert report.valid is True
        assert presenter.states[report.field_id] is FieldState.SUCCESS

    def test_range(self, engine):
        field = make_field(options={"range": "[10, 20]"}, value="15")
        assert engine.validate(field, MANUAL).valid is True

        field.element.value = "21"
        report = engine.validate(field, MANUAL)
        assert report.valid is False
        assert dict(report.validation_pass["range"].params) == {"min": 10, "max": 20}

    def test_one_failure_among_many_is_invalid(self, engine):
        field = make_field(
            attributes={"required": True, "type": "number", "min": "1", "max": "100"},
            value="500",
        )
        report = engine.validate(field, MANUAL)
        assert [o.valid for o in report.validation_pass.values()] == [True, True, False, True]
        assert report.verdict is Verdict.INVALID

    def test_error_then_success_clears_errors(self, engine, presenter):
        field = make_field(attributes={"required": True}, options={"minlength": "3"}, value="ab")
        first = engine.validate(field, MANUAL)
        assert presenter.messages(first.field_id) == [
            "This value is too short. It should have 3 characters or more."
        ]

        field.element.value = "abcd"
        second = engine.validate(field, MANUAL)
        assert second.field_id == first.field_id
        assert RemoveAllErrors() in second.instructions
        assert presenter.messages(second.field_id) == []
        assert presenter.states[second.field_id] is FieldState.SUCCESS

    def test_declared_order_drives_error_order(self, engine, presenter):
        field = make_field(
            options={"min": "10", "max": "5", "validators": "max min"},
            value="7",
        )
        report = engine.validate(field, MANUAL)
        assert list(report.validation_pass) == ["max", "min"]
        assert list(presenter.errors[report.field_id]) == ["max", "min"]

    def test_idempotent(self, engine):
        field = make_field(attributes={"type": "digits"}, options={"minlength": "4"}, value="12a")
        first = engine.validate(field, MANUAL)
        second = engine.validate(field, MANUAL)
        assert first.validation_pass == second.validation_pass
        assert first.verdict is second.verdict

    def test_configuration_changes_apply_on_next_pass(self, engine):
        field = make_field(options={"min": "5"}, value="7")
        assert engine.validate(field, MANUAL).valid is True
        field.set_option("min", "10")
        assert engine.validate(field, MANUAL).valid is False


# =============================================================================
# Plugins
# =============================================================================


class TestPluginsInEngine:
    def test_first_keyup_is_vetoed_then_manual_trigger_proceeds(self, engine, presenter):
        field = make_field(attributes={"required": True})

        vetoed = engine.validate(field, Event("keyup"))
        assert vetoed.valid is None
        assert vetoed.vetoed_by == ["delayed-validation"]
        assert len(vetoed.validation_pass) == 0
        assert presenter.errors == {}

        report = engine.validate(field, MANUAL)
        assert report.valid is False
        assert field.get_option(VALIDATED_ONCE) is True

        # Once validated, keyup is no longer delayed
        field.element.value = "filled"
        assert engine.validate(field, Event("keyup")).valid is True

    def test_untriggered_event_is_vetoed(self, engine):
        field = make_field(attributes={"required": True}, options={"trigger": "blur"})
        report = engine.validate(field, Event("focus"))
        assert report.vetoed_by == ["triggers"]

    def test_vetoed_pass_does_not_run_after_hooks(self, engine):
        field = make_field(attributes={"required": True})
        engine.validate(field, Event("keyup"))
        assert field.get_option(VALIDATED_ONCE) is None

    def test_direct_call_without_event(self, engine):
        field = make_field(attributes={"required": True}, value="x")
        assert engine.validate(field).valid is True

    def test_custom_plugin_observes_outcomes(self, presenter):
        seen = []
        plugins = create_default_plugins()

        @plugins.plugin("observer")
        def observer(field, context):
            return PluginHooks(
                after_validate=lambda ctx, validation_pass: seen.append(dict(validation_pass))
            )

        engine = ValidationEngine(plugins=plugins, presenter=presenter)
        engine.validate(make_field(attributes={"required": True}, value="x"), MANUAL)
        assert list(seen[0]) == ["required"]

    def test_validate_after_uses_form_lookup(self):
        form = Form("signup", [
            FormElement(name="password", attributes={"required": True}, value="secret"),
            FormElement(name="confirm", data={"validate-after": "password", "minlength": "3"},
                        value="secret"),
        ])
        engine = ValidationEngine.for_form(form)

        assert engine.validate(form.field("confirm"), MANUAL).vetoed_by == ["validate-after"]
        engine.validate(form.field("password"), MANUAL)
        assert engine.validate(form.field("confirm"), MANUAL).valid is True


# =============================================================================
# Events, reset and errors
# =============================================================================


class TestHandleEvent:
    def test_dispatches_to_the_target_field(self):
        element = FormElement(name="age", attributes={"type": "number", "min": "18"}, value="12")
        form = Form("profile", [element])
        engine = ValidationEngine.for_form(form)

        report = engine.handle_event(Event("validate", target=element))
        assert report is not None
        assert report.valid is False

    def test_non_field_target_is_ignored(self):
        engine = ValidationEngine.for_form(Form("empty"))
        assert engine.handle_event(Event("validate", target=FormElement(tag="div"))) is None
        assert engine.handle_event(Event("validate")) is None


class TestReset:
    def test_reset_clears_errors_state_and_first_pass(self, engine, presenter):
        field = make_field(attributes={"required": True})
        report = engine.validate(field, MANUAL)
        assert presenter.errors

        engine.reset(field)
        assert presenter.errors == {}
        assert report.field_id not in presenter.states
        assert not field.get_option(VALIDATED_ONCE)


class TestConfigurationErrors:
    def test_malformed_pattern_propagates(self, engine, caplog):
        field = make_field(options={"regexp": "(["}, value="x")
        with caplog.at_level(logging.ERROR):
            with pytest.raises(InvalidPatternError):
                engine.validate(field, MANUAL)
        assert "Configuration error" in caplog.text

    def test_missing_message_propagates(self, presenter):
        engine = ValidationEngine(catalog=MessageCatalog({"required": "Needed."}), presenter=presenter)
        with pytest.raises(MissingMessageError):
            engine.validate(make_field(attributes={"type": "email"}, value="nope"), MANUAL)

    def test_missing_message_leaves_field_unvalidated(self, presenter):
        engine = ValidationEngine(catalog=MessageCatalog({"required": "Needed."}), presenter=presenter)
        field = make_field(attributes={"type": "email"}, value="nope")
        with pytest.raises(MissingMessageError):
            engine.validate(field, MANUAL)
        assert field.get_option(VALIDATED_ONCE) is None
        assert presenter.errors == {}

    def test_broken_field_does_not_affect_others(self, engine):
        broken = make_field(options={"regexp": "(["}, value="x")
        with pytest.raises(InvalidPatternError):
            engine.validate(broken, MANUAL)
        assert engine.validate(make_field(attributes={"required": True}, value="x"), MANUAL).valid


class TestClearedOptionalField:
    def test_skipped_pass_keeps_previous_errors_until_reset(self, engine, presenter):
        field = make_field(attributes={"type": "email"}, value="nope")
        first = engine.validate(field, MANUAL)
        assert presenter.messages(first.field_id) == ["This value should be a valid email."]

        field.element.value = ""
        cleared = engine.validate(field, MANUAL)
        assert cleared.valid is None
        assert cleared.instructions == []
        assert presenter.messages(first.field_id) == ["This value should be a valid email."]
        assert presenter.states[first.field_id] is FieldState.ERROR

        engine.reset(field)
        assert presenter.errors == {}
        assert first.field_id not in presenter.states

    def test_whitespace_value_is_not_skipped(self, engine, presenter):
        field = make_field(attributes={"type": "digits"}, value="   ")
        report = engine.validate(field, MANUAL)
        assert report.valid is False
        assert presenter.messages(report.field_id) == ["This value should be digits."]


class TestSettings:
    def test_strict_empty_policy(self):
        engine = ValidationEngine(settings=EngineSettings(empty_value_policy=EmptyValuePolicy.STRICT))
        report = engine.validate(make_field(attributes={"type": "email"}), MANUAL)
        assert report.valid is False
