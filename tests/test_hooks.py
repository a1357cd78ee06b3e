"""Tests for the validation plugin system."""

import logging

import pytest

from formcheck.fields.adapter import Field, FormElement
from formcheck.hooks import (
    VALIDATED_ONCE,
    Event,
    HookContext,
    HookDecision,
    PluginContext,
    PluginHookChain,
    PluginHooks,
    PluginRegistry,
    create_default_plugins,
)
from formcheck.hooks.builtin import (
    delayed_validation_plugin,
    triggers_plugin,
    validate_after_plugin,
    validation_min_length_plugin,
)
from formcheck.validation.types import ValidationPass


def make_field(tag: str = "input", options: dict | None = None, value: str = "") -> Field:
    return Field(FormElement(tag=tag, data=options or {}, value=value))


def before(hooks: PluginHooks, field: Field, event: str | None) -> HookDecision | None:
    ctx = HookContext(field=field, event=Event(event) if event else None, value=field.get_value())
    return hooks.before_validate(ctx)


# =============================================================================
# Registry
# =============================================================================


class TestPluginRegistry:
    def test_builtin_order(self):
        assert create_default_plugins().list_registered() == [
            "triggers",
            "delayed-validation",
            "validation-min-length",
            "validate-after",
        ]

    def test_decorator_registers(self):
        registry = PluginRegistry()

        @registry.plugin("noop")
        def noop(field, context):
            return PluginHooks()

        assert registry.get("noop") is noop

    def test_register_is_idempotent(self):
        registry = PluginRegistry()
        first = lambda field, context: PluginHooks()  # noqa: E731
        registry.register("p", first)
        registry.register("p", lambda field, context: PluginHooks())
        assert registry.get("p") is first

    def test_get_unknown_raises(self):
        with pytest.raises(ValueError, match="not registered"):
            PluginRegistry().get("missing")


# =============================================================================
# Built-in plugins
# =============================================================================


class TestTriggersPlugin:
    def test_vetoes_unlisted_event(self):
        field = make_field(options={"trigger": "blur"})
        assert before(triggers_plugin(field, PluginContext()), field, "focus") is HookDecision.VETO

    def test_accepts_declared_and_default_triggers(self):
        field = make_field(options={"trigger": "blur"})
        hooks = triggers_plugin(field, PluginContext())
        for event in ("blur", "keyup", "validate"):
            assert before(hooks, field, event) is HookDecision.PROCEED

    def test_proceeds_without_event(self):
        field = make_field()
        assert before(triggers_plugin(field, PluginContext()), field, None) is HookDecision.PROCEED


class TestDelayedValidationPlugin:
    def test_first_keyup_is_delayed(self):
        field = make_field()
        hooks = delayed_validation_plugin(field, PluginContext())
        assert before(hooks, field, "keyup") is HookDecision.VETO
        assert before(hooks, field, "change") is HookDecision.VETO

    def test_manual_trigger_is_never_delayed(self):
        field = make_field()
        hooks = delayed_validation_plugin(field, PluginContext())
        assert before(hooks, field, "validate") is HookDecision.PROCEED

    def test_declared_trigger_is_never_delayed(self):
        field = make_field(options={"trigger": "change"})
        hooks = delayed_validation_plugin(field, PluginContext())
        assert before(hooks, field, "change") is HookDecision.PROCEED

    def test_non_rapid_events_pass(self):
        field = make_field()
        hooks = delayed_validation_plugin(field, PluginContext())
        assert before(hooks, field, "blur") is HookDecision.PROCEED

    def test_after_validate_marks_field(self):
        field = make_field()
        hooks = delayed_validation_plugin(field, PluginContext())
        hooks.after_validate(HookContext(field=field), ValidationPass())
        assert field.get_option(VALIDATED_ONCE) is True
        assert before(hooks, field, "keyup") is HookDecision.PROCEED


class TestValidationMinLengthPlugin:
    def test_no_hooks_without_option(self):
        field = make_field()
        assert validation_min_length_plugin(field, PluginContext()).before_validate is None

    def test_vetoes_short_value_before_first_pass(self):
        field = make_field(options={"validation-min-length": "3"}, value="ab")
        hooks = validation_min_length_plugin(field, PluginContext())
        assert before(hooks, field, "keyup") is HookDecision.VETO

    def test_long_enough_or_empty_value_proceeds(self):
        field = make_field(options={"validation-min-length": "3"}, value="abc")
        hooks = validation_min_length_plugin(field, PluginContext())
        assert before(hooks, field, "keyup") is HookDecision.PROCEED

        empty = make_field(options={"validation-min-length": "3"})
        hooks = validation_min_length_plugin(empty, PluginContext())
        assert before(hooks, empty, "keyup") is HookDecision.PROCEED

    def test_no_effect_after_first_pass(self):
        field = make_field(options={"validation-min-length": "3", VALIDATED_ONCE: True}, value="a")
        assert validation_min_length_plugin(field, PluginContext()).before_validate is None


class TestValidateAfterPlugin:
    def test_waits_for_other_field(self):
        other = make_field()
        field = make_field(options={"validate-after": "password"})
        context = PluginContext(find_field=lambda ref: other if ref == "password" else None)
        hooks = validate_after_plugin(field, context)

        assert before(hooks, field, "blur") is HookDecision.VETO
        other.set_option(VALIDATED_ONCE, True)
        assert before(hooks, field, "blur") is HookDecision.PROCEED

    def test_unresolved_reference_vetoes(self, caplog):
        field = make_field(options={"validate-after": "#nowhere"})
        hooks = validate_after_plugin(field, PluginContext())
        with caplog.at_level(logging.WARNING):
            assert before(hooks, field, "blur") is HookDecision.VETO
        assert "#nowhere" in caplog.text


# =============================================================================
# Chain
# =============================================================================


class TestPluginHookChain:
    def test_every_before_hook_runs_and_vetoes_are_collected(self):
        calls = []

        def make(name, decision):
            def factory(field, context):
                def before_validate(ctx):
                    calls.append(name)
                    return decision
                return PluginHooks(before_validate=before_validate)
            return factory

        registry = PluginRegistry()
        registry.register("a", make("a", HookDecision.VETO))
        registry.register("b", make("b", None))
        registry.register("c", make("c", HookDecision.VETO))

        chain = PluginHookChain.build(registry, make_field())
        decision = chain.before_validate(HookContext(field=make_field()))

        assert calls == ["a", "b", "c"]
        assert decision.proceed is False
        assert decision.vetoed_by == ["a", "c"]

    def test_none_counts_as_proceed(self):
        registry = PluginRegistry()
        registry.register("quiet", lambda field, context: PluginHooks(before_validate=lambda ctx: None))
        decision = PluginHookChain.build(registry, make_field()).before_validate(
            HookContext(field=make_field())
        )
        assert decision.proceed is True
        assert decision.vetoed_by == []

    def test_after_hooks_run_in_registration_order(self):
        seen = []
        registry = PluginRegistry()
        for name in ("first", "second"):
            registry.register(
                name,
                lambda field, context, name=name: PluginHooks(
                    after_validate=lambda ctx, validation_pass: seen.append(name)
                ),
            )
        PluginHookChain.build(registry, make_field()).after_validate(
            HookContext(field=make_field()), ValidationPass()
        )
        assert seen == ["first", "second"]
