"""Built-in plugins.

- triggers: only validate on the field's trigger events
- delayed-validation: hold back keyup/change validation until a first pass
- validation-min-length: hold back the first pass until enough is typed
- validate-after: wait until another field has been validated
"""

import logging

from formcheck.fields.adapter import FieldAdapter
from formcheck.hooks.registry import PluginRegistry
from formcheck.hooks.types import HookContext, HookDecision, PluginContext, PluginHooks
from formcheck.validation.constraints import parse_number
from formcheck.validation.types import ValidationPass

logger = logging.getLogger(__name__)

VALIDATED_ONCE = "validated-once"

# Rapid-fire events held back until the field has been validated once
DELAYABLE_EVENTS = ("keyup", "change")


def triggers_plugin(field: FieldAdapter, context: PluginContext) -> PluginHooks:
    """Abandons validation unless triggered by one of the field's triggers."""

    def before_validate(ctx: HookContext) -> HookDecision:
        if ctx.event is not None and ctx.event.type not in field.triggers():
            return HookDecision.VETO
        return HookDecision.PROCEED

    return PluginHooks(before_validate=before_validate)


def delayed_validation_plugin(field: FieldAdapter, context: PluginContext) -> PluginHooks:
    """Delays keyup/change validation until the field has been validated once.

    Explicitly declared triggers and the manual trigger are never delayed.
    """

    def before_validate(ctx: HookContext) -> HookDecision:
        if ctx.event is None:
            return HookDecision.PROCEED

        event_type = ctx.event.type
        forced = (
            event_type in field.declared_triggers()
            or event_type == field.manual_trigger
        )
        if not forced and event_type in DELAYABLE_EVENTS and not field.get_option(VALIDATED_ONCE):
            return HookDecision.VETO
        return HookDecision.PROCEED

    def after_validate(ctx: HookContext, validation_pass: ValidationPass) -> None:
        field.set_option(VALIDATED_ONCE, True)

    return PluginHooks(before_validate=before_validate, after_validate=after_validate)


def validation_min_length_plugin(field: FieldAdapter, context: PluginContext) -> PluginHooks:
    """Holds back the first validation while the value is shorter than a minimum."""
    min_length = field.get_option("validation-min-length")
    if not min_length or field.get_option(VALIDATED_ONCE):
        return PluginHooks()

    minimum = parse_number(min_length, "validation-min-length")

    def before_validate(ctx: HookContext) -> HookDecision:
        value = ctx.value
        if value and len(str(value)) < minimum:
            return HookDecision.VETO
        return HookDecision.PROCEED

    return PluginHooks(before_validate=before_validate)


def validate_after_plugin(field: FieldAdapter, context: PluginContext) -> PluginHooks:
    """Delays validation until another field has been validated once."""
    reference = field.get_option("validate-after")
    if not reference:
        return PluginHooks()

    def before_validate(ctx: HookContext) -> HookDecision:
        other = context.find_field(str(reference))
        if other is None:
            logger.warning("validate-after target '%s' not found", reference)
            return HookDecision.VETO
        if not other.get_option(VALIDATED_ONCE):
            return HookDecision.VETO
        return HookDecision.PROCEED

    return PluginHooks(before_validate=before_validate)


BUILTIN_PLUGINS = (
    ("triggers", triggers_plugin),
    ("delayed-validation", delayed_validation_plugin),
    ("validation-min-length", validation_min_length_plugin),
    ("validate-after", validate_after_plugin),
)


def register_builtin_plugins(registry: PluginRegistry) -> None:
    """Register the built-in plugins, in their default run order."""
    for name, factory in BUILTIN_PLUGINS:
        registry.register(name, factory)


def create_default_plugins() -> PluginRegistry:
    """A new plugin registry holding every built-in plugin."""
    registry = PluginRegistry()
    register_builtin_plugins(registry)
    return registry
