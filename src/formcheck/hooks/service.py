"""Plugin hook chain for formcheck.

Wraps one validation attempt with the registered plugins' hooks. Every
beforeValidate hook runs, in registration order; a single veto abandons the
attempt. afterValidate hooks only run after a completed pass, and only
observe it.
"""

import logging

from formcheck.fields.adapter import FieldAdapter
from formcheck.hooks.registry import PluginRegistry
from formcheck.hooks.types import (
    ChainDecision,
    HookContext,
    HookDecision,
    PluginContext,
    PluginHooks,
)
from formcheck.validation.types import ValidationPass

logger = logging.getLogger(__name__)


class PluginHookChain:
    """The hooks of every registered plugin, built for one field."""

    def __init__(self, hooks: list[tuple[str, PluginHooks]]):
        self.hooks = hooks

    @classmethod
    def build(
        cls,
        registry: PluginRegistry,
        field: FieldAdapter,
        context: PluginContext | None = None,
    ) -> "PluginHookChain":
        """Construct every registered plugin for the given field."""
        context = context or PluginContext()
        return cls([(name, factory(field, context)) for name, factory in registry.items()])

    def before_validate(self, ctx: HookContext) -> ChainDecision:
        """Run every beforeValidate hook and combine their decisions.

        Returns:
            ChainDecision with proceed=False if any hook vetoed
        """
        decision = ChainDecision()

        for name, hooks in self.hooks:
            if hooks.before_validate is None:
                continue

            result = hooks.before_validate(ctx)
            if result is HookDecision.VETO:
                decision.proceed = False
                decision.vetoed_by.append(name)

        if not decision.proceed:
            logger.debug(
                "Validation vetoed by %s (event=%s)",
                ", ".join(decision.vetoed_by),
                ctx.event.type if ctx.event else None,
            )
        return decision

    def after_validate(self, ctx: HookContext, validation_pass: ValidationPass) -> None:
        """Run every afterValidate hook, in registration order."""
        for name, hooks in self.hooks:
            if hooks.after_validate is not None:
                hooks.after_validate(ctx, validation_pass)
