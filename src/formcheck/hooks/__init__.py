"""formcheck validation plugin system.

Plugins contribute hooks around each validation attempt:
- beforeValidate: runs first; any veto abandons the attempt (no verdict)
- afterValidate: runs after a completed pass; observes the outcomes

Usage:
    from formcheck.hooks import PluginHooks, create_default_plugins

    plugins = create_default_plugins()

    @plugins.plugin("audit")
    def audit(field, context):
        return PluginHooks(after_validate=lambda ctx, validation_pass: ...)
"""

from formcheck.hooks.builtin import (
    BUILTIN_PLUGINS,
    DELAYABLE_EVENTS,
    VALIDATED_ONCE,
    create_default_plugins,
    register_builtin_plugins,
)
from formcheck.hooks.registry import PluginRegistry
from formcheck.hooks.service import PluginHookChain
from formcheck.hooks.types import (
    ChainDecision,
    Event,
    HookContext,
    HookDecision,
    PluginContext,
    PluginFactory,
    PluginHooks,
)

__all__ = [
    "BUILTIN_PLUGINS",
    "ChainDecision",
    "DELAYABLE_EVENTS",
    "Event",
    "HookContext",
    "HookDecision",
    "PluginContext",
    "PluginFactory",
    "PluginHookChain",
    "PluginHooks",
    "PluginRegistry",
    "VALIDATED_ONCE",
    "create_default_plugins",
    "register_builtin_plugins",
]
