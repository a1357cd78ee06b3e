"""Plugin registry for formcheck.

Provides registration and lookup for plugin factories. Follows the same
pattern as ConstraintRegistry: registration order is the order hooks run in.
"""

from collections.abc import Callable

from formcheck.hooks.types import PluginFactory


class PluginRegistry:
    """Ordered table of named plugin factories.

    Example:
        plugins = PluginRegistry()

        @plugins.plugin("audit")
        def audit(field, context):
            return PluginHooks(after_validate=record_pass)
    """

    def __init__(self) -> None:
        self._plugins: dict[str, PluginFactory] = {}

    def register(self, name: str, factory: PluginFactory) -> None:
        """Register a plugin factory by name.

        Idempotent: re-registering the same name is a no-op.
        """
        if name in self._plugins:
            return
        self._plugins[name] = factory

    def plugin(self, name: str) -> Callable[[PluginFactory], PluginFactory]:
        """Decorator to register a plugin factory."""

        def decorator(factory: PluginFactory) -> PluginFactory:
            self.register(name, factory)
            return factory

        return decorator

    def get(self, name: str) -> PluginFactory:
        """Get a registered plugin factory by name.

        Raises:
            ValueError: If plugin is not registered
        """
        if name not in self._plugins:
            raise ValueError(f"Plugin '{name}' is not registered.")
        return self._plugins[name]

    def items(self) -> list[tuple[str, PluginFactory]]:
        return list(self._plugins.items())

    def is_registered(self, name: str) -> bool:
        """Check if a plugin is registered."""
        return name in self._plugins

    def list_registered(self) -> list[str]:
        """List registered plugin names in registration order."""
        return list(self._plugins)

    def clear(self) -> None:
        """Clear all registrations. Primarily for testing."""
        self._plugins.clear()
