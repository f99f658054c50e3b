"""Minimal in-process build host.

Implements the build surface plugins register against, and dispatches
resolve and load calls through the registered hooks the way a bundler
does: hooks run in registration order, and a resolve hook returning None
passes the request to the next one.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from collections.abc import Sequence
from dataclasses import dataclass

from .models import ImportRequest
from .models import LoadRequest
from .plugin import LoadCallback
from .plugin import Plugin
from .plugin import ResolveCallback
from .results import LoadResult
from .results import ResolveResult
from .settings import BuildOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisteredHook:
    filter: re.Pattern[str]
    callback: Callable
    namespace: str | None = None


class PluginHost:
    """Holds build options and the hooks plugins registered during setup.

    Attributes:
        initial_options: Build options visible to plugins at setup time
        resolve_hooks: Registered resolve hooks, in order
        load_hooks: Registered load hooks, in order
    """

    def __init__(
        self,
        initial_options: BuildOptions | None = None,
        plugins: Sequence[Plugin] = (),
        supports_load: bool = True,
    ):
        """Initialize host and set up plugins.

        Args:
            initial_options: Build options (default: BuildOptions())
            plugins: Plugins to set up immediately, in order
            supports_load: When False, plugins see ``on_load`` as None
        """
        self.initial_options = initial_options or BuildOptions()
        self.resolve_hooks: list[RegisteredHook] = []
        self.load_hooks: list[RegisteredHook] = []
        if not supports_load:
            self.on_load = None

        for plugin in plugins:
            self.install(plugin)

    def install(self, plugin: Plugin) -> None:
        logger.debug(f"Setting up plugin {plugin.name}")
        plugin.setup(self)

    def on_resolve(self, filter: re.Pattern[str], callback: ResolveCallback, namespace: str | None = None) -> None:
        self.resolve_hooks.append(RegisteredHook(filter, callback, namespace))

    def on_load(self, filter: re.Pattern[str], callback: LoadCallback, namespace: str | None = None) -> None:
        self.load_hooks.append(RegisteredHook(filter, callback, namespace))

    def resolve(self, request: ImportRequest) -> ResolveResult | None:
        """Run resolve hooks until one produces a result.

        Returns:
            First non-None hook result, or None if every hook delegated
        """
        for hook in self.resolve_hooks:
            if not hook.filter.search(request.specifier):
                continue
            result = hook.callback(request)
            if result is not None:
                return result
        return None

    def load(self, request: LoadRequest) -> LoadResult | None:
        """Run the first load hook registered for the request's namespace and path."""
        for hook in self.load_hooks:
            if hook.namespace is not None and hook.namespace != request.namespace:
                continue
            if hook.filter.search(request.path):
                return hook.callback(request)
        return None


__all__ = ["PluginHost", "RegisteredHook"]
