"""Plugin wiring: installs the resolve and load hooks into a host build.

Usage:
    plugin = pnp_plugin(find_pnp_api, base_dir="/repo")
    host = PluginHost(BuildOptions(platform="node"), plugins=[plugin])
    result = host.resolve(ImportRequest("left-pad", importer="/repo/src/index.js"))
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .classifier import DEFAULT_POLICY
from .classifier import NAMESPACE
from .classifier import DiagnosticPolicy
from .classifier import ResultClassifier
from .conditions import build_condition_sets
from .engine import ResolutionEngine
from .externals import parse_externals
from .models import DELEGATED
from .models import EXTERNAL
from .models import ImportRequest
from .models import LoadRequest
from .models import Resolution
from .provider import ProviderLocator
from .results import LoadResult
from .results import ResolveResult
from .settings import BuildOptions

logger = logging.getLogger(__name__)

PLUGIN_NAME = "pnp-plugin"

MATCH_ALL = re.compile(r"()")

DEFAULT_EXTENSIONS = (".tsx", ".ts", ".jsx", ".mjs", ".cjs", ".js", ".css", ".json")

ResolveCallback = Callable[[ImportRequest], ResolveResult | None]
LoadCallback = Callable[[LoadRequest], LoadResult]
OnResolve = Callable[[ImportRequest, Resolution], ResolveResult | None]
OnLoad = Callable[[LoadRequest], LoadResult]


class PluginBuild(Protocol):
    """Build surface a host exposes to plugins during setup.

    ``on_load`` may be None on hosts that never load file contents.
    """

    initial_options: BuildOptions

    def on_resolve(self, filter: re.Pattern[str], callback: ResolveCallback, namespace: str | None = None) -> None: ...

    on_load: Callable[..., None] | None


def default_on_load(request: LoadRequest) -> LoadResult:
    """Read a resolved file from disk.

    Paths in the managed namespace still point at files in the package
    cache, so imports from the loaded module resolve relative to its
    directory like regular files.
    """
    return LoadResult(
        contents=Path(request.path).read_bytes(),
        loader="default",
        resolve_dir=os.path.dirname(request.path),
    )


@dataclass
class Plugin:
    """A host build plugin.

    Attributes:
        name: Plugin name reported to the host
        locator: Provider locator; None makes setup a no-op
        base_dir: Importing context for entry points
        extensions: Extensions tried by the provider, in order
        filter: Specifiers the resolve hook intercepts
        on_resolve: Turns a Resolution into the host result
        on_load: Loads a resolved path's contents
    """

    locator: ProviderLocator | None
    base_dir: str
    extensions: Sequence[str]
    filter: re.Pattern[str]
    on_resolve: OnResolve
    on_load: OnLoad
    name: str = PLUGIN_NAME

    def create_engine(self, options: BuildOptions) -> ResolutionEngine:
        """Precompute per-build data and build the engine.

        Raises:
            ValueError: No provider locator is configured
        """
        if self.locator is None:
            raise ValueError("Cannot create a resolution engine without a provider locator")

        platform = options.platform or "browser"
        return ResolutionEngine(
            self.locator,
            externals=parse_externals(options.external),
            condition_sets=build_condition_sets(options.conditions, platform),
            platform=platform,
            extensions=self.extensions,
            base_dir=self.base_dir,
        )

    def setup(self, build: PluginBuild) -> None:
        if self.locator is None:
            logger.debug(f"[pnp:setup] no provider locator, {self.name} is inactive")
            return

        engine = self.create_engine(build.initial_options)
        on_resolve = self.on_resolve

        def resolve_hook(request: ImportRequest) -> ResolveResult | None:
            outcome = engine.resolve(request)
            if outcome is DELEGATED:
                return None
            if outcome is EXTERNAL:
                return ResolveResult(external=True)
            return on_resolve(request, outcome)

        build.on_resolve(self.filter, resolve_hook)

        # The host must not read managed paths itself: they may live
        # inside archives it cannot open.
        if build.on_load is not None:
            build.on_load(self.filter, self.on_load, namespace=NAMESPACE)

        logger.debug(
            f"[pnp:setup] {self.name} installed (platform={engine.platform}, externals={len(engine.externals)})"
        )


def pnp_plugin(
    locator: ProviderLocator | None = None,
    *,
    base_dir: str | os.PathLike[str] | None = None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
    filter: re.Pattern[str] | str = MATCH_ALL,
    on_resolve: OnResolve | None = None,
    on_load: OnLoad = default_on_load,
    policy: DiagnosticPolicy = DEFAULT_POLICY,
) -> Plugin:
    """Create the resolution plugin.

    Args:
        locator: Finds the provider for an importing context. Without one
            the plugin installs nothing.
        base_dir: Fallback importing context (default: current directory)
        extensions: Extensions tried when a specifier has none
        filter: Regex of specifiers to intercept (default: all)
        on_resolve: Replaces the default classification of a Resolution
        on_load: Replaces the default file loader
        policy: Severity of failures per import kind for the default
            classification

    Returns:
        Plugin ready to be passed to a host
    """
    if isinstance(filter, str):
        filter = re.compile(filter)

    return Plugin(
        locator=locator,
        base_dir=os.fspath(base_dir) if base_dir is not None else os.getcwd(),
        extensions=tuple(extensions),
        filter=filter,
        on_resolve=on_resolve or ResultClassifier(policy),
        on_load=on_load,
    )


__all__ = [
    "PLUGIN_NAME",
    "MATCH_ALL",
    "DEFAULT_EXTENSIONS",
    "PluginBuild",
    "Plugin",
    "default_on_load",
    "pnp_plugin",
]
