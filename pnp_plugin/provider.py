"""Boundary with the package-resolution provider.

The provider owns the package layout (archives, soft links, lock state)
and is consumed as an opaque capability. These protocols describe the
calls the engine makes; any object with matching methods works.
"""

from __future__ import annotations

import importlib
from collections.abc import Collection
from collections.abc import Sequence
from typing import Protocol
from typing import runtime_checkable

from .errors import ConfigurationError
from .models import PackageInfo
from .models import PackageLocator

# Specifier that every provider resolves to its own manifest file
MANIFEST_SPECIFIER = "pnpapi"


@runtime_checkable
class PnpApi(Protocol):
    """Resolution provider for one managed project.

    ``resolve_virtual(path) -> str | None`` is optional. Providers that
    have no indirection for soft-linked packages may omit it.
    """

    def resolve_request(
        self,
        request: str,
        issuer: str | None,
        *,
        conditions: Collection[str] | None = None,
        consider_builtins: bool = True,
        extensions: Sequence[str] | None = None,
    ) -> str | None:
        """Resolve a specifier from an issuer; raise with a descriptive message on failure."""
        ...

    def find_package_locator(self, path: str) -> PackageLocator | None:
        """Return the package owning a path, if any."""
        ...

    def get_package_information(self, locator: PackageLocator) -> PackageInfo | None:
        """Return information about a package."""
        ...


@runtime_checkable
class ProviderLocator(Protocol):
    """Finds the provider managing an importing context.

    Returns None when the context is outside any managed project.
    """

    def __call__(self, importing_context: str) -> PnpApi | None: ...


def load_provider_locator(reference: str) -> ProviderLocator:
    """Import a provider locator from a "module:attribute" reference.

    Args:
        reference: Import reference (e.g., "my_pkg.pnp:find_pnp_api")

    Returns:
        The referenced callable

    Raises:
        ConfigurationError: Reference is malformed or cannot be imported
    """
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigurationError(f"Provider reference must look like 'module:attribute', got '{reference}'")

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import provider module '{module_name}': {e}") from e

    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as e:
            raise ConfigurationError(f"Provider reference '{reference}' not found: {e}") from e

    if not callable(target):
        raise ConfigurationError(f"Provider reference '{reference}' is not callable")

    return target


__all__ = ["PnpApi", "ProviderLocator", "MANIFEST_SPECIFIER", "load_provider_locator"]
