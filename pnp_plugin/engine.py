"""Resolution engine: one provider round-trip per import request.

Pipeline per request:
1. External short-circuit (no provider call)
2. Effective importing context (resolve_dir, importer, or base_dir)
3. Provider lookup for that context (delegate when not managed)
4. Provider resolution with the kind's condition set (failures captured)
5. Manifest path added to the watch list
6. Soft-linked packages add their virtual path to the watch list

The engine holds only immutable setup data and can serve concurrent
requests. Provider reentrancy is the integrator's concern.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .conditions import ConditionSets
from .errors import ManifestResolutionError
from .externals import ExternalPattern
from .externals import is_external
from .models import DELEGATED
from .models import EXTERNAL
from .models import Builtin
from .models import Failed
from .models import ImportRequest
from .models import LinkType
from .models import Resolution
from .models import Resolved
from .models import Signal
from .provider import MANIFEST_SPECIFIER
from .provider import PnpApi
from .provider import ProviderLocator

logger = logging.getLogger(__name__)


class ResolutionEngine:
    """Decides how a single import request is resolved."""

    def __init__(
        self,
        locator: ProviderLocator,
        *,
        externals: Sequence[ExternalPattern],
        condition_sets: ConditionSets,
        platform: str,
        extensions: Sequence[str],
        base_dir: str,
    ):
        """Initialize with per-build setup data.

        Args:
            locator: Finds the provider managing an importing context
            externals: Compiled external entries
            condition_sets: Precomputed default/import/require conditions
            platform: Target platform; "node" enables builtin modules
            extensions: Extensions the provider tries, in order
            base_dir: Importing context for requests without an importer
        """
        self.locator = locator
        self.externals = tuple(externals)
        self.condition_sets = condition_sets
        self.platform = platform
        self.extensions = tuple(extensions)
        self.base_dir = base_dir

    @property
    def consider_builtins(self) -> bool:
        return self.platform == "node"

    def effective_importer(self, request: ImportRequest) -> str:
        """Compute the context the provider resolves from.

        Entry points arrive with neither a resolve_dir nor an importer and
        fall back to base_dir.
        """
        if request.resolve_dir:
            return f"{request.resolve_dir}/"
        if request.importer:
            return request.importer
        return f"{self.base_dir}/"

    def resolve(self, request: ImportRequest) -> Resolution | Signal:
        """Run the pipeline for one request.

        Returns:
            EXTERNAL if the specifier is configured as external,
            DELEGATED if no provider manages the importing context,
            otherwise a Resolution

        Raises:
            ManifestResolutionError: Provider cannot locate its manifest
        """
        if is_external(request.specifier, self.externals):
            logger.debug(f"[pnp:resolve] {request.specifier} -> external")
            return EXTERNAL

        importer = self.effective_importer(request)

        api = self.locator(importer)
        if api is None:
            logger.debug(f"[pnp:resolve] {request.specifier} -> delegated ({importer} not managed)")
            return DELEGATED

        conditions = self.condition_sets.for_kind(request.kind)

        outcome: Resolved | Builtin | Failed
        try:
            path = api.resolve_request(
                request.specifier,
                importer,
                conditions=conditions,
                consider_builtins=self.consider_builtins,
                extensions=list(self.extensions),
            )
        except Exception as e:
            logger.debug(f"[pnp:resolve] {request.specifier} from {importer} failed: {e}")
            outcome = Failed(e)
        else:
            if path:
                logger.debug(f"[pnp:resolve] {request.specifier} from {importer} -> {path}")
                outcome = Resolved(path)
            else:
                # Builtin modules resolve to nothing when consider_builtins is set
                logger.debug(f"[pnp:resolve] {request.specifier} from {importer} -> builtin")
                outcome = Builtin(request.specifier)

        watch_files = [self._manifest_path(api)]

        if isinstance(outcome, Resolved):
            virtual = self._soft_link_watch_path(api, outcome.path)
            if virtual is not None:
                watch_files.append(virtual)

        return Resolution(outcome=outcome, watch_files=tuple(watch_files))

    def _manifest_path(self, api: PnpApi) -> str:
        try:
            manifest = api.resolve_request(MANIFEST_SPECIFIER, None)
        except Exception as e:
            raise ManifestResolutionError(f"Failed to resolve the provider manifest: {e}") from e

        if not manifest:
            raise ManifestResolutionError("Provider returned no manifest path")

        return manifest

    def _soft_link_watch_path(self, api: PnpApi, path: str) -> str | None:
        """Return the path to watch for a soft-linked package, if any."""
        locator = api.find_package_locator(path)
        if locator is None:
            return None

        info = api.get_package_information(locator)
        if info is None or info.link_type != LinkType.SOFT:
            return None

        resolve_virtual = getattr(api, "resolve_virtual", None)
        virtual = resolve_virtual(path) if resolve_virtual is not None else None
        logger.debug(f"[pnp:watch] {locator.name} is soft-linked, watching {virtual or path}")
        return virtual or path


__all__ = ["ResolutionEngine"]
