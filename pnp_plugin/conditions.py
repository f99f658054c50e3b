"""Export-condition sets used when asking the provider to resolve.

Three sets are derived once per build and selected per request by
import kind: ``import`` for ESM forms, ``require`` for CommonJS forms,
``default`` for everything else (entry points, CSS rules, URL tokens).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .models import ImportKind

PLATFORM_CONDITIONS = frozenset({"browser", "node"})

_IMPORT_KINDS = frozenset({ImportKind.DYNAMIC_IMPORT, ImportKind.STATIC_IMPORT})
_REQUIRE_KINDS = frozenset({ImportKind.REQUIRE_CALL, ImportKind.REQUIRE_RESOLVE})


@dataclass(frozen=True)
class ConditionSets:
    """The default/import/require condition trio for one build."""

    default: frozenset[str]
    import_: frozenset[str]
    require: frozenset[str]

    def for_kind(self, kind: ImportKind) -> frozenset[str]:
        """Select the condition set that applies to an import kind."""
        if kind in _IMPORT_KINDS:
            return self.import_
        if kind in _REQUIRE_KINDS:
            return self.require
        return self.default


def build_condition_sets(conditions: Iterable[str] | None, platform: str | None) -> ConditionSets:
    """Derive the condition trio from user conditions and the target platform.

    Args:
        conditions: User-supplied conditions from the build options
        platform: Target platform ("browser", "node", "neutral", ...)

    Returns:
        ConditionSets with "default" (and the platform name for browser/node)
        in every set, plus "import" or "require" in the flavored sets
    """
    default = set(conditions or ())
    default.add("default")
    if platform in PLATFORM_CONDITIONS:
        default.add(platform)

    return ConditionSets(
        default=frozenset(default),
        import_=frozenset(default | {"import"}),
        require=frozenset(default | {"require"}),
    )


__all__ = ["ConditionSets", "build_condition_sets", "PLATFORM_CONDITIONS"]
