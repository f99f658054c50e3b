"""Value types shared by the resolution pipeline.

- ImportKind: how the host encountered an import
- ImportRequest / LoadRequest: one resolve or load call from the host
- PackageLocator / PackageInfo: package identity as reported by the provider
- Resolved / Builtin / Failed: outcome of asking the provider
- EXTERNAL / DELEGATED: signals that short-circuit the pipeline
- Resolution: outcome plus the files to watch
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ImportKind(str, Enum):
    """Closed set of import kinds reported by the host build tool."""

    ENTRY_POINT = "entry-point"
    STATIC_IMPORT = "import-statement"
    REQUIRE_CALL = "require-call"
    DYNAMIC_IMPORT = "dynamic-import"
    REQUIRE_RESOLVE = "require-resolve"
    IMPORT_RULE = "import-rule"
    COMPOSES_FROM = "composes-from"
    URL_TOKEN = "url-token"

    @classmethod
    def _missing_(cls, value):
        # Descriptive spellings used outside the host tool
        aliases = {"static-import": cls.STATIC_IMPORT, "url-reference": cls.URL_TOKEN}
        if isinstance(value, str):
            return aliases.get(value)
        return None


class LinkType(str, Enum):
    """How a package is linked into the dependency tree.

    SOFT packages are not pinned by the lock state, so their contents can
    change without a reinstall.
    """

    HARD = "HARD"
    SOFT = "SOFT"


@dataclass(frozen=True)
class ImportRequest:
    """A single resolve call.

    Attributes:
        specifier: Raw import specifier (e.g., "./util", "left-pad/lib")
        importer: File doing the import ("" or None for entry points)
        resolve_dir: Directory to resolve from, if the host provides one
        kind: How the import was encountered
    """

    specifier: str
    importer: str | None = None
    resolve_dir: str | None = None
    kind: ImportKind = ImportKind.STATIC_IMPORT


@dataclass(frozen=True)
class LoadRequest:
    """A load hook call for a path in the managed namespace."""

    path: str
    namespace: str = "pnp"


@dataclass(frozen=True)
class PackageLocator:
    """Identity of a package: name plus reference."""

    name: str | None
    reference: str | None


@dataclass(frozen=True)
class PackageInfo:
    link_type: LinkType
    package_location: str | None = None


@dataclass(frozen=True)
class Resolved:
    """The provider mapped the specifier to a path."""

    path: str


@dataclass(frozen=True)
class Builtin:
    """The provider resolved the specifier to a host builtin (no file)."""

    specifier: str


@dataclass(frozen=True)
class Failed:
    """The provider raised while resolving the specifier."""

    error: Exception

    @property
    def message(self) -> str:
        return str(self.error)


class Signal:
    """Named sentinel returned instead of a Resolution."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return self.name


# Specifier matched a configured external; leave it to the runtime.
EXTERNAL = Signal("EXTERNAL")

# Importing context is not managed by the provider; hand the request to
# the next resolver in the host's chain.
DELEGATED = Signal("DELEGATED")


@dataclass(frozen=True)
class Resolution:
    """Result of one provider attempt.

    Attributes:
        outcome: Resolved path, builtin, or captured failure (exactly one)
        watch_files: Files whose modification invalidates this resolution
    """

    outcome: Resolved | Builtin | Failed
    watch_files: tuple[str, ...] = ()

    @property
    def resolved_path(self) -> str | None:
        return self.outcome.path if isinstance(self.outcome, Resolved) else None

    @property
    def error(self) -> Exception | None:
        return self.outcome.error if isinstance(self.outcome, Failed) else None


__all__ = [
    "ImportKind",
    "LinkType",
    "ImportRequest",
    "LoadRequest",
    "PackageLocator",
    "PackageInfo",
    "Resolved",
    "Builtin",
    "Failed",
    "Signal",
    "EXTERNAL",
    "DELEGATED",
    "Resolution",
]
