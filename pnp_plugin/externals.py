"""Matching of specifiers against the build's "external" list.

An external entry is either an exact specifier or a pattern with a single
"*" wildcard. Marking a bare package name external also externalizes its
deep imports ("react" covers "react/jsx-runtime").
"""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Sequence
from dataclasses import dataclass

_NON_PACKAGE_PREFIXES = ("/", "./", "../")


@dataclass(frozen=True)
class ExternalPattern:
    """One compiled external entry.

    Exact entries keep the raw specifier in ``exact``; wildcard entries
    store the text around the "*" in ``prefix`` and ``suffix``.
    """

    exact: str | None = None
    prefix: str = ""
    suffix: str = ""

    @property
    def is_wildcard(self) -> bool:
        return self.exact is None

    @property
    def is_bare_package(self) -> bool:
        """True for entries naming a package rather than a path."""
        if self.exact is None:
            return False
        return not self.exact.startswith(_NON_PACKAGE_PREFIXES) and self.exact not in (".", "..")

    def matches(self, path: str) -> bool:
        if self.exact is None:
            return (
                len(path) >= len(self.prefix) + len(self.suffix)
                and path.startswith(self.prefix)
                and path.endswith(self.suffix)
            )

        if path == self.exact:
            return True

        return self.is_bare_package and path.startswith(f"{self.exact}/")


def parse_externals(externals: Iterable[str]) -> tuple[ExternalPattern, ...]:
    """Compile raw external entries.

    The host validates entries before plugins run, so each wildcard entry
    holds at most one "*". Only the first one is considered here.
    """
    patterns = []
    for external in externals:
        prefix, star, suffix = external.partition("*")
        if star:
            patterns.append(ExternalPattern(prefix=prefix, suffix=suffix))
        else:
            patterns.append(ExternalPattern(exact=external))
    return tuple(patterns)


def is_external(path: str, externals: Sequence[ExternalPattern]) -> bool:
    """Check whether a specifier matches any compiled external entry."""
    return any(pattern.matches(path) for pattern in externals)


__all__ = ["ExternalPattern", "parse_externals", "is_external"]
