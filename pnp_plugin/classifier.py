"""Turns a provider attempt into the result handed to the host.

Failures are errors for static imports and entry points, and warnings
for import forms that are commonly wrapped in try/catch at the call site
(require, require.resolve, dynamic import). The host cannot tell whether
such a call is guarded, so a hard error would break valid code.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Mapping
from enum import Enum

from .errors import ConfigurationError
from .models import Builtin
from .models import Failed
from .models import ImportKind
from .models import ImportRequest
from .models import Resolution
from .models import Resolved
from .results import Message
from .results import ResolveResult

logger = logging.getLogger(__name__)

NAMESPACE = "pnp"

DEFAULT_DOWNGRADE_KINDS = frozenset(
    {
        ImportKind.REQUIRE_CALL,
        ImportKind.REQUIRE_RESOLVE,
        ImportKind.DYNAMIC_IMPORT,
    }
)


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


class DiagnosticPolicy:
    """Total mapping from import kind to the severity of a resolution failure."""

    def __init__(self, severities: Mapping[ImportKind, Severity]):
        missing = [kind.value for kind in ImportKind if kind not in severities]
        if missing:
            raise ConfigurationError(f"Diagnostic policy has no severity for: {', '.join(missing)}")
        self._severities = {kind: Severity(severities[kind]) for kind in ImportKind}

    @classmethod
    def downgrading(cls, kinds: Iterable[ImportKind | str] = DEFAULT_DOWNGRADE_KINDS) -> DiagnosticPolicy:
        """Build a policy that warns for ``kinds`` and errors for everything else.

        Raises:
            ConfigurationError: A kind name is not a known import kind
        """
        warn = set()
        for kind in kinds:
            try:
                warn.add(ImportKind(kind))
            except ValueError as e:
                raise ConfigurationError(f"Unknown import kind '{kind}'") from e

        return cls({kind: Severity.WARNING if kind in warn else Severity.ERROR for kind in ImportKind})

    def severity(self, kind: ImportKind) -> Severity:
        return self._severities[kind]

    @property
    def downgraded_kinds(self) -> frozenset[ImportKind]:
        return frozenset(kind for kind, sev in self._severities.items() if sev is Severity.WARNING)


DEFAULT_POLICY = DiagnosticPolicy.downgrading()


class ResultClassifier:
    """Pure mapping from (request, resolution) to a ResolveResult."""

    def __init__(self, policy: DiagnosticPolicy = DEFAULT_POLICY, namespace: str = NAMESPACE):
        self.policy = policy
        self.namespace = namespace

    def classify(self, request: ImportRequest, resolution: Resolution) -> ResolveResult:
        watch_files = list(resolution.watch_files)
        outcome = resolution.outcome

        if isinstance(outcome, Resolved):
            return ResolveResult(namespace=self.namespace, path=outcome.path, watch_files=watch_files)

        if isinstance(outcome, Builtin):
            return ResolveResult(external=True, watch_files=watch_files)

        problems = [Message(text=outcome.message)]
        if self.policy.severity(request.kind) is Severity.WARNING:
            logger.debug(f"[pnp:classify] {request.specifier} ({request.kind.value}) failure downgraded to warning")
            return ResolveResult(external=True, warnings=problems, watch_files=watch_files)

        return ResolveResult(external=True, errors=problems, watch_files=watch_files)

    __call__ = classify


__all__ = [
    "NAMESPACE",
    "DEFAULT_DOWNGRADE_KINDS",
    "DEFAULT_POLICY",
    "Severity",
    "DiagnosticPolicy",
    "ResultClassifier",
]
