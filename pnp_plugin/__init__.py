"""Resolution plugin for Plug'n'Play package layouts.

Bridges a build tool's resolve hook and a package-resolution provider:
decides which imports stay external, which export conditions apply,
how provider failures are reported, and which files to watch.
"""

from .classifier import DiagnosticPolicy
from .classifier import ResultClassifier
from .classifier import Severity
from .conditions import ConditionSets
from .conditions import build_condition_sets
from .engine import ResolutionEngine
from .errors import ConfigurationError
from .errors import ManifestResolutionError
from .errors import PnpPluginError
from .externals import ExternalPattern
from .externals import is_external
from .externals import parse_externals
from .host import PluginHost
from .models import DELEGATED
from .models import EXTERNAL
from .models import Builtin
from .models import Failed
from .models import ImportKind
from .models import ImportRequest
from .models import LinkType
from .models import LoadRequest
from .models import PackageInfo
from .models import PackageLocator
from .models import Resolution
from .models import Resolved
from .plugin import Plugin
from .plugin import pnp_plugin
from .provider import PnpApi
from .provider import ProviderLocator
from .results import LoadResult
from .results import Message
from .results import ResolveResult
from .settings import BuildOptions
from .settings import PluginSettings
from .settings import SettingsManager

__all__ = [
    "pnp_plugin",
    "Plugin",
    "PluginHost",
    "ResolutionEngine",
    "ResultClassifier",
    "DiagnosticPolicy",
    "Severity",
    "ConditionSets",
    "build_condition_sets",
    "ExternalPattern",
    "parse_externals",
    "is_external",
    "PnpApi",
    "ProviderLocator",
    "ImportKind",
    "ImportRequest",
    "LoadRequest",
    "LinkType",
    "PackageInfo",
    "PackageLocator",
    "Resolution",
    "Resolved",
    "Builtin",
    "Failed",
    "EXTERNAL",
    "DELEGATED",
    "ResolveResult",
    "LoadResult",
    "Message",
    "BuildOptions",
    "PluginSettings",
    "SettingsManager",
    "PnpPluginError",
    "ManifestResolutionError",
    "ConfigurationError",
]
