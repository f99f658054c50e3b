"""Exception types for the PnP resolution plugin."""


class PnpPluginError(Exception):
    """Base class for plugin errors."""


class ManifestResolutionError(PnpPluginError):
    """The provider could not locate its own manifest.

    Raised out of the resolve hook: without the manifest path there is
    nothing to watch, so the setup is considered broken.
    """


class ConfigurationError(PnpPluginError):
    """Plugin or build settings are invalid."""


__all__ = ["PnpPluginError", "ManifestResolutionError", "ConfigurationError"]
