"""Tests for plugin setup and hook wiring."""

import os
import re

import pytest

from pnp_plugin.host import PluginHost
from pnp_plugin.models import ImportKind
from pnp_plugin.models import ImportRequest
from pnp_plugin.models import LoadRequest
from pnp_plugin.plugin import DEFAULT_EXTENSIONS
from pnp_plugin.plugin import PLUGIN_NAME
from pnp_plugin.plugin import default_on_load
from pnp_plugin.plugin import pnp_plugin
from pnp_plugin.results import ResolveResult
from pnp_plugin.settings import BuildOptions


class TestFactory:
    """Tests for pnp_plugin defaults."""

    def test_defaults(self, locator):
        plugin = pnp_plugin(locator)
        assert plugin.name == PLUGIN_NAME
        assert plugin.base_dir == os.getcwd()
        assert plugin.extensions == DEFAULT_EXTENSIONS
        assert plugin.filter.search("anything")
        assert plugin.filter.search("")

    def test_string_filter_is_compiled(self, locator):
        plugin = pnp_plugin(locator, filter=r"^\./")
        assert plugin.filter.search("./util")
        assert not plugin.filter.search("react")

    def test_path_base_dir(self, locator, tmp_path):
        assert pnp_plugin(locator, base_dir=tmp_path).base_dir == str(tmp_path)


class TestSetup:
    """Tests for Plugin.setup."""

    def test_no_locator_is_noop(self):
        host = PluginHost(plugins=[pnp_plugin(None)])
        assert host.resolve_hooks == []
        assert host.load_hooks == []

    def test_registers_hooks(self, locator):
        host = PluginHost(plugins=[pnp_plugin(locator)])
        assert len(host.resolve_hooks) == 1
        assert len(host.load_hooks) == 1
        assert host.load_hooks[0].namespace == "pnp"

    def test_skips_load_hook_when_unsupported(self, locator):
        host = PluginHost(plugins=[pnp_plugin(locator)], supports_load=False)
        assert len(host.resolve_hooks) == 1
        assert host.on_load is None

    def test_build_options_read_once(self, api, locator):
        """Build options are captured at setup time."""
        options = BuildOptions(platform="node")
        host = PluginHost(options, plugins=[pnp_plugin(locator, base_dir="/repo")])
        options.platform = "browser"

        host.resolve(ImportRequest("./util", importer="/repo/a.js"))
        assert api.resolve_calls[0]["consider_builtins"] is True


class TestResolveHook:
    """End-to-end resolution through the host."""

    def test_hard_linked(self, locator):
        host = PluginHost(plugins=[pnp_plugin(locator, base_dir="/repo")])
        result = host.resolve(ImportRequest("./util", importer="/repo/src/a.js", kind=ImportKind.STATIC_IMPORT))

        assert result == ResolveResult(
            namespace="pnp",
            path="/store/pkgA/util.js",
            watch_files=["/repo/.pnp.cjs"],
        )

    def test_soft_linked(self, locator):
        host = PluginHost(plugins=[pnp_plugin(locator)])
        result = host.resolve(ImportRequest("linked", importer="/repo/src/a.js"))

        assert result.watch_files == ["/repo/.pnp.cjs", "/repo/.yarn/__virtual__/linked/index.js"]

    def test_external(self, api, locator):
        host = PluginHost(BuildOptions(external=["left-*"]), plugins=[pnp_plugin(locator)])
        result = host.resolve(ImportRequest("left-pad", importer="/repo/a.js"))

        assert result == ResolveResult(external=True)
        assert api.calls == []

    def test_delegates_unmanaged_context(self, locator):
        host = PluginHost(plugins=[pnp_plugin(locator)])
        assert host.resolve(ImportRequest("./util", importer="/elsewhere/a.js")) is None

    def test_entry_point_uses_base_dir(self, api, locator):
        host = PluginHost(plugins=[pnp_plugin(locator, base_dir="/repo")])
        result = host.resolve(ImportRequest("./util", importer="", kind=ImportKind.ENTRY_POINT))

        assert result.path == "/store/pkgA/util.js"
        assert api.resolve_calls[0]["issuer"] == "/repo/"

    def test_dynamic_import_failure_warns(self, locator):
        host = PluginHost(plugins=[pnp_plugin(locator)])
        result = host.resolve(ImportRequest("missing", importer="/repo/a.js", kind=ImportKind.DYNAMIC_IMPORT))

        assert result.external is True
        assert len(result.warnings) == 1
        assert result.errors == []

    def test_static_import_failure_errors(self, locator):
        host = PluginHost(plugins=[pnp_plugin(locator)])
        result = host.resolve(ImportRequest("missing", importer="/repo/a.js", kind=ImportKind.STATIC_IMPORT))

        assert result.external is True
        assert len(result.errors) == 1
        assert "missing" in result.errors[0].text

    def test_filter_limits_interception(self, api, locator):
        host = PluginHost(plugins=[pnp_plugin(locator, filter=re.compile(r"^\./"))])
        assert host.resolve(ImportRequest("linked", importer="/repo/a.js")) is None
        assert api.calls == []

    def test_custom_on_resolve(self, locator):
        seen = []

        def on_resolve(request, resolution):
            seen.append((request.specifier, resolution.resolved_path, resolution.watch_files))
            return ResolveResult(namespace="custom", path="/custom.js")

        host = PluginHost(plugins=[pnp_plugin(locator, on_resolve=on_resolve)])
        result = host.resolve(ImportRequest("./util", importer="/repo/a.js"))

        assert result.namespace == "custom"
        assert seen == [("./util", "/store/pkgA/util.js", ("/repo/.pnp.cjs",))]

    def test_custom_on_resolve_not_called_for_externals(self, locator):
        calls = []
        plugin = pnp_plugin(locator, on_resolve=lambda req, res: calls.append(req))
        host = PluginHost(BuildOptions(external=["react"]), plugins=[plugin])

        assert host.resolve(ImportRequest("react", importer="/repo/a.js")).external is True
        assert calls == []


class TestLoadHook:
    """Tests for the default loader."""

    def test_default_on_load(self, tmp_path):
        module = tmp_path / "pkg" / "index.js"
        module.parent.mkdir()
        module.write_bytes(b"export default 1;\n")

        result = default_on_load(LoadRequest(str(module)))

        assert result.contents == b"export default 1;\n"
        assert result.loader == "default"
        assert result.resolve_dir == str(module.parent)

    def test_host_load_uses_plugin(self, locator, tmp_path):
        module = tmp_path / "util.js"
        module.write_bytes(b"module.exports = {};")
        host = PluginHost(plugins=[pnp_plugin(locator)])

        result = host.load(LoadRequest(str(module), namespace="pnp"))
        assert result.contents == b"module.exports = {};"

    def test_host_load_ignores_other_namespaces(self, locator, tmp_path):
        host = PluginHost(plugins=[pnp_plugin(locator)])
        assert host.load(LoadRequest(str(tmp_path / "x.js"), namespace="file")) is None

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            default_on_load(LoadRequest(str(tmp_path / "missing.js")))
