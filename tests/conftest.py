"""Pytest configuration for plugin tests."""

import sys
from pathlib import Path

import pytest

# Make the fake provider importable by "module:attribute" references
tests_root = Path(__file__).parent
sys.path.insert(0, str(tests_root))

from fake_provider import FakePnpApi  # noqa: E402

from pnp_plugin.models import LinkType  # noqa: E402
from pnp_plugin.models import PackageInfo  # noqa: E402
from pnp_plugin.models import PackageLocator  # noqa: E402


@pytest.fixture
def api():
    """Provider managing /repo with one hard and one soft package."""
    api = FakePnpApi(root="/repo", manifest="/repo/.pnp.cjs")
    api.add_module(
        "./util",
        "/store/pkgA/util.js",
        locator=PackageLocator("pkg-a", "npm:1.0.0"),
        info=PackageInfo(link_type=LinkType.HARD),
    )
    api.add_module(
        "linked",
        "/repo/packages/linked/index.js",
        locator=PackageLocator("linked", "workspace:packages/linked"),
        info=PackageInfo(link_type=LinkType.SOFT),
        virtual="/repo/.yarn/__virtual__/linked/index.js",
    )
    return api


@pytest.fixture
def locator(api):
    """Locator that only claims contexts under /repo and records lookups."""
    calls = []

    def find_pnp_api(importing_context):
        calls.append(importing_context)
        return api if importing_context.startswith(api.root) else None

    find_pnp_api.calls = calls
    return find_pnp_api
