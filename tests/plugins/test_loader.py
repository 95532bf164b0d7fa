"""Tests for plugin loading from configuration values."""

from __future__ import annotations

import sys
from types import ModuleType, SimpleNamespace

import pytest

from sitcom.errors import ConfigError
from sitcom.plugins import Plugin, load_plugins


class _EntryPoints(list):
    def select(self, **kwargs):
        if kwargs.get("group") == "sitcom.plugins":
            return self
        return []


class UpperPlugin(Plugin):
    name = "upper"

    def transform(self, html: str) -> str:
        return html.upper()


@pytest.fixture
def plugin_module(monkeypatch) -> ModuleType:
    module = ModuleType("sitcom_test_plugins")
    module.UpperPlugin = UpperPlugin
    module.make_plugin = lambda: {"name": "made", "transform": str.strip}
    module.instance = UpperPlugin()
    monkeypatch.setitem(sys.modules, "sitcom_test_plugins", module)
    return module


def test_import_paths_resolve_classes_factories_and_instances(plugin_module: ModuleType) -> None:
    plugins = load_plugins(
        [
            "sitcom_test_plugins:UpperPlugin",
            "sitcom_test_plugins:make_plugin",
            "sitcom_test_plugins:instance",
        ]
    )

    assert isinstance(plugins[0], UpperPlugin)
    assert plugins[1]["name"] == "made"
    assert plugins[2] is plugin_module.instance


def test_objects_pass_through_and_none_is_skipped() -> None:
    mapping = {"transform": lambda html: html}
    instance = UpperPlugin()

    plugins = load_plugins([mapping, None, instance, UpperPlugin])

    assert plugins[0] is mapping
    assert plugins[1] is instance
    assert isinstance(plugins[2], UpperPlugin)
    assert load_plugins(None) == []


def test_entry_point_names_are_resolved(monkeypatch) -> None:
    entry = SimpleNamespace(name="upper", load=lambda: UpperPlugin)

    monkeypatch.setattr(
        "sitcom.plugins.loader.metadata.entry_points",
        lambda: _EntryPoints([entry]),
    )

    plugins = load_plugins(["upper"])

    assert isinstance(plugins[0], UpperPlugin)


def test_unknown_plugins_raise_config_error(monkeypatch, plugin_module: ModuleType) -> None:
    monkeypatch.setattr("sitcom.plugins.loader.metadata.entry_points", lambda: _EntryPoints())

    with pytest.raises(ConfigError):
        load_plugins(["missing-plugin"])
    with pytest.raises(ConfigError):
        load_plugins(["sitcom_test_plugins:absent"])
    with pytest.raises(ConfigError):
        load_plugins(["sitcom_no_such_module:thing"])
    with pytest.raises(ConfigError):
        load_plugins([42])
