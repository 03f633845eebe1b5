"""Tests for PanelRegistry — construction, deferred phases and scenarios."""

import json

import pytest

from admin_panels import PanelRegistry
from admin_panels.errors import DanglingParentError, HostRegistrationError, UnknownPanelError
from admin_panels.host import RecordingMenuHost
from admin_panels.lifecycle import Phase
from admin_panels.panel_types import PanelType
from tests.builders import ICON_URL, panel, render_page, sub_panel, wp_sub_panel


def make_registry(controller, host, config):
    return PanelRegistry(controller, config, render_page, ICON_URL, host)


class TestConstruction:
    def test_nothing_registered_synchronously(self, controller, host, sample_config):
        registry = make_registry(controller, host, sample_config)
        assert host.calls == []
        assert controller.calls == []
        assert all(entry.hook is None for entry in registry.panels.values())

    def test_both_phases_scheduled(self, controller, host, dispatcher, sample_config):
        make_registry(controller, host, sample_config)
        assert dispatcher.pending(Phase.MENU_BUILD) == 1
        assert dispatcher.pending(Phase.INIT_COMPLETE) == 1

    def test_ids_equal_keys(self, controller, host, sample_config):
        registry = make_registry(controller, host, sample_config)
        assert all(entry.id == key for key, entry in registry.get_panels().items())

    def test_panels_view_is_read_only(self, controller, host, sample_config):
        registry = make_registry(controller, host, sample_config)
        with pytest.raises(TypeError):
            registry.panels["new"] = None

    def test_get_panel(self, controller, host, sample_config):
        registry = make_registry(controller, host, sample_config)
        assert registry.get_panel("main").slug == "main-slug"
        with pytest.raises(UnknownPanelError):
            registry.get_panel("missing")
        with pytest.raises(KeyError):
            registry.get_panel("missing")


class TestNoPanels:
    def test_menu_build_is_a_no_op(self, controller, host, dispatcher):
        registry = make_registry(controller, host, {"w": wp_sub_panel("w", "tools.php")})
        assert dispatcher.pending(Phase.MENU_BUILD) == 0
        assert registry.menu_task is None
        dispatcher.run()
        assert host.calls == []
        assert registry.get_panel("w").hook is None
        assert controller.components["panel"] is not None

    def test_empty_config(self, controller, host, dispatcher):
        registry = make_registry(controller, host, {})
        dispatcher.run()
        assert host.calls == []
        assert dict(controller.components["panel"]) == {}
        assert registry.failures == {}


class TestLifecycle:
    def test_every_entry_hooked_after_menu_build(self, controller, host, dispatcher, sample_config):
        registry = make_registry(controller, host, sample_config)
        dispatcher.fire(Phase.MENU_BUILD)
        assert all(entry.hook for entry in registry.panels.values())
        assert controller.calls == []

    def test_controller_receives_hooked_collection(self, controller, host, dispatcher, sample_config):
        registry = make_registry(controller, host, sample_config)
        dispatcher.run()
        assert len(controller.calls) == 1
        kind, collection = controller.calls[0]
        assert kind == "panel"
        assert list(collection) == list(sample_config)
        assert collection["main"] is registry.get_panel("main")
        assert all(entry.hook for entry in collection.values())

    def test_each_entry_registered_once_even_if_task_reinvoked(self, controller, host, dispatcher, sample_config):
        registry = make_registry(controller, host, sample_config)
        dispatcher.run()
        registry.menu_task()
        registry.handoff_task()
        assert len(host.calls) == len(sample_config)
        assert len(controller.calls) == 1

    def test_host_error_propagates_from_phase(self, controller, dispatcher):
        host = RecordingMenuHost(dispatcher, rejected_capabilities=("nope",))
        make_registry(controller, host, {"a": panel("a", capabilities="nope")})
        with pytest.raises(HostRegistrationError):
            dispatcher.fire(Phase.MENU_BUILD)


class TestScenarios:
    def test_panel_with_sub_panel(self, controller, host, dispatcher):
        registry = make_registry(controller, host, {
            "a": panel("a"),
            "b": sub_panel("b", "a"),
        })
        dispatcher.fire(Phase.MENU_BUILD)
        assert registry.get_panel("a").hook
        assert registry.get_panel("b").hook
        assert host.calls_for("b")[0].parent_slug == registry.get_panel("a").slug

    def test_dangling_parent_does_not_block_valid_entries(self, controller, host, dispatcher):
        registry = make_registry(controller, host, {
            "a": panel("a"),
            "lost": sub_panel("lost", "nowhere"),
            "b": sub_panel("b", "a"),
        })
        dispatcher.run()
        assert isinstance(registry.failures["lost"], DanglingParentError)
        assert registry.get_panel("a").hook
        assert registry.get_panel("b").hook
        assert registry.get_panel("lost").hook is None
        assert "lost" in controller.components["panel"]

    def test_registration_order_follows_configuration(self, controller, host, dispatcher):
        make_registry(controller, host, {
            "z": panel("z"),
            "a": panel("a"),
            "m": panel("m"),
        })
        dispatcher.run()
        assert [call.slug for call in host.calls] == ["z", "a", "m"]


class TestQueries:
    def test_get_sub_panels(self, controller, host, sample_config):
        registry = make_registry(controller, host, sample_config)
        assert [p.id for p in registry.get_sub_panels("main")] == ["main-settings", "main-about"]
        assert registry.get_sub_panels("tools-export") == []
        assert registry.get_sub_panels("missing") == []

    def test_panels_by_type(self, controller, host, sample_config):
        registry = make_registry(controller, host, sample_config)
        assert [p.id for p in registry.panels_by_type(PanelType.PANEL)] == ["main", "reports"]

    def test_menu_tree(self, controller, host, sample_config):
        registry = make_registry(controller, host, sample_config)
        tree = [(entry.id, [child.id for child, _ in children]) for entry, children in registry.menu_tree()]
        assert tree == [
            ("main", ["main-settings", "main-about"]),
            ("reports", ["reports-daily"]),
            ("tools-export", []),
        ]


class TestFromConfigFile:
    def test_loads_panels_and_icon_url(self, tmp_path, controller, host, dispatcher, monkeypatch):
        monkeypatch.delenv("ADMIN_PANELS_ICON_URL", raising=False)
        path = tmp_path / "panels.json"
        path.write_text(json.dumps({
            "icon_url": "https://cdn.example.com/img",
            "panels": {"a": panel("a", icon="a.png")},
        }))
        registry = PanelRegistry.from_config_file(controller, path, render_page, host)
        dispatcher.run()
        assert registry.icon_url == "https://cdn.example.com/img"
        assert host.calls_for("a")[0].icon_url == "https://cdn.example.com/img/a.png"

    def test_explicit_icon_url_wins(self, tmp_path, controller, host, monkeypatch):
        monkeypatch.delenv("ADMIN_PANELS_ICON_URL", raising=False)
        path = tmp_path / "panels.json"
        path.write_text(json.dumps({"icon_url": "https://file", "panels": {}}))
        registry = PanelRegistry.from_config_file(controller, path, render_page, host, icon_url="https://arg")
        assert registry.icon_url == "https://arg"
