"""Unit tests for per-display widget visibility."""

import pytest

from flashspace_tracker.models import WorkspaceRecord
from flashspace_tracker.visibility import VisibilityController, plan_visibility
from flashspace_tracker.widgets import WidgetRegistry


@pytest.fixture
def records():
    return [
        WorkspaceRecord(name="Code", shortcut_key="1", display="Main"),
        WorkspaceRecord(name="Web", shortcut_key="3", display="Main"),
        WorkspaceRecord(name="Chat", shortcut_key="2", display="Laptop"),
    ]


@pytest.fixture
def registry(host, dispatcher, config, records):
    registry = WidgetRegistry(host, dispatcher, config)
    registry.build(records)
    return registry


class TestPlanVisibility:
    """Test the visibility plan."""

    def test_partition_by_display(self, records, registry, config):
        mutations = plan_visibility(records, registry.handles, "Laptop", config.palette)
        # Widgets start hidden, so only the shown one carries a drawing change
        drawing = {m.key: m.properties.get("drawing", False) for m in mutations}

        assert drawing == {
            "workspace.code": False,
            "workspace.web": False,
            "workspace.chat": True,
        }

    def test_resets_colours(self, records, registry, config):
        mutations = plan_visibility(records, registry.handles, "Main", config.palette)

        for mutation in mutations:
            assert mutation.properties["icon.color"] == config.palette.inactive

    def test_records_without_widgets_skipped(self, records, config):
        assert plan_visibility(records, {}, "Main", config.palette) == []


class TestVisibilityController:
    """Test refreshes against the host."""

    def test_refresh_shows_active_display(self, records, registry, host, resolver, config):
        controller = VisibilityController(resolver, registry, config.palette)

        controller.refresh(records, registry.handles)

        assert host.drawn() == {"workspace.code", "workspace.web"}
        assert resolver.calls == 1

    def test_every_widget_shown_or_hidden(self, records, registry, host, resolver, config):
        controller = VisibilityController(resolver, registry, config.palette)
        for display in ["Main", "Laptop", "Main"]:
            resolver.display = display
            controller.refresh(records, registry.handles)

            for record in records:
                key = registry.handles[record.name].key
                assert host.widgets[key]["drawing"] == (record.display == display)

    def test_second_refresh_is_noop(self, records, registry, host, resolver, config):
        controller = VisibilityController(resolver, registry, config.palette)
        controller.refresh(records, registry.handles)
        host.reset()

        controller.refresh(records, registry.handles)

        assert host.batches == []
        assert resolver.calls == 2

    def test_unknown_display_hides_all(self, records, registry, host, resolver, config):
        controller = VisibilityController(resolver, registry, config.palette)
        controller.refresh(records, registry.handles)

        resolver.display = ""
        controller.refresh(records, registry.handles)

        assert host.drawn() == set()

    def test_display_without_workspaces(self, records, registry, host, resolver, config):
        resolver.display = "Projector"
        controller = VisibilityController(resolver, registry, config.palette)

        controller.refresh(records, registry.handles)

        assert host.drawn() == set()


class TestHostFailures:
    """Test recovery after the host rejects a batch."""

    def test_rejected_refresh_is_sent_again(self, failing_host, dispatcher, resolver, config, records):
        failing_host.failures = 0
        registry = WidgetRegistry(failing_host, dispatcher, config)
        registry.build(records)
        controller = VisibilityController(resolver, registry, config.palette)

        failing_host.failures = 1
        controller.refresh(records, registry.handles)

        assert failing_host.drawn() == set()
        assert registry.handles["Code"].drawing is False

        controller.refresh(records, registry.handles)

        assert failing_host.drawn() == {"workspace.code", "workspace.web"}
        assert registry.handles["Code"].drawing is True

    def test_rejected_build_is_repaired_by_refresh(self, failing_host, dispatcher, resolver, config, records):
        registry = WidgetRegistry(failing_host, dispatcher, config)
        registry.build(records)
        assert len(failing_host.rejected) == 1
        controller = VisibilityController(resolver, registry, config.palette)

        controller.refresh(records, registry.handles)

        drawing = {key: props["drawing"] for key, props in failing_host.widgets.items()}
        assert drawing == {
            "workspace.code": True,
            "workspace.web": True,
            "workspace.chat": False,
        }
