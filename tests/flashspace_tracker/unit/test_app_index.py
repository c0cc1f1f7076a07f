"""Unit tests for the app index."""

from flashspace_tracker.app_index import AppIndex


class TestAppIndex:
    """Test app to workspace lookups."""

    def test_lookup_registered_app(self):
        index = AppIndex()
        index.register("Cursor", "Code")

        assert index.lookup("Cursor") == "Code"
        assert "Cursor" in index
        assert len(index) == 1

    def test_unknown_and_empty_names(self):
        index = AppIndex()
        index.register("Cursor", "Code")

        assert index.lookup("Slack") is None
        assert index.lookup("") is None

    def test_last_registration_wins(self):
        index = AppIndex()
        index.register("Terminal", "Code")
        index.register("Terminal", "Shell")

        assert index.lookup("Terminal") == "Shell"
        assert len(index) == 1

    def test_lookup_is_case_sensitive(self):
        index = AppIndex()
        index.register("Slack", "Chat")

        assert index.lookup("slack") is None

    def test_items(self):
        index = AppIndex()
        index.register("Cursor", "Code")
        index.register("Slack", "Chat")

        assert dict(index.items()) == {"Cursor": "Code", "Slack": "Chat"}
