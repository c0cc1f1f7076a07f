"""
Pytest configuration and fixtures for FlashSpace tracker tests.

Provides profile documents, a recording widget host and a test configuration.
"""

import json
import tempfile
import threading
from pathlib import Path
from typing import Generator, List

import pytest

from flashspace_tracker.config import TrackerConfig
from flashspace_tracker.host import MutationKind, WidgetHost, WidgetMutation


class RecordingHost(WidgetHost):
    """Widget host that records mutations and keeps a property view per widget."""

    def __init__(self):
        self.batches: List[List[WidgetMutation]] = []
        self.widgets = {}
        self.subscriptions = {}

    def apply(self, mutations):
        batch = list(mutations)
        self.batches.append(batch)
        for mutation in batch:
            if mutation.kind == MutationKind.ADD:
                self.widgets[mutation.key] = dict(mutation.properties)
            elif mutation.kind == MutationKind.SET:
                self.widgets.setdefault(mutation.key, {}).update(mutation.properties)
            elif mutation.kind == MutationKind.REMOVE:
                self.widgets.pop(mutation.key, None)
                self.subscriptions.pop(mutation.key, None)
            elif mutation.kind == MutationKind.SUBSCRIBE:
                self.subscriptions.setdefault(mutation.key, []).extend(mutation.events)
        return True

    @property
    def mutations(self) -> List[WidgetMutation]:
        return [m for batch in self.batches for m in batch]

    def drawn(self) -> set:
        """Keys of widgets currently drawing."""
        return {key for key, props in self.widgets.items() if props.get("drawing")}

    def reset(self):
        self.batches.clear()


class FailingHost(RecordingHost):
    """Host that rejects the next ``failures`` batches without applying them."""

    def __init__(self, failures: int = 1):
        super().__init__()
        self.failures = failures
        self.rejected: List[List[WidgetMutation]] = []

    def apply(self, mutations):
        if self.failures > 0:
            self.failures -= 1
            self.rejected.append(list(mutations))
            return False
        return super().apply(mutations)


class BlockingHost(RecordingHost):
    """Host that holds one batch until released, once ``block_next`` is set."""

    def __init__(self):
        super().__init__()
        self.block_next = False
        self.entered = threading.Event()
        self.release = threading.Event()

    def apply(self, mutations):
        if self.block_next:
            self.block_next = False
            self.entered.set()
            self.release.wait(timeout=5)
        return super().apply(mutations)


class FakeResolver:
    """Display resolver returning a fixed display and counting queries."""

    def __init__(self, display: str = "Main"):
        self.display = display
        self.calls = 0

    def active_display(self) -> str:
        self.calls += 1
        return self.display


class FakeDispatcher:
    """Command dispatcher that records switch requests."""

    def __init__(self):
        self.switched: List[str] = []

    def switch_to(self, workspace_name: str) -> None:
        self.switched.append(workspace_name)


def workspace(name, shortcut, display, apps, icon_path=None):
    """FlashSpace workspace entry as written in profiles.json."""
    return {
        "id": f"id-{name.lower()}",
        "name": name,
        "shortcut": shortcut,
        "display": display,
        "apps": [
            {
                "name": app,
                "bundleIdentifier": f"com.example.{app.lower()}",
                **({"iconPath": icon_path} if icon_path and i == 0 else {}),
            }
            for i, app in enumerate(apps)
        ],
    }


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Temporary directory for profile and socket files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_workspace():
    return workspace


@pytest.fixture
def scenario_workspaces():
    """Two workspaces on two displays."""
    return [
        workspace("Code", "opt+1", "Main", ["Cursor"]),
        workspace("Chat", "opt+2", "Laptop", ["Slack"]),
    ]


@pytest.fixture
def write_profile(temp_dir):
    """Write a profiles.json containing the given workspaces and return its path."""
    def _write(workspaces, profile_name="Default", extra_profiles=None) -> Path:
        document = {"profiles": [{"id": "p1", "name": profile_name, "workspaces": workspaces}]}
        document["profiles"].extend(extra_profiles or [])
        path = temp_dir / "profiles.json"
        path.write_text(json.dumps(document, indent=2))
        return path
    return _write


@pytest.fixture
def scenario_profile(write_profile, scenario_workspaces) -> Path:
    return write_profile(scenario_workspaces)


@pytest.fixture
def config(temp_dir) -> TrackerConfig:
    """Tracker configuration pointing at temporary files."""
    return TrackerConfig(
        profile_path=temp_dir / "profiles.json",
        main_display="Main",
        socket_path=temp_dir / "events.sock",
        log_file=temp_dir / "tracker.log",
        animation_frames=0,
    )


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver("Main")


@pytest.fixture
def dispatcher() -> FakeDispatcher:
    return FakeDispatcher()


@pytest.fixture
def failing_host() -> FailingHost:
    return FailingHost()


@pytest.fixture
def blocking_host() -> BlockingHost:
    return BlockingHost()
