"""Widget registry for workspace indicators and the focused-app summary.

Widgets are created once per workspace record and mutated in place for the
life of the process. Each handle mirrors the properties last sent to the host.
"""

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Optional

from .config import Palette, TrackerConfig
from .dispatcher import CommandDispatcher
from .host import (
    FRONT_APP_EVENT,
    MOUSE_EVENTS,
    MutationKind,
    WidgetHost,
    WidgetMutation,
    notify_script,
)
from .icons import workspace_glyph
from .models import WorkspaceRecord

logger = logging.getLogger(__name__)


@dataclass
class WidgetHandle:
    """Reference to a host widget plus the state last applied to it."""

    key: str
    record: Optional[WorkspaceRecord] = None
    properties: Dict[str, Any] = field(default_factory=dict)
    handlers: Dict[str, Callable[[], None]] = field(default_factory=dict)

    @property
    def drawing(self) -> bool:
        return bool(self.properties.get("drawing", False))


def workspace_widget_key(prefix: str, workspace_name: str) -> str:
    return prefix + workspace_name.lower().replace(" ", "_")


def workspace_item_properties(record: WorkspaceRecord, config: TrackerConfig) -> Dict[str, Any]:
    """Initial properties of a workspace widget: hidden, glyph only, no label."""
    palette = config.palette
    return {
        "drawing": False,
        "padding_left": 8,
        "padding_right": 8,
        "background.height": 26,
        "background.color": palette.background,
        "background.border_width": 0,
        "background.corner_radius": 5,
        "icon": workspace_glyph(record.name, record.icon_path),
        "icon.font": config.icon_font,
        "icon.color": palette.idle,
        "icon.padding_right": 4,
        "label": "",
        "label.width": 0,
        "label.font": config.label_font,
        "label.color": palette.inactive,
        "script": notify_script(config.socket_path),
    }


def summary_item_properties(config: TrackerConfig) -> Dict[str, Any]:
    palette = config.palette
    return {
        "drawing": False,
        "padding_left": 8,
        "padding_right": 12,
        "background.color": palette.summary_background,
        "background.border_width": 1,
        "background.height": 26,
        "background.corner_radius": 5,
        "background.border_color": palette.accent_border,
        "icon.font": config.icon_font,
        "icon.padding_right": 4,
        "label.font": config.label_font,
        "label.color": palette.inactive,
        "label.padding_left": 8,
        "label.padding_right": 8,
        "updates": True,
        "script": notify_script(config.socket_path),
    }


def hover_enter_properties(record: WorkspaceRecord, palette: Palette) -> Dict[str, Any]:
    """Reveal "<key> - <name>" and switch to the hover background."""
    return {
        "label": record.hover_label,
        "label.width": "dynamic",
        "background.color": palette.hover_background,
    }


def hover_exit_properties(palette: Palette) -> Dict[str, Any]:
    """Collapse the label and restore the normal background."""
    return {
        "label": "",
        "label.width": 0,
        "background.color": palette.background,
    }


class WidgetRegistry:
    """Owns the workspace widgets and the app summary widget."""

    def __init__(self, host: WidgetHost, dispatcher: CommandDispatcher, config: TrackerConfig):
        """
        Initialize widget registry.

        Args:
            host: Receiver of widget mutations
            dispatcher: Target of workspace widget clicks
            config: Tracker configuration (keys, fonts, palette)
        """
        self.host = host
        self.dispatcher = dispatcher
        self.config = config
        self.handles: Dict[str, WidgetHandle] = {}
        self.summary: Optional[WidgetHandle] = None
        self._by_key: Dict[str, WidgetHandle] = {}

    def apply(self, mutations: Iterable[WidgetMutation]) -> bool:
        """Send mutations to the host and record the new properties on each handle.

        Handles are only updated when the host accepted the batch, so a failed
        batch is planned again on the next pass.
        """
        mutations = list(mutations)
        if not mutations:
            return True
        if not self.host.apply(mutations):
            logger.warning(f"Host rejected {len(mutations)} widget changes")
            return False
        for mutation in mutations:
            if mutation.kind not in (MutationKind.ADD, MutationKind.SET):
                continue
            handle = self._by_key.get(mutation.key)
            if handle is not None:
                handle.properties.update(mutation.properties)
        return True

    def build(self, records: List[WorkspaceRecord]) -> Dict[str, WidgetHandle]:
        """
        Create one hidden widget per workspace record.

        Widgets from an earlier build are removed first.

        Returns:
            Mapping of workspace name to widget handle
        """
        self.teardown_workspaces()

        mutations: List[WidgetMutation] = []
        for record in records:
            key = self._unique_key(workspace_widget_key(self.config.workspace_prefix, record.name))
            handle = WidgetHandle(key=key, record=record)
            handle.handlers = {
                "mouse.clicked": partial(self.dispatcher.switch_to, record.name),
                "mouse.entered": partial(self.hover_enter, handle),
                "mouse.exited": partial(self.hover_exit, handle),
            }
            self.handles[record.name] = handle
            self._by_key[key] = handle
            mutations.append(WidgetMutation(
                MutationKind.ADD, key,
                properties=workspace_item_properties(record, self.config),
                position=self.config.position,
            ))
            mutations.append(WidgetMutation(MutationKind.SUBSCRIBE, key, events=list(MOUSE_EVENTS)))

        self.apply(mutations)
        logger.info(f"Created {len(self.handles)} workspace widgets")
        return self.handles

    def _unique_key(self, key: str) -> str:
        """Suffix a widget key already taken by another widget ("Code X" vs "code_x")."""
        candidate = key
        suffix = 2
        while candidate in self._by_key:
            candidate = f"{key}_{suffix}"
            suffix += 1
        if candidate != key:
            logger.warning(f"Widget key {key} already in use, using {candidate}")
        return candidate

    def build_summary(self) -> WidgetHandle:
        """Create the focused-app summary widget once; later calls return it."""
        if self.summary is not None:
            return self.summary

        key = self.config.summary_key
        self.summary = WidgetHandle(key=key)
        self._by_key[key] = self.summary
        self.apply([
            WidgetMutation(
                MutationKind.ADD, key,
                properties=summary_item_properties(self.config),
                position=self.config.position,
            ),
            WidgetMutation(MutationKind.SUBSCRIBE, key, events=[FRONT_APP_EVENT]),
        ])
        return self.summary

    def hover_enter(self, handle: WidgetHandle) -> None:
        if handle.record is None:
            return
        self.apply([WidgetMutation(
            MutationKind.SET, handle.key,
            properties=hover_enter_properties(handle.record, self.config.palette),
            animation_frames=self.config.animation_frames,
        )])

    def hover_exit(self, handle: WidgetHandle) -> None:
        self.apply([WidgetMutation(
            MutationKind.SET, handle.key,
            properties=hover_exit_properties(self.config.palette),
            animation_frames=self.config.animation_frames,
        )])

    def handle_mouse(self, key: str, sender: str) -> bool:
        """
        Run the behaviour registered on a widget for a mouse event.

        Returns:
            True if a handler ran
        """
        handle = self._by_key.get(key)
        handler = handle.handlers.get(sender) if handle else None
        if handler is None:
            logger.debug(f"No {sender} handler for widget {key}")
            return False
        handler()
        return True

    def teardown_workspaces(self) -> None:
        """Remove every workspace widget from the host."""
        if not self.handles:
            return
        removals = [WidgetMutation(MutationKind.REMOVE, handle.key) for handle in self.handles.values()]
        self.host.apply(removals)
        for handle in self.handles.values():
            self._by_key.pop(handle.key, None)
        logger.info(f"Removed {len(self.handles)} workspace widgets")
        self.handles.clear()

    def teardown(self) -> None:
        """Remove all widgets owned by this registry."""
        self.teardown_workspaces()
        if self.summary is not None:
            self.host.apply([WidgetMutation(MutationKind.REMOVE, self.summary.key)])
            self._by_key.pop(self.summary.key, None)
            self.summary = None
