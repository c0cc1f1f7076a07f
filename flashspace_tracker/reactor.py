"""Focus reactor: handles front_app_switched notifications.

Updates the focused-app summary widget and re-checks which display is active.
"""

import logging
from typing import Any, Dict, List

from .app_index import AppIndex
from .config import TrackerConfig
from .host import MutationKind, WidgetMutation
from .icons import app_glyph, workspace_glyph
from .models import WorkspaceRecord
from .visibility import VisibilityController
from .widgets import WidgetRegistry

logger = logging.getLogger(__name__)


def normalize_app_name(payload: Any) -> str:
    """Focused app name from an event payload; non-text payloads mean no app.

    Surrounding whitespace is dropped unless nothing else is left, so only an
    empty payload counts as "no app focused".
    """
    if not isinstance(payload, str):
        return ""
    return payload.strip() or payload


def plan_app_summary(
    app_name: str,
    app_index: AppIndex,
    records_by_name: Dict[str, WorkspaceRecord],
    config: TrackerConfig
) -> WidgetMutation:
    """
    Summary widget update for a newly focused app.

    - No app: hide the summary.
    - App in a workspace: workspace glyph, "W<key> - <app>", accent border.
    - Unknown app: app glyph, raw app name, neutral border.
    """
    key = config.summary_key
    palette = config.palette
    if not app_name:
        return WidgetMutation(MutationKind.SET, key, properties={"drawing": False})

    workspace_name = app_index.lookup(app_name)
    if workspace_name is not None:
        record = records_by_name.get(workspace_name)
        if record is not None:
            glyph = workspace_glyph(record.name, record.icon_path)
            label = f"W{record.shortcut_key} - {app_name}"
        else:
            # Workspace listed the app but was itself incomplete
            glyph = workspace_glyph(workspace_name)
            label = app_name
        border = palette.accent_border
    else:
        glyph = app_glyph(app_name)
        label = app_name
        border = palette.neutral_border

    return WidgetMutation(MutationKind.SET, key, properties={
        "drawing": True,
        "icon": glyph,
        "icon.color": palette.inactive,
        "label": label,
        "label.color": palette.inactive,
        "background.border_color": border,
    })


class FocusReactor:
    """Handler for the host's front-app-changed notifications."""

    def __init__(
        self,
        app_index: AppIndex,
        records: List[WorkspaceRecord],
        registry: WidgetRegistry,
        visibility: VisibilityController,
        config: TrackerConfig
    ):
        self.registry = registry
        self.visibility = visibility
        self.config = config
        self.update_profile(records, app_index)

    def update_profile(self, records: List[WorkspaceRecord], app_index: AppIndex) -> None:
        """Point the reactor at a freshly loaded profile."""
        self.records = records
        self.app_index = app_index
        self.records_by_name = {record.name: record for record in records}

    def on_front_app_switched(self, payload: Any) -> None:
        """
        React to a focus change. Never raises.

        Args:
            payload: Name of the newly focused app ("" when nothing is focused)
        """
        app_name = normalize_app_name(payload)
        try:
            self.registry.apply([
                plan_app_summary(app_name, self.app_index, self.records_by_name, self.config)
            ])
        except Exception as e:
            logger.error(f"Failed to update app summary for {app_name!r}: {e}")

        if not app_name:
            return

        # Any focus change may have moved focus to another display
        try:
            self.visibility.refresh(self.records, self.registry.handles)
        except Exception as e:
            logger.error(f"Visibility refresh failed: {e}")
