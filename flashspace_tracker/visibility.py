"""Per-display visibility of workspace widgets.

This is the only place that toggles ``drawing`` on workspace widgets.
"""

import logging
from typing import Dict, List

from .config import Palette
from .display import DisplayResolver
from .host import MutationKind, WidgetMutation
from .models import WorkspaceRecord
from .widgets import WidgetHandle, WidgetRegistry

logger = logging.getLogger(__name__)


def plan_visibility(
    records: List[WorkspaceRecord],
    widgets: Dict[str, WidgetHandle],
    active_display: str,
    palette: Palette
) -> List[WidgetMutation]:
    """Mutations that show exactly the widgets pinned to the active display.

    Widgets whose mirrored state already matches produce no mutation, so
    planning twice for the same display yields nothing the second time. An
    empty active display hides every widget.

    Args:
        records: Loaded workspace records
        widgets: Workspace name -> widget handle
        active_display: Display identifier from the resolver ("" if unknown)
        palette: Colours for the inactive icon/label state
    """
    mutations = []
    for record in records:
        handle = widgets.get(record.name)
        if handle is None:
            continue
        desired = {
            "drawing": bool(active_display) and record.display == active_display,
            "icon.color": palette.inactive,
            "label.color": palette.inactive,
        }
        changes = {k: v for k, v in desired.items() if handle.properties.get(k) != v}
        if changes:
            mutations.append(WidgetMutation(MutationKind.SET, handle.key, properties=changes))
    return mutations


class VisibilityController:
    """Shows the workspace widgets of the active display and hides the rest."""

    def __init__(self, resolver: DisplayResolver, registry: WidgetRegistry, palette: Palette):
        self.resolver = resolver
        self.registry = registry
        self.palette = palette

    def refresh(self, records: List[WorkspaceRecord], widgets: Dict[str, WidgetHandle]) -> None:
        """Query the active display once and update widget visibility."""
        active_display = self.resolver.active_display()
        mutations = plan_visibility(records, widgets, active_display, self.palette)
        if mutations:
            logger.debug(f"Visibility refresh for {active_display or '<unknown>'}: {len(mutations)} changes")
        self.registry.apply(mutations)
