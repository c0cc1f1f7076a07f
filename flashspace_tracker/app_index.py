"""Application name to workspace name lookup."""

import logging
from typing import Dict, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)


class AppIndex:
    """Maps application names to the workspace they belong to.

    Written while the profile loads, read-only afterwards. When an app is
    listed in more than one workspace, the last registration wins.
    """

    def __init__(self) -> None:
        self._workspace_by_app: Dict[str, str] = {}

    def register(self, app_name: str, workspace_name: str) -> None:
        """Associate an app with a workspace, replacing any earlier association."""
        previous = self._workspace_by_app.get(app_name)
        if previous is not None and previous != workspace_name:
            logger.debug(f"App {app_name!r} moved from workspace {previous!r} to {workspace_name!r}")
        self._workspace_by_app[app_name] = workspace_name

    def lookup(self, app_name: str) -> Optional[str]:
        """Workspace name for an app, or None when the app is not in the profile."""
        if not app_name:
            return None
        return self._workspace_by_app.get(app_name)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self._workspace_by_app.items())

    def __contains__(self, app_name: object) -> bool:
        return app_name in self._workspace_by_app

    def __len__(self) -> int:
        return len(self._workspace_by_app)
