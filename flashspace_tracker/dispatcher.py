"""Workspace switch commands sent to FlashSpace."""

import logging

from .errors import ExternalCommandError
from .process import run_command

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Turns workspace widget clicks into ``flashspace workspace`` invocations."""

    def __init__(self, flashspace_bin: str = "/usr/local/bin/flashspace", timeout: float = 2.0):
        self.flashspace_bin = flashspace_bin
        self.timeout = timeout

    def switch_to(self, workspace_name: str) -> None:
        """Ask FlashSpace to activate a workspace.

        Waits for the command to exit but ignores its status and output;
        FlashSpace decides whether the switch happens.

        Args:
            workspace_name: Workspace name as written in the profile
        """
        if not workspace_name:
            logger.debug("No workspace name, skipping switch")
            return

        argv = [self.flashspace_bin, "workspace", "--name", workspace_name]
        try:
            result = run_command(argv, timeout=self.timeout)
        except ExternalCommandError as e:
            logger.warning(f"Switch to {workspace_name} not sent: {e.message}")
            return

        logger.info(f"Requested workspace {workspace_name} (exit {result.returncode})")
