"""Active display lookup through the FlashSpace CLI."""

import logging

from .errors import ExternalCommandError
from .process import run_command

logger = logging.getLogger(__name__)


class DisplayResolver:
    """Queries FlashSpace for the display holding the focused app."""

    def __init__(self, flashspace_bin: str = "/usr/local/bin/flashspace", timeout: float = 2.0):
        self.flashspace_bin = flashspace_bin
        self.timeout = timeout

    def active_display(self) -> str:
        """Return the active display identifier.

        Returns:
            Trimmed output of ``flashspace get-display``, or "" when the
            command is missing, fails or times out
        """
        argv = [self.flashspace_bin, "get-display"]
        try:
            result = run_command(argv, timeout=self.timeout)
        except ExternalCommandError as e:
            logger.warning(f"Active display unknown: {e.message}")
            return ""

        if result.returncode != 0:
            logger.warning(f"flashspace get-display exited with {result.returncode}")
            return ""

        display = (result.stdout or "").strip()
        logger.debug(f"Active display: {display or '<none>'}")
        return display
