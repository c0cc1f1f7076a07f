"""External command execution with a bounded wait."""

import logging
import subprocess
from typing import List

from .errors import ErrorCode, ExternalCommandError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 2.0


def run_command(argv: List[str], timeout: float = DEFAULT_TIMEOUT) -> subprocess.CompletedProcess:
    """Run an external command and wait for it to exit.

    The exit status is not checked; callers decide what a non-zero exit means.

    Args:
        argv: Command and arguments
        timeout: Seconds to wait before giving up on the child

    Returns:
        CompletedProcess with text stdout/stderr

    Raises:
        ExternalCommandError: If the binary is missing, cannot be executed or times out
    """
    try:
        return subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False
        )
    except FileNotFoundError:
        raise ExternalCommandError(argv, "binary not found", code=ErrorCode.COMMAND_NOT_FOUND)
    except subprocess.TimeoutExpired:
        raise ExternalCommandError(argv, f"timed out after {timeout}s", code=ErrorCode.COMMAND_TIMEOUT)
    except OSError as e:
        raise ExternalCommandError(argv, str(e))
