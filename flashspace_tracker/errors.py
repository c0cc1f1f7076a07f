"""
Error types for the FlashSpace workspace tracker.

Errors are raised at internal seams (profile reading, external commands,
event payload parsing) and always caught by the owning component, which logs
them and falls back to a defined value.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """
    Error codes for the workspace tracker.

    Ranges:
    - 1100-1199: Profile errors
    - 1400-1499: External command errors
    - 1500-1599: Event errors
    """

    INTERNAL_ERROR = -32603

    # Profile errors (1100-1199)
    PROFILE_NOT_FOUND = 1100
    PROFILE_UNREADABLE = 1101
    PROFILE_MALFORMED = 1102
    PROFILE_MISSING = 1103

    # External command errors (1400-1499)
    COMMAND_NOT_FOUND = 1400
    COMMAND_FAILED = 1401
    COMMAND_TIMEOUT = 1402

    # Event errors (1500-1599)
    INVALID_EVENT = 1500
    DAEMON_NOT_RUNNING = 1501


class TrackerError(Exception):
    """Base exception for workspace tracker errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize tracker error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a dictionary for socket replies and logs."""
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class ProfileLoadError(TrackerError):
    """Workspace profile could not be read."""

    def __init__(self, file_path: str, reason: str, code: ErrorCode = ErrorCode.PROFILE_UNREADABLE):
        super().__init__(
            code=code,
            message=f"Failed to load workspace profile from {file_path}: {reason}",
            suggestion="Check that FlashSpace has written its profiles.json",
            context={"file_path": file_path, "reason": reason}
        )


class ExternalCommandError(TrackerError):
    """External command could not be run to completion."""

    def __init__(self, argv: list, reason: str, code: ErrorCode = ErrorCode.COMMAND_FAILED):
        super().__init__(
            code=code,
            message=f"Command {argv[0] if argv else '<empty>'} failed: {reason}",
            context={"argv": list(argv), "reason": reason}
        )


class EventPayloadError(TrackerError):
    """Event received on the socket is not a valid host event."""

    def __init__(self, reason: str):
        super().__init__(
            code=ErrorCode.INVALID_EVENT,
            message=f"Invalid event payload: {reason}",
            suggestion='Send one JSON object per line: {"sender": ..., "name": ..., "info": ...}'
        )


def error_response(error: Exception) -> Dict[str, Any]:
    """
    Create a socket error reply from an exception.

    Args:
        error: Exception to convert

    Returns:
        Reply dictionary with ``ok`` set to False
    """
    if isinstance(error, TrackerError):
        error_dict = error.to_dict()
    else:
        error_dict = {
            "code": ErrorCode.INTERNAL_ERROR.value,
            "message": str(error),
            "suggestion": "Check the tracker log for details"
        }

    return {"ok": False, "error": error_dict}
