"""Client side of the tracker event socket, used by item scripts and the CLI."""

import json
import socket
from pathlib import Path
from typing import Any, Dict

from .errors import ErrorCode, TrackerError


def send_event(socket_path: Path, event: Dict[str, Any], timeout: float = 1.0) -> Dict[str, Any]:
    """
    Send one event to the daemon and return its reply.

    Args:
        socket_path: Daemon event socket
        event: Event with sender, name and info keys
        timeout: Socket timeout in seconds

    Raises:
        TrackerError: If the daemon is not reachable or replies with garbage
    """
    if not socket_path.exists():
        raise TrackerError(
            ErrorCode.DAEMON_NOT_RUNNING,
            f"Tracker daemon not running (socket not found: {socket_path})",
            suggestion="Start it with: flashspace-tracker run"
        )

    try:
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
            sock.settimeout(timeout)
            sock.connect(str(socket_path))
            sock.sendall((json.dumps(event) + "\n").encode())
            with sock.makefile("r", encoding="utf-8") as reader:
                line = reader.readline()
    except OSError as e:
        raise TrackerError(
            ErrorCode.DAEMON_NOT_RUNNING,
            f"Failed to reach tracker daemon: {e}",
            context={"socket_path": str(socket_path)}
        )

    try:
        return json.loads(line)
    except json.JSONDecodeError:
        raise TrackerError(ErrorCode.INVALID_EVENT, f"Unreadable reply from daemon: {line!r}")
