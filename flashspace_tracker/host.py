"""SketchyBar host adapter.

Core components describe widget changes as WidgetMutation values; the host
turns them into ``sketchybar`` invocations.
"""

import logging
import shlex
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .errors import ExternalCommandError
from .process import run_command

logger = logging.getLogger(__name__)

MOUSE_EVENTS = ["mouse.clicked", "mouse.entered", "mouse.exited"]
FRONT_APP_EVENT = "front_app_switched"


class MutationKind(Enum):
    """Widget primitives understood by the host."""
    ADD = "add"
    SET = "set"
    REMOVE = "remove"
    SUBSCRIBE = "subscribe"


def format_value(value: Any) -> str:
    """Render a property value in SketchyBar syntax."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


@dataclass
class WidgetMutation:
    """A single change to a host widget.

    Properties use SketchyBar's dotted names (icon.color, label.width, ...).
    """

    kind: MutationKind
    key: str
    properties: Dict[str, Any] = field(default_factory=dict)
    events: List[str] = field(default_factory=list)
    position: str = "left"
    animation_frames: int = 0

    def to_args(self) -> List[str]:
        """Convert to sketchybar command-line arguments."""
        props = [f"{name}={format_value(value)}" for name, value in self.properties.items()]
        if self.kind == MutationKind.ADD:
            args = ["--add", "item", self.key, self.position]
            if props:
                args += ["--set", self.key, *props]
            return args
        if self.kind == MutationKind.SET:
            if not props:
                return []
            # --animate covers every --set after it in the same invocation
            animate = ["--animate", "sin", str(self.animation_frames)] if self.animation_frames > 0 else []
            return [*animate, "--set", self.key, *props]
        if self.kind == MutationKind.REMOVE:
            return ["--remove", self.key]
        return ["--subscribe", self.key, *self.events] if self.events else []


def notify_script(socket_path: Path) -> str:
    """Item script that forwards SketchyBar events to the tracker daemon."""
    return shlex.join([
        sys.executable, "-m", "flashspace_tracker", "notify", "--socket", str(socket_path)
    ])


class WidgetHost(ABC):
    """Receiver of widget mutations."""

    @abstractmethod
    def apply(self, mutations: Iterable[WidgetMutation]) -> bool:
        """Apply mutations in order. Must not raise.

        Returns:
            True if the host accepted the whole batch
        """


class SketchybarHost(WidgetHost):
    """Applies mutations through the sketchybar CLI, one batch per call."""

    def __init__(self, sketchybar_bin: str = "sketchybar", timeout: float = 2.0):
        """
        Initialize SketchyBar host.

        Args:
            sketchybar_bin: sketchybar executable
            timeout: Seconds to wait for each sketchybar invocation
        """
        self.sketchybar_bin = sketchybar_bin
        self.timeout = timeout

    def apply(self, mutations: Iterable[WidgetMutation]) -> bool:
        args: List[str] = []
        for mutation in mutations:
            args += mutation.to_args()
        if not args:
            return True

        argv = [self.sketchybar_bin, *args]
        try:
            result = run_command(argv, timeout=self.timeout)
        except ExternalCommandError as e:
            logger.error(e.message)
            return False

        if result.returncode != 0:
            logger.warning(f"sketchybar exited with {result.returncode}: {result.stderr.strip()}")
            return False

        logger.debug(f"sketchybar applied {len(args)} arguments")
        return True
