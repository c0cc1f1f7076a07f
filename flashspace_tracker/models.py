"""
Pydantic data models for the FlashSpace workspace tracker.

Workspace records are built once from the FlashSpace profile and never
mutated afterwards. Host events arrive over the tracker socket.
"""

import json
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import EventPayloadError


class WorkspaceRecord(BaseModel):
    """A FlashSpace workspace pinned to one display."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Workspace name (unique within a profile)")
    shortcut_key: str = Field(..., min_length=1, description="Key part of the shortcut, e.g. '1' for opt+1")
    display: str = Field(..., min_length=1, description="Display the workspace is pinned to")
    member_apps: Tuple[str, ...] = Field(default=(), description="Application names, first-seen order")
    icon_path: Optional[str] = Field(None, description="iconPath of the first member app")

    @field_validator("member_apps")
    @classmethod
    def dedupe_apps(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        """Keep the first occurrence of each app name."""
        return tuple(dict.fromkeys(v))

    @property
    def sort_number(self) -> int:
        """Numeric shortcut key; non-numeric keys sort as 0."""
        try:
            return int(self.shortcut_key)
        except ValueError:
            return 0

    @property
    def hover_label(self) -> str:
        """Label revealed while the pointer is over the workspace widget."""
        return f"{self.shortcut_key} - {self.name}"


class TrackerEvent(BaseModel):
    """An event forwarded from SketchyBar (SENDER / NAME / INFO)."""

    sender: str = Field(..., min_length=1, description="Event name, e.g. front_app_switched")
    name: str = Field("", description="Widget the event was delivered to")
    info: str = Field("", description="Event payload, e.g. the focused app name")

    @field_validator("name", "info", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Missing or non-string payloads become empty strings."""
        return v if isinstance(v, str) else ""

    @classmethod
    def parse(cls, line: str) -> "TrackerEvent":
        """Parse one JSON line received on the event socket.

        Raises:
            EventPayloadError: If the line is not a JSON object with a sender
        """
        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise EventPayloadError(f"not JSON ({e.msg})")
        if not isinstance(data, dict):
            raise EventPayloadError("expected a JSON object")
        try:
            return cls(**data)
        except ValidationError as e:
            raise EventPayloadError(f"{e.error_count()} field error(s): {e.errors()[0]['msg']}")
