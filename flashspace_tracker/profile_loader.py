"""
Workspace profile loader for FlashSpace profiles.json.

Loads and parses:
- profiles.json written by FlashSpace (structured JSON)
- one-workspace-per-line JSON (``jq -c '.profiles[0].workspaces[]'`` output),
  used as a fallback when the whole document does not parse

Every workspace chunk is handled on its own and every field is extracted on
its own, so one broken workspace never hides the others.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from .app_index import AppIndex
from .errors import ErrorCode, ProfileLoadError
from .models import WorkspaceRecord

logger = logging.getLogger(__name__)

# "opt+1" -> "1", "cmd+opt+k" -> "k"
SHORTCUT_PATTERN = re.compile(r"^.*\+\s*(\S+)\s*$")


def read_profile_text(profile_path: Path) -> str:
    """
    Read the profile document.

    Raises:
        ProfileLoadError: If the file is missing or unreadable
    """
    if not profile_path.exists():
        raise ProfileLoadError(str(profile_path), "file not found", code=ErrorCode.PROFILE_NOT_FOUND)
    try:
        return profile_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ProfileLoadError(str(profile_path), str(e))


def extract_shortcut_key(shortcut: Any) -> Optional[str]:
    """Key part of a FlashSpace shortcut string, or None if it has no key."""
    if not isinstance(shortcut, str):
        return None
    match = SHORTCUT_PATTERN.match(shortcut)
    return match.group(1) if match else None


def _text_field(chunk: dict, key: str) -> Optional[str]:
    value = chunk.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _member_apps(chunk: dict) -> Tuple[List[str], Optional[str]]:
    """App names listed in a workspace chunk and the first app's iconPath."""
    apps = chunk.get("apps")
    if not isinstance(apps, list):
        return [], None

    names = []
    icon_path = None
    for position, app in enumerate(apps):
        if isinstance(app, dict):
            name = _text_field(app, "name")
            if position == 0:
                icon_path = _text_field(app, "iconPath")
        elif isinstance(app, str) and app.strip():
            name = app.strip()
        else:
            name = None
        if name:
            names.append(name)
    return names, icon_path


class ProfileLoader:
    """Builds workspace records and the app index from a FlashSpace profile."""

    def __init__(self, profile_name: Optional[str] = None, main_display: str = ""):
        """
        Initialize profile loader.

        Args:
            profile_name: FlashSpace profile to read (None selects the first one)
            main_display: Display whose workspaces sort before all others
        """
        self.profile_name = profile_name
        self.main_display = main_display

    def load(self, profile_path: Path) -> Tuple[List[WorkspaceRecord], AppIndex]:
        """
        Load workspace records and the app index.

        Args:
            profile_path: Path to profiles.json

        Returns:
            (sorted workspace records, app index); both empty if the profile
            cannot be read
        """
        profile_path = Path(profile_path).expanduser()
        app_index = AppIndex()

        try:
            text = read_profile_text(profile_path)
        except ProfileLoadError as e:
            logger.warning(e.message)
            return [], app_index

        records: List[WorkspaceRecord] = []
        seen_names = set()
        for chunk in self.split_chunks(text):
            record = self._extract_record(chunk, app_index)
            if record is None:
                continue
            if record.name in seen_names:
                logger.warning(f"Duplicate workspace {record.name!r} ignored")
                continue
            seen_names.add(record.name)
            records.append(record)

        records = self.sort_records(records)
        logger.info(f"Loaded {len(records)} workspaces and {len(app_index)} apps from {profile_path}")
        return records, app_index

    def split_chunks(self, text: str) -> List[Any]:
        """Split a profile document into per-workspace chunks."""
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Profile is not valid JSON ({e.msg}), reading one workspace per line")
            return self._split_lines(text)

        if isinstance(document, list):
            return document
        if not isinstance(document, dict):
            logger.warning("Profile document is neither an object nor a list")
            return []
        if "workspaces" in document and "profiles" not in document:
            workspaces = document.get("workspaces")
            return workspaces if isinstance(workspaces, list) else []

        profile = self._select_profile(document.get("profiles"))
        if profile is None:
            return []
        workspaces = profile.get("workspaces")
        if not isinstance(workspaces, list):
            logger.warning("Selected profile has no workspace list")
            return []
        return workspaces

    def _select_profile(self, profiles: Any) -> Optional[dict]:
        if not isinstance(profiles, list):
            logger.warning("Profile document has no profile list")
            return None
        candidates = [p for p in profiles if isinstance(p, dict)]
        if self.profile_name:
            for profile in candidates:
                if profile.get("name") == self.profile_name:
                    return profile
            logger.warning(f"Profile {self.profile_name!r} not found, using the first profile")
        return candidates[0] if candidates else None

    @staticmethod
    def _split_lines(text: str) -> List[Any]:
        chunks = []
        for line_number, line in enumerate(text.splitlines(), start=1):
            line = line.strip().rstrip(",")
            if not line:
                continue
            try:
                chunks.append(json.loads(line))
            except json.JSONDecodeError:
                logger.debug(f"Skipping unparseable profile line {line_number}")
        return chunks

    def _extract_record(self, chunk: Any, app_index: AppIndex) -> Optional[WorkspaceRecord]:
        """
        Extract one workspace, registering its apps even when the record is incomplete.

        Returns:
            WorkspaceRecord, or None if name, shortcut key or display is missing
        """
        if not isinstance(chunk, dict):
            return None

        name = _text_field(chunk, "name")
        apps, icon_path = _member_apps(chunk)
        if name:
            for app_name in apps:
                app_index.register(app_name, name)

        shortcut_key = extract_shortcut_key(chunk.get("shortcut"))
        display = _text_field(chunk, "display")
        if not (name and shortcut_key and display):
            missing = [
                field for field, value in (("name", name), ("shortcut", shortcut_key), ("display", display))
                if not value
            ]
            logger.debug(f"Skipping workspace {name or '<unnamed>'}: missing {', '.join(missing)}")
            return None

        try:
            return WorkspaceRecord(
                name=name,
                shortcut_key=shortcut_key,
                display=display,
                member_apps=tuple(apps),
                icon_path=icon_path,
            )
        except ValidationError as e:
            logger.debug(f"Skipping workspace {name}: {e}")
            return None

    def sort_records(self, records: List[WorkspaceRecord]) -> List[WorkspaceRecord]:
        """Main display first, then numeric shortcut key ascending."""
        return sorted(records, key=lambda r: (r.display != self.main_display, r.sort_number))


def load_profile(
    profile_path: Path,
    profile_name: Optional[str] = None,
    main_display: str = ""
) -> Tuple[List[WorkspaceRecord], AppIndex]:
    """Load a FlashSpace profile with a one-off ProfileLoader."""
    return ProfileLoader(profile_name=profile_name, main_display=main_display).load(profile_path)
