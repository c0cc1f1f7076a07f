"""Configuration for the FlashSpace workspace tracker.

Defaults work without a config file. Overrides are read from
~/.config/flashspace-tracker/config.toml (or $FLASHSPACE_TRACKER_CONFIG).
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "FLASHSPACE_TRACKER_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "flashspace-tracker" / "config.toml"
DEFAULT_PROFILE_PATH = Path.home() / ".config" / "flashspace" / "profiles.json"
DEFAULT_SOCKET_PATH = Path.home() / ".cache" / "flashspace-tracker" / "events.sock"


@dataclass
class Palette:
    """Widget colours in SketchyBar ARGB notation.

    Default theme: Kanagawa
    """
    inactive: str = "0xffc8c093"          # White - icon/label after a visibility refresh
    idle: str = "0xff727169"              # Grey - icon colour before the first refresh
    background: str = "0xff1f1f28"        # Workspace item background
    hover_background: str = "0xf016161d"  # Workspace item background under the pointer
    summary_background: str = "0xf016161d"
    accent_border: str = "0xff7e9cd8"     # Blue - focused app belongs to a workspace
    neutral_border: str = "0xff727169"    # Grey - focused app is not in the profile


@dataclass
class TrackerConfig:
    """Complete tracker configuration."""

    profile_path: Path = DEFAULT_PROFILE_PATH
    profile_name: Optional[str] = None    # None selects the first profile
    main_display: str = ""                # Workspaces on this display sort first
    flashspace_bin: str = "/usr/local/bin/flashspace"
    sketchybar_bin: str = "sketchybar"
    command_timeout: float = 2.0
    socket_path: Path = DEFAULT_SOCKET_PATH
    workspace_prefix: str = "workspace."
    summary_key: str = "app.space"
    position: str = "left"
    icon_font: str = "SF Pro:Regular:14.0"
    label_font: str = "SF Pro:Regular:12.0"
    animation_frames: int = 18            # Hover reveal length in frames (60 per second)
    log_file: Path = Path("/tmp/flashspace-tracker.log")
    log_level: str = "INFO"
    palette: Palette = field(default_factory=Palette)

    def __post_init__(self):
        """Normalise path-valued settings given as strings."""
        self.profile_path = Path(self.profile_path).expanduser()
        self.socket_path = Path(self.socket_path).expanduser()
        self.log_file = Path(self.log_file).expanduser()
        self.command_timeout = float(self.command_timeout)


def _known_overrides(cls, data: Dict[str, Any], section: str) -> Dict[str, Any]:
    """Keep only keys that name a field of ``cls``."""
    names = {f.name for f in fields(cls) if f.name != "palette"}
    overrides = {}
    for key, value in data.items():
        if key in names:
            overrides[key] = value
        else:
            logger.warning(f"Ignoring unknown [{section}] setting: {key}")
    return overrides


def load_config(path: Optional[Path] = None) -> TrackerConfig:
    """Load tracker configuration with TOML overrides.

    Args:
        path: Config file (defaults to $FLASHSPACE_TRACKER_CONFIG or DEFAULT_CONFIG_PATH)

    Returns:
        TrackerConfig; defaults when the file is missing or invalid
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
    path = Path(path).expanduser()

    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        return TrackerConfig()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.error(f"Failed to read config {path}: {e}")
        return TrackerConfig()

    tracker_data = data.get("tracker", {})
    palette_data = data.get("palette", {})
    if not isinstance(tracker_data, dict) or not isinstance(palette_data, dict):
        logger.error(f"Config {path}: [tracker] and [palette] must be tables")
        return TrackerConfig()

    try:
        palette = Palette(**_known_overrides(Palette, palette_data, "palette"))
        config = TrackerConfig(
            palette=palette,
            **_known_overrides(TrackerConfig, tracker_data, "tracker")
        )
    except (TypeError, ValueError) as e:
        logger.error(f"Invalid setting in {path}: {e}")
        return TrackerConfig()

    logger.info(f"Loaded config from {path}")
    return config


def configure_logging(config: TrackerConfig, verbose: bool = False) -> None:
    """Send log records to the debug log file (and stderr when verbose)."""
    handlers = []
    try:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(config.log_file))
    except OSError:
        verbose = True
    if verbose:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, config.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )
