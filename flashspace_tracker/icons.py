"""SF Symbols glyph lookup for workspaces and applications."""

from pathlib import PurePosixPath
from typing import Optional

DEFAULT_GLYPH = "􀈊"

WORKSPACE_GLYPHS = {
    "Code": "􀤋",
    "Terminal": "􀪏",
    "Browser": "􀎬",
    "Chat": "􀌤",
    "Email": "􀍕",
    "Design": "􀤒",
    "Media": "􀑪",
    "Tools": "􀦳",
    "Apps": "􀏜",
}

# FlashSpace iconPath file name -> workspace glyph
ICON_FILE_GLYPHS = {
    "Warp.icns": WORKSPACE_GLYPHS["Terminal"],
    "Cursor.icns": WORKSPACE_GLYPHS["Code"],
    "Code - Insiders.icns": WORKSPACE_GLYPHS["Code"],
    "Zed Preview.icns": WORKSPACE_GLYPHS["Code"],
    "AppIcon.icns": WORKSPACE_GLYPHS["Terminal"],
    "electron.icns": WORKSPACE_GLYPHS["Apps"],
    "app.icns": WORKSPACE_GLYPHS["Browser"],
    "firefox.icns": WORKSPACE_GLYPHS["Browser"],
    "icon.icns": WORKSPACE_GLYPHS["Email"],
    "messenger.icns": WORKSPACE_GLYPHS["Chat"],
    "Icon.icns": WORKSPACE_GLYPHS["Media"],
    "Navicat Premium Lite.icns": WORKSPACE_GLYPHS["Tools"],
    "ZPLogo.icns": WORKSPACE_GLYPHS["Design"],
    "figma.icns": WORKSPACE_GLYPHS["Design"],
    "spotify.icns": WORKSPACE_GLYPHS["Media"],
    "Slack.icns": WORKSPACE_GLYPHS["Tools"],
}

APP_GLYPHS = {
    "Brave Browser": "􀎬",
    "Arc": "􀎬",
    "Safari": "􀎬",
    "Cursor": "􀪏",
    "Code": "􀤋",
    "Terminal": "􀪏",
    "iTerm2": "􀪏",
    "Finder": "􀉫",
    "Slack": "􀌤",
    "Discord": "􀌤",
    "Spotify": "􀑪",
    "Music": "􀑪",
    "Figma": "􀤒",
}


def workspace_glyph(workspace_name: str, icon_path: Optional[str] = None) -> str:
    """Glyph for a workspace.

    The workspace name is tried first, then the file name of the first
    member app's icon. Unknown workspaces get DEFAULT_GLYPH.
    """
    glyph = WORKSPACE_GLYPHS.get(workspace_name)
    if glyph:
        return glyph
    if icon_path:
        glyph = ICON_FILE_GLYPHS.get(PurePosixPath(icon_path).name)
        if glyph:
            return glyph
    return DEFAULT_GLYPH


def app_glyph(app_name: str) -> str:
    return APP_GLYPHS.get(app_name, DEFAULT_GLYPH)
