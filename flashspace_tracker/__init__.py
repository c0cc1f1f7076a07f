"""
FlashSpace Tracker

Status-bar workspace tracker for FlashSpace and SketchyBar.
Shows the workspaces pinned to the active display and the focused app's workspace.
"""

__version__ = "1.0.0"
__author__ = "NixOS Configuration Team"
