#!/usr/bin/env python3
"""
FlashSpace Workspace Tracker CLI

Commands:
- run: start the tracker daemon
- notify: forward a SketchyBar event (SENDER/NAME/INFO) to the daemon
- reload: ask the daemon to reload the FlashSpace profile
- show: print the workspaces and app index read from the profile
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .config import TrackerConfig, configure_logging, load_config
from .daemon import RELOAD_EVENT, main as run_daemon
from .daemon_client import send_event
from .errors import TrackerError
from .icons import workspace_glyph
from .profile_loader import load_profile

logger = logging.getLogger(__name__)


def cmd_run(args, config: TrackerConfig) -> int:
    return asyncio.run(run_daemon(config))


def cmd_notify(args, config: TrackerConfig) -> int:
    """Forward one event; always exits 0 so SketchyBar never reports a failing script."""
    event = {
        "sender": args.sender or os.environ.get("SENDER", ""),
        "name": args.name if args.name is not None else os.environ.get("NAME", ""),
        "info": args.info if args.info is not None else os.environ.get("INFO", ""),
    }
    if not event["sender"]:
        logger.debug("notify called without a sender")
        return 0

    socket_path = Path(args.socket).expanduser() if args.socket else config.socket_path
    try:
        reply = send_event(socket_path, event)
    except TrackerError as e:
        logger.warning(e.message)
        return 0

    if not reply.get("ok"):
        logger.warning(f"Daemon rejected {event['sender']}: {reply.get('error', {}).get('message')}")
    return 0


def cmd_reload(args, config: TrackerConfig) -> int:
    try:
        reply = send_event(config.socket_path, {"sender": RELOAD_EVENT})
    except TrackerError as e:
        print(f"❌ {e.message}")
        if e.suggestion:
            print(f"  → {e.suggestion}")
        return 1

    if reply.get("ok"):
        print("✅ Reload requested")
        return 0
    print(f"❌ Reload rejected: {reply.get('error', {}).get('message')}")
    return 1


def cmd_show(args, config: TrackerConfig) -> int:
    console = Console()
    records, app_index = load_profile(config.profile_path, config.profile_name, config.main_display)

    if not records and not len(app_index):
        console.print(f"[yellow]No workspaces found in {config.profile_path}[/yellow]")
        return 1

    table = Table(title=f"Workspaces ({config.profile_path})")
    table.add_column("Key", justify="right")
    table.add_column("Icon")
    table.add_column("Workspace", style="cyan")
    table.add_column("Display")
    table.add_column("Apps")
    for record in records:
        display = record.display
        if config.main_display and display == config.main_display:
            display = f"[bold]{display}[/bold] (main)"
        table.add_row(
            record.shortcut_key,
            workspace_glyph(record.name, record.icon_path),
            record.name,
            display,
            ", ".join(record.member_apps),
        )
    console.print(table)

    if args.apps:
        apps = Table(title="App index")
        apps.add_column("App", style="green")
        apps.add_column("Workspace", style="cyan")
        for app_name, workspace_name in sorted(app_index.items()):
            apps.add_row(app_name, workspace_name)
        console.print(apps)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flashspace-tracker",
        description="SketchyBar workspace tracker for FlashSpace"
    )
    parser.add_argument("--config", help="Config file (default: ~/.config/flashspace-tracker/config.toml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log to stderr at debug level")

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Start the tracker daemon")
    run_parser.set_defaults(func=cmd_run)

    notify_parser = subparsers.add_parser("notify", help="Forward a SketchyBar event to the daemon")
    notify_parser.add_argument("--socket", help="Daemon event socket")
    notify_parser.add_argument("--sender", help="Event name (default: $SENDER)")
    notify_parser.add_argument("--name", help="Widget name (default: $NAME)")
    notify_parser.add_argument("--info", help="Event payload (default: $INFO)")
    notify_parser.set_defaults(func=cmd_notify)

    reload_parser = subparsers.add_parser("reload", help="Reload the FlashSpace profile")
    reload_parser.set_defaults(func=cmd_reload)

    show_parser = subparsers.add_parser("show", help="Print workspaces from the profile")
    show_parser.add_argument("--apps", action="store_true", help="Also print the app index")
    show_parser.set_defaults(func=cmd_show)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(Path(args.config) if args.config else None)
    configure_logging(config, verbose=args.verbose)

    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
