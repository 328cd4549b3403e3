"""Tray front end: a menu of wallpaper actions, or the text menu with --cli."""

from __future__ import annotations

import argparse
import sys
import webbrowser
from pathlib import Path
from typing import TextIO

from .app import ACTION_ERRORS, NO_IMAGE, BingCliApp
from .config import Config
from .tray_menu import MenuAction, TrayMenu, create_tray_menu

TOOLTIP = "BingTray - Bing Wallpaper Manager"

_KEYS = {
    MenuAction.COPYRIGHT_LINK: "c",
    MenuAction.OPEN_CACHE: "0",
    MenuAction.NEXT_MARKET: "1",
    MenuAction.KEEP: "2",
    MenuAction.BLACKLIST: "3",
    MenuAction.NEXT_KEPT: "4",
    MenuAction.EXIT: "5",
}


def _open_link(link: str) -> None:
    print(f"Opening copyright link: {link}")
    try:
        opened = webbrowser.open(link)
    except webbrowser.Error as error:
        print(f"Failed to open copyright link: {error}", file=sys.stderr)
        return
    if not opened:
        print(f"Failed to open copyright link: {link}", file=sys.stderr)


def _open_cache(app) -> None:
    print("Executing: Cache Dir Contents")
    try:
        app.open_cache_directory()
    except ACTION_ERRORS as error:
        print(f"Failed to open cache directory: {error}", file=sys.stderr)
    else:
        print("Cache directory opened in file manager")


def _next_market(app) -> None:
    if not app.has_next_market_wallpaper_available():
        print(
            "Next market wallpaper is not available - no images in unprocessed "
            "folder and no available market codes"
        )
        return
    print("Executing: Next market wallpaper")
    try:
        app.set_next_market_wallpaper()
    except ACTION_ERRORS as error:
        print(f"Failed to set next market wallpaper: {error}", file=sys.stderr)


def _keep(app) -> None:
    if app.can_keep_current_image():
        print("Executing: Keep current image")
        try:
            app.keep_current_image()
        except ACTION_ERRORS as error:
            print(f"Failed to keep image: {error}", file=sys.stderr)
    elif not app.has_unprocessed_files():
        print("Keep current image is not available - no files in unprocessed folder")
    elif app.get_current_image_title() == NO_IMAGE:
        print("Keep current image is not available - no current image")
    elif app.is_current_image_in_favorites():
        print("Keep current image is not available - image is already in favorites")
    else:
        print("Keep current image is not available")


def _blacklist(app) -> None:
    if app.can_blacklist_current_image():
        print("Executing: Blacklist current image")
        try:
            app.blacklist_current_image()
        except ACTION_ERRORS as error:
            print(f"Failed to blacklist image: {error}", file=sys.stderr)
    elif not app.has_unprocessed_files():
        print("Blacklist current image is not available - no files in unprocessed folder")
    elif app.get_current_image_title() == NO_IMAGE:
        print("Blacklist current image is not available - no current image")
    else:
        print("Blacklist current image is not available")


def _next_kept(app) -> None:
    if not app.has_kept_wallpapers_available():
        print("Next kept wallpaper is not available - no kept wallpapers in favorites folder")
        return
    print("Executing: Next kept wallpaper")
    try:
        app.set_kept_wallpaper()
    except ACTION_ERRORS as error:
        print(f"Failed to set kept wallpaper: {error}", file=sys.stderr)


def handle_menu_action(app, action: MenuAction, copyright_link: str | None = None) -> bool:
    """Carry out a menu action on ``app``; return False when the tray should exit."""
    if action is MenuAction.EXIT:
        print("Executing: Exit")
        return False
    if action is MenuAction.COPYRIGHT_LINK:
        if copyright_link:
            _open_link(copyright_link)
    elif action is MenuAction.OPEN_CACHE:
        _open_cache(app)
    elif action is MenuAction.NEXT_MARKET:
        _next_market(app)
    elif action is MenuAction.KEEP:
        _keep(app)
    elif action is MenuAction.BLACKLIST:
        _blacklist(app)
    elif action is MenuAction.NEXT_KEPT:
        _next_kept(app)
    return True


def _show_menu(menu: TrayMenu) -> None:
    lines = ["", f"=== {TOOLTIP} ==="]
    for entry in menu.entries:
        if entry.separator:
            lines.append("-" * 20)
        elif entry.action is MenuAction.COPYRIGHT_LINK:
            lines.append(f"c. {entry.label}")
        else:
            lines.append(entry.label)
    print("\n".join(lines))
    print("\nSelect an option: ", end="", flush=True)


def _action_for(menu: TrayMenu, choice: str) -> MenuAction | None:
    for entry in menu.entries:
        if entry.action is not None and entry.enabled and _KEYS[entry.action] == choice:
            return entry.action
    return None


def _run_tray(app: BingCliApp, stream: TextIO) -> int:
    create_tray_menu(app)
    print("Tray icon created, starting background initialization...")
    try:
        app.initialize()
    except ACTION_ERRORS as error:
        print(f"Failed to initialize app: {error}", file=sys.stderr)

    while True:
        menu = create_tray_menu(app)
        _show_menu(menu)
        line = stream.readline()
        if not line:
            print()
            return 0
        choice = line.strip()
        action = _action_for(menu, choice)
        if action is None:
            print(f"Unknown menu item clicked: {choice}")
            continue
        if not handle_menu_action(app, action, menu.copyright_link):
            return 0


def main(argv=None) -> int:
    """Start the tray menu, or the text menu with ``--cli``; return the exit status."""
    parser = argparse.ArgumentParser(
        prog="bingtray-gui", description="BingTray - Bing Wallpaper Manager with GUI"
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.0.1")
    parser.add_argument("--cli", action="store_true", help="run in text-menu mode")
    parser.add_argument("--debug", action="store_true", help="print start-up diagnostics")
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="directory for images and settings (default: per-user config directory)",
    )
    args = parser.parse_args(argv)

    try:
        app = BingCliApp(Config.create(args.config_dir))
    except ACTION_ERRORS as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1

    if args.cli:
        print("BingTray CLI mode started successfully!")
        try:
            app.run()
        except ACTION_ERRORS as error:
            print(f"Error: {error}", file=sys.stderr)
            return 1
        return 0

    if args.debug:
        print("BingTray GUI started successfully!")
    return _run_tray(app, sys.stdin)


if __name__ == "__main__":
    sys.exit(main())