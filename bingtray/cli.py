"""Command that starts the text-menu wallpaper manager."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .app import ACTION_ERRORS, BingCliApp
from .config import Config


def main(argv=None) -> int:
    """Initialise the manager and run its menu; return the exit status."""
    parser = argparse.ArgumentParser(
        prog="bingcli", description="BingTray - Bing Wallpaper Manager"
    )
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="directory for images and settings (default: per-user config directory)",
    )
    args = parser.parse_args(argv)

    try:
        app = BingCliApp(Config.create(args.config_dir))
        app.initialize()
        print("BingTray started successfully!")
        app.run()
    except ACTION_ERRORS as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())