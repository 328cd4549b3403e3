"""Locations of the files and folders the wallpaper manager keeps."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import platformdirs


@dataclass(frozen=True)
class Config:
    """Paths to the configuration directory and everything stored in it."""

    config_dir: Path
    unprocessed_dir: Path
    keepfavorite_dir: Path
    blacklist_file: Path
    marketcodes_file: Path
    metadata_file: Path

    @classmethod
    def create(cls, config_dir=None) -> "Config":
        """Build the layout under ``config_dir`` and create whatever is missing.

        Without a directory the platform's per-user configuration directory
        for the application is used.
        """
        if config_dir is None:
            base = Path(platformdirs.user_config_dir("bingtray", "bingtray"))
        else:
            base = Path(config_dir)

        config = cls(
            config_dir=base,
            unprocessed_dir=base / "unprocessed",
            keepfavorite_dir=base / "keepfavorite",
            blacklist_file=base / "blacklist.conf",
            marketcodes_file=base / "marketcodes.conf",
            metadata_file=base / "metadata.conf",
        )

        for directory in (config.config_dir, config.unprocessed_dir, config.keepfavorite_dir):
            directory.mkdir(parents=True, exist_ok=True)

        for path in (config.blacklist_file, config.metadata_file):
            if not path.exists():
                path.write_text("", encoding="utf-8")

        return config