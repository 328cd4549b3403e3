"""Interactive wallpaper manager built on the core storage and Bing helpers."""

from __future__ import annotations

import random
import sys
import time
from pathlib import Path
from typing import Callable, TextIO

import requests

from .bing import download_images_for_market, load_market_codes
from .config import Config
from .desktop import open_config_directory, set_wallpaper
from .storage import (
    blacklist_image,
    get_image_metadata,
    get_next_image,
    get_old_market_codes,
    list_jpg_images,
    move_to_keepfavorite,
    need_more_images,
    save_market_codes,
)

NO_IMAGE = "(no image)"
NO_COPYRIGHT = "(no copyright info)"
MAX_TITLE_LENGTH = 30

# Failures an action may raise; the menu reports them and carries on.
ACTION_ERRORS = (OSError, ValueError, requests.RequestException)


def _count_jpg_images(directory: Path) -> int:
    try:
        return len(list_jpg_images(directory))
    except OSError:
        return 0


class BingCliApp:
    """Keeps track of the current wallpaper and offers the menu actions."""

    def __init__(
        self,
        config: Config | None = None,
        wallpaper_setter: Callable[[Path], bool] | None = None,
    ) -> None:
        self.config = config if config is not None else Config.create()
        self._set_wallpaper = wallpaper_setter if wallpaper_setter is not None else set_wallpaper
        self.current_image: Path | None = None

    # -- actions -----------------------------------------------------------

    def initialize(self) -> None:
        """Fetch images if none are waiting, then set the first wallpaper."""
        market_codes = load_market_codes(self.config)
        if need_more_images(self.config):
            self._download_new_images(market_codes)
        self.set_next_market_wallpaper()

    def _download_new_images(self, market_codes: dict[str, int]) -> None:
        old_codes = get_old_market_codes(market_codes)
        if not old_codes:
            return
        market_code = random.choice(old_codes)
        print(f"Downloading images for market code: {market_code}")
        count, _ = download_images_for_market(self.config, market_code)
        print(f"Downloaded {count} images")
        market_codes[market_code] = int(time.time())
        save_market_codes(self.config, market_codes)

    def set_next_market_wallpaper(self) -> bool:
        """Download from a stale market if possible and show an unprocessed image."""
        market_codes = load_market_codes(self.config)
        self._download_new_images(market_codes)

        image_path = get_next_image(self.config)
        if image_path is not None and self._set_wallpaper(image_path):
            self.current_image = image_path
            print(f"Set wallpaper: {image_path}")
        return True

    def keep_current_image(self) -> None:
        """Move the current image to the favourites and move on to the next one."""
        if self.current_image is None:
            return
        image_path = self.current_image
        move_to_keepfavorite(self.config, image_path)
        print(f"Moved to favorites: {image_path}")
        if need_more_images(self.config):
            self._download_new_images(load_market_codes(self.config))
        self.set_next_market_wallpaper()

    def blacklist_current_image(self) -> None:
        """Blacklist and delete the current image, then move on to the next one."""
        if self.current_image is None:
            return
        image_path = self.current_image
        blacklist_image(self.config, image_path)
        print(f"Blacklisted: {image_path}")
        if need_more_images(self.config):
            self._download_new_images(load_market_codes(self.config))
        self.set_next_market_wallpaper()

    def set_kept_wallpaper(self) -> bool:
        """Show one of the favourite images, chosen by the current time."""
        images = list_jpg_images(self.config.keepfavorite_dir)
        if not images:
            print("No kept wallpapers available in favorites folder.")
            return False
        selected = images[int(time.time()) % len(images)]
        if self._set_wallpaper(selected):
            self.current_image = selected
            print(f"Set kept wallpaper: {selected}")
            return True
        return False

    def open_cache_directory(self) -> None:
        """Open the configuration directory in a file manager."""
        open_config_directory(self.config)

    # -- state queries -----------------------------------------------------

    def _market_codes_or_empty(self) -> dict[str, int]:
        try:
            return load_market_codes(self.config)
        except ACTION_ERRORS:
            return {}

    def has_unprocessed_files(self) -> bool:
        try:
            return not need_more_images(self.config)
        except OSError:
            return False

    def has_next_market_wallpaper_available(self) -> bool:
        if _count_jpg_images(self.config.unprocessed_dir) > 0:
            return True
        return bool(get_old_market_codes(self._market_codes_or_empty()))

    def is_current_image_in_favorites(self) -> bool:
        return self.current_image is not None and self.current_image.is_relative_to(
            self.config.keepfavorite_dir
        )

    def can_keep_current_image(self) -> bool:
        if self.current_image is None:
            return False
        return not self.is_current_image_in_favorites() and self.has_unprocessed_files()

    def can_blacklist_current_image(self) -> bool:
        return self.current_image is not None and self.has_unprocessed_files()

    def has_kept_wallpapers_available(self) -> bool:
        return _count_jpg_images(self.config.keepfavorite_dir) > 0

    # -- descriptions ------------------------------------------------------

    def get_current_image_title(self) -> str:
        """A short title from the current image's file name."""
        if self.current_image is None or not self.current_image.stem:
            return NO_IMAGE
        stem = self.current_image.stem
        title = stem.rpartition(".")[0] if "." in stem else stem
        if len(title) > MAX_TITLE_LENGTH:
            return title[:MAX_TITLE_LENGTH] + "..."
        return title

    def get_current_image_copyright(self) -> tuple[str, str]:
        """The recorded copyright text and link of the current image."""
        if self.current_image is not None and self.current_image.stem:
            metadata = get_image_metadata(self.config, self.current_image.stem)
            if metadata is not None:
                return metadata
        return NO_COPYRIGHT, ""

    def get_market_status(self) -> tuple[str, int]:
        """The most recently used market code and how many markets are stale."""
        market_codes = self._market_codes_or_empty()
        last_tried = max(market_codes, key=market_codes.__getitem__, default="none")
        return last_tried, len(get_old_market_codes(market_codes))

    def get_status_info(self) -> tuple[str, str, int]:
        last_tried, available_count = self.get_market_status()
        return self.get_current_image_title(), last_tried, available_count

    # -- text menu ---------------------------------------------------------

    def show_menu(self) -> None:
        title = self.get_current_image_title()
        copyright_text, copyrightlink = self.get_current_image_copyright()
        last_tried, available_count = self.get_market_status()

        def entry(label: str, available: bool, reason: str = "") -> str:
            return label if available else f"{label} (unavailable{reason})"

        lines = [
            "",
            "=== BingTray - Bing Wallpaper Manager ===",
            f"Current wallpaper: {title}",
            copyright_text,
            copyrightlink,
            f"Last tried market: {last_tried} | Available markets: {available_count}",
            "",
            "0. Cache Dir Contents",
            entry(
                "1. Next Market wallpaper",
                self.has_next_market_wallpaper_available(),
                " - no images/markets",
            ),
            entry(f'2. Keep "{title}"', self.can_keep_current_image()),
            entry(f'3. Blacklist "{title}"', self.can_blacklist_current_image()),
            entry(
                "4. Next Kept wallpaper",
                self.has_kept_wallpapers_available(),
                " - no kept wallpapers",
            ),
            "5. Exit",
        ]
        print("\n".join(lines))
        print("\nSelect an option (0-5): ", end="", flush=True)

    def _choose_cache(self) -> None:
        try:
            self.open_cache_directory()
        except ACTION_ERRORS as error:
            print(f"Failed to open cache directory: {error}", file=sys.stderr)
        else:
            print("Cache directory opened in file manager")

    def _choose_next(self) -> None:
        if not self.has_next_market_wallpaper_available():
            print(
                "Next market wallpaper is not available - no images in unprocessed "
                "folder and no available market codes"
            )
            return
        try:
            self.set_next_market_wallpaper()
        except ACTION_ERRORS as error:
            print(f"Failed to set next market wallpaper: {error}", file=sys.stderr)

    def _choose_keep(self) -> None:
        if self.can_keep_current_image():
            try:
                self.keep_current_image()
            except ACTION_ERRORS as error:
                print(f"Failed to keep image: {error}", file=sys.stderr)
        elif self.current_image is None:
            print("Keep current image is not available - no current image")
        elif self.is_current_image_in_favorites():
            print("Keep current image is not available - image is already in favorites")
        else:
            print("Keep current image is not available - no files in unprocessed folder")

    def _choose_blacklist(self) -> None:
        if self.can_blacklist_current_image():
            try:
                self.blacklist_current_image()
            except ACTION_ERRORS as error:
                print(f"Failed to blacklist image: {error}", file=sys.stderr)
        elif self.current_image is None:
            print("Blacklist current image is not available - no current image")
        else:
            print("Blacklist current image is not available - no files in unprocessed folder")

    def _choose_kept(self) -> None:
        if not self.has_kept_wallpapers_available():
            print(
                "Next kept wallpaper is not available - no kept wallpapers in favorites folder"
            )
            return
        try:
            self.set_kept_wallpaper()
        except ACTION_ERRORS as error:
            print(f"Failed to set kept wallpaper: {error}", file=sys.stderr)

    def run(self, input_stream: TextIO | None = None) -> None:
        """Show the menu and act on choices until Exit or end of input."""
        stream = input_stream if input_stream is not None else sys.stdin
        handlers = {
            "0": self._choose_cache,
            "1": self._choose_next,
            "2": self._choose_keep,
            "3": self._choose_blacklist,
            "4": self._choose_kept,
        }
        while True:
            self.show_menu()
            line = stream.readline()
            if not line:
                print()
                return
            choice = line.strip()
            if choice == "5":
                print("Exiting BingTray...")
                return
            handler = handlers.get(choice)
            if handler is None:
                print("Invalid option. Please select 0-5.")
            else:
                handler()