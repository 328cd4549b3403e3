"""Plain-text stores and image folders kept in the configuration directory."""

from __future__ import annotations

import re
import time
from pathlib import Path

from .config import Config

SEVEN_DAYS = 7 * 24 * 60 * 60
MAX_FILENAME_LENGTH = 100

_TIMESTAMP = re.compile(r"[+-]?\d+")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError:
        return ""


def list_jpg_images(directory) -> list[Path]:
    """Return the ``.jpg`` files (any case) in ``directory``, sorted by path."""
    return sorted(
        entry
        for entry in Path(directory).iterdir()
        if entry.suffix.lower() == ".jpg"
    )


def save_market_codes(config: Config, market_codes: dict[str, int]) -> None:
    """Write market codes with their last-used timestamps, one ``code|ts`` per line."""
    content = "".join(f"{code}|{timestamp}\n" for code, timestamp in market_codes.items())
    config.marketcodes_file.write_text(content, encoding="utf-8")


def read_market_codes(config: Config) -> dict[str, int]:
    """Read the market-code file; lines that do not parse are ignored."""
    content = config.marketcodes_file.read_text(encoding="utf-8")
    market_codes: dict[str, int] = {}
    for line in content.splitlines():
        code, separator, timestamp = line.partition("|")
        if separator and _TIMESTAMP.fullmatch(timestamp):
            market_codes[code] = int(timestamp)
    return market_codes


def get_old_market_codes(market_codes: dict[str, int], now=None) -> list[str]:
    """Return the codes last used more than seven days before ``now``."""
    if now is None:
        now = int(time.time())
    cutoff = now - SEVEN_DAYS
    return [code for code, timestamp in market_codes.items() if timestamp < cutoff]


def sanitize_filename(filename: str) -> str:
    """Replace unsafe characters with ``_``, trim, and cap the length."""
    sanitized = "".join(
        char if char.isalnum() or char in " -_" else "_" for char in filename
    ).strip()
    if len(sanitized.encode("utf-8")) > MAX_FILENAME_LENGTH:
        return sanitized[:MAX_FILENAME_LENGTH]
    return sanitized


def _copyright_text(copyright: str) -> str:
    start = copyright.find("(")
    end = copyright.find(")")
    if start != -1 and end != -1 and end > start:
        return copyright[start + 1 : end]
    return copyright


def save_image_metadata(config: Config, filename: str, copyright: str, copyrightlink: str) -> None:
    """Record the copyright text (the part in parentheses) and link for an image."""
    entry = f"{filename}|{_copyright_text(copyright)}|{copyrightlink}"
    lines = _read_text(config.metadata_file).splitlines()
    prefix = f"{filename}|"
    for index, line in enumerate(lines):
        if line.startswith(prefix):
            lines[index] = entry
            break
    else:
        lines.append(entry)

    content = "\n".join(lines)
    if content:
        config.metadata_file.write_text(content + "\n", encoding="utf-8")


def get_image_metadata(config: Config, filename: str) -> tuple[str, str] | None:
    """Return ``(copyright_text, copyrightlink)`` for an image, if recorded."""
    for line in _read_text(config.metadata_file).splitlines():
        parts = line.split("|")
        if len(parts) >= 3 and parts[0] == filename:
            return parts[1], parts[2]
    return None


def blacklist_image(config: Config, image_path) -> None:
    """Add the image's name to the blacklist and delete the file."""
    image_path = Path(image_path)
    if image_path.stem:
        blacklist = _read_text(config.blacklist_file)
        config.blacklist_file.write_text(blacklist + f"{image_path.stem}\n", encoding="utf-8")
    image_path.unlink()


def is_blacklisted(config: Config, filename: str) -> bool:
    """Tell whether ``filename`` (without extension) is on the blacklist."""
    listed = any(
        line.strip() == filename for line in _read_text(config.blacklist_file).splitlines()
    )
    print(f"Checking if {filename} is blacklisted : {str(listed).lower()}")
    return listed


def get_next_image(config: Config) -> Path | None:
    """Pick an unprocessed image, chosen by the current time, or ``None``."""
    images = list_jpg_images(config.unprocessed_dir)
    if not images:
        return None
    return images[int(time.time()) % len(images)]


def move_to_keepfavorite(config: Config, image_path) -> None:
    """Move an image into the favourites folder."""
    image_path = Path(image_path)
    if image_path.name:
        image_path.replace(config.keepfavorite_dir / image_path.name)


def need_more_images(config: Config) -> bool:
    """True when the unprocessed folder holds no images."""
    return not list_jpg_images(config.unprocessed_dir)