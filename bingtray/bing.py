"""Talking to Bing: market codes, the daily image archive and downloads."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

import requests
from bs4 import BeautifulSoup

from .config import Config
from .storage import (
    is_blacklisted,
    read_market_codes,
    sanitize_filename,
    save_image_metadata,
    save_market_codes,
)

MARKET_CODES_URL = (
    "https://learn.microsoft.com/en-us/bing/search-apis/bing-web-search/reference/market-codes"
)
ARCHIVE_URL = "https://bing.com/HPImageArchive.aspx?format=js&idx=0&n=8&mkt={}"
BING_BASE = "https://bing.com"
TIMEOUT = 30


@dataclass(frozen=True)
class BingImage:
    """One entry of the Bing image archive."""

    url: str
    title: str
    copyright: str | None = None
    copyrightlink: str | None = None

    def display_name(self) -> str:
        """The image id from the URL (e.g. ``OHR.TemplePhilae``), else the title."""
        _, marker, rest = self.url.partition("th?id=")
        if marker:
            return rest.split("_", 1)[0]
        return self.title

    @property
    def full_url(self) -> str:
        return self.url if self.url.startswith("http") else BING_BASE + self.url


def _image_from_json(entry) -> BingImage:
    if not isinstance(entry, dict):
        raise ValueError("image entry is not an object")
    try:
        url = entry["url"]
        title = entry["title"]
    except KeyError as missing:
        raise ValueError(f"image entry lacks field {missing}") from None
    if not isinstance(url, str) or not isinstance(title, str):
        raise ValueError("image url and title must be strings")
    return BingImage(
        url=url,
        title=title,
        copyright=entry.get("copyright"),
        copyrightlink=entry.get("copyrightlink"),
    )


def parse_market_codes(html: str) -> list[str]:
    """Extract market codes from the last cell of each table row after the header."""
    soup = BeautifulSoup(html, "html.parser")
    codes = []
    for table in soup.find_all("table"):
        for row in table.find_all("tr")[1:]:
            cells = row.find_all("td")
            if len(cells) >= 2:
                code = cells[-1].get_text().strip()
                if code and "-" in code:
                    codes.append(code)
    return codes


def get_market_codes() -> list[str]:
    """Fetch the list of market codes from the published reference page."""
    response = requests.get(MARKET_CODES_URL, timeout=TIMEOUT)
    return parse_market_codes(response.text)


def load_market_codes(config: Config) -> dict[str, int]:
    """Read stored market codes, fetching and storing them on first use."""
    if not config.marketcodes_file.exists():
        market_codes = dict.fromkeys(get_market_codes(), 0)
        save_market_codes(config, market_codes)
        return market_codes
    return read_market_codes(config)


def get_bing_images(market_code: str) -> list[BingImage]:
    """Fetch the latest archive images for a market."""
    response = requests.get(ARCHIVE_URL.format(market_code), timeout=TIMEOUT)
    data = response.json()
    if not isinstance(data, dict) or not isinstance(data.get("images"), list):
        raise ValueError("archive response has no image list")
    return [_image_from_json(entry) for entry in data["images"]]


def download_image(image: BingImage, target_dir, config: Config) -> Path:
    """Download ``image`` into ``target_dir`` unless it is already kept or present."""
    target_dir = Path(target_dir)
    name = sanitize_filename(image.display_name())
    filename = f"{name}.jpg"
    filepath = target_dir / filename

    if (target_dir.parent / "keepfavorite" / filename).exists():
        return filepath

    if not filepath.exists():
        response = requests.get(image.full_url, timeout=TIMEOUT)
        filepath.write_bytes(response.content)

    if image.copyright is not None and image.copyrightlink is not None:
        save_image_metadata(config, name, image.copyright, image.copyrightlink)

    return filepath


def download_images_for_market(config: Config, market_code: str) -> tuple[int, list[BingImage]]:
    """Download the market's new images; return how many and which ones."""
    downloaded: list[BingImage] = []
    for image in get_bing_images(market_code):
        name = sanitize_filename(image.display_name())
        unprocessed_path = config.unprocessed_dir / f"{name}.jpg"
        keepfavorite_path = config.keepfavorite_dir / f"{name}.jpg"
        if (
            unprocessed_path.exists()
            or keepfavorite_path.exists()
            or is_blacklisted(config, name)
        ):
            print(f"Skipping already downloaded or blacklisted image: {name}")
            continue
        try:
            filepath = download_image(image, config.unprocessed_dir, config)
        except (requests.RequestException, OSError) as error:
            print(f"Failed to download image {name}: {error}", file=sys.stderr)
            continue
        print(f"Downloaded image: {filepath}")
        downloaded.append(image)
    return len(downloaded), downloaded