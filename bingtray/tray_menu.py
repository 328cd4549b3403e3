"""Description of the tray menu and icon, built from the manager's state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

NO_COPYRIGHT = "(no copyright info)"
MAX_COPYRIGHT_LENGTH = 50
ICON_SIZE = 32

_BACKGROUND = bytes((0, 100, 200, 255))
_FOREGROUND = bytes((255, 255, 255, 255))


class MenuAction(Enum):
    """What a clickable tray entry does."""

    COPYRIGHT_LINK = "copyright_link"
    OPEN_CACHE = "open_cache"
    NEXT_MARKET = "next_market"
    KEEP = "keep"
    BLACKLIST = "blacklist"
    NEXT_KEPT = "next_kept"
    EXIT = "exit"


@dataclass(frozen=True)
class MenuEntry:
    """One line of the tray menu; a separator has no label and no action."""

    label: str
    enabled: bool
    action: MenuAction | None = None
    separator: bool = False


SEPARATOR = MenuEntry(label="", enabled=False, separator=True)


@dataclass(frozen=True)
class TrayMenu:
    """The entries of the tray menu and the copyright link, if it has one."""

    entries: tuple[MenuEntry, ...]
    copyright_link: str | None = None

    @property
    def actions(self) -> list[MenuAction]:
        """The actions of the menu, in the order they appear."""
        return [entry.action for entry in self.entries if entry.action is not None]


def _labelled(label: str, available: bool) -> str:
    return label if available else f"{label} (unavailable)"


def _copyright_label(copyright_text: str) -> str:
    if len(copyright_text) > MAX_COPYRIGHT_LENGTH:
        return copyright_text[: MAX_COPYRIGHT_LENGTH - 3] + "..."
    return copyright_text


def create_tray_menu(app) -> TrayMenu:
    """Build the tray menu for the manager ``app`` in its current state."""
    title, last_tried, available_count = app.get_status_info()
    copyright_text, copyrightlink = app.get_current_image_copyright()
    has_link = bool(copyrightlink) and copyrightlink != NO_COPYRIGHT

    has_next = app.has_next_market_wallpaper_available()
    can_keep = app.can_keep_current_image()
    can_blacklist = app.can_blacklist_current_image()
    has_kept = app.has_kept_wallpapers_available()

    entries = (
        MenuEntry(f"Current: {title}", False),
        MenuEntry(
            _copyright_label(copyright_text),
            has_link,
            MenuAction.COPYRIGHT_LINK if has_link else None,
        ),
        MenuEntry(f"Last: {last_tried} | Available: {available_count}", False),
        SEPARATOR,
        MenuEntry("0. Cache Dir Contents", True, MenuAction.OPEN_CACHE),
        MenuEntry(
            _labelled("1. Next Market wallpaper", has_next), has_next, MenuAction.NEXT_MARKET
        ),
        MenuEntry(_labelled(f'2. Keep "{title}"', can_keep), can_keep, MenuAction.KEEP),
        MenuEntry(
            _labelled(f'3. Blacklist "{title}"', can_blacklist),
            can_blacklist,
            MenuAction.BLACKLIST,
        ),
        MenuEntry(
            _labelled("4. Next Kept wallpaper", has_kept), has_kept, MenuAction.NEXT_KEPT
        ),
        SEPARATOR,
        MenuEntry("5. Exit", True, MenuAction.EXIT),
    )
    return TrayMenu(entries=entries, copyright_link=copyrightlink if has_link else None)


def _in_letter(x: int, y: int) -> bool:
    return (
        8 <= x <= 10
        or (8 <= y <= 10 and 8 <= x <= 20)
        or (15 <= y <= 17 and 8 <= x <= 18)
        or (22 <= y <= 24 and 8 <= x <= 20)
        or (18 <= x <= 20 and (11 <= y <= 14 or 18 <= y <= 21))
    )


def load_icon() -> bytes:
    """RGBA pixels, row by row, of a square icon: a white "B" on blue."""
    return b"".join(
        _FOREGROUND if _in_letter(x, y) else _BACKGROUND
        for y in range(ICON_SIZE)
        for x in range(ICON_SIZE)
    )