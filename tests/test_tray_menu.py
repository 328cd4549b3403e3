from dataclasses import dataclass

import pytest

from bingtray.tray_menu import (
    ICON_SIZE,
    MenuAction,
    TrayMenu,
    create_tray_menu,
    load_icon,
)


@dataclass
class FakeApp:
    title: str = "OHR.TemplePhilae"
    last_tried: str = "en-US"
    available: int = 3
    copyright_text: str = "Philae temple"
    copyrightlink: str = "https://example.com/search"
    has_next: bool = True
    can_keep: bool = True
    can_blacklist: bool = True
    has_kept: bool = True

    def get_status_info(self):
        return self.title, self.last_tried, self.available

    def get_current_image_copyright(self):
        return self.copyright_text, self.copyrightlink

    def has_next_market_wallpaper_available(self):
        return self.has_next

    def can_keep_current_image(self):
        return self.can_keep

    def can_blacklist_current_image(self):
        return self.can_blacklist

    def has_kept_wallpapers_available(self):
        return self.has_kept


def labels(menu: TrayMenu):
    return [entry.label for entry in menu.entries if not entry.separator]


def test_menu_with_link_lists_all_actions_in_order():
    menu = create_tray_menu(FakeApp())
    assert menu.actions == [
        MenuAction.COPYRIGHT_LINK,
        MenuAction.OPEN_CACHE,
        MenuAction.NEXT_MARKET,
        MenuAction.KEEP,
        MenuAction.BLACKLIST,
        MenuAction.NEXT_KEPT,
        MenuAction.EXIT,
    ]
    assert menu.copyright_link == "https://example.com/search"


def test_menu_labels_when_everything_available():
    menu = create_tray_menu(FakeApp())
    assert labels(menu) == [
        "Current: OHR.TemplePhilae",
        "Philae temple",
        "Last: en-US | Available: 3",
        "0. Cache Dir Contents",
        "1. Next Market wallpaper",
        '2. Keep "OHR.TemplePhilae"',
        '3. Blacklist "OHR.TemplePhilae"',
        "4. Next Kept wallpaper",
        "5. Exit",
    ]


def test_menu_has_two_separators():
    menu = create_tray_menu(FakeApp())
    assert sum(entry.separator for entry in menu.entries) == 2


def test_menu_without_link_has_no_copyright_action():
    menu = create_tray_menu(FakeApp(copyrightlink=""))
    assert menu.copyright_link is None
    assert MenuAction.COPYRIGHT_LINK not in menu.actions
    assert menu.actions[0] == MenuAction.OPEN_CACHE
    copyright_entry = menu.entries[1]
    assert copyright_entry.enabled is False


def test_no_copyright_marker_is_not_a_link():
    menu = create_tray_menu(
        FakeApp(copyright_text="(no copyright info)", copyrightlink="(no copyright info)")
    )
    assert menu.copyright_link is None
    assert len(menu.actions) == 6


def test_unavailable_entries_are_marked_and_disabled():
    app = FakeApp(has_next=False, can_keep=False, can_blacklist=False, has_kept=False)
    menu = create_tray_menu(app)
    by_action = {entry.action: entry for entry in menu.entries if entry.action}
    assert by_action[MenuAction.NEXT_MARKET].label == "1. Next Market wallpaper (unavailable)"
    assert by_action[MenuAction.KEEP].label == '2. Keep "OHR.TemplePhilae" (unavailable)'
    assert by_action[MenuAction.NEXT_KEPT].label == "4. Next Kept wallpaper (unavailable)"
    for action in (
        MenuAction.NEXT_MARKET,
        MenuAction.KEEP,
        MenuAction.BLACKLIST,
        MenuAction.NEXT_KEPT,
    ):
        assert by_action[action].enabled is False
    assert by_action[MenuAction.EXIT].enabled is True
    assert by_action[MenuAction.OPEN_CACHE].enabled is True


def test_long_copyright_is_truncated():
    text = "A" * 30 + "B" * 30
    menu = create_tray_menu(FakeApp(copyright_text=text))
    label = menu.entries[1].label
    assert len(label) == 50
    assert label == text[:47] + "..."


def test_short_copyright_is_kept_whole():
    text = "C" * 50
    menu = create_tray_menu(FakeApp(copyright_text=text))
    assert menu.entries[1].label == text


def test_info_entries_are_not_clickable():
    menu = create_tray_menu(FakeApp())
    assert menu.entries[0].enabled is False
    assert menu.entries[0].action is None
    assert menu.entries[2].enabled is False


def pixel(icon: bytes, x: int, y: int) -> tuple:
    start = (y * ICON_SIZE + x) * 4
    return tuple(icon[start : start + 4])


def test_icon_size():
    icon = load_icon()
    assert len(icon) == ICON_SIZE * ICON_SIZE * 4


@pytest.mark.parametrize("x, y", [(0, 0), (31, 31), (15, 12), (22, 9)])
def test_icon_background_pixels(x, y):
    assert pixel(load_icon(), x, y) == (0, 100, 200, 255)


@pytest.mark.parametrize("x, y", [(9, 0), (15, 9), (15, 16), (19, 12), (19, 20), (20, 23)])
def test_icon_letter_pixels(x, y):
    assert pixel(load_icon(), x, y) == (255, 255, 255, 255)