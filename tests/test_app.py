import io
import time
from pathlib import Path

import pytest
import responses

from bingtray.app import BingCliApp
from bingtray.bing import ARCHIVE_URL, MARKET_CODES_URL
from bingtray.config import Config
from bingtray.storage import read_market_codes, save_image_metadata, save_market_codes


class FakeSetter:
    def __init__(self, result=True):
        self.result = result
        self.calls = []

    def __call__(self, path):
        self.calls.append(Path(path))
        return self.result


@pytest.fixture
def config(tmp_path):
    cfg = Config.create(tmp_path / "cfg")
    save_market_codes(cfg, {"en-US": int(time.time())})
    return cfg


@pytest.fixture
def setter():
    return FakeSetter()


@pytest.fixture
def app(config, setter):
    return BingCliApp(config, wallpaper_setter=setter)


@pytest.fixture
def mocked_http():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def add_image(directory, name):
    path = directory / f"{name}.jpg"
    path.write_bytes(b"img")
    return path


def test_title_without_image(app):
    assert app.get_current_image_title() == "(no image)"


def test_title_plain_name(app, config):
    app.current_image = config.unprocessed_dir / "Sunset.jpg"
    assert app.get_current_image_title() == "Sunset"


def test_title_is_truncated(app, config):
    app.current_image = config.unprocessed_dir / ("A" * 40 + ".jpg")
    title = app.get_current_image_title()
    assert title == "A" * 30 + "..."


def test_set_next_market_wallpaper_picks_unprocessed(app, config, setter):
    path = add_image(config.unprocessed_dir, "Sunset")
    assert app.set_next_market_wallpaper() is True
    assert app.current_image == path
    assert setter.calls == [path]


def test_failed_setter_leaves_current_image(config):
    add_image(config.unprocessed_dir, "Sunset")
    app = BingCliApp(config, wallpaper_setter=FakeSetter(result=False))
    assert app.set_next_market_wallpaper() is True
    assert app.current_image is None


def test_keep_moves_image_to_favorites(app, config):
    path = add_image(config.unprocessed_dir, "Sunset")
    add_image(config.unprocessed_dir, "Harbor")
    app.current_image = path
    assert app.can_keep_current_image()
    app.keep_current_image()
    assert (config.keepfavorite_dir / "Sunset.jpg").exists()
    assert not path.exists()


def test_blacklist_removes_and_records(app, config):
    path = add_image(config.unprocessed_dir, "Sunset")
    app.current_image = path
    assert app.can_blacklist_current_image()
    app.blacklist_current_image()
    assert not path.exists()
    assert "Sunset" in config.blacklist_file.read_text().splitlines()


def test_can_keep_rules(app, config):
    assert not app.can_keep_current_image()
    kept = add_image(config.keepfavorite_dir, "Kept")
    add_image(config.unprocessed_dir, "Other")
    app.current_image = kept
    assert app.is_current_image_in_favorites()
    assert not app.can_keep_current_image()
    assert app.can_blacklist_current_image()


def test_cannot_act_without_unprocessed_files(app, config):
    app.current_image = config.unprocessed_dir / "Gone.jpg"
    assert not app.has_unprocessed_files()
    assert not app.can_keep_current_image()
    assert not app.can_blacklist_current_image()


def test_set_kept_wallpaper(app, config, setter):
    assert app.set_kept_wallpaper() is False
    assert not app.has_kept_wallpapers_available()
    kept = add_image(config.keepfavorite_dir, "Kept")
    assert app.set_kept_wallpaper() is True
    assert app.current_image == kept
    assert setter.calls == [kept]


def test_next_market_availability(app, config):
    assert not app.has_next_market_wallpaper_available()
    save_market_codes(config, {"en-US": 0})
    assert app.has_next_market_wallpaper_available()
    save_market_codes(config, {"en-US": int(time.time())})
    add_image(config.unprocessed_dir, "Sunset")
    assert app.has_next_market_wallpaper_available()


def test_market_status(app, config):
    save_market_codes(config, {"en-US": 100, "de-DE": 200})
    assert app.get_market_status() == ("de-DE", 2)
    assert app.get_status_info() == ("(no image)", "de-DE", 2)


def test_market_status_without_codes(app, config):
    save_market_codes(config, {})
    assert app.get_market_status() == ("none", 0)


def test_copyright(app, config):
    assert app.get_current_image_copyright() == ("(no copyright info)", "")
    save_image_metadata(config, "Sunset", "A view (© Someone)", "https://example.com/x")
    app.current_image = add_image(config.unprocessed_dir, "Sunset")
    assert app.get_current_image_copyright() == ("© Someone", "https://example.com/x")


def test_show_menu_marks_unavailable(app, capsys):
    app.show_menu()
    out = capsys.readouterr().out
    assert "1. Next Market wallpaper (unavailable - no images/markets)" in out
    assert '2. Keep "(no image)" (unavailable)' in out
    assert "4. Next Kept wallpaper (unavailable - no kept wallpapers)" in out
    assert out.endswith("Select an option (0-5): ")


def test_run_invalid_then_exit(app, capsys):
    app.run(io.StringIO("9\n5\n"))
    out = capsys.readouterr().out
    assert "Invalid option. Please select 0-5." in out
    assert "Exiting BingTray..." in out


def test_run_reports_unavailable_actions(app, capsys):
    app.run(io.StringIO("1\n2\n3\n4\n5\n"))
    out = capsys.readouterr().out
    assert "Next market wallpaper is not available" in out
    assert "Keep current image is not available - no current image" in out
    assert "Blacklist current image is not available - no current image" in out
    assert "Next kept wallpaper is not available" in out


def test_run_stops_at_end_of_input(app, capsys):
    app.run(io.StringIO(""))
    out = capsys.readouterr().out
    assert out.count("=== BingTray - Bing Wallpaper Manager ===") == 1


def test_run_keeps_image(app, config, capsys):
    path = add_image(config.unprocessed_dir, "Sunset")
    add_image(config.unprocessed_dir, "Harbor")
    app.current_image = path
    app.run(io.StringIO("2\n5\n"))
    assert (config.keepfavorite_dir / "Sunset.jpg").exists()
    assert "Moved to favorites" in capsys.readouterr().out


def test_initialize_downloads_and_sets(tmp_path, mocked_http):
    config = Config.create(tmp_path / "fresh")
    html = (
        "<table><tr><th>Country</th><th>Code</th></tr>"
        "<tr><td>United States</td><td>en-US</td></tr></table>"
    )
    mocked_http.add(responses.GET, MARKET_CODES_URL, body=html)
    image_path = "/th?id=OHR.Harbor_EN-US1_1920x1080.jpg&rf=x&pid=hp"
    mocked_http.add(
        responses.GET,
        ARCHIVE_URL.format("en-US"),
        json={
            "images": [
                {
                    "url": image_path,
                    "title": "Harbor",
                    "copyright": "Harbor (© Photographer)",
                    "copyrightlink": "https://example.com/harbor",
                }
            ]
        },
    )
    mocked_http.add(responses.GET, "https://bing.com" + image_path, body=b"jpegdata")

    setter = FakeSetter()
    app = BingCliApp(config, wallpaper_setter=setter)
    app.initialize()

    expected = config.unprocessed_dir / "OHR_Harbor.jpg"
    assert app.current_image == expected
    assert expected.read_bytes() == b"jpegdata"
    assert setter.calls == [expected]
    assert read_market_codes(config)["en-US"] > 0
    assert app.get_current_image_copyright() == ("© Photographer", "https://example.com/harbor")