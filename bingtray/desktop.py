"""Desktop integration: detecting the environment, setting wallpaper, opening folders."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

from .config import Config

_KNOWN_SESSIONS = frozenset(
    {
        "gnome", "unity", "cinnamon", "mate", "xfce4", "lxde", "fluxbox",
        "blackbox", "openbox", "icewm", "jwm", "afterstep", "trinity", "kde",
    }
)

_SESSION_PREFIXES = (
    ("ubuntustudio", "kde"),
    ("ubuntu", "gnome"),
    ("lubuntu", "lxde"),
    ("kubuntu", "kde"),
)

_FILE_MANAGERS = ("xdg-open", "nautilus", "dolphin", "thunar", "pcmanfm", "nemo")

_WINDOWS_SCRIPT = (
    "$code = '[DllImport(\"user32.dll\", CharSet=CharSet.Unicode)] "
    "public static extern int SystemParametersInfo(int a, int b, string c, int d);'; "
    "Add-Type -MemberDefinition $code -Name Wallpaper -Namespace Desktop; "
    "if ([Desktop.Wallpaper]::SystemParametersInfo(20, 0, '{path}', 3) -eq 0) {{ exit 1 }}"
)


def get_desktop_environment(environ=None) -> str:
    """Name the running desktop environment from the environment variables."""
    if environ is None:
        environ = os.environ

    session = environ.get("DESKTOP_SESSION")
    if session is not None:
        session = session.lower()
        if session in _KNOWN_SESSIONS:
            return session
        if "xfce" in session or session.startswith("xubuntu"):
            return "xfce4"
        for prefix, name in _SESSION_PREFIXES:
            if session.startswith(prefix):
                return name

    if environ.get("KDE_FULL_SESSION", "") == "true":
        return "kde"
    if "GNOME_DESKTOP_SESSION_ID" in environ:
        return "gnome"
    return "unknown"


def _run(args: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(args, capture_output=True, check=False)


def _xfconf_set(prop: str, value: str) -> None:
    _run(["xfconf-query", "-c", "xfce4-desktop", "-p", prop, "-s", value])


def _set_wallpaper_xfce(path: str) -> bool:
    listing = _run(["xfconf-query", "-c", "xfce4-desktop", "-l"])
    if listing.returncode == 0:
        output = (listing.stdout or b"").decode("utf-8", errors="replace")
        for line in output.splitlines():
            if "workspace0/last-image" in line and line.strip():
                _xfconf_set(line.strip(), path)

    _xfconf_set("/backdrop/screen0/monitor0/image-path", path)
    _xfconf_set("/backdrop/screen0/monitor0/image-style", "3")
    _xfconf_set("/backdrop/screen0/monitor0/image-show", "true")
    return _run(["xfdesktop", "--reload"]).returncode == 0


def _set_wallpaper_linux(path: str) -> bool:
    desktop = get_desktop_environment()
    if desktop in ("gnome", "unity", "cinnamon"):
        args = ["gsettings", "set", "org.gnome.desktop.background", "picture-uri", f"file://{path}"]
    elif desktop == "mate":
        args = ["gsettings", "set", "org.mate.background", "picture-filename", path]
    elif desktop == "xfce4":
        return _set_wallpaper_xfce(path)
    elif desktop == "lxde":
        args = ["pcmanfm", "--set-wallpaper", path, "--wallpaper-mode=scaled"]
    elif desktop in ("fluxbox", "jwm", "openbox", "afterstep"):
        args = ["fbsetbg", path]
    elif desktop == "icewm":
        args = ["icewmbg", path]
    elif desktop == "blackbox":
        args = ["bsetbg", "-full", path]
    else:
        print(f"Desktop environment '{desktop}' not supported", file=sys.stderr)
        return False
    return _run(args).returncode == 0


def _platform_command(path: str) -> list[str] | None:
    if sys.platform == "darwin":
        quoted = path.replace("\\", "\\\\").replace('"', '\\"')
        script = f'tell application "System Events" to tell every desktop to set picture to "{quoted}"'
        return ["osascript", "-e", script]
    if sys.platform == "win32":
        script = _WINDOWS_SCRIPT.format(path=path.replace("'", "''"))
        return ["powershell", "-NoProfile", "-NonInteractive", "-Command", script]
    return None


def set_wallpaper(file_path) -> bool:
    """Set the desktop wallpaper to ``file_path``; return whether it worked."""
    path = str(Path(file_path))

    if sys.platform.startswith("linux"):
        return _set_wallpaper_linux(path)

    command = _platform_command(path)
    if command is None:
        print(f"Failed to set wallpaper: unsupported platform {sys.platform}", file=sys.stderr)
        return False
    try:
        result = _run(command)
    except OSError as error:
        print(f"Failed to set wallpaper: {error}", file=sys.stderr)
        return False
    if result.returncode != 0:
        print(f"Failed to set wallpaper: exit status {result.returncode}", file=sys.stderr)
        return False
    print(f"Wallpaper set successfully to: {path}")
    return True


def open_config_directory(config: Config) -> None:
    """Open the configuration directory in the platform's file manager."""
    target = str(config.config_dir)
    if sys.platform == "win32":
        subprocess.Popen(["explorer", target])
    elif sys.platform == "darwin":
        subprocess.Popen(["open", target])
    elif sys.platform.startswith("linux"):
        for manager in _FILE_MANAGERS:
            try:
                subprocess.Popen([manager, target])
            except OSError:
                continue
            return
        print(f"Could not find a suitable file manager to open {target}", file=sys.stderr)