# bingtray

bingtray keeps your desktop fresh with Bing's image of the day. It fetches the
latest images from one Bing market at a time, sets one of them as your
wallpaper, and lets you keep the ones you like and blacklist the ones you
don't.

## Installation

```
pip install bingtray
```

## Usage

### Text menu

```
bingcli
bingcli --config-dir /path/to/data
```

On start-up `bingcli` fetches the list of market codes if it has none yet,
downloads a batch of images if none are waiting, sets a wallpaper, and then
shows a menu:

```
0. Cache Dir Contents
1. Next Market wallpaper
2. Keep "<title>"
3. Blacklist "<title>"
4. Next Kept wallpaper
5. Exit
```

- **0** opens the data directory in your file manager.
- **1** downloads images from a market not used for seven days (if there is
  one) and sets one of the waiting images as the wallpaper.
- **2** moves the current image to your favourites and moves on to the next
  image. Only available while other images are waiting and the current image
  is not already a favourite.
- **3** deletes the current image, adds its name to the blacklist so it is
  never downloaded again, and moves on to the next image. Only available
  while other images are waiting.
- **4** sets one of your favourites as the wallpaper.
- **5** quits; so does the end of input.

Entries that cannot be used at the moment are marked "unavailable". Where an
image is picked from a folder, the choice is made from the current time.

The title shown is taken from the image's file name, cut to 30 characters.
The copyright line and link come from what Bing reported when the image was
downloaded.

### Menu front end

```
bingtray
bingtray --debug
bingtray --cli
bingtray --version
```

`bingtray` initialises the same way as `bingcli` and then shows a richer
menu: the current image's title, its copyright line, the last market used
and the number of markets due, followed by the same actions `0`–`5`. When
the current image has a copyright link, choosing `c` opens it in your web
browser. Only enabled entries can be chosen.

`--debug` prints an extra start-up message. `--cli` runs the text menu of
`bingcli` instead, without the initial download and wallpaper change.
Both commands accept `--config-dir` to keep everything in a directory of
your choice.

## What it does not do

bingtray does not put an icon in the system tray or notification area. The
`bingtray` command reads its menu choices from the terminal. The menu model
(`bingtray.tray_menu.create_tray_menu`) and the icon pixels
(`bingtray.tray_menu.load_icon`, 32×32 RGBA bytes of a white "B" on blue)
are available for a tray front end to use, but none is included.

## How images are chosen

The list of Bing market codes is fetched once from Microsoft's published
reference page and stored with the time each market was last used. A market
is only asked again after seven days, so over time you see images from all
over the world. Up to eight images are fetched per market; images already
downloaded, kept or blacklisted are skipped.

## Where files live

Everything is kept in your per-user configuration directory for `bingtray`
(or in the directory given with `--config-dir`):

| Path               | Contents                                           |
|--------------------|----------------------------------------------------|
| `unprocessed/`     | downloaded images waiting to be shown              |
| `keepfavorite/`    | images you chose to keep                           |
| `blacklist.conf`   | names of images that are never downloaded again    |
| `marketcodes.conf` | one `code|timestamp` line per market               |
| `metadata.conf`    | one `name|copyright|link` line per image           |

## Setting the wallpaper

On Linux the desktop environment is detected from `DESKTOP_SESSION`,
`KDE_FULL_SESSION` and `GNOME_DESKTOP_SESSION_ID`, and the matching tool is
used: `gsettings` for GNOME, Unity, Cinnamon and MATE, `xfconf-query` for
Xfce, `pcmanfm` for LXDE, `fbsetbg` for Fluxbox, JWM, Openbox and AfterStep,
`icewmbg` for IceWM and `bsetbg` for Blackbox. Other environments, KDE
included, are reported as not supported.

On macOS the wallpaper is set with `osascript`, on Windows with PowerShell.

## Using it from Python

```python
from bingtray.app import BingCliApp
from bingtray.config import Config

app = BingCliApp(Config.create("/tmp/bingtray-data"))
app.initialize()
print(app.get_status_info())
```

`BingCliApp` also accepts a `wallpaper_setter` callable, taking the image
path and returning whether it worked, in place of the built-in one.