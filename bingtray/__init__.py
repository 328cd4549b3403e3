"""Rotate the desktop wallpaper through Bing's images of the day, with text menus."""

__version__ = "0.0.1"