"""
Wallpaper Handler

This module handles updates to the desktop background. Each supported operating system gets its
own WallpaperSetter and get_wallpaper_setter() picks the one for the running platform.

Linux: there is no single API for the desktop background, so the active desktop environment is
read from XDG_CURRENT_DESKTOP and we drop into that environment's own command line tool:
    - GNOME: gsettings, writing the picture-uri key of the org.gnome.desktop.background schema.
      More information on this schema can be found at:
      https://github.com/GNOME/gsettings-desktop-schemas/blob/master/schemas/org.gnome.desktop.background.gschema.xml.in
    - KDE Plasma: qdbus, asking plasmashell to evaluate a small desktop script that points the
      image wallpaper plugin of the first desktop at our file.

Windows: SystemParametersInfoW from user32 with SPI_SETDESKWALLPAPER, called through ctypes.

The command runner (subprocess.run) and user32 are injectable so tests can assert the intended
calls without touching the live desktop session.
"""

import os
import sys
import ctypes
import subprocess
from enum import Enum
from pathlib import Path


# Windows API constants
SPI_SETDESKWALLPAPER = 0x0014
SPIF_UPDATEINIFILE = 0x01
SPIF_SENDCHANGE = 0x02

KDE_WALLPAPER_SCRIPT = """
var allDesktops = desktops();
d = allDesktops[0];
d.wallpaperPlugin = "org.kde.image";
d.currentConfigGroup = Array("Wallpaper", "org.kde.image", "General");
d.writeConfig("Image", "{uri}");
"""


class WallpaperUpdateError(Exception):
    """
    Raised when an attempt to update the desktop background fails.
    """

    pass


class DesktopEnvironment(Enum):
    GNOME = "GNOME"
    KDE = "KDE"
    UNKNOWN = "UNKNOWN"


def detect_desktop_environment(environ=None) -> DesktopEnvironment:
    """
    Determine the desktop environment from XDG_CURRENT_DESKTOP. The variable may hold a colon
    separated list (e.g. "ubuntu:GNOME") so match on substrings. GNOME is checked first.
    """

    if environ is None:
        environ = os.environ

    desktop = environ.get("XDG_CURRENT_DESKTOP", "")

    if DesktopEnvironment.GNOME.value in desktop:
        return DesktopEnvironment.GNOME

    if DesktopEnvironment.KDE.value in desktop:
        return DesktopEnvironment.KDE

    return DesktopEnvironment.UNKNOWN


def image_uri(img_path: Path) -> str:
    """Absolute file:// URI for img_path, as expected by both gsettings and plasmashell."""

    return Path(img_path).expanduser().resolve().as_uri()


def gnome_command(img_path: Path) -> list[str]:
    return [
        "gsettings",
        "set",
        "org.gnome.desktop.background",
        "picture-uri",
        image_uri(img_path),
    ]


def kde_command(img_path: Path) -> list[str]:
    return [
        "qdbus",
        "org.kde.plasmashell",
        "/PlasmaShell",
        "org.kde.PlasmaShell.evaluateScript",
        KDE_WALLPAPER_SCRIPT.format(uri=image_uri(img_path)),
    ]


class WallpaperSetter:
    """
    Base class for platform wallpaper setters. Subclasses implement update_wallpaper and raise
    WallpaperUpdateError when the background could not be changed.
    """

    name = "unknown"

    def update_wallpaper(self, img_path: Path) -> None:
        raise NotImplementedError


class LinuxWallpaperSetter(WallpaperSetter):

    name = "Linux"

    commands = {
        DesktopEnvironment.GNOME: gnome_command,
        DesktopEnvironment.KDE: kde_command,
    }

    def __init__(self, runner=subprocess.run, environ=None):
        self.runner = runner
        self.environ = os.environ if environ is None else environ

    def update_wallpaper(self, img_path: Path) -> None:
        """
        Update the background image to img_path using the tool for the active desktop environment.
        Raise WallpaperUpdateError if the desktop environment is unsupported or the tool fails.
        """

        desktop = detect_desktop_environment(self.environ)

        try:
            build_command = self.commands[desktop]
        except KeyError:
            raise WallpaperUpdateError(
                "Unsupported desktop environment: "
                f"'{self.environ.get('XDG_CURRENT_DESKTOP', '')}'"
            )

        command = build_command(img_path)

        try:
            result = self.runner(command, capture_output=True, text=True)

        # raised by subprocess when the executable can't be found or launched
        except OSError as error:
            raise WallpaperUpdateError(
                f"could not run {command[0]} for {desktop.value}: {error}"
            )

        if result.returncode != 0:
            raise WallpaperUpdateError(
                f"{command[0]} exited with status {result.returncode} "
                f"setting {desktop.value} wallpaper: {result.stderr.strip()}"
            )


class WindowsWallpaperSetter(WallpaperSetter):

    name = "Windows"

    def __init__(self, user32=None):
        self.user32 = user32

    def update_wallpaper(self, img_path: Path) -> None:
        """
        Update the background image to img_path with SystemParametersInfoW. The change is written
        to the user profile and broadcast to running applications. Raise WallpaperUpdateError if
        the call reports failure.
        """

        # ctypes.windll only exists on Windows
        user32 = self.user32 or ctypes.windll.user32

        wallpaper_location = str(Path(img_path).expanduser().resolve())

        result = user32.SystemParametersInfoW(
            SPI_SETDESKWALLPAPER,
            0,
            wallpaper_location,
            SPIF_UPDATEINIFILE | SPIF_SENDCHANGE,
        )

        if not result:
            raise WallpaperUpdateError(
                f"SystemParametersInfoW could not set wallpaper to {wallpaper_location}"
            )


def get_wallpaper_setter(platform: str = sys.platform) -> WallpaperSetter:
    """
    Return the WallpaperSetter for platform (a sys.platform value). Raise WallpaperUpdateError
    for platforms without one.
    """

    if platform == "win32":
        return WindowsWallpaperSetter()

    if platform.startswith("linux"):
        return LinuxWallpaperSetter()

    raise WallpaperUpdateError(f"Unsupported platform: {platform}")
