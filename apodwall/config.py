"""
apodwall Configuration Management

This file handles loading the settings apodwall needs before it can talk to the APOD API.
The only required setting is the NASA API key, read from the APOD_KEY environment variable.
A .env file in the current working directory is loaded first so the key can live there
instead of in the shell profile. Raise an ApodConfigError for any issues that arise in
processing or retrieving these configuration variables.

The image is saved to the user's pictures directory as resolved by the XDG user dirs
convention on Linux (~/.config/user-dirs.dirs), falling back to ~/Pictures.
"""

import os
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from urllib.parse import urlencode

from dotenv import load_dotenv
from dotenv import dotenv_values


APOD_ENDPOINT = "https://api.nasa.gov/planetary/apod"
APOD_FILENAME = "apod.jpg"


class ApodConfigError(Exception):
    """Raise when an issue occurs with handling apodwall configuration."""

    pass


def pictures_dir() -> Path:
    """
    Return the user's pictures directory. The XDG_PICTURES_DIR environment variable wins,
    then the entry in ~/.config/user-dirs.dirs, then ~/Pictures. The directory is not created.
    """

    location = os.environ.get("XDG_PICTURES_DIR")

    if not location:
        # user-dirs.dirs is written by xdg-user-dirs-update in shell syntax, e.g.
        # XDG_PICTURES_DIR="$HOME/Pictures"
        user_dirs = Path("~/.config/user-dirs.dirs").expanduser()
        if user_dirs.is_file():
            location = dotenv_values(user_dirs, interpolate=False).get(
                "XDG_PICTURES_DIR"
            )

    if not location:
        return Path("~/Pictures").expanduser()

    return Path(os.path.expandvars(location)).expanduser()


@dataclass
class ApodConfig:
    """
    Dataclass to represent configuration variables for apodwall. The api_key is required;
    image_dir and filename together locate the single file each run writes to.
    """

    api_key: str
    image_dir: Path = field(default_factory=pictures_dir)
    filename: str = APOD_FILENAME

    def __post_init__(self):
        self.image_dir = Path(self.image_dir)

    @property
    def api_url(self) -> str:
        return build_api_url(self.api_key)

    @property
    def image_path(self) -> Path:
        return self.image_dir / self.filename


def build_api_url(api_key: str, endpoint: str = APOD_ENDPOINT) -> str:
    """Embed the api key as the only query parameter of the APOD endpoint."""

    return f"{endpoint}?{urlencode({'api_key': api_key})}"


def load_config() -> ApodConfig:
    """
    Load a .env file from the working directory (if there is one) and instantiate an ApodConfig
    from the environment. Variables already set in the environment take precedence over the file.
    Raise ApodConfigError if APOD_KEY is not set.
    """

    load_dotenv(Path.cwd() / ".env")

    api_key = os.environ.get("APOD_KEY")
    if not api_key:
        raise ApodConfigError("APOD_KEY must be set in the environment")

    return ApodConfig(api_key=api_key)
