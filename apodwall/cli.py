"""
apodwall

Set your desktop wallpaper to NASA's Astronomy Picture of the Day.

This module defines the entry point to the apodwall CLI. A run is one linear pipeline:
fetch today's picture metadata -> download the high resolution image to the pictures
directory -> set it as the desktop background. Nothing is retried and nothing is kept
between runs, each run overwrites the same file. Scheduling repeated runs is left to cron
or a similar scheduler.
"""

from pathlib import Path
from typing import Optional

import click

from apodwall.config import ApodConfig
from apodwall.config import load_config
from apodwall.apod_handler import ApodFetchError
from apodwall.apod_handler import fetch_metadata
from apodwall.image_handler import ImageDownloadError
from apodwall.image_handler import download_image
from apodwall.wallpaper_handler import WallpaperSetter
from apodwall.wallpaper_handler import WallpaperUpdateError
from apodwall.wallpaper_handler import get_wallpaper_setter

from apodwall.cli_utils.console import describe, confirm, warn, fail
from apodwall.cli_utils.decorators import catch_errors


@click.command()
@catch_errors
def cli():
    """
    apodwall

    Download NASA's Astronomy Picture of the Day and set it as your desktop wallpaper.

    Requires a NASA API key in the APOD_KEY environment variable or in a .env file in
    the current directory. Get one at https://api.nasa.gov/.

        $ APOD_KEY=DEMO_KEY apodwall
    """

    # a missing api key is the only fatal error: catch_errors exits with status 1
    config = load_config()
    process_pipeline(config)


def process_pipeline(
    config: ApodConfig, setter: Optional[WallpaperSetter] = None
) -> Optional[Path]:
    """
    Run fetch -> download -> set wallpaper. Failures are reported to stderr and end the
    pipeline at that stage without raising. Returns the downloaded image path, or None if
    no image was saved.
    """

    try:
        metadata = fetch_metadata(config.api_url)
    except ApodFetchError as error:
        fail(f"Failed to fetch image data: {error}")
        return None

    describe(f":telescope: fetched image data: {metadata.hdurl}")

    if config.image_path.exists():
        warn(f"replacing existing '{config.image_path.name}' in {config.image_dir}")

    try:
        img_path = download_image(url=metadata.hdurl, file_path=config.image_path)
    except ImageDownloadError as error:
        fail(f"Failed to download image: {error}")
        return None

    confirm(f":floppy_disk: image downloaded to {img_path}")

    try:
        if setter is None:
            setter = get_wallpaper_setter()
        setter.update_wallpaper(img_path)

    except WallpaperUpdateError as error:
        platform = setter.name if setter is not None else "this platform"
        fail(f"Failed to set wallpaper on {platform}: {error}")

    else:
        confirm(f":desktop_computer-emoji: updated wallpaper to {img_path}")

    return img_path


def main():
    cli()


if __name__ == "__main__":
    main()
