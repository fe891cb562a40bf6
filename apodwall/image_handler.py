"""
Image Handler

Utility for downloading the picture of the day. Supports only direct requests for image files
specified by URL, with no expectation of authentication. The response body is written to disk
as-is: no content type checks are made and the image is never decoded.
"""

from pathlib import Path

import requests


class ImageDownloadError(Exception):
    """
    Raised when an image download is unsuccessful.
    """

    pass


def download_image(url: str, file_path) -> Path:
    """
    Download the image at url and save it to file_path, overwriting any file already there.
    Returns the location on filesystem where image was saved.

    The parent directory of file_path must already exist, it is not created here. If downloading
    or saving fails, raise ImageDownloadError instead of failing silently. A file that fails
    partway through writing is left as-is.
    """

    destination_path = Path(file_path).expanduser().resolve()

    # edge case where destination path is a folder
    if destination_path.is_dir():
        raise ImageDownloadError(f"Destination file {destination_path} is a directory.")

    """
    The get method from Requests automatically follows redirects (status codes 3XX) on your behalf.
    The entire body is read into memory before anything is written to disk.
    """

    try:
        r = requests.get(url)

    except requests.exceptions.RequestException as error:
        raise ImageDownloadError(str(error))

    # successful request but received a bad response from the server.
    try:
        r.raise_for_status()
    except requests.exceptions.HTTPError:
        raise ImageDownloadError(
            f"Download error: something went wrong trying to access {url} (status code {r.status_code})"
        )

    try:
        destination_path.write_bytes(r.content)

    except OSError as error:
        raise ImageDownloadError(
            f"There was an error saving the image to {destination_path}: {error}"
        )

    return destination_path
