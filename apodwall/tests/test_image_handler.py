"""
Tests for image_handler.py

Validate that the image download writes exactly what the server sent and reports
network and filesystem failures as ImageDownloadError.

*** Fixtures ***
- make_response, image_bytes (defined in conftest.py)
- tmp_path (defined by Pytest)

requests.get is patched in apodwall.image_handler so no network call is made.
"""

from unittest.mock import patch

import pytest
import requests

# following entities are tested in this module:
from apodwall.image_handler import download_image
from apodwall.image_handler import ImageDownloadError

IMAGE_URL = "https://example.com/img.jpg"


@patch("apodwall.image_handler.requests.get", autospec=True)
def test_download_image_success(mock_get, make_response, image_bytes, tmp_path):
    mock_get.return_value = make_response(content=image_bytes)
    destination = tmp_path / "apod.jpg"

    saved = download_image(url=IMAGE_URL, file_path=destination)

    mock_get.assert_called_once_with(IMAGE_URL)
    assert saved == destination.resolve()
    assert saved.stat().st_size == len(image_bytes)
    assert saved.read_bytes() == image_bytes


@patch("apodwall.image_handler.requests.get", autospec=True)
def test_download_image_overwrites(mock_get, make_response, tmp_path):
    destination = tmp_path / "apod.jpg"
    destination.write_bytes(b"yesterday's picture, which was much longer")
    mock_get.return_value = make_response(content=b"today")

    download_image(url=IMAGE_URL, file_path=destination)

    assert destination.read_bytes() == b"today"
    assert [path.name for path in tmp_path.iterdir()] == ["apod.jpg"]


@patch("apodwall.image_handler.requests.get", autospec=True)
def test_download_image_missing_parent(mock_get, make_response, image_bytes, tmp_path):
    """The destination directory is never created on the caller's behalf."""

    mock_get.return_value = make_response(content=image_bytes)
    destination = tmp_path / "does" / "not" / "exist" / "apod.jpg"

    with pytest.raises(ImageDownloadError):
        download_image(url=IMAGE_URL, file_path=destination)

    assert not destination.parent.exists()


def test_download_image_destination_is_dir(tmp_path):
    with patch("apodwall.image_handler.requests.get", autospec=True) as mock_get:
        with pytest.raises(ImageDownloadError, match="is a directory"):
            download_image(url=IMAGE_URL, file_path=tmp_path)

        mock_get.assert_not_called()


@patch("apodwall.image_handler.requests.get", autospec=True)
def test_download_image_network_failure(mock_get, tmp_path):
    mock_get.side_effect = requests.exceptions.ConnectionError("connection refused")
    destination = tmp_path / "apod.jpg"

    with pytest.raises(ImageDownloadError, match="connection refused"):
        download_image(url=IMAGE_URL, file_path=destination)

    assert not destination.exists()


@patch("apodwall.image_handler.requests.get", autospec=True)
def test_download_image_http_error(mock_get, make_response, tmp_path):
    """An error page is never written over the previous picture."""

    destination = tmp_path / "apod.jpg"
    destination.write_bytes(b"yesterday's picture")
    mock_get.return_value = make_response(content=b"Not Found", status_code=404)

    with pytest.raises(ImageDownloadError, match="404"):
        download_image(url=IMAGE_URL, file_path=destination)

    assert destination.read_bytes() == b"yesterday's picture"
