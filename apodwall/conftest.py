"""
conftest.py

Test configuration for apodwall tests.

Defines Pytest fixtures for supplying test data to tests across the entire
test suite. Fixtures used within only a single module are defined
directly in that module.

No test makes a real network call or touches the live desktop session: requests.get
is patched in the module under test and wallpaper setters get fake runners.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests


@pytest.fixture
def apod_response() -> dict:
    """A trimmed down but realistic APOD API response body."""

    return {
        "copyright": "Jane Astronomer",
        "date": "2024-03-01",
        "explanation": "A spiral galaxy seen face on.",
        "hdurl": "https://example.com/img.jpg",
        "media_type": "image",
        "service_version": "v1",
        "title": "Spiral Galaxy",
        "url": "https://example.com/img_small.jpg",
    }


@pytest.fixture
def make_response():
    """
    Return a factory for MagicMocks standing in for requests.Response. Passing json_data sets the
    return value of .json(), passing a ValueError as json_data makes .json() raise it instead.
    A status_code of 400 or above makes raise_for_status() raise HTTPError like the real thing.
    """

    def inner(json_data=None, content: bytes = b"", status_code: int = 200):
        response = MagicMock(spec=requests.Response)
        response.status_code = status_code
        response.content = content

        if isinstance(json_data, Exception):
            response.json.side_effect = json_data
        else:
            response.json.return_value = json_data

        if status_code >= 400:
            response.raise_for_status.side_effect = requests.exceptions.HTTPError(
                f"{status_code} Error"
            )

        return response

    return inner


@pytest.fixture
def image_bytes() -> bytes:
    """Arbitrary binary content covering every byte value, standing in for a jpeg."""

    return bytes(range(256)) * 64 + b"\x00\xff\xd8\xff"


@pytest.fixture
def apod_env(tmp_path, monkeypatch) -> Path:
    """
    Isolate the process environment for a run: work from an empty directory (so no stray .env
    is loaded), set APOD_KEY, and point the pictures directory at a temporary folder. Returns
    the pictures directory.
    """

    pictures = tmp_path / "Pictures"
    pictures.mkdir()

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APOD_KEY", "TEST_KEY")
    monkeypatch.setenv("XDG_PICTURES_DIR", str(pictures))

    return pictures
