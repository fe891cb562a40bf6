"""
APOD API Handler

This module is a thin wrapper around NASA's Astronomy Picture of the Day API. A single GET request
to the APOD endpoint returns a JSON object describing today's picture. The only piece of that
response apodwall cares about is 'hdurl', the link to the high resolution image, which is handed
off to the image handler for downloading.

See https://api.nasa.gov/ for endpoint documentation. The response contains many more fields
(title, explanation, media_type, copyright etc.), all of which are ignored here.
"""

from dataclasses import dataclass

import requests


class ApodFetchError(Exception):
    """
    Raised when picture metadata can't be retrieved from the APOD API, whether because of a network
    failure, a bad response from the server, or a response body that isn't the expected JSON.
    """

    pass


@dataclass(frozen=True)
class ApodMetadata:
    """Picture metadata returned by the APOD API."""

    hdurl: str

    @classmethod
    def from_json(cls, data) -> "ApodMetadata":
        """
        Build ApodMetadata from a deserialized APOD response. Unknown fields are ignored. Raise
        ApodFetchError if 'hdurl' is missing or not a string, e.g. on days where the picture
        of the day is a video.
        """

        if not isinstance(data, dict):
            raise ApodFetchError(
                f"Expected a JSON object from the APOD API, got {type(data).__name__}."
            )

        hdurl = data.get("hdurl")
        if not isinstance(hdurl, str):
            raise ApodFetchError("APOD response is missing the 'hdurl' field.")

        return cls(hdurl=hdurl)


def fetch_metadata(api_url: str) -> ApodMetadata:
    """
    Request picture metadata from api_url, which must already include the api key. Raise
    ApodFetchError if the request fails or the response can't be read.
    """

    # NOTE: no timeout is passed to requests, so a hung server blocks indefinitely.
    try:
        r = requests.get(api_url)

    except requests.exceptions.RequestException as error:
        raise ApodFetchError(str(error))

    # successful request but received a bad response from the server.
    try:
        r.raise_for_status()
    except requests.exceptions.HTTPError:
        raise ApodFetchError(
            f"something went wrong trying to access the APOD API (status code {r.status_code})"
        )

    # requests raises a subclass of ValueError when the body isn't valid JSON
    try:
        data = r.json()
    except ValueError as error:
        raise ApodFetchError(f"APOD response is not valid JSON: {error}")

    return ApodMetadata.from_json(data)
