"""
Location header parsing.

The negotiation response points at the upload URI (`...?key=<key>`) and
the final chunk response points at the created file (`.../files/<id>`).
"""
import re
from typing import Optional
from urllib.parse import urljoin, urlsplit, parse_qs

from ..api.config import DEFAULT_BASE_URL
from ..exceptions import MalformedLocationError

_FILE_ID_PATTERN = re.compile(r'/files/(\d+)$')


def extract_upload_key(
    location: Optional[str],
    base_url: str = DEFAULT_BASE_URL
) -> str:
    """
    Read the `key` query parameter of a Location value.

    Args:
        location: Location header value (relative or absolute)
        base_url: Endpoint relative values are resolved against

    Returns:
        Upload key

    Raises:
        MalformedLocationError: If the header is missing or has no key
    """
    if not location:
        raise MalformedLocationError("Missing Location header in response")

    url = urljoin(base_url.rstrip('/') + '/', location)
    values = parse_qs(urlsplit(url).query).get('key')
    if not values or not values[0]:
        raise MalformedLocationError(
            f"No upload key in Location header: {location}",
            location=location
        )
    return values[0]


def extract_file_id(location: Optional[str]) -> str:
    """
    Read the trailing `/files/<digits>` of a Location value.

    Example:
        >>> extract_file_id("/files/42")
        '42'

    Raises:
        MalformedLocationError: If the header is missing or does not match
    """
    if not location:
        raise MalformedLocationError("Missing Location header in response")

    match = _FILE_ID_PATTERN.search(location)
    if not match:
        raise MalformedLocationError(
            f"Invalid Location header format: {location}",
            location=location
        )
    return match.group(1)


class LocationParser:
    """Location parsing bound to one API endpoint."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL):
        self._base_url = base_url

    @property
    def base_url(self) -> str:
        return self._base_url

    def upload_key(self, location: Optional[str]) -> str:
        return extract_upload_key(location, self._base_url)

    def file_id(self, location: Optional[str]) -> str:
        return extract_file_id(location)
