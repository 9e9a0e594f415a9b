"""API response container."""
import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from multidict import CIMultiDict


@dataclass
class ApiResponse:
    """
    Status, headers and body of a completed HTTP exchange.

    Headers are stored case-insensitively so `Location` and `location`
    resolve to the same value.
    """
    status: int
    headers: Mapping[str, str] = field(default_factory=CIMultiDict)
    body: bytes = b''

    def __post_init__(self):
        if not isinstance(self.headers, CIMultiDict):
            self.headers = CIMultiDict(self.headers or {})

    def header(self, name: str) -> Optional[str]:
        """Return a header value or None."""
        return self.headers.get(name)

    @property
    def location(self) -> Optional[str]:
        """The Location header, if any."""
        return self.header('Location')

    def json(self) -> Any:
        """Decode the body as JSON (None for an empty body)."""
        if not self.body:
            return None
        return json.loads(self.body)

    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')
