"""A response to a submitted request."""

from __future__ import annotations

import json as _json
from typing import Any

from .errors import Error, ErrorKind
from .headers import HeaderMap


class Response:
    """Status, headers, final URL and body of an HTTP response."""

    def __init__(
        self,
        status: int,
        headers: HeaderMap | Any = None,
        url: str = "",
        content: bytes = b"",
    ) -> None:
        self.status = int(status)
        self.headers = headers if isinstance(headers, HeaderMap) else HeaderMap(headers)
        self.url = url
        self._content = bytes(content)

    def content_length(self) -> int | None:
        """Return the Content-Length header as an integer, if present and valid."""
        raw = self.headers.get("content-length")
        if raw is None:
            return None
        digits = raw[1:] if raw.startswith("+") else raw
        if not digits or not digits.isascii() or not digits.isdigit():
            return None
        value = int(digits)
        return value if value < 2**64 else None

    def text(self) -> str:
        """Return the body decoded as UTF-8, replacing invalid sequences."""
        return self._content.decode("utf-8-sig", errors="replace")

    def bytes(self) -> bytes:
        """Return the raw body."""
        return self._content

    def json(self) -> Any:
        """Parse the body as JSON."""
        try:
            return _json.loads(self._content)
        except (ValueError, UnicodeDecodeError) as exc:
            raise Error(ErrorKind.DECODE, str(exc), url=self.url) from exc

    def _is_error_status(self) -> bool:
        return 400 <= self.status < 600

    def error_for_status(self) -> Response:
        """Raise a status error for 4xx and 5xx responses, else return self."""
        if self._is_error_status():
            raise Error(ErrorKind.STATUS, url=self.url, status=self.status)
        return self

    def error_for_status_ref(self) -> Response:
        """Same as error_for_status; the response stays usable either way."""
        return self.error_for_status()

    def __repr__(self) -> str:
        return f"Response(status={self.status}, headers={self.headers!r})"