"""Error type raised by the client, requests and responses."""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus


class ErrorKind(Enum):
    """What went wrong."""

    BUILDER = "builder"
    REQUEST = "request"
    DECODE = "decode"
    STATUS = "status"


def _status_text(status: int) -> str:
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return str(status)


class Error(Exception):
    """An error while building, sending or reading an HTTP exchange."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str = "",
        url: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.url = url
        self.status = status

    def is_builder(self) -> bool:
        """True if the error came from building a request."""
        return self.kind is ErrorKind.BUILDER

    def is_request(self) -> bool:
        """True if the error came from sending a request."""
        return self.kind is ErrorKind.REQUEST

    def is_decode(self) -> bool:
        """True if the error came from decoding a response body."""
        return self.kind is ErrorKind.DECODE

    def is_status(self) -> bool:
        """True if the error came from an error status code."""
        return self.kind is ErrorKind.STATUS

    def __str__(self) -> str:
        if self.kind is ErrorKind.STATUS and self.status is not None:
            side = "client" if self.status < 500 else "server"
            text = f"HTTP status {side} error ({_status_text(self.status)})"
        elif self.kind is ErrorKind.BUILDER:
            text = "builder error"
        elif self.kind is ErrorKind.REQUEST:
            text = "error sending request"
        elif self.kind is ErrorKind.DECODE:
            text = "error decoding response body"
        else:
            text = "HTTP status error"
        if self.url:
            text += f" for url ({self.url})"
        if self.message:
            text += f": {self.message}"
        return text

    def __repr__(self) -> str:
        return (
            f"Error(kind={self.kind.value!r}, message={self.message!r}, "
            f"url={self.url!r}, status={self.status!r})"
        )