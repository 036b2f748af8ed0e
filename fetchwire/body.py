"""Request bodies: raw bytes, multipart forms and multipart part contents."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any


class _Kind(Enum):
    BYTES = auto()
    FORM = auto()
    PART = auto()


class Body:
    """The body of a request."""

    __slots__ = ("_kind", "_content")

    def __init__(self, data: Any = b"") -> None:
        if isinstance(data, Body):
            self._kind = data._kind
            self._content = data._content
        elif isinstance(data, str):
            self._kind = _Kind.BYTES
            self._content = data.encode("utf-8")
        elif isinstance(data, (bytes, bytearray, memoryview)):
            self._kind = _Kind.BYTES
            self._content = bytes(data)
        else:
            raise TypeError(f"cannot make a body from {type(data).__name__}")

    @classmethod
    def from_form(cls, form: Any) -> Body:
        """Make a body that holds a multipart form."""
        body = cls()
        body._kind = _Kind.FORM
        body._content = form
        return body

    def as_bytes(self) -> bytes | None:
        """Return the body's bytes, or None if it is a multipart form."""
        if self._kind is _Kind.FORM:
            return None
        return self._content

    def is_empty(self) -> bool:
        """True if there is nothing to send."""
        if self._kind is _Kind.FORM:
            return self._content.is_empty()
        return not self._content

    def try_clone(self) -> Body | None:
        """Return a copy, or None if the body holds a form."""
        if self._kind is _Kind.FORM:
            return None
        return Body(self)

    def into_part(self) -> Body:
        """Return this body as the content of a multipart part."""
        body = Body(self)
        if body._kind is _Kind.BYTES:
            body._kind = _Kind.PART
        return body

    def to_payload(self) -> bytes:
        """Return the bytes that go on the wire."""
        if self._kind is _Kind.FORM:
            return self._content.encode()
        return self._content

    def __repr__(self) -> str:
        if self._kind is _Kind.FORM:
            return "Body(form)"
        return f"Body({len(self._content)} bytes)"