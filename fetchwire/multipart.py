"""multipart/form-data request bodies."""

from __future__ import annotations

import re
from typing import Any

from .body import Body
from .errors import Error, ErrorKind
from .headers import HeaderMap, fast_random

_TCHARS = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+"
_QUOTED = r'"(?:[^"\\\r\n]|\\.)*"'
_MIME_RE = re.compile(
    rf"^\s*({_TCHARS})/({_TCHARS})((?:\s*;\s*{_TCHARS}=(?:{_TCHARS}|{_QUOTED}))*)\s*;?\s*$"
)


def _parse_mime(mime: str) -> str:
    if not isinstance(mime, str):
        raise Error(ErrorKind.BUILDER, f"invalid mime type: {mime!r}")
    match = _MIME_RE.match(mime)
    if match is None:
        raise Error(ErrorKind.BUILDER, f"invalid mime type: {mime!r}")
    kind, subtype, params = match.groups()
    return f"{kind.lower()}/{subtype.lower()}{params.strip() and params}"


def _quote(text: str) -> str:
    return text.replace('"', "%22").replace("\r", "%0D").replace("\n", "%0A")


def _generate_boundary() -> str:
    return "-".join(f"{fast_random():016x}" for _ in range(4))


class Part:
    """A field in a multipart form."""

    def __init__(self, value: Any) -> None:
        body = value if isinstance(value, Body) else Body(value)
        self.value = body.into_part()
        self._mime: str | None = None
        self._file_name: str | None = None
        self.headers = HeaderMap()

    @classmethod
    def text(cls, value: str) -> Part:
        """Make a text field."""
        if not isinstance(value, str):
            raise TypeError(f"text part needs str, not {type(value).__name__}")
        return cls(Body(value))

    @classmethod
    def bytes(cls, value: bytes | bytearray | memoryview) -> Part:
        """Make a field from arbitrary bytes."""
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f"bytes part needs bytes, not {type(value).__name__}")
        return cls(Body(value))

    @classmethod
    def stream(cls, value: Any) -> Part:
        """Make a field from anything that can become a body."""
        return cls(value)

    def mime_str(self, mime: str) -> Part:
        """Set the content type of this part; raises a builder error if invalid."""
        self._mime = _parse_mime(mime)
        return self

    def file_name(self, filename: str) -> Part:
        """Set the file name of this part."""
        self._file_name = str(filename)
        return self

    @property
    def mime(self) -> str | None:
        """The content type set for this part, if any."""
        return self._mime

    @property
    def filename(self) -> str | None:
        """The file name set for this part, if any."""
        return self._file_name

    def _encode(self, name: str) -> bytes:
        disposition = f'Content-Disposition: form-data; name="{_quote(name)}"'
        if self._file_name is not None:
            disposition += f'; filename="{_quote(self._file_name)}"'
        lines = [disposition]
        if self._mime is not None:
            lines.append(f"Content-Type: {self._mime}")
        lines.extend(f"{key}: {value}" for key, value in self.headers.items())
        head = "".join(f"{line}\r\n" for line in lines) + "\r\n"
        return head.encode("utf-8") + self.value.to_payload()

    def __repr__(self) -> str:
        return (
            f"Part(value={self.value!r}, mime={self._mime!r}, "
            f"file_name={self._file_name!r}, headers={self.headers!r})"
        )


class Form:
    """A multipart/form-data request body."""

    def __init__(self) -> None:
        self._fields: list[tuple[str, Part]] = []
        self.boundary = _generate_boundary()

    def text(self, name: str, value: str) -> Form:
        """Add a text field."""
        return self.part(name, Part.text(value))

    def part(self, name: str, part: Part) -> Form:
        """Add a customised part."""
        if not isinstance(part, Part):
            raise TypeError(f"expected a Part, not {type(part).__name__}")
        self._fields.append((str(name), part))
        return self

    @property
    def fields(self) -> list[tuple[str, Part]]:
        """The (name, part) pairs in the order they were added."""
        return list(self._fields)

    def is_empty(self) -> bool:
        """True if the form has no fields."""
        return not self._fields

    def content_type(self) -> str:
        """The Content-Type header value for this form."""
        return f"multipart/form-data; boundary={self.boundary}"

    def encode(self) -> bytes:
        """Return the encoded body; an empty form encodes to no bytes."""
        if not self._fields:
            return b""
        delimiter = f"--{self.boundary}\r\n".encode("ascii")
        chunks = [delimiter + part._encode(name) + b"\r\n" for name, part in self._fields]
        chunks.append(f"--{self.boundary}--\r\n".encode("ascii"))
        return b"".join(chunks)

    def __repr__(self) -> str:
        return f"Form(parts={self._fields!r})"