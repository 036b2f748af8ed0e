"""An HTTP client holding default headers, and the builder that configures it."""

from __future__ import annotations

import http.client
import urllib.error
import urllib.request
from typing import Any

from .errors import Error, ErrorKind
from .headers import HeaderMap
from .request import Request, RequestBuilder
from .response import Response


def _header_text(name: str, value: str) -> str:
    if any(ord(char) > 126 for char in value):
        raise Error(ErrorKind.BUILDER, f"header {name!r} has a non-ASCII value")
    return value


def _read_handle(handle: Any, request_url: str) -> Response:
    try:
        with handle:
            status = handle.getcode()
            final_url = handle.geturl() or request_url
            headers = HeaderMap()
            for name, value in handle.headers.items():
                try:
                    headers.append(name, value)
                except (TypeError, ValueError):
                    continue
            content = handle.read() if getattr(handle, "fp", True) is not None else b""
    except (OSError, http.client.HTTPException) as exc:
        raise Error(ErrorKind.REQUEST, str(exc), url=request_url) from exc
    return Response(status, headers, final_url, content)


def _fetch(request: Request) -> Response:
    headers: dict[str, str] = {}
    for name, value in request.headers.items():
        text = _header_text(name, value)
        headers[name] = f"{headers[name]}, {text}" if name in headers else text

    data = None
    if request.body is not None and not request.body.is_empty():
        data = request.body.to_payload()

    try:
        outgoing = urllib.request.Request(
            request.url, data=data, headers=headers, method=request.method
        )
    except ValueError as exc:
        raise Error(ErrorKind.BUILDER, str(exc), url=request.url) from exc

    opener = urllib.request.build_opener(urllib.request.ProxyHandler({}))
    try:
        handle = opener.open(outgoing)
    except urllib.error.HTTPError as exc:
        handle = exc
    except (OSError, ValueError, http.client.HTTPException) as exc:
        raise Error(ErrorKind.REQUEST, str(exc), url=request.url) from exc
    return _read_handle(handle, request.url)


class Client:
    """Makes requests, adding its default headers to each one."""

    def __init__(self, default_headers: HeaderMap | None = None) -> None:
        self._headers = default_headers.copy() if default_headers is not None else HeaderMap()

    @staticmethod
    def builder() -> ClientBuilder:
        """Return a builder for configuring a client."""
        return ClientBuilder()

    def get(self, url: str) -> RequestBuilder:
        """Start a GET request."""
        return self.request("GET", url)

    def post(self, url: str) -> RequestBuilder:
        """Start a POST request."""
        return self.request("POST", url)

    def put(self, url: str) -> RequestBuilder:
        """Start a PUT request."""
        return self.request("PUT", url)

    def patch(self, url: str) -> RequestBuilder:
        """Start a PATCH request."""
        return self.request("PATCH", url)

    def delete(self, url: str) -> RequestBuilder:
        """Start a DELETE request."""
        return self.request("DELETE", url)

    def head(self, url: str) -> RequestBuilder:
        """Start a HEAD request."""
        return self.request("HEAD", url)

    def request(self, method: str, url: str) -> RequestBuilder:
        """Start a request; an invalid method or URL surfaces on build or send."""
        try:
            req: Request | Error = Request(method, url)
        except Error as exc:
            req = exc
        return RequestBuilder(self, req)

    def merge_headers(self, request: Request) -> None:
        """Add default headers the request does not already carry."""
        for name, value in self._headers.items():
            if name not in request.headers:
                request.headers.insert(name, value)

    def execute(self, request: Request) -> Response:
        """Send a request and return its response."""
        self.merge_headers(request)
        return _fetch(request)

    def __repr__(self) -> str:
        return f"Client(default_headers={self._headers!r})"


class ClientBuilder:
    """Configures a Client."""

    def __init__(self) -> None:
        self._headers = HeaderMap()

    def default_headers(self, headers: HeaderMap) -> ClientBuilder:
        """Set headers sent with every request."""
        for name, value in headers.items():
            self._headers.insert(name, value)
        return self

    def build(self) -> Client:
        """Return a client with this configuration."""
        return Client(default_headers=self._headers)

    def __repr__(self) -> str:
        return f"ClientBuilder(default_headers={self._headers!r})"