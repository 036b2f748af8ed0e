"""Requests and the builder that assembles them before sending."""

from __future__ import annotations

import base64
import json as _json
from collections.abc import Mapping
from enum import Enum
from typing import Any
from urllib.parse import quote_plus, urlsplit, urlunsplit

from .body import Body
from .errors import Error, ErrorKind
from .headers import HeaderMap, replace_headers

_METHOD_CHARS = frozenset(
    "!#$%&'*+-.^_`|~0123456789"
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
)

_DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}
_SPECIAL_SCHEMES = frozenset(_DEFAULT_PORTS) | {"file"}


class Credentials(Enum):
    """Credentials mode of a fetch request."""

    SAME_ORIGIN = "same-origin"
    INCLUDE = "include"
    OMIT = "omit"


def _builder_error(message: str) -> Error:
    return Error(ErrorKind.BUILDER, message)


def _parse_method(method: Any) -> str:
    if isinstance(method, (bytes, bytearray)):
        method = bytes(method).decode("latin-1")
    if not isinstance(method, str):
        raise _builder_error(f"invalid HTTP method: {method!r}")
    if not method or any(char not in _METHOD_CHARS for char in method):
        raise _builder_error(f"invalid HTTP method: {method!r}")
    return method


def _parse_url(url: Any) -> str:
    if not isinstance(url, str):
        raise _builder_error(f"invalid URL: {url!r}")
    try:
        parts = urlsplit(url.strip())
        port = parts.port
    except ValueError as exc:
        raise _builder_error(f"invalid URL: {exc}") from exc
    if not parts.scheme:
        raise _builder_error("relative URL without a base")
    if not parts.hostname:
        raise _builder_error(f"URL has no host: {url!r}")
    scheme = parts.scheme.lower()
    userinfo, at, hostport = parts.netloc.rpartition("@")
    hostport = hostport.lower()
    if port is not None and _DEFAULT_PORTS.get(scheme) == port:
        hostport = hostport[: hostport.rfind(":")]
    netloc = f"{userinfo}{at}{hostport}"
    path = parts.path
    if not path and scheme in _SPECIAL_SCHEMES:
        path = "/"
    return urlunsplit((scheme, netloc, path, parts.query, parts.fragment))


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    raise _builder_error(f"unsupported value for url encoding: {type(value).__name__}")


def _form_quote(text: str) -> str:
    return quote_plus(text, safe="*").replace("~", "%7E")


def _urlencode(data: Any) -> str:
    """Serialise a mapping or a sequence of pairs as application/x-www-form-urlencoded."""
    if isinstance(data, Mapping):
        pairs = list(data.items())
    elif isinstance(data, (str, bytes, bytearray)) or not hasattr(data, "__iter__"):
        raise _builder_error("top-level serializer supports only maps and sequences of pairs")
    else:
        pairs = []
        for item in data:
            if isinstance(item, (str, bytes)) or not hasattr(item, "__len__") or len(item) != 2:
                raise _builder_error(f"expected a key-value pair, got {item!r}")
            pairs.append(tuple(item))
    encoded = []
    for key, value in pairs:
        if value is None:
            continue
        encoded.append(f"{_form_quote(_scalar(key))}={_form_quote(_scalar(value))}")
    return "&".join(encoded)


class Request:
    """A request which can be executed by a client."""

    def __init__(self, method: str, url: str) -> None:
        self.method = _parse_method(method)
        self.url = _parse_url(url)
        self.headers = HeaderMap()
        self.body: Body | None = None
        self.cors = True
        self.credentials: Credentials | None = None

    def try_clone(self) -> Request | None:
        """Return a copy, or None if the body cannot be cloned."""
        body = None
        if self.body is not None:
            body = self.body.try_clone()
            if body is None:
                return None
        clone = Request.__new__(Request)
        clone.method = self.method
        clone.url = self.url
        clone.headers = self.headers.copy()
        clone.body = body
        clone.cors = self.cors
        clone.credentials = self.credentials
        return clone

    def __repr__(self) -> str:
        return f"Request(method={self.method!r}, url={self.url!r}, headers={self.headers!r})"


class RequestBuilder:
    """Sets the properties of a request; the first failure is kept until build or send."""

    def __init__(self, client: Any, request: Request | Error) -> None:
        self._client = client
        self._request = request

    def _ok(self) -> Request | None:
        return self._request if isinstance(self._request, Request) else None

    def query(self, query: Any) -> RequestBuilder:
        """Append parameters to the URL's query string; existing ones are kept."""
        req = self._ok()
        if req is None:
            return self
        try:
            encoded = _urlencode(query)
        except Error as exc:
            self._request = exc
            return self
        parts = urlsplit(req.url)
        existing = parts.query
        if existing and encoded:
            combined = f"{existing}&{encoded}"
        else:
            combined = existing or encoded
        req.url = urlunsplit(parts._replace(query=combined))
        return self

    def form(self, form: Any) -> RequestBuilder:
        """Send a url-encoded form body with the matching Content-Type."""
        req = self._ok()
        if req is None:
            return self
        try:
            encoded = _urlencode(form)
        except Error as exc:
            self._request = exc
            return self
        req.headers.insert("content-type", "application/x-www-form-urlencoded")
        req.body = Body(encoded)
        return self

    def json(self, json: Any) -> RequestBuilder:
        """Send a JSON body with the matching Content-Type."""
        req = self._ok()
        if req is None:
            return self
        try:
            payload = _json.dumps(
                json, separators=(",", ":"), ensure_ascii=False, allow_nan=False
            ).encode("utf-8")
        except (TypeError, ValueError) as exc:
            self._request = _builder_error(str(exc))
            return self
        req.headers.insert("content-type", "application/json")
        req.body = Body(payload)
        return self

    def basic_auth(self, username: Any, password: Any = None) -> RequestBuilder:
        """Add an HTTP basic Authorization header."""
        credentials = f"{username}:" if password is None else f"{username}:{password}"
        encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        return self.header("authorization", f"Basic {encoded}")

    def bearer_auth(self, token: Any) -> RequestBuilder:
        """Add an HTTP bearer Authorization header."""
        return self.header("authorization", f"Bearer {token}")

    def body(self, body: Any) -> RequestBuilder:
        """Set the request body."""
        req = self._ok()
        if req is not None:
            req.body = Body(body)
        return self

    def multipart(self, multipart: Any) -> RequestBuilder:
        """Send a multipart/form-data body."""
        req = self._ok()
        if req is not None:
            req.headers.insert("content-type", multipart.content_type())
            req.body = Body.from_form(multipart)
        return self

    def header(self, key: Any, value: Any) -> RequestBuilder:
        """Append a header, keeping any values already set for that name."""
        req = self._ok()
        if req is None:
            return self
        try:
            req.headers.append(key, value)
        except (TypeError, ValueError) as exc:
            self._request = _builder_error(str(exc))
        return self

    def headers(self, headers: HeaderMap) -> RequestBuilder:
        """Merge headers in; each name given replaces the values already set."""
        req = self._ok()
        if req is not None:
            replace_headers(req.headers, headers)
        return self

    def fetch_mode_no_cors(self) -> RequestBuilder:
        """Use the 'no-cors' request mode."""
        req = self._ok()
        if req is not None:
            req.cors = False
        return self

    def _credentials(self, mode: Credentials) -> RequestBuilder:
        req = self._ok()
        if req is not None:
            req.credentials = mode
        return self

    def fetch_credentials_same_origin(self) -> RequestBuilder:
        """Set the credentials mode to 'same-origin'."""
        return self._credentials(Credentials.SAME_ORIGIN)

    def fetch_credentials_include(self) -> RequestBuilder:
        """Set the credentials mode to 'include'."""
        return self._credentials(Credentials.INCLUDE)

    def fetch_credentials_omit(self) -> RequestBuilder:
        """Set the credentials mode to 'omit'."""
        return self._credentials(Credentials.OMIT)

    def build(self) -> Request:
        """Return the request, or raise the first error met while building it."""
        if isinstance(self._request, Error):
            raise self._request
        return self._request

    def send(self) -> Any:
        """Build the request and execute it with the client."""
        return self._client.execute(self.build())

    def try_clone(self) -> RequestBuilder | None:
        """Return a copy, or None if the request failed or cannot be cloned."""
        req = self._ok()
        if req is None:
            return None
        clone = req.try_clone()
        if clone is None:
            return None
        return RequestBuilder(self._client, clone)

    def __repr__(self) -> str:
        if isinstance(self._request, Error):
            return f"RequestBuilder(error={self._request!r})"
        req = self._request
        return (
            f"RequestBuilder(method={req.method!r}, url={req.url!r}, "
            f"headers={req.headers!r})"
        )