# fetchwire

fetchwire is a small HTTP client library with no third-party dependencies.
You build requests fluently and set default headers on the client. It can
send multipart forms. Every failure is raised as one exception type that
tells you what went wrong.

## Installation

```
pip install fetchwire
```

## Headers

`fetchwire.headers.HeaderMap` is an ordered header map. Names are
case-insensitive, and each name can hold several values.

- `insert(name, value)` replaces the values for a name.
- `append(name, value)` adds a value after the existing ones.
- `setdefault(name, value)` sets a value only when the name is absent.
- `get(name)` returns the first value.
- `get_all(name)` returns every value for the name.
- `remove(name)` removes the name.
- `items()` yields every `(name, value)` pair.
- `keys()` returns the names.
- `copy()` returns a copy of the map.

Names are stored in lower case. Names that are not valid HTTP tokens raise
`ValueError`. So do values that contain control characters.

`replace_headers(dst, src)` merges one map into another. Each name in `src`
replaces all of its values in `dst`.

## Building a client

```python
from fetchwire.client import Client
from fetchwire.headers import HeaderMap

defaults = HeaderMap([("content-type", "application/json"), ("x-custom", "value")])
client = Client.builder().default_headers(defaults).build()
```

`Client()` with no arguments gives a client that has no default headers.
`Client.merge_headers(request)` adds a default header only when the request
does not already carry that header. A header set on the request always wins
over the client default.

## Building requests

The client has `get`, `post`, `put`, `patch`, `delete` and `head`. Each one
returns a `fetchwire.request.RequestBuilder`. `request(method, url)` takes
any method.

```python
request = (
    client.post("https://example.com/upload")
    .header("accept", "application/json")
    .query([("page", "1")])
    .bearer_auth("token")
    .body(b"payload")
    .build()
)
```

`RequestBuilder` has these methods:

- `header(key, value)` appends a header.
- `headers(header_map)` merges a `HeaderMap`. Each name given replaces the
  values already set for it.
- `query(...)` appends URL-encoded pairs to the query string. It takes a
  mapping or a sequence of pairs.
- `form(...)` sets a URL-encoded body and
  `Content-Type: application/x-www-form-urlencoded`.
- `json(...)` sets a compact JSON body and `Content-Type: application/json`.
- `basic_auth(username, password=None)` adds an `Authorization: Basic ...`
  header.
- `bearer_auth(token)` adds an `Authorization: Bearer ...` header.
- `body(data)` sets the body. It takes `str`, `bytes` or a
  `fetchwire.body.Body`.
- `multipart(form)` sets a multipart body and its `Content-Type`.
- `fetch_mode_no_cors()`, `fetch_credentials_same_origin()`,
  `fetch_credentials_include()` and `fetch_credentials_omit()` record the
  fetch mode on the `Request`. The credentials value is a
  `fetchwire.request.Credentials`.
- `try_clone()` returns a copy of the builder. It returns `None` if the
  builder holds an error or if its body is a multipart form.

An invalid method, URL, header or body to encode does not raise at once. The
builder keeps the first such error. `build()` raises it, and so does
`send()`. Otherwise `build()` returns a `Request`. The request has
`method`, `url`, `headers`, `body`, `cors` and `credentials` attributes, and
a `try_clone()` method.

`send()` builds the request and passes it to `Client.execute(request)`.
`execute` merges the default headers and sends the request with the standard
library's `urllib`. It returns a `Response` once the whole body has been
read.

## Multipart forms

```python
from fetchwire.multipart import Form, Part

form = (
    Form()
    .text("username", "alice")
    .part(
        "file",
        Part.bytes(b"\x00\x2a").file_name("binary.bin").mime_str("application/octet-stream"),
    )
)
request = client.post("https://example.com/form").multipart(form).build()
```

- `Part.text`, `Part.bytes` and `Part.stream` create parts.
- `file_name` sets a part's file name.
- `mime_str` sets its content type. It raises a builder `Error` if the type
  is not valid.
- `Form.encode()` returns the encoded body.
- `Form.content_type()` returns the header value, including the form's
  random `boundary`.

## Responses and errors

A `fetchwire.response.Response` has these members:

- `status` holds the status code as an integer.
- `headers` holds a `HeaderMap`.
- `url` holds the final URL.
- `content_length()` returns the `Content-Length` header as an integer, or
  `None`.
- `bytes()` returns the raw body.
- `text()` returns the body decoded as UTF-8. Invalid bytes are replaced.
- `json()` parses the body. It raises a decode `Error` on invalid JSON.
- `error_for_status()` and `error_for_status_ref()` raise a status `Error`
  for 4xx and 5xx responses. Otherwise they return the response.

Responses with an error status are returned normally by `send()`. They are
not raised.

`fetchwire.errors.Error` carries a `kind` (an `ErrorKind`), a `message`, and
the `url` and `status` when they are known. You can test the kind with these
methods:

- `is_builder()`: an invalid request.
- `is_request()`: a network failure.
- `is_decode()`: a body that could not be decoded.
- `is_status()`: an error status from `error_for_status()`.

## What it does not do

fetchwire sends requests directly and takes no proxy settings, not even from
the environment. It does not do these things:

- keep cookies
- set timeouts
- decompress response bodies itself
- stream request or response bodies

The fetch mode and credentials settings are recorded on the `Request`. They
do not change how the request is sent.

## Running the tests

```
pip install -e ".[test]"
pytest
```