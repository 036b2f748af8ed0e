import base64

import pytest

from fetchwire.errors import Error
from fetchwire.headers import HeaderMap
from fetchwire.multipart import Form
from fetchwire.request import Credentials, Request, RequestBuilder
from fetchwire.response import Response


class _RecordingClient:
    def __init__(self):
        self.sent = []

    def execute(self, request):
        self.sent.append(request)
        return Response(200, url=request.url)


def _builder(method="GET", url="https://example.com/path", client=None):
    return RequestBuilder(client or _RecordingClient(), Request(method, url))


def test_body_from_bytes():
    request = _builder("PUT", "https://google.com").body(b"abc").build()
    assert request.body.as_bytes() == b"abc"


def test_post_body_text():
    request = _builder("POST").body("Hello").build()
    assert request.method == "POST"
    assert request.body.as_bytes() == b"Hello"


def test_post_form():
    form = [("hello", "world"), ("sean", "monstar")]
    request = _builder("POST").form(form).build()
    assert request.body.as_bytes() == b"hello=world&sean=monstar"
    assert request.headers.get("content-type") == "application/x-www-form-urlencoded"


def test_form_encodes_spaces_and_skips_none():
    request = _builder("POST").form({"a b": "c&d", "skip": None}).build()
    assert request.body.as_bytes() == b"a+b=c%26d"


def test_appended_headers_not_overwritten():
    request = (
        _builder()
        .header("accept", "application/json")
        .header("accept", "application/json+hal")
        .build()
    )
    assert request.headers.get_all("accept") == ["application/json", "application/json+hal"]


def test_headers_replace_existing_names():
    extra = HeaderMap([("authorization", "Bearer secret"), ("x-one", "1")])
    request = (
        _builder()
        .header("authorization", "Bearer token")
        .header("x-keep", "yes")
        .headers(extra)
        .build()
    )
    assert request.headers.get_all("authorization") == ["Bearer secret"]
    assert request.headers.get("x-keep") == "yes"
    assert request.headers.get("x-one") == "1"


def test_query_repeated_keys():
    request = _builder(url="https://example.com/").query([("foo", "a"), ("foo", "b")]).build()
    assert request.url == "https://example.com/?foo=a&foo=b"


def test_query_appends_to_existing():
    request = (
        _builder(url="https://example.com/p?x=1")
        .query({"y": 2, "flag": True})
        .build()
    )
    assert request.url == "https://example.com/p?x=1&y=2&flag=true"


def test_empty_query_is_removed():
    request = _builder(url="https://example.com/p").query([]).build()
    assert request.url == "https://example.com/p"


def test_query_rejects_nested_values():
    builder = _builder().query({"a": [1, 2]})
    with pytest.raises(Error) as info:
        builder.build()
    assert info.value.is_builder()


def test_query_rejects_plain_string():
    with pytest.raises(Error) as info:
        _builder().query("a=b").build()
    assert info.value.is_builder()


def test_json_body_and_content_type():
    request = _builder("POST").json({"key": "value", "n": [1, 2]}).build()
    assert request.body.as_bytes() == b'{"key":"value","n":[1,2]}'
    assert request.headers.get("content-type") == "application/json"


def test_json_unserialisable_is_builder_error():
    with pytest.raises(Error) as info:
        _builder("POST").json({"bad": object()}).build()
    assert info.value.is_builder()


def test_basic_auth_round_trip():
    password = "password"
    request = _builder().basic_auth("user", password).build()
    value = request.headers.get("authorization")
    assert value.startswith("Basic ")
    assert base64.b64decode(value[len("Basic "):]) == b"user:password"


def test_basic_auth_without_password():
    request = _builder().basic_auth("user").build()
    value = request.headers.get("authorization")
    assert base64.b64decode(value[len("Basic "):]) == b"user:"


def test_bearer_auth():
    request = _builder().bearer_auth("token").build()
    assert request.headers.get("authorization") == "Bearer token"


def test_invalid_header_name_keeps_error():
    builder = _builder().header("bad name", "x").header("x-ok", "1")
    with pytest.raises(Error) as info:
        builder.build()
    assert info.value.is_builder()


def test_invalid_header_value_is_builder_error():
    with pytest.raises(Error) as info:
        _builder().header("x-bad", "a\nb").build()
    assert info.value.is_builder()


def test_fetch_mode_and_credentials():
    request = _builder().fetch_mode_no_cors().fetch_credentials_include().build()
    assert request.cors is False
    assert request.credentials is Credentials.INCLUDE
    request = _builder().fetch_credentials_same_origin().build()
    assert request.credentials is Credentials.SAME_ORIGIN
    assert request.cors is True
    request = _builder().fetch_credentials_omit().build()
    assert request.credentials.value == "omit"


def test_new_request_defaults():
    request = Request("GET", "HTTP://Example.COM")
    assert request.url == "http://example.com/"
    assert len(request.headers) == 0
    assert request.body is None
    assert request.credentials is None


def test_default_port_is_dropped():
    assert Request("GET", "http://example.com:80/a").url == "http://example.com/a"
    assert Request("GET", "http://example.com:8080/a").url == "http://example.com:8080/a"


@pytest.mark.parametrize("url", ["not a url", "/relative/path", "http://"])
def test_invalid_url_is_builder_error(url):
    with pytest.raises(Error) as info:
        Request("GET", url)
    assert info.value.is_builder()


def test_invalid_method_is_builder_error():
    with pytest.raises(Error) as info:
        Request("GE T", "https://example.com/")
    assert info.value.is_builder()


def test_request_try_clone_is_independent():
    original = _builder("POST").body(b"data").header("x-a", "1").build()
    clone = original.try_clone()
    clone.headers.insert("x-a", "2")
    assert original.headers.get("x-a") == "1"
    assert clone.body.as_bytes() == b"data"
    assert clone.url == original.url


def test_try_clone_with_form_body_is_none():
    builder = _builder("POST").multipart(Form().text("foo", "bar"))
    assert builder.try_clone() is None
    assert builder.build().try_clone() is None


def test_builder_try_clone():
    builder = _builder("POST").body("from a str")
    clone = builder.try_clone()
    assert clone.build().body.as_bytes() == b"from a str"
    clone.header("x-extra", "1")
    assert "x-extra" not in builder.build().headers


def test_try_clone_of_failed_builder_is_none():
    assert _builder().header("bad name", "x").try_clone() is None


def test_multipart_sets_body_and_content_type():
    form = Form().text("foo", "bar")
    request = _builder("POST").multipart(form).build()
    assert request.headers.get("content-type") == f"multipart/form-data; boundary={form.boundary}"
    assert request.body.as_bytes() is None
    assert request.body.to_payload() == form.encode()


def test_send_uses_client():
    client = _RecordingClient()
    response = _builder(url="https://example.com/1", client=client).send()
    assert response.status == 200
    assert response.url == "https://example.com/1"
    assert [req.url for req in client.sent] == ["https://example.com/1"]


def test_send_raises_builder_error_without_sending():
    client = _RecordingClient()
    builder = _builder(client=client).header("bad name", "x")
    with pytest.raises(Error):
        builder.send()
    assert client.sent == []