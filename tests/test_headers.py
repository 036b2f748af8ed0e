from concurrent.futures import ThreadPoolExecutor

import pytest

from fetchwire.headers import HeaderMap, fast_random, replace_headers


def test_names_are_case_insensitive():
    headers = HeaderMap()
    headers.insert("Content-Type", "application/json")
    assert headers.get("content-type") == "application/json"
    assert "CONTENT-TYPE" in headers
    assert headers.keys() == ["content-type"]


def test_insert_replaces_all_values():
    headers = HeaderMap()
    headers.append("accept", "text/html")
    headers.append("accept", "application/json")
    replaced = headers.insert("accept", "*/*")
    assert replaced == ["text/html", "application/json"]
    assert headers.get_all("accept") == ["*/*"]


def test_append_keeps_order_of_values():
    headers = HeaderMap()
    headers.append("accept", "application/json")
    headers.append("accept", "application/json+hal")
    assert headers.get_all("accept") == ["application/json", "application/json+hal"]
    assert headers.get("accept") == "application/json"


def test_insertion_order_of_names_survives_remove():
    headers = HeaderMap()
    headers.insert("foo", "bar")
    headers.append("foo", "bar2")
    headers.insert("hello", "world")
    headers.insert("second", "is it?")
    assert headers.remove("foo") == "bar"
    headers.insert("accept", "*/*")
    assert list(headers) == ["hello", "second", "accept"]
    assert len(headers) == 3


def test_missing_names():
    headers = HeaderMap()
    assert headers.get("x-missing") is None
    assert headers.get("x-missing", "fallback") == "fallback"
    assert headers.get_all("x-missing") == []
    assert headers.remove("x-missing") is None
    assert "x-missing" not in headers


def test_setdefault_does_not_overwrite():
    headers = HeaderMap({"content-type": "text/plain"})
    assert headers.setdefault("content-type", "application/json") == "text/plain"
    assert headers.setdefault("x-custom", "flibbertigibbet") == "flibbertigibbet"
    assert headers.get_all("content-type") == ["text/plain"]


def test_items_repeat_names_with_several_values():
    headers = HeaderMap([("a", "1"), ("b", "2"), ("a", "3")])
    assert list(headers.items()) == [("a", "1"), ("a", "3"), ("b", "2")]


def test_copy_is_independent():
    original = HeaderMap({"x-one": "1"})
    duplicate = original.copy()
    duplicate.append("x-one", "2")
    assert original.get_all("x-one") == ["1"]
    assert duplicate != original
    assert original.copy() == original


def test_bytes_and_int_values():
    headers = HeaderMap()
    headers.insert(b"X-Bytes", b"raw")
    headers.insert("content-length", 5)
    assert headers.get("x-bytes") == "raw"
    assert headers.get("content-length") == "5"


@pytest.mark.parametrize("name", ["", "bad name", "colon:", "new\nline"])
def test_invalid_names_are_rejected(name):
    with pytest.raises(ValueError):
        HeaderMap().insert(name, "value")


@pytest.mark.parametrize("value", ["line\r\nbreak", "nul\x00", "del\x7f"])
def test_invalid_values_are_rejected(value):
    with pytest.raises(ValueError):
        HeaderMap().append("x-test", value)


def test_wrong_value_type_is_rejected():
    with pytest.raises(TypeError):
        HeaderMap().insert("x-test", 1.5)


def test_replace_headers_overrides_and_keeps_multiple_values():
    dst = HeaderMap()
    dst.insert("accept", "text/html")
    dst.insert("x-keep", "kept")
    src = HeaderMap()
    src.append("accept", "application/json")
    src.append("accept", "application/json+hal")
    src.insert("x-new", "added")

    replace_headers(dst, src)

    assert dst.get_all("accept") == ["application/json", "application/json+hal"]
    assert dst.get("x-keep") == "kept"
    assert dst.get("x-new") == "added"


def test_fast_random_is_64_bit_and_varies():
    values = [fast_random() for _ in range(100)]
    assert all(0 <= value < 2**64 for value in values)
    assert len(set(values)) > 90


def _draw_several(count):
    return [fast_random() for _ in range(count)]


def test_fast_random_works_in_other_threads():
    with ThreadPoolExecutor(max_workers=1) as executor:
        values = executor.submit(_draw_several, 10).result()
    assert len(values) == 10
    assert all(0 <= value < 2**64 for value in values)
    assert len(set(values)) > 5

    local_values = [fast_random() for _ in range(10)]
    assert all(0 <= value < 2**64 for value in local_values)
    assert len(set(local_values)) > 5