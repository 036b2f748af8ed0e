"""Ordered, case-insensitive multi-valued HTTP header map and helpers."""

from __future__ import annotations

import secrets
import threading
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

_TOKEN_CHARS = frozenset(
    "!#$%&'*+-.^_`|~0123456789"
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
)

_MASK64 = (1 << 64) - 1


def _normalize_name(name: Any) -> str:
    if isinstance(name, (bytes, bytearray)):
        name = bytes(name).decode("latin-1")
    if not isinstance(name, str):
        raise TypeError(f"header name must be str or bytes, not {type(name).__name__}")
    if not name or any(char not in _TOKEN_CHARS for char in name):
        raise ValueError(f"invalid header name: {name!r}")
    return name.lower()


def _normalize_value(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("latin-1")
    elif isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    elif not isinstance(value, str):
        raise TypeError(
            f"header value must be str, bytes or int, not {type(value).__name__}"
        )
    for char in value:
        code = ord(char)
        if (code < 32 and char != "\t") or code == 127:
            raise ValueError(f"invalid header value: {value!r}")
    return value


class HeaderMap:
    """Header names map to one or more values; names keep first-insertion order."""

    def __init__(self, items: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None) -> None:
        self._entries: dict[str, list[str]] = {}
        if items is None:
            return
        pairs = items.items() if isinstance(items, (HeaderMap, Mapping)) else items
        for name, value in pairs:
            self.append(name, value)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the first value for ``name``, or ``default``."""
        try:
            key = _normalize_name(name)
        except (ValueError, TypeError):
            return default
        values = self._entries.get(key)
        return values[0] if values else default

    def get_all(self, name: str) -> list[str]:
        """Return every value for ``name`` in insertion order."""
        try:
            key = _normalize_name(name)
        except (ValueError, TypeError):
            return []
        return list(self._entries.get(key, ()))

    def insert(self, name: str, value: Any) -> list[str]:
        """Set ``name`` to a single value, returning the values it replaced."""
        key = _normalize_name(name)
        normalized = _normalize_value(value)
        previous = self._entries.get(key, [])
        self._entries[key] = [normalized]
        return previous

    def append(self, name: str, value: Any) -> None:
        """Add a value for ``name`` after any existing ones."""
        key = _normalize_name(name)
        self._entries.setdefault(key, []).append(_normalize_value(value))

    def remove(self, name: str) -> str | None:
        """Remove every value for ``name``, returning the first one."""
        try:
            key = _normalize_name(name)
        except (ValueError, TypeError):
            return None
        values = self._entries.pop(key, None)
        return values[0] if values else None

    def setdefault(self, name: str, value: Any) -> str:
        """Insert ``value`` only if ``name`` is absent; return the first value."""
        key = _normalize_name(name)
        if key not in self._entries:
            self._entries[key] = [_normalize_value(value)]
        return self._entries[key][0]

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield every (name, value) pair, repeating names with several values."""
        for name, values in list(self._entries.items()):
            for value in values:
                yield name, value

    def keys(self) -> list[str]:
        """Return the distinct header names."""
        return list(self._entries)

    def copy(self) -> HeaderMap:
        """Return an independent copy."""
        duplicate = HeaderMap()
        duplicate._entries = {name: list(values) for name, values in self._entries.items()}
        return duplicate

    def __contains__(self, name: object) -> bool:
        try:
            return _normalize_name(name) in self._entries
        except (ValueError, TypeError):
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderMap):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"HeaderMap({list(self.items())!r})"


def replace_headers(dst: HeaderMap, src: HeaderMap) -> None:
    """Merge ``src`` into ``dst``: each name in ``src`` replaces its values in ``dst``."""
    for name in src.keys():
        first, *rest = src.get_all(name)
        dst.insert(name, first)
        for value in rest:
            dst.append(name, value)


_rng_state = threading.local()


def _seed() -> int:
    seed = 0
    while seed == 0:
        seed = secrets.randbits(64)
    return seed


def fast_random() -> int:
    """Return a pseudo-random 64-bit integer from a per-thread xorshift generator."""
    state = getattr(_rng_state, "value", None)
    if state is None:
        state = _seed()
    state ^= state >> 12
    state ^= (state << 25) & _MASK64
    state ^= state >> 27
    _rng_state.value = state
    return (state * 0x2545_F491_4F6C_DD1D) & _MASK64