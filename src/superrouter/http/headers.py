"""Mutable, case-insensitive headers.

Implements ``MutableMapping[str, str]``. Keys are normalized to lowercase
on every read, write, and delete; insertion order is preserved so
rendering enumerates headers in the order they were first set.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping


class Headers(MutableMapping[str, str]):
    """Case-insensitive header storage.

    ``headers["Content-Type"]`` and ``headers["content-type"]`` address
    the same entry. Values must be strings.
    """

    __slots__ = ("_store",)

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._store: dict[str, str] = {}
        if initial:
            for key, value in initial.items():
                self[key] = value

    def __getitem__(self, key: str) -> str:
        return self._store[_key(key)]

    def __setitem__(self, key: str, value: str) -> None:
        if not isinstance(key, str):
            msg = "First argument: key must be a string."
            raise TypeError(msg)
        if not isinstance(value, str):
            msg = "Second argument: value must be a string."
            raise TypeError(msg)
        self._store[key.lower()] = value

    def __delitem__(self, key: str) -> None:
        del self._store[_key(key)]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return key.lower() in self._store

    def __iter__(self) -> Iterator[str]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"Headers({self._store!r})"

    def to_dict(self) -> dict[str, str]:
        """Return a plain ``dict`` snapshot with lowercase keys."""
        return dict(self._store)

    def copy(self) -> Headers:
        return Headers(self._store)


def _key(key: object) -> str:
    if not isinstance(key, str):
        raise KeyError(key)
    return key.lower()
