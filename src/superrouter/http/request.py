"""Mutable request shared by every route in a dispatch.

Routes communicate through the request: a matcher fills in
``route_params`` and ``matched_route``, content negotiation replaces the
body, and later routes see every change made before them.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from superrouter.http.methods import is_valid_method, normalize_method, normalize_path
from superrouter.http.message import Message
from superrouter.http.redaction import MASK, Sensitive, render

if TYPE_CHECKING:
    from superrouter.routing.route import Route


class Request(Message):
    """A request flowing through an ``App``.

    ``method`` and ``path`` are normalized to lowercase on every
    assignment. ``original_path`` is the path exactly as first given and
    never changes, even when a request is copied with ``from_request``.

    Fields not known to the request are kept in ``extra``.
    """

    __slots__ = ("_method", "_original_path", "_path", "extra", "matched_route", "route_params")

    def __init__(
        self,
        path: str,
        method: str,
        headers: Mapping[str, str] | None = None,
        body: AsyncIterable[bytes | str] | None = None,
        *,
        original_path: str | None = None,
        sensitive: Sensitive | Mapping[str, Iterable[str]] | None = None,
        **extra: Any,
    ) -> None:
        super().__init__(headers=headers, sensitive=sensitive)
        self.path = path
        self.method = method
        self._original_path: str = original_path if original_path is not None else path
        if body is not None:
            if not isinstance(body, AsyncIterable):
                msg = "body must be a readable stream."
                raise TypeError(msg)
            self.body.pipe_from(body)
        self.route_params: dict[str, str] = {}
        self.matched_route: Route | None = None
        self.extra: dict[str, Any] = dict(extra)

    @classmethod
    def from_request(cls, other: Request) -> Request:
        """Copy *other*, keeping its original path and reading from its body."""
        request = cls(
            other.path,
            other.method,
            other.headers,
            original_path=other.original_path,
            sensitive=other.sensitive,
            **other.extra,
        )
        request.set_body(other.get_body())
        return request

    # -- Normalized fields --

    @property
    def path(self) -> str:
        return self._path

    @path.setter
    def path(self, path: str) -> None:
        if not isinstance(path, str):
            msg = "path must be a string."
            raise TypeError(msg)
        self._path = normalize_path(path)

    @property
    def original_path(self) -> str:
        """The path this request was first constructed with."""
        return self._original_path

    @property
    def method(self) -> str:
        """The request method, lowercased."""
        return self._method

    @method.setter
    def method(self, method: str) -> None:
        if not isinstance(method, str):
            msg = "method must be a string."
            raise TypeError(msg)
        if not is_valid_method(method):
            msg = f"method must be a valid method string, got {method!r}."
            raise ValueError(msg)
        self._method = normalize_method(method)

    # -- Rendering --

    def to_string(self, *, hide_sensitive: bool = True, mask: str = MASK) -> str:
        """Render method, path, headers, and body with sensitive fields masked."""
        headers, body = self._rendered_headers_and_body(hide_sensitive, mask)
        return render(
            "Request",
            {"method": self.method, "path": self.path, "headers": headers, "body": body},
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<Request {self.method.upper()} {self.path}>"
