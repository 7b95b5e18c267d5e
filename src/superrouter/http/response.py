"""Mutable response built up by routes during a dispatch."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from superrouter.http.message import Message
from superrouter.http.redaction import MASK, Sensitive, render


class Response(Message):
    """The response ``App.process_request()`` hands back.

    Starts as 200 with no headers and an empty body stream. Routes set
    the status, headers, and body in place; ``end()`` flips the one-way
    ``ended`` flag.
    """

    __slots__ = ("_ended", "_status_code")

    def __init__(
        self,
        status_code: int = 200,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        *,
        sensitive: Sensitive | Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        super().__init__(headers=headers, sensitive=sensitive)
        self.status_code = status_code
        self._ended = False
        if body is not None:
            self.set_body(body)

    @property
    def status_code(self) -> int:
        return self._status_code

    @status_code.setter
    def status_code(self, value: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            msg = "status_code must be a number."
            raise TypeError(msg)
        self._status_code = value

    @property
    def ended(self) -> bool:
        return self._ended

    def end(self) -> None:
        """Mark the response finished. Cannot be undone."""
        self._ended = True
        if not self.body.piped and not self.body.ended:
            self.body.end()

    def to_string(self, *, hide_sensitive: bool = True, mask: str = MASK) -> str:
        """Render status, headers, and body with sensitive fields masked."""
        headers, body = self._rendered_headers_and_body(hide_sensitive, mask)
        return render(
            "Response",
            {"statusCode": self.status_code, "headers": headers, "body": body},
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"<Response {self.status_code}>"
