"""Header and body behavior shared by Request and Response."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from superrouter.http.body import BodyStream, encode_value, is_stream
from superrouter.http.headers import Headers
from superrouter.http.redaction import Sensitive, redact_body, redact_headers

_UNSET: Any = object()


class Message:
    """Case-insensitive headers plus a replaceable body.

    The body is always a ``BodyStream``. ``set_body()`` swaps in a fresh
    stream, closing the previous one so nothing piped into it earlier
    can leak through:

    - an async iterable becomes the upstream of the new stream
    - any other value is remembered (``get_body()`` returns it) and the
      new stream is ended with its encoded bytes
    """

    __slots__ = ("_assigned", "_body", "_headers", "_sensitive")

    def __init__(
        self,
        headers: Mapping[str, str] | None = None,
        sensitive: Sensitive | Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        if headers is not None and not isinstance(headers, Mapping):
            msg = "headers must be a mapping."
            raise TypeError(msg)
        self._headers = Headers(headers)
        self._body = BodyStream()
        self._assigned: Any = _UNSET
        self._sensitive = Sensitive.coerce(sensitive)

    # -- Headers --

    @property
    def headers(self) -> Headers:
        return self._headers

    def get_header(self, key: str) -> str | None:
        """Return the header value for *key* (any case), or ``None``."""
        return self._headers.get(key)

    def set_header(self, key: str, value: str) -> None:
        self._headers[key] = value

    def clear_header(self, key: str) -> None:
        """Remove *key* if present."""
        self._headers.pop(key, None)

    # -- Body --

    @property
    def body(self) -> BodyStream:
        """The current body stream. Replace it with ``set_body()``."""
        return self._body

    def set_body(self, value: Any) -> None:
        self._body.close()
        if is_stream(value):
            self._body = BodyStream(source=value)
            self._assigned = _UNSET
            return
        stream = BodyStream()
        stream.end(encode_value(value))
        self._body = stream
        self._assigned = value

    def get_body(self) -> Any:
        """The last assigned non-stream value, else the body stream."""
        if self._assigned is _UNSET:
            return self._body
        return self._assigned

    def close(self) -> None:
        """Finish the body stream and detach any upstream."""
        self._body.close()

    # -- Rendering --

    @property
    def sensitive(self) -> Sensitive | None:
        return self._sensitive

    @sensitive.setter
    def sensitive(self, value: Sensitive | Mapping[str, Iterable[str]] | None) -> None:
        self._sensitive = Sensitive.coerce(value)

    def _rendered_headers_and_body(self, hide_sensitive: bool, mask: str) -> tuple[dict[str, str], Any]:
        headers = self._headers.to_dict()
        body = None if self._assigned is _UNSET else self._assigned
        if hide_sensitive and self._sensitive is not None:
            if self._sensitive.headers:
                headers = redact_headers(headers, self._sensitive.headers, mask)
            if self._sensitive.body:
                body = redact_body(body, self._sensitive.body, mask)
        return headers, body
