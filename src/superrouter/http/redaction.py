"""Sensitive-field masking for string rendering.

Rendering works on copies only: the header map and body value a
message holds are never touched.
"""

import copy
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

MASK = "**********"


@dataclass(frozen=True, slots=True)
class Sensitive:
    """Header names and top-level body keys to mask when rendering.

    Usage::

        response.sensitive = Sensitive(headers=("authorization",), body=("password",))
    """

    headers: tuple[str, ...] = ()
    body: tuple[str, ...] = ()

    @classmethod
    def coerce(cls, value: "Sensitive | Mapping[str, Iterable[str]] | None") -> "Sensitive | None":
        """Accept a ``Sensitive`` or a ``{"headers": [...], "body": [...]}`` mapping."""
        if value is None or isinstance(value, Sensitive):
            return value
        if isinstance(value, Mapping):
            return cls(
                headers=tuple(value.get("headers") or ()),
                body=tuple(value.get("body") or ()),
            )
        msg = "sensitive must be a Sensitive instance or a mapping."
        raise TypeError(msg)


def redact_headers(headers: Mapping[str, str], keys: Iterable[str], mask: str = MASK) -> dict[str, str]:
    """Return a copy of *headers* with every present *keys* entry masked."""
    result = dict(headers)
    for key in keys:
        name = key.lower()
        if result.get(name) is not None:
            result[name] = mask
    return result


def redact_body(body: Any, keys: Iterable[str], mask: str = MASK) -> Any:
    """Return a renderable copy of *body* with top-level *keys* masked.

    A string body holding a JSON object is decoded and masked as an
    object. Any other string is returned verbatim.
    """
    keys = tuple(keys)
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", "replace")
    if isinstance(body, str):
        try:
            decoded = json.loads(body)
        except ValueError:
            return body
        if not isinstance(decoded, dict):
            return body
        body = decoded
    elif isinstance(body, Mapping):
        body = copy.deepcopy(dict(body))
    else:
        return body

    for key in keys:
        if body.get(key) is not None:
            body[key] = mask
    return body


def render(label: str, fields: Mapping[str, Any]) -> str:
    """``"<label>: <indented JSON>"``; unserializable values render via ``str``."""
    return f"{label}: {json.dumps(fields, indent=2, default=str)}"
