"""Per-dispatch context.

Provides:
- ``DispatchContext``: what every handler receives (request, response,
  and the current error once the dispatch has entered error mode).
- ``request_var``: the ``Request`` currently being dispatched.

``request_var`` is set by ``App.process_request()`` and reset after
each call. Outside a dispatch, ``get_request()`` raises ``LookupError``.

Thread safety:
    ``ContextVar`` is task-local under asyncio, so concurrent
    ``process_request()`` calls never see each other's request.
"""

from contextvars import ContextVar
from dataclasses import dataclass

from superrouter.http.request import Request
from superrouter.http.response import Response


@dataclass(slots=True)
class DispatchContext:
    """The argument passed to every route handler.

    ``error`` is ``None`` while regular routes run. In error mode it
    holds the current error and is updated whenever an error route
    fails.
    """

    request: Request
    response: Response
    error: Exception | None = None


request_var: ContextVar[Request] = ContextVar("superrouter_request")
"""The current request. Set by ``App.process_request()`` before dispatch."""


def get_request() -> Request:
    """Return the request being dispatched.

    Raises ``LookupError`` if called outside ``App.process_request()``.
    """
    return request_var.get()
