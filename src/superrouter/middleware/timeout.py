"""Timeout wrapper for route handlers.

The dispatcher has no timeouts of its own. Wrap a handler to race it
against a timer; expiry becomes an ordinary failure and the dispatch
enters error mode with a ``RouteTimeout``::

    app.use(timeout(2.5, fetch_upstream))
"""

import functools
from typing import Any

import anyio

from superrouter._internal.invoke import invoke
from superrouter._internal.types import Handler
from superrouter.context import DispatchContext
from superrouter.errors import ConfigurationError, RouteTimeout


def timeout(seconds: float, handler: Handler) -> Handler:
    """Return a handler that fails with ``RouteTimeout`` after *seconds*."""
    if seconds <= 0:
        msg = f"timeout must be positive, got {seconds!r}"
        raise ConfigurationError(msg)

    @functools.wraps(handler)
    async def wrapper(context: DispatchContext) -> Any:
        with anyio.move_on_after(seconds):
            return await invoke(handler, context)
        raise RouteTimeout(seconds)

    return wrapper
