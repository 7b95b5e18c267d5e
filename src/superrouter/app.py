"""superrouter application class.

Mutable during setup (route and error-route registration).
Frozen when ``freeze()`` is called or ``process_request()`` is first awaited.
"""

import logging
import threading
from collections.abc import Mapping
from typing import Any

from superrouter._internal.invoke import Err
from superrouter._internal.types import RouteInput
from superrouter.config import AppConfig
from superrouter.context import DispatchContext, request_var
from superrouter.errors import ConfigurationError
from superrouter.http.request import Request
from superrouter.http.response import Response
from superrouter.routing.route import Route, to_route

logger = logging.getLogger("superrouter.app")


class App:
    """The dispatcher: an ordered list of routes and an ordered list of error routes.

    Each ``process_request()`` call runs the routes one after another
    against a single request/response pair. The first failure stops
    the regular routes and hands the error to the error routes, which
    also run in order; an error route that fails replaces the current
    error for the ones after it.

    Thread safety:
        Registration is single-threaded setup. The freeze transition
        uses a Lock + double-check so exactly one caller turns the
        route lists into tuples, even if the first requests arrive
        concurrently. After that nothing shared is mutated.
    """

    __slots__ = (
        "_error_routes",
        "_freeze_lock",
        "_frozen",
        "_routes",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._routes: list[Route] | tuple[Route, ...] = []
        self._error_routes: list[Route] | tuple[Route, ...] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    # -- Registration --

    def use(self, route: RouteInput) -> Route:
        """Append a regular route.

        Accepts a ``Route``, a bare handler, or route options::

            app.use(log_request)
            app.use({"path": "/admin/*", "handler": require_admin})
        """
        self._check_not_frozen()
        normalized = to_route(route)
        self._routes.append(normalized)  # type: ignore[union-attr]
        return normalized

    def use_error(self, route: RouteInput) -> Route:
        """Append an error route.

        Error routes see the current error as ``context.error``. A route
        scoped to another method or path is skipped and leaves the error
        as it was.
        """
        self._check_not_frozen()
        normalized = to_route(route)
        self._error_routes.append(normalized)  # type: ignore[union-attr]
        return normalized

    @property
    def routes(self) -> tuple[Route, ...]:
        return tuple(self._routes)

    @property
    def error_routes(self) -> tuple[Route, ...]:
        return tuple(self._error_routes)

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- Dispatch --

    async def process_request(self, request: Request | Mapping[str, Any]) -> Response:
        """Run *request* through the routes and return the response.

        Raises the final error if dispatch entered error mode and the
        configured ``error_policy`` does not recover from it.
        """
        self._ensure_frozen()
        request = _as_request(request)
        response = Response()
        context = DispatchContext(request=request, response=response)

        token = request_var.set(request)
        try:
            error = await self._run_routes(context)
            if error is None:
                return response
            return await self._run_error_routes(context, error)
        finally:
            request_var.reset(token)

    async def _run_routes(self, context: DispatchContext) -> Exception | None:
        """Run regular routes until one fails. Returns that failure, if any."""
        for route in self._routes:
            outcome = await route.execute(context)
            if isinstance(outcome, Err):
                if self.config.lifecycle_logging:
                    logger.debug(
                        "%s %s entered error mode at %s: %s",
                        context.request.method,
                        context.request.path,
                        route.describe(),
                        type(outcome.error).__name__,
                    )
                return outcome.error
            if outcome.skipped:
                logger.debug("Skipped %s", route.describe())
        return None

    async def _run_error_routes(self, context: DispatchContext, error: Exception) -> Response:
        context.error = error
        recovered = False
        for route in self._error_routes:
            outcome = await route.execute(context)
            if isinstance(outcome, Err):
                if self.config.lifecycle_logging:
                    logger.debug(
                        "Error route %s replaced %s with %s",
                        route.describe(),
                        type(context.error).__name__,
                        type(outcome.error).__name__,
                    )
                context.error = outcome.error
                recovered = False
            elif outcome.skipped:
                logger.debug("Skipped error route %s", route.describe())
            else:
                recovered = True

        if recovered and self.config.error_policy == "recover":
            return context.response
        raise context.error

    # -- Internal --

    def freeze(self) -> None:
        """End the wiring phase. Further registration raises ``ConfigurationError``."""
        self._ensure_frozen()

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._routes = tuple(self._routes)
            self._error_routes = tuple(self._error_routes)
            self._frozen = True
            if self.config.lifecycle_logging:
                logger.info(
                    "App frozen with %d routes and %d error routes",
                    len(self._routes),
                    len(self._error_routes),
                )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot register routes after the app has started dispatching."
            raise ConfigurationError(msg)


def _as_request(value: Request | Mapping[str, Any]) -> Request:
    """Use *value* as is when it is a ``Request``, otherwise build one from it."""
    if isinstance(value, Request):
        return value
    if isinstance(value, Mapping):
        return Request(**value)
    msg = f"process_request expects a Request or a mapping, got {type(value).__name__}"
    raise TypeError(msg)
