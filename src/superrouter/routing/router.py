"""Router — exposes a RouteTree as two App routes.

``match`` finds the endpoint for the request and stores it on
``request.matched_route``; ``execute`` runs whatever was matched. Any
routes registered between the two on the App see the matched route
(and its ``route_params``) before the endpoint runs.
"""

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from superrouter._internal.types import Handler, RouteInput
from superrouter.config import AppConfig
from superrouter.context import DispatchContext
from superrouter.routing.route import Route
from superrouter.routing.tree import RouteTree

if TYPE_CHECKING:
    from superrouter.app import App

logger = logging.getLogger("superrouter.routing")


class Router:
    """Endpoint routing on top of a ``RouteTree``.

    Usage::

        router = Router()

        @router.route("/users/:id", method="get")
        async def show_user(ctx):
            ctx.response.set_body(await load_user(ctx.request.route_params["id"]))

        app.use(router.match)
        app.use(router.execute)    # or: router.mount(app)
    """

    __slots__ = ("_tree",)

    def __init__(self, config: AppConfig | None = None) -> None:
        self._tree = RouteTree(config)

    @property
    def tree(self) -> RouteTree:
        return self._tree

    def add_route(self, route: RouteInput) -> Route:
        """Add an endpoint. Routes must be deterministic (no ``*`` or ``(...)``).

        Any parameters in the path are available on
        ``request.route_params`` when the handler runs. Extra option keys
        end up in ``route.metadata`` and are visible through
        ``request.matched_route``.
        """
        return self._tree.add_route(route)

    def route(
        self,
        path: str,
        *,
        method: str | None = None,
        **metadata: Any,
    ) -> Callable[[Handler], Handler]:
        """Register an endpoint via decorator."""

        def decorator(func: Handler) -> Handler:
            self.add_route(Route(handler=func, method=method, path=path, metadata=metadata))
            return func

        return decorator

    def match(self, context: DispatchContext) -> None:
        """Route handler: assign the matching endpoint to ``request.matched_route``.

        No match is not an error; ``matched_route`` is simply ``None``.
        """
        if not self._tree.frozen:
            self._tree.freeze()
        request = context.request
        request.matched_route = self._tree.find(request)
        if request.matched_route is None:
            logger.debug("No route matches %s %s", request.method, request.path)

    async def execute(self, context: DispatchContext) -> Any:
        """Route handler: run the matched endpoint, if any.

        A failing endpoint fails this route, so the App enters error mode
        with the endpoint's error.
        """
        route = context.request.matched_route
        if route is None:
            return None
        outcome = await route.execute(context)
        return outcome.unwrap()

    def mount(self, app: "App") -> None:
        """Register ``match`` then ``execute`` on *app*."""
        app.use(self.match)
        app.use(self.execute)
