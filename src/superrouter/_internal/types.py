"""Shared type aliases used across superrouter modules."""

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from superrouter.routing.route import Route

# Route handler: receives a DispatchContext, returns a value or an awaitable
Handler: TypeAlias = Callable[..., Any]

# Anything App.use() / RouteTree.add_route() accepts
RouteInput: TypeAlias = "Route | Handler | Mapping[str, Any]"
