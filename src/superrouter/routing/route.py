"""Route — a handler unit with optional method and path scope."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from superrouter._internal.invoke import SKIPPED, Outcome, settle
from superrouter._internal.types import Handler
from superrouter.errors import ConfigurationError
from superrouter.http.methods import ALL, METHODS
from superrouter.routing.pattern import PathPattern, compile_pattern

if TYPE_CHECKING:
    from superrouter.context import DispatchContext
    from superrouter.http.request import Request


def normalize_route_method(method: str | None) -> str | None:
    """Lowercase *method*; ``None`` and ``"all"`` mean unconstrained.

    Raises ``ConfigurationError`` for anything that is not a supported verb.
    """
    if method is None:
        return None
    if not isinstance(method, str):
        msg = f"method must be a string, got {type(method).__name__}"
        raise ConfigurationError(msg)
    lowered = method.lower()
    if lowered == ALL:
        return None
    if lowered not in METHODS:
        allowed = ", ".join(sorted(METHODS))
        msg = f"Unsupported method {method!r}. Expected one of: {allowed}, or {ALL!r}."
        raise ConfigurationError(msg)
    return lowered


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen handler unit.

    With no ``method`` and no ``path`` the route runs for every request.
    Otherwise it runs only when the request is in scope and is silently
    skipped when it is not::

        Route(handler=load_user, method="get", path="/users/:id")
        Route(handler=log_everything)
    """

    handler: Handler
    method: str | None = None
    path: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False)
    pattern: PathPattern | None = field(init=False, default=None, compare=False)

    def __post_init__(self) -> None:
        if not callable(self.handler):
            msg = f"handler must be callable, got {type(self.handler).__name__}"
            raise ConfigurationError(msg)
        object.__setattr__(self, "method", normalize_route_method(self.method))
        if self.path is not None:
            object.__setattr__(self, "pattern", compile_pattern(self.path))
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> Route:
        """Build a route from ``{"handler", "path"?, "method"?, **metadata}``.

        Keys other than ``handler``, ``path``, and ``method`` are kept in
        ``metadata``.
        """
        if not isinstance(options, Mapping):
            msg = f"route options must be a mapping, got {type(options).__name__}"
            raise ConfigurationError(msg)
        if "handler" not in options:
            msg = "route options require a 'handler'"
            raise ConfigurationError(msg)
        rest = {k: v for k, v in options.items() if k not in ("handler", "path", "method")}
        return cls(
            handler=options["handler"],
            method=options.get("method"),
            path=options.get("path"),
            metadata=rest,
        )

    # -- Dispatch --

    def in_scope(self, request: Request) -> bool:
        """True if this route should run for *request*."""
        if self.method is not None and self.method != request.method:
            return False
        if self.pattern is not None and not self.pattern.match(request.path):
            return False
        return True

    async def execute(self, context: DispatchContext) -> Outcome:
        """Run the handler if the request is in scope.

        Returns ``Ok(value)`` on success, ``Err(exc)`` if the handler raised
        or its awaitable failed, and ``SKIPPED`` when out of scope.
        """
        if not self.in_scope(context.request):
            return SKIPPED
        return await settle(self.handler, context)

    def describe(self) -> str:
        method = (self.method or ALL).upper()
        return f"{method} {self.path or '*'}"


def to_route(value: Route | Callable[..., Any] | Mapping[str, Any]) -> Route:
    """Normalize registration input into a ``Route``.

    - ``Route`` passes through unchanged
    - a bare callable becomes ``Route(handler=value)``
    - a mapping goes through ``Route.from_options``
    """
    if isinstance(value, Route):
        return value
    if isinstance(value, Mapping):
        return Route.from_options(value)
    if callable(value):
        return Route(handler=value)
    msg = f"Cannot build a route from {type(value).__name__}"
    raise ConfigurationError(msg)
