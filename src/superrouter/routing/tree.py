"""Exact-match route index with trie-based path lookup.

Only deterministic routes (literal and parameter segments) can be
indexed. Lookup walks one trie level per path segment, preferring a
literal child over the parameter slot, so ``/users/new`` wins over
``/users/:id`` for the path ``/users/new``.
"""

import logging
from dataclasses import dataclass

from superrouter._internal.types import RouteInput
from superrouter.config import AppConfig
from superrouter.errors import ConfigurationError
from superrouter.http.methods import ALL, split_path
from superrouter.http.request import Request
from superrouter.routing.route import Route, to_route

logger = logging.getLogger("superrouter.routing")


class _TrieNode:
    """A node in the route trie. Mutable until the tree freezes."""

    __slots__ = ("children", "param_child", "routes_by_method")

    def __init__(self) -> None:
        # Literal segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one parameter name per level)
        self.param_child: _ParamEdge | None = None
        # Routes ending at this node, keyed by method ("all" = any method)
        self.routes_by_method: dict[str, Route] = {}


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    node: _TrieNode


class RouteTree:
    """Trie of deterministic routes keyed by method at each leaf.

    Usage::

        tree = RouteTree()
        tree.add_route({"path": "/users/:id", "method": "get", "handler": show_user})
        tree.freeze()
        route = tree.find(request)  # fills request.route_params on success
    """

    __slots__ = ("_config", "_frozen", "_root")

    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or AppConfig()
        self._root = _TrieNode()
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """End the wiring phase. No more routes can be added."""
        self._frozen = True

    def add_route(self, route: RouteInput) -> Route:
        """Index *route* under its method and path.

        Raises ``ConfigurationError`` if the tree is frozen, the route has
        no path, its pattern has a wildcard or optional group, a parameter
        name conflicts with one already registered at the same position,
        or the method + path is taken and duplicates are rejected.
        """
        if self._frozen:
            msg = "Cannot add routes after the route tree is frozen."
            raise ConfigurationError(msg)

        route = to_route(route)
        if route.pattern is None:
            msg = "Routes added to a RouteTree must declare a path."
            raise ConfigurationError(msg)
        if not route.pattern.is_deterministic:
            msg = (
                f"Wildcards and optional groups are not supported for routes: "
                f"{route.pattern.source!r}"
            )
            raise ConfigurationError(msg)

        self._check_param_names(route)

        node = self._root
        for seg in route.pattern.segments:
            if seg.param_name is not None:
                if node.param_child is None:
                    node.param_child = _ParamEdge(param_name=seg.param_name, node=_TrieNode())
                node = node.param_child.node
            else:
                node = node.children.setdefault(seg.value, _TrieNode())

        key = route.method or ALL
        existing = node.routes_by_method.get(key)
        if existing is not None:
            if self._config.duplicate_routes == "reject":
                msg = f"Route {route.describe()} is already registered."
                raise ConfigurationError(msg)
            logger.warning("Route %s replaces an earlier registration", route.describe())
        node.routes_by_method[key] = route
        return route

    def _check_param_names(self, route: Route) -> None:
        """Reject a parameter whose slot already exists under another name."""
        assert route.pattern is not None
        node: _TrieNode | None = self._root
        for seg in route.pattern.segments:
            if node is None:
                return
            if seg.param_name is None:
                node = node.children.get(seg.value)
                continue
            edge = node.param_child
            if edge is None:
                return
            if edge.param_name != seg.param_name:
                msg = (
                    f"Parameter ':{seg.param_name}' in {route.pattern.source!r} conflicts "
                    f"with ':{edge.param_name}' already registered at the same position."
                )
                raise ConfigurationError(msg)
            node = edge.node

    @property
    def routes(self) -> list[Route]:
        """Return every registered route once, in trie order."""
        seen: set[int] = set()
        result: list[Route] = []
        self._collect_routes(self._root, seen, result)
        return result

    def _collect_routes(self, node: _TrieNode, seen: set[int], result: list[Route]) -> None:
        for route in node.routes_by_method.values():
            if id(route) not in seen:
                seen.add(id(route))
                result.append(route)
        for child in node.children.values():
            self._collect_routes(child, seen, result)
        if node.param_child is not None:
            self._collect_routes(node.param_child.node, seen, result)

    def find(self, request: Request) -> Route | None:
        """Return the route for *request*, or ``None``.

        On success ``request.route_params`` is replaced with the parameters
        captured for this route. On failure the request is untouched.
        """
        parts = split_path(request.path)
        result = self._match_node(self._root, parts, 0, {}, request.method)
        if result is None:
            return None
        route, params = result
        request.route_params = dict(params)
        return route

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
        method: str,
    ) -> tuple[Route, dict[str, str]] | None:
        """Recursively match path parts against the trie."""
        # All parts consumed: look up the method at this node
        if index == len(parts):
            route = node.routes_by_method.get(method) or node.routes_by_method.get(ALL)
            if route is None:
                return None
            return route, params

        part = parts[index]

        # 1. Literal child first
        child = node.children.get(part.lower())
        if child is not None:
            result = self._match_node(child, parts, index + 1, params, method)
            if result is not None:
                return result

        # 2. Parameter slot
        if node.param_child is not None:
            edge = node.param_child
            new_params = {**params, edge.param_name: part}
            return self._match_node(edge.node, parts, index + 1, new_params, method)

        return None
