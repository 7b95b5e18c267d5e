"""Routing — path patterns, scoped routes, and the exact-match route tree.

Routes are registered during setup; the tree freezes before the first
lookup and is read-only from then on.
"""

from superrouter.routing.pattern import PathPattern, PatternMatch, compile_pattern
from superrouter.routing.route import Route, to_route
from superrouter.routing.router import Router
from superrouter.routing.tree import RouteTree

__all__ = [
    "PathPattern",
    "PatternMatch",
    "Route",
    "RouteTree",
    "Router",
    "compile_pattern",
    "to_route",
]
