"""Path templates compiled into segment matchers.

Template syntax::

    /users              literal segments (matched case-insensitively)
    /users/:id          named parameter, one segment
    /users/{id}         same parameter, brace spelling
    /files/*/raw        wildcard, one segment, not captured
    /users(/:id)        trailing optional group, absent or fully present

Only patterns without wildcards or optional groups are deterministic,
and only deterministic patterns can be indexed by a ``RouteTree``.
"""

from dataclasses import dataclass, field
from enum import Enum

from superrouter.errors import ConfigurationError
from superrouter.http.methods import split_path


class SegmentKind(Enum):
    LITERAL = "literal"
    PARAM = "param"
    WILDCARD = "wildcard"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a path template.

    Literal:  ``users``  (value="users")
    Param:    ``:id``    (kind=PARAM, param_name="id")
    Wildcard: ``*``      (kind=WILDCARD)
    """

    value: str
    kind: SegmentKind = SegmentKind.LITERAL
    param_name: str | None = None

    @property
    def is_param(self) -> bool:
        return self.kind is SegmentKind.PARAM

    @property
    def is_wildcard(self) -> bool:
        return self.kind is SegmentKind.WILDCARD

    def accepts(self, part: str) -> bool:
        if self.kind is SegmentKind.LITERAL:
            return part.lower() == self.value
        return True


@dataclass(frozen=True, slots=True)
class PatternMatch:
    """Result of matching a path. Truthy only when the path matched."""

    matched: bool
    params: dict[str, str] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return self.matched


NO_MATCH = PatternMatch(matched=False)


@dataclass(frozen=True, slots=True)
class PathPattern:
    """A compiled path template. Build with ``compile_pattern()``."""

    source: str
    segments: tuple[PathSegment, ...]
    optional: tuple[PathSegment, ...] | None = None

    @property
    def is_deterministic(self) -> bool:
        """True when the pattern has no wildcard and no optional group."""
        return self.optional is None and not any(s.is_wildcard for s in self.segments)

    @property
    def param_names(self) -> tuple[str, ...]:
        every = self.segments + (self.optional or ())
        return tuple(s.param_name for s in every if s.param_name is not None)

    def match(self, path: str) -> PatternMatch:
        """Match *path* segment by segment, capturing parameters."""
        parts = split_path(path)
        required = len(self.segments)
        if len(parts) < required:
            return NO_MATCH

        params: dict[str, str] = {}
        if not _match_all(self.segments, parts[:required], params):
            return NO_MATCH

        rest = parts[required:]
        if not rest:
            return PatternMatch(matched=True, params=params)
        if self.optional is None or len(rest) != len(self.optional):
            return NO_MATCH
        if not _match_all(self.optional, rest, params):
            return NO_MATCH
        return PatternMatch(matched=True, params=params)

    def __str__(self) -> str:
        return self.source


def _match_all(segments: tuple[PathSegment, ...], parts: list[str], params: dict[str, str]) -> bool:
    for segment, part in zip(segments, parts, strict=True):
        if not segment.accepts(part):
            return False
        if segment.param_name is not None:
            params[segment.param_name] = part
    return True


def parse_segment(part: str, template: str) -> PathSegment:
    """Parse one ``/``-delimited piece of *template*."""
    if part == "*":
        return PathSegment(value=part, kind=SegmentKind.WILDCARD)

    name: str | None = None
    if part.startswith(":"):
        name = part[1:]
    elif part.startswith("{") and part.endswith("}"):
        name = part[1:-1]

    if name is None:
        if "(" in part or ")" in part:
            msg = f"Optional groups must close the pattern: {template!r}"
            raise ConfigurationError(msg)
        return PathSegment(value=part.lower())

    if not name.isidentifier():
        msg = f"Invalid parameter name {name!r} in pattern {template!r}"
        raise ConfigurationError(msg)
    return PathSegment(value=part, kind=SegmentKind.PARAM, param_name=name)


def parse_segments(path: str, template: str) -> tuple[PathSegment, ...]:
    return tuple(parse_segment(part, template) for part in split_path(path))


def compile_pattern(template: str) -> PathPattern:
    """Compile *template* into a ``PathPattern``.

    Raises ``ConfigurationError`` for a misplaced or repeated optional
    group, an empty group, an invalid parameter name, or a parameter
    name used twice.
    """
    if not isinstance(template, str):
        msg = f"path must be a string, got {type(template).__name__}"
        raise ConfigurationError(msg)

    open_at = template.find("(")
    if open_at == -1:
        if ")" in template:
            msg = f"Unbalanced ')' in pattern {template!r}"
            raise ConfigurationError(msg)
        segments = parse_segments(template, template)
        optional = None
    else:
        inner = template[open_at + 1 : -1]
        if not template.endswith(")") or "(" in inner or ")" in inner:
            msg = f"Only one optional group is allowed, at the end of the pattern: {template!r}"
            raise ConfigurationError(msg)
        segments = parse_segments(template[:open_at], template)
        optional = parse_segments(inner, template)
        if not optional:
            msg = f"Empty optional group in pattern {template!r}"
            raise ConfigurationError(msg)

    pattern = PathPattern(source=template, segments=segments, optional=optional)
    names = pattern.param_names
    if len(names) != len(set(names)):
        msg = f"Duplicate parameter name in pattern {template!r}"
        raise ConfigurationError(msg)
    return pattern
