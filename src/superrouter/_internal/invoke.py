"""Invoke helpers — call sync or async handlers uniformly.

Handlers can be ``def`` or ``async def``, and may return a plain value,
raise, or return an awaitable that later fails. ``settle`` folds all of
those into a single ``Outcome`` so the dispatcher never has to inspect
a handler's return value or catch around it.

Usage::

    from superrouter._internal.invoke import settle

    outcome = await settle(handler, context)
    if isinstance(outcome, Err):
        ...
"""

import inspect
from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True)
class Ok:
    """A handler settled with a value (or was skipped by its scope check)."""

    value: Any = None
    skipped: bool = False

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    """A handler raised, or returned an awaitable that raised."""

    error: Exception

    def unwrap(self) -> Any:
        raise self.error


Outcome: TypeAlias = Ok | Err

SKIPPED = Ok(skipped=True)


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


async def settle(handler: Any, *args: Any, **kwargs: Any) -> Outcome:
    """Call a handler and normalize its result into ``Ok`` or ``Err``.

    Only ``Exception`` is captured. Cancellation and other
    ``BaseException`` subclasses propagate untouched.
    """
    try:
        value = await invoke(handler, *args, **kwargs)
    except Exception as exc:
        return Err(exc)
    return Ok(value)
