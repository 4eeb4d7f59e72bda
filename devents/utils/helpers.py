"""
Small stateless helpers shared by the event engine.
"""

import inspect
import itertools
import types
from collections.abc import Sized
from typing import Any, Callable, Optional

from devents.core.types.event_types import CallState

_id_counter = itertools.count(1)


def unique_id(prefix: Optional[str] = None) -> str:
    """Generate an id that is unique within the running process."""
    id_ = str(next(_id_counter))
    return f"{prefix}{id_}" if prefix else id_


def is_empty(obj: Any) -> bool:
    """True for None and for any container, string or mapping with no items."""
    if obj is None:
        return True
    return isinstance(obj, Sized) and len(obj) == 0


def bind(func: Callable[..., Any], context: Any) -> Callable[..., Any]:
    """
    Bind a plain function to `context` as if it were a method of it.

    Bound methods, partials and other callables already carry their own
    receiver and are returned unchanged, as is everything when `context`
    is None.
    """
    if context is None or not inspect.isfunction(func):
        return func
    return types.MethodType(func, context)


class Once:
    """
    Wraps a callable so it runs at most one time.

    Later calls return the result of the first call without invoking the
    wrapped function again.
    """

    def __init__(self, func: Callable[..., Any]):
        self.func = func
        self.state = CallState.ARMED
        self.result: Any = None

    @property
    def fired(self) -> bool:
        return self.state is CallState.FIRED

    def __call__(self, *args, **kwargs):
        if self.state is CallState.ARMED:
            # Flip first so re-entrant calls made by func are no-ops.
            self.state = CallState.FIRED
            self.result = self.func(*args, **kwargs)
        return self.result

    def __repr__(self) -> str:
        return f"<Once {self.func!r} {self.state.value}>"
