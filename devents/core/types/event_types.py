from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from devents.core.events.listening import Listening


# Reserved channel whose handlers receive every fired event's name first.
ALL_EVENTS = "all"

EventCallback = Callable[..., Any]
EventMap = Mapping[str, EventCallback]
EventName = Union[str, EventMap]


class CallState(str, Enum):
    """State of a single-call wrapper."""

    ARMED = "armed"
    FIRED = "fired"


@dataclass(frozen=True)
class HandlerRecord:
    """
    One registered handler.

    `context` is what the caller passed to `on`; it is matched on removal
    and plain functions are bound to it on dispatch. `ctx` is the context when
    one was given, otherwise the emitter itself. It is kept for
    introspection only; dispatch binds plain functions to `context`.
    `listening` links the record back to the relationship that created it,
    if any.
    """

    callback: EventCallback
    context: Any = None
    ctx: Any = None
    listening: Optional["Listening"] = None


HandlerMap = Dict[str, List[HandlerRecord]]

__all__ = [
    "ALL_EVENTS",
    "CallState",
    "EventCallback",
    "EventMap",
    "EventName",
    "HandlerMap",
    "HandlerRecord",
]
