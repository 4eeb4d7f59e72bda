"""
Cross-object listening tracker.

A `Listening` stands for "listener L is listening to target T". L keeps it
in `_listening_to`, T keeps it in `_listeners`, and `cleanup()` removes both
references once nothing remains subscribed. Without it, a listener that
stops listening would stay reachable from the target forever.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Optional

from devents.config.settings import get_settings
from devents.core.events.api import events_api
from devents.core.events.handlers import off_api, on_api
from devents.core.types.event_types import EventName, HandlerMap
from devents.utils.logging import Logger

logger = Logger("Listening", "listening", get_settings().log_level)

# Set only while `listen_to` runs `target.on(...)`; read by `Events.on`.
_current_listening: ContextVar[Optional["Listening"]] = ContextVar(
    "devents_current_listening", default=None
)


def current_listening() -> Optional["Listening"]:
    return _current_listening.get()


@contextmanager
def establishing(listening: "Listening") -> Iterator["Listening"]:
    """Mark `listening` as the relationship being set up, and always unmark it."""
    token = _current_listening.set(listening)
    try:
        yield listening
    finally:
        _current_listening.reset(token)


class Listening:
    """
    Tracks the subscriptions one listener holds on one target.

    While `interop` is True the target has not been seen to register through
    `Events.on`, so subscriptions are shadowed in a private registry. Once
    the target proves it does, a plain counter is used instead.
    """

    def __init__(self, listener: Any, target: Any):
        self.id: str = listener._listen_id
        self.listener = listener
        self.target = target
        self.interop = True
        self.count = 0
        self._events: Optional[HandlerMap] = None

    @property
    def is_idle(self) -> bool:
        return self.count == 0 and not self._events

    def on(self, name: EventName, callback: Any = None) -> "Listening":
        self._events = events_api(
            on_api,
            self._events or {},
            name,
            callback,
            {"context": None, "ctx": self, "listening": None},
        )
        return self

    def off(self, name: Optional[EventName] = None, callback: Any = None) -> None:
        if self.interop:
            self._events = events_api(
                off_api,
                self._events,
                name,
                callback,
                {"context": None, "listeners": None},
            )
            cleanup = not self._events
        else:
            self.count -= 1
            cleanup = self.count == 0
        if cleanup:
            self.cleanup()

    def cleanup(self) -> None:
        """Drop the listener's and the target's references to this relationship."""
        target_id = getattr(self.target, "_listen_id", None)
        listening_to = getattr(self.listener, "_listening_to", None)
        if listening_to is not None:
            if listening_to.get(target_id) is self:
                del listening_to[target_id]
            if not listening_to:
                self.listener._listening_to = None

        if not self.interop:
            listeners = getattr(self.target, "_listeners", None)
            if listeners is not None:
                if listeners.get(self.id) is self:
                    del listeners[self.id]
                if not listeners:
                    self.target._listeners = None

        logger.debug(f"Cleaned up listening {self.id} -> {target_id}")

    def __repr__(self) -> str:
        mode = "interop" if self.interop else f"count={self.count}"
        return f"<Listening {self.id} -> {getattr(self.target, '_listen_id', None)} {mode}>"
