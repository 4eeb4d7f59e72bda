"""
Event channel mixin.

Inherit from `Events` to give any class a custom event channel. Bind a
callback with `on`, remove it with `off`, and `trigger` an event to fire
every callback bound to it in registration order:

    class Document(Events):
        ...

    doc = Document()
    doc.on("expand", lambda: print("expanded"))
    doc.trigger("expand")

`listen_to` and `stop_listening` are the inversion-of-control versions of
`on` and `off`: the listener keeps track of what it is listening to so all
of it can be unbound in one call.

Passing "all" binds a callback to every event; it receives the name of the
event that fired as its first argument.
"""

from __future__ import annotations

from functools import partial
from typing import Any, List, Optional, Tuple

from devents.config.settings import get_settings
from devents.core.events.api import events_api
from devents.core.events.handlers import off_api, on_api, once_map, trigger_api
from devents.core.events.listening import Listening, current_listening, establishing
from devents.core.types.event_types import EventName, HandlerMap
from devents.utils.helpers import is_empty, unique_id
from devents.utils.logging import Logger

logger = Logger("Events", "events", get_settings().log_level)


class Events:
    """
    Mixin providing on/off/once/trigger and listen_to/stop_listening.

    No `__init__` is required; the registries below are created lazily on
    each instance the first time they are needed.
    """

    # Allow the same (name, callback, context) to be registered twice.
    allow_duplicates: bool = True

    _events: Optional[HandlerMap] = None
    _listen_id: Optional[str] = None
    _listeners: Optional[dict] = None
    _listening_to: Optional[dict] = None

    # === Registration ===

    def on(self, name: EventName, callback: Any = None, context: Any = None):
        """
        Bind `callback` to `name`. Passing "all" binds it to every event.

        `name` may also hold several space-separated names, or be a mapping
        of {name: callback}, in which case the second argument is taken as
        the context.
        """
        listening = current_listening()
        opts = {"context": context, "ctx": self, "listening": listening}

        # Validate everything first so a bad callback changes nothing.
        events_api(self._check_api, [], name, callback, opts)
        self._events = (
            events_api(on_api, self._events or {}, name, callback, opts) or None
        )

        if listening is not None:
            if self._listeners is None:
                self._listeners = {}
            self._listeners[listening.id] = listening
            # The target uses Events.on, so the listening can just count.
            listening.interop = False

        return self

    def _check_api(
        self, seen: List[Tuple[Any, Any, Any]], name: Any, callback: Any, opts
    ) -> List[Tuple[Any, Any, Any]]:
        if not callable(callback):
            raise TypeError(
                f"Callback for event {name!r} must be callable, "
                f"got {type(callback).__name__}"
            )
        if not self.allow_duplicates:
            context = opts["context"]
            existing = (self._events or {}).get(name, [])
            duplicate = any(
                handler.callback == callback and handler.context is context
                for handler in existing
            ) or any(
                seen_name == name and seen_callback == callback and seen_context is context
                for seen_name, seen_callback, seen_context in seen
            )
            if duplicate:
                raise ValueError(
                    f"Listener for event {name!r} cannot be added more than once"
                )
            seen.append((name, callback, context))
        return seen

    def off(
        self,
        name: Optional[EventName] = None,
        callback: Any = None,
        context: Any = None,
    ):
        """
        Remove one or many callbacks. The more arguments given, the narrower
        the removal: no arguments removes everything, a name removes every
        callback for it, and a callback and/or context must also match.
        """
        if not self._events:
            return self

        if not name and callback is None and context is None and self._listeners:
            logger.debug(
                f"Flushing {len(self._listeners)} listening relationship(s) on "
                f"{self._listen_id}"
            )

        self._events = events_api(
            off_api,
            self._events,
            name,
            callback,
            {"context": context, "listeners": self._listeners},
        )
        return self

    def once(self, name: EventName, callback: Any = None, context: Any = None):
        """
        Bind a callback that fires a single time and then unbinds itself.

        With several space-separated names, the callback fires once for
        each of them.
        """
        events = events_api(
            once_map, {}, name, callback, {"context": context, "offer": self.off}
        )
        if isinstance(name, str) and context is None:
            callback = None
        return self.on(events, callback, context)

    def trigger(self, name: str, *args: Any):
        """
        Fire every callback bound to `name` with `args`, then every callback
        bound to "all" with `(name, *args)`.
        """
        if not self._events:
            return self

        trigger_api(self._events, name, None, args)
        return self

    # === Inversion of control ===

    def listen_to(self, target: Any, name: EventName = None, callback: Any = None):
        """
        Tell this object to listen to `name` on `target`, keeping track of it
        so it can be undone with `stop_listening`.
        """
        if target is None:
            return self

        prefix = get_settings().listen_id_prefix
        target_id = getattr(target, "_listen_id", None)
        if target_id is None:
            target_id = target._listen_id = unique_id(prefix)

        if self._listening_to is None:
            self._listening_to = {}
        listening = self._listening_to.get(target_id)

        created = listening is None
        if created:
            if self._listen_id is None:
                self._listen_id = unique_id(prefix)
            listening = self._listening_to[target_id] = Listening(self, target)
            logger.debug(f"{self._listen_id} started listening to {target_id}")

        try:
            with establishing(listening):
                target.on(name, callback, self)
        except Exception as e:
            logger.debug(f"Registering on {target_id} failed: {e}")
            if created and listening.is_idle:
                listening.cleanup()
            raise

        # The target did not register through Events.on; track events here.
        if listening.interop:
            listening.on(name, callback)

        # Nothing was bound (empty mapping, blank name); no count can reach zero.
        if created and listening.is_idle:
            listening.cleanup()

        return self

    def stop_listening(
        self, target: Any = None, name: EventName = None, callback: Any = None
    ):
        """
        Stop listening to specific events on `target`, or to everything this
        object is listening to when no target is given.
        """
        listening_to = self._listening_to
        if not listening_to:
            return self

        if target is not None:
            ids = [getattr(target, "_listen_id", None)]
        else:
            ids = list(listening_to)

        for target_id in ids:
            listening = listening_to.get(target_id)
            # Not listening to this target at all.
            if listening is None:
                break

            logger.debug(f"{self._listen_id} stopping listening to {target_id}")
            listening.target.off(name, callback, self)
            if listening.interop:
                listening.off(name, callback)

        if is_empty(self._listening_to):
            self._listening_to = None

        return self

    def listen_to_once(self, target: Any, name: EventName, callback: Any = None):
        """Inversion-of-control version of `once`."""
        events = events_api(
            once_map,
            {},
            name,
            callback,
            {"context": self, "offer": partial(self.stop_listening, target)},
        )
        return self.listen_to(target, events)

    # === Introspection ===

    def listener_count(self, name: Optional[str] = None) -> int:
        """Number of handlers bound to `name`, or to any event."""
        if not self._events:
            return 0
        if name is None:
            return sum(len(handlers) for handlers in self._events.values())
        return len(self._events.get(name, ()))

    def has_listeners(self, name: Optional[str] = None) -> bool:
        return self.listener_count(name) > 0

    # === Backward compatibility aliases ===

    bind = on
    add_listener = on
    unbind = off
    remove_listener = off
    emit = trigger


class StrictEvents(Events):
    """Events variant that refuses to register the same listener twice."""

    allow_duplicates = False
