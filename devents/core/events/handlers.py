"""
Registration store and dispatcher.

The reducers in this module are folded over normalized event names by
`events_api`. Each takes the accumulator, one event name, one callback and
an options mapping, and returns the (possibly replaced) accumulator.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from devents.core.types.event_types import ALL_EVENTS, HandlerMap, HandlerRecord
from devents.utils.helpers import Once, bind


def on_api(
    events: HandlerMap, name: Any, callback: Any, options: Dict[str, Any]
) -> HandlerMap:
    """Append a handler record for `name`."""
    if callback is not None:
        handlers = events.setdefault(name, [])
        context = options.get("context")
        listening = options.get("listening")
        if listening is not None:
            listening.count += 1

        handlers.append(
            HandlerRecord(
                callback=callback,
                context=context,
                ctx=context if context is not None else options.get("ctx"),
                listening=listening,
            )
        )
    return events


def _matches_callback(handler: HandlerRecord, callback: Any) -> bool:
    if callback == handler.callback:
        return True
    # Removing the user's function also removes its once-wrapped form.
    return isinstance(handler.callback, Once) and callback == getattr(
        handler.callback, "callback", None
    )


def off_api(
    events: Optional[HandlerMap], name: Any, callback: Any, options: Dict[str, Any]
) -> Optional[HandlerMap]:
    """
    Remove handlers matching every supplied filter.

    With no name, callback or context at all, every binding is dropped and
    each listening relationship recorded in `options["listeners"]` is
    cleaned up.
    """
    if not events:
        return None

    context = options.get("context")
    listeners = options.get("listeners")

    if not name and callback is None and context is None:
        for listening in list((listeners or {}).values()):
            listening.cleanup()
        return None

    names = [name] if name else list(events)
    for event_name in names:
        handlers = events.get(event_name)
        if not handlers:
            continue

        remaining = []
        for handler in handlers:
            if (callback is not None and not _matches_callback(handler, callback)) or (
                context is not None and context is not handler.context
            ):
                remaining.append(handler)
            elif handler.listening is not None:
                handler.listening.off(event_name, callback)

        # A fresh list, so an in-flight trigger keeps iterating the old one.
        if remaining:
            events[event_name] = remaining
        else:
            del events[event_name]

    return events or None


def invoke(handler: HandlerRecord, args: Sequence[Any]) -> Any:
    return bind(handler.callback, handler.context)(*args)


def trigger_events(handlers: Sequence[HandlerRecord], args: Sequence[Any]) -> None:
    # Handlers appended while dispatching wait for the next trigger.
    for index in range(len(handlers)):
        invoke(handlers[index], args)


def trigger_api(
    obj_events: Optional[HandlerMap], name: Any, callback: Any, args: Sequence[Any]
) -> Optional[HandlerMap]:
    """Fire `name` handlers with `args`, then "all" handlers with (name, *args)."""
    if obj_events:
        events = obj_events.get(name)
        all_events = obj_events.get(ALL_EVENTS)
        if events and all_events:
            all_events = list(all_events)
        if events:
            trigger_events(events, args)
        if all_events:
            trigger_events(all_events, (name, *args))
    return obj_events


def once_map(
    mapping: Dict[Any, Once], name: Any, callback: Any, options: Dict[str, Any]
) -> Dict[Any, Once]:
    """
    Reduce callbacks into {name: wrapper}, where each wrapper removes itself
    through `options["offer"]` before running the original callback once.
    """
    if not callable(callback):
        raise TypeError(
            f"Callback for event {name!r} must be callable, "
            f"got {type(callback).__name__}"
        )

    offer = options["offer"]
    context = options.get("context")

    def fire(*args):
        offer(name, wrapper)
        return bind(callback, context)(*args)

    wrapper = Once(fire)
    wrapper.callback = callback
    mapping[name] = wrapper
    return mapping
