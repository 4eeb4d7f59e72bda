"""
Event-name normalization.

Every public operation accepts the same three call shapes: a single event
name, several space-separated names ("change blur"), or a mapping of
{name: callback}. This module reduces all of them to individual
(name, callback) applications.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Callable, Iterator, Optional, Tuple, TypeVar

from devents.core.types.event_types import EventName

A = TypeVar("A")

# Iteratee signature shared by the register/unregister/dispatch/once reducers.
Iteratee = Callable[[A, Optional[str], Any, Any], A]

event_splitter = re.compile(r"\s+")


def iter_events(
    name: Optional[EventName], callback: Any, opts: Any
) -> Iterator[Tuple[Optional[str], Any]]:
    """
    Yield one (name, callback) pair per logical registration.

    When `name` is a mapping and a `callback` was also supplied, the
    callback is taken to be the context for every entry, provided `opts`
    has an unset "context" slot. That slot is updated in place.
    """
    if isinstance(name, Mapping):
        if (
            callback is not None
            and isinstance(opts, dict)
            and "context" in opts
            and opts["context"] is None
        ):
            opts["context"] = callback
        for key, value in name.items():
            yield from iter_events(key, value, opts)
    elif isinstance(name, str) and event_splitter.search(name):
        for token in name.split():
            yield token, callback
    else:
        yield name, callback


def events_api(
    iteratee: Iteratee,
    events: A,
    name: Optional[EventName],
    callback: Any,
    opts: Any,
) -> A:
    """Fold `iteratee` over the normalized pairs and return the accumulator."""
    for event_name, event_callback in iter_events(name, callback, opts):
        events = iteratee(events, event_name, event_callback, opts)
    return events

