"""
devents

Unified import layer for the devents package.
"""

from devents.core.events import Events, Listening, StrictEvents
from devents.core.types.event_types import ALL_EVENTS, HandlerRecord

__all__ = [
    "ALL_EVENTS",
    "Events",
    "HandlerRecord",
    "Listening",
    "StrictEvents",
]
