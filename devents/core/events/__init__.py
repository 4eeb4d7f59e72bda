"""
Event System

Event registration, dispatch and cross-object listening.
"""

from .events import Events, StrictEvents
from .listening import Listening

__all__ = [
    "Events",
    "StrictEvents",
    "Listening",
]
