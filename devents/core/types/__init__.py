"""Types module for core functionality."""

from devents.core.types.event_types import *
