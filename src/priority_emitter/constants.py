"""
Shared constants for the priority emitter.

Kept free of imports so that config, logging and the event package can all
depend on it without cycles.
"""

from __future__ import annotations

from typing import Final

# Ceiling applied to new emitters unless Config or the caller overrides it.
DEFAULT_MAX_LISTENERS: Final[int] = 10

# Priority used by add_listener()/once() when none is given.
DEFAULT_PRIORITY: Final[int] = 1

# Meta-events dispatched on every registration / removal.
NEW_LISTENER_EVENT: Final[str] = "newListener"
REMOVE_LISTENER_EVENT: Final[str] = "removeListener"

MAX_LISTENERS_WARNING_NAME: Final[str] = "MaxListenersExceededWarning"
