"""
priority_emitter: a synchronous, priority-ordered event emitter.

Listeners registered with a higher priority run first; a listener can stop
the rest of an emit by returning a falsy value other than None.

Usage
-----
```python
from priority_emitter import PriorityEventEmitter

emitter = PriorityEventEmitter()
emitter.on("ready", lambda: print("second"), priority=1)
emitter.on("ready", lambda: print("first"), priority=5)
emitter.emit("ready")  # prints "first", then "second"; returns True
```
"""

from priority_emitter.constants import (
    DEFAULT_MAX_LISTENERS,
    NEW_LISTENER_EVENT,
    REMOVE_LISTENER_EVENT,
)
from priority_emitter.event import (
    ListenerEntry,
    ListenerRegistry,
    OrderedListenerSet,
    PriorityEventEmitter,
    RawListener,
    current_emitter,
)
from priority_emitter.exceptions import EmitterException, InvalidArgumentError

__version__ = "1.0.0"

__all__ = [
    "PriorityEventEmitter",
    "ListenerRegistry",
    "OrderedListenerSet",
    "ListenerEntry",
    "RawListener",
    "current_emitter",
    "EmitterException",
    "InvalidArgumentError",
    "DEFAULT_MAX_LISTENERS",
    "NEW_LISTENER_EVENT",
    "REMOVE_LISTENER_EVENT",
]
