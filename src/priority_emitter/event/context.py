"""
Dispatch context helpers for the priority emitter.

Purpose
-------
Python listeners have no implicit receiver, so the emitter that is running a
listener is published through a ContextVar instead. `current_emitter()`
returns it from anywhere inside the listener's call stack.

Design Decisions
----------------
- **ContextVar, not a global**: nested emits (including the meta-events
  fired by registrations made inside a listener) push their own value and
  restore the outer one when they return, even when a listener raises.
- **Log context in the same step**: the event name is layered onto the
  logging LogContext for the duration of the call, so every log line written
  by a listener carries the event it is handling.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Iterator, Optional

from priority_emitter.logging.logger import LogContext

if TYPE_CHECKING:
    from priority_emitter.event.emitter import PriorityEventEmitter

_current_emitter: ContextVar[Optional["PriorityEventEmitter"]] = ContextVar(
    "priority_emitter_current_emitter", default=None
)


def current_emitter() -> Optional["PriorityEventEmitter"]:
    """
    Return the emitter dispatching the running listener.

    Returns None outside of a dispatch.

    Examples
    --------
    >>> def on_ready():
    ...     current_emitter().emit("ready.done")
    >>> emitter.on("ready", on_ready)
    """
    return _current_emitter.get()


@contextmanager
def dispatch_context(
    emitter: "PriorityEventEmitter", event_name: str
) -> Iterator[None]:
    token = _current_emitter.set(emitter)
    try:
        with LogContext(event_name=event_name, component="priority_emitter"):
            yield
    finally:
        _current_emitter.reset(token)
