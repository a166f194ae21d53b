"""
Core Event Types for the priority emitter.

Purpose
-------
Provides the fundamental type definitions for the event system: the listener
callback alias, the immutable listener entry stored by the registry, and the
callable wrapper handed out by `raw_listeners()`.

Design Decisions
----------------
- **ListenerEntry with slots**: Frozen, memory-efficient record. Removal
  replaces entries, it never mutates them.
- **Identity, not equality**: Listeners are matched by reference. Bound
  methods are the one exception because Python builds a new bound method
  object on every attribute access; they match when their instance and
  function are the same objects.
- **Validation helpers live here**: registry and emitter share them so both
  reject bad input with the same error before touching any structure.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from numbers import Real
from typing import TYPE_CHECKING, Any, Callable, Union

from priority_emitter.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from priority_emitter.event.emitter import PriorityEventEmitter

# Listener callbacks receive the emitted positional arguments. A return value
# of None or anything truthy continues the dispatch pass; any other value
# stops it.
Listener = Callable[..., Any]

Priority = Union[int, float]


@dataclass(slots=True, frozen=True)
class ListenerEntry:
    """
    A registered listener.

    Attributes
    ----------
    listener:
        Callable invoked with the emitted arguments.
    priority:
        Real number; higher values dispatch earlier.
    once:
        If True, the listener is deregistered the first time it fires.
    """

    listener: Listener
    priority: Priority
    once: bool = False

    def matches(self, listener: Listener) -> bool:
        return same_listener(self.listener, listener)


def same_listener(a: Listener, b: Listener) -> bool:
    """Reference equality for listeners, treating equivalent bound methods as one."""
    if a is b:
        return True
    if inspect.ismethod(a) and inspect.ismethod(b):
        return a.__self__ is b.__self__ and a.__func__ is b.__func__
    return False


def validate_priority(priority: Any) -> None:
    """Raise InvalidArgumentError unless priority is a real, non-NaN number."""
    if (
        isinstance(priority, bool)
        or not isinstance(priority, Real)
        # NaN; no float conversion, so huge ints stay valid
        or priority != priority
    ):
        raise InvalidArgumentError(
            "priority", priority, "a real number and not NaN"
        )


def validate_listener(listener: Any, field: str = "listener") -> None:
    if not callable(listener):
        raise InvalidArgumentError(field, listener, "callable")


class RawListener:
    """
    Callable wrapper around a registered listener.

    Calling the wrapper first removes the listener from its emitter when it
    was registered with ``once``, then calls the original listener with the
    given arguments and returns its result.

    Examples
    --------
    >>> emitter.once("ready", on_ready, priority=6)
    >>> raw = emitter.raw_listeners("ready")[0]
    >>> raw.listener is on_ready, raw.priority
    (True, 6)
    >>> raw()  # deregisters, then calls on_ready()
    """

    __slots__ = ("_emitter", "event_name", "listener", "priority", "once")

    def __init__(
        self,
        emitter: "PriorityEventEmitter",
        event_name: str,
        entry: ListenerEntry,
    ) -> None:
        self._emitter = emitter
        self.event_name = event_name
        self.listener = entry.listener
        self.priority = entry.priority
        self.once = entry.once

    def __call__(self, *args: Any) -> Any:
        if self.once:
            self._emitter.remove_listener(self.event_name, self.listener)
        return self._emitter.invoke_listener(self.event_name, self.listener, *args)

    def __repr__(self) -> str:
        return (
            f"RawListener(event_name={self.event_name!r}, "
            f"listener={self.listener!r}, priority={self.priority!r}, "
            f"once={self.once!r})"
        )
