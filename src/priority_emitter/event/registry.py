"""
ListenerRegistry: storage and max-listener accounting for the emitter.

Purpose
-------
Maps event names to their OrderedListenerSet and owns the max-listener
warning policy.

Responsibilities
----------------
- Create listener sets lazily on first registration
- Validate listeners and priorities before any mutation
- Remove listeners by reference (one at a time, or every once-entry in bulk)
- Track a per-event "warned" flag so the max-listener warning fires once per
  over-limit episode
- Provide introspection (names in first-registration order, counts, ordered
  snapshots)

Design Decisions
----------------
- **No dispatch**: The registry never emits. Mutators return what they
  removed or inserted, and PriorityEventEmitter turns that into
  ``newListener`` / ``removeListener`` meta-events.
- **Lookups never create**: Only `get_or_create()` adds an event name, and
  only registration calls it. Counting, snapshotting, emitting, removing and
  clearing an unknown name leave `names()` untouched.
- **Pluggable warning sink**: The max-listener warning is handed to a
  ``Callable[[str], None]``; by default the module logger's ``warning``.

Thread Safety
-------------
Not thread-safe. All mutations happen synchronously on the calling thread.
"""

from __future__ import annotations

from typing import Callable, Optional

from priority_emitter.constants import MAX_LISTENERS_WARNING_NAME
from priority_emitter.event.listener_set import OrderedListenerSet
from priority_emitter.event.types import (
    Listener,
    ListenerEntry,
    Priority,
    validate_listener,
    validate_priority,
)
from priority_emitter.logging.logger import get_logger

logger = get_logger(__name__)

WarningSink = Callable[[str], None]


def format_max_listeners_warning(event_name: str, size: int, ceiling: int) -> str:
    return (
        f"{MAX_LISTENERS_WARNING_NAME}: Possible EventEmitter memory leak detected. "
        f"{size} {event_name} listeners added (limit {ceiling}). "
        "Use emitter.set_max_listeners() to increase limit"
    )


class ListenerRegistry:
    """
    Registry of listener sets keyed by event name.

    Examples
    --------
    >>> registry = ListenerRegistry(max_listeners=10)
    >>> registry.register("ready", on_ready, priority=1, once=False)
    ListenerEntry(listener=<function on_ready ...>, priority=1, once=False)
    >>> registry.count("ready")
    1
    >>> registry.names()
    ['ready']
    """

    def __init__(
        self,
        max_listeners: int,
        warning_sink: Optional[WarningSink] = None,
    ) -> None:
        self._listeners: dict[str, OrderedListenerSet] = {}
        self._warned: dict[str, bool] = {}
        self._max_listeners = max_listeners
        self._warning_sink: WarningSink = warning_sink or logger.warning

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #

    @property
    def max_listeners(self) -> int:
        """Ceiling per event name; 0 means unbounded."""
        return self._max_listeners

    @max_listeners.setter
    def max_listeners(self, value: int) -> None:
        self._max_listeners = value

    # ------------------------------------------------------------------ #
    # Lookup
    # ------------------------------------------------------------------ #

    def get_or_create(self, event_name: str) -> OrderedListenerSet:
        listeners = self._listeners.get(event_name)
        if listeners is None:
            listeners = OrderedListenerSet()
            self._listeners[event_name] = listeners
        return listeners

    def lookup(self, event_name: str) -> Optional[OrderedListenerSet]:
        """Return the live set for event_name, or None if the name is unknown."""
        return self._listeners.get(event_name)

    # ------------------------------------------------------------------ #
    # Modification
    # ------------------------------------------------------------------ #

    def register(
        self,
        event_name: str,
        listener: Listener,
        priority: Priority,
        once: bool,
    ) -> ListenerEntry:
        """
        Validate and insert a listener.

        Raises
        ------
        InvalidArgumentError:
            ``field="priority"`` if priority is not a real number or is NaN,
            ``field="listener"`` if listener is not callable. Nothing is
            created or inserted in either case.
        """
        validate_priority(priority)
        validate_listener(listener)

        entry = ListenerEntry(listener=listener, priority=priority, once=once)
        self.get_or_create(event_name).insert(entry)
        return entry

    def unregister(self, event_name: str, listener: Listener) -> Optional[ListenerEntry]:
        """
        Remove the first entry, in priority order, registered with listener.

        The stored priority and once flag are ignored when matching.

        Raises
        ------
        InvalidArgumentError:
            ``field="listenerToRemove"`` if listener is not callable.
        """
        validate_listener(listener, field="listenerToRemove")

        listeners = self._listeners.get(event_name)
        if listeners is None:
            return None
        return listeners.remove_first_matching(lambda entry: entry.matches(listener))

    def remove_once(self, event_name: str, listener: Listener) -> list[ListenerEntry]:
        """Remove every once-entry registered with listener from the live set."""
        listeners = self._listeners.get(event_name)
        if listeners is None:
            return []
        return listeners.remove_all_matching(
            lambda entry: entry.once and entry.matches(listener)
        )

    def clear(self, event_name: Optional[str] = None) -> int:
        """
        Forget every event name, or empty the set of one known name.

        Returns
        -------
        int:
            Number of listener entries discarded.
        """
        if event_name is None:
            total = self.total_count()
            self._listeners = {}
            self._warned = {}
            return total

        listeners = self._listeners.get(event_name)
        if listeners is None:
            return 0
        total = len(listeners)
        self._listeners[event_name] = OrderedListenerSet()
        return total

    # ------------------------------------------------------------------ #
    # Max-listener policy
    # ------------------------------------------------------------------ #

    def check_limit(self, event_name: str) -> bool:
        """
        Compare the listener count of event_name against the ceiling.

        The first check that finds the count above the ceiling hands one
        warning to the sink and marks the name as warned. While warned, later
        checks stay silent however far the count grows. A check that finds
        the count back at or below the ceiling clears the flag.

        Returns
        -------
        bool:
            False while the count is above the ceiling, True otherwise.
        """
        listeners = self._listeners.get(event_name)
        size = len(listeners) if listeners is not None else 0

        if self._max_listeners and size > self._max_listeners:
            if not self._warned.get(event_name, False):
                self._warned[event_name] = True
                self._warning_sink(
                    format_max_listeners_warning(event_name, size, self._max_listeners)
                )
            return False

        self._warned[event_name] = False
        return True

    def is_warned(self, event_name: str) -> bool:
        return self._warned.get(event_name, False)

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #

    def names(self) -> list[str]:
        return list(self._listeners)

    def count(self, event_name: Optional[str]) -> int:
        if not event_name:
            return 0
        listeners = self._listeners.get(event_name)
        return len(listeners) if listeners is not None else 0

    def total_count(self) -> int:
        return sum(len(listeners) for listeners in self._listeners.values())

    def snapshot_entries(self, event_name: str) -> list[ListenerEntry]:
        listeners = self._listeners.get(event_name)
        if listeners is None:
            return []
        return listeners.to_ordered_list()
