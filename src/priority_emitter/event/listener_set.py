"""
OrderedListenerSet: per-event ordered storage of listener entries.

Purpose
-------
Holds the ListenerEntry records registered for one event name, ordered by
priority (descending) with ties kept in insertion order.

Design Decisions
----------------
- **Parallel key list**: Each entry is stored next to a ``(-priority,
  sequence)`` key. Keys are compared with bisect, so insertion finds its slot
  in O(log n) and equal priorities stay stable because the sequence number
  only grows.
- **Multiset**: The same listener may appear any number of times, at the
  same or different priorities.
- **No validation**: Entries are validated by ListenerRegistry before they
  reach this container.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Callable, Iterator, Optional

from priority_emitter.event.types import ListenerEntry

EntryPredicate = Callable[[ListenerEntry], bool]


class OrderedListenerSet:
    """
    Ordered multiset of ListenerEntry records.

    Examples
    --------
    >>> listeners = OrderedListenerSet()
    >>> listeners.insert(ListenerEntry(on_low, 1))
    >>> listeners.insert(ListenerEntry(on_high, 5))
    >>> [entry.listener for entry in listeners]
    [on_high, on_low]
    """

    __slots__ = ("_keys", "_entries", "_sequence")

    def __init__(self) -> None:
        self._keys: list[tuple[float, int]] = []
        self._entries: list[ListenerEntry] = []
        self._sequence = 0

    # ------------------------------------------------------------------ #
    # Modification
    # ------------------------------------------------------------------ #

    def insert(self, entry: ListenerEntry) -> None:
        key = (-entry.priority, self._sequence)
        self._sequence += 1

        index = bisect_right(self._keys, key)
        self._keys.insert(index, key)
        self._entries.insert(index, entry)

    def poll(self) -> Optional[ListenerEntry]:
        """Remove and return the highest-priority entry, or None when empty."""
        if not self._entries:
            return None
        del self._keys[0]
        return self._entries.pop(0)

    def remove_first_matching(self, predicate: EntryPredicate) -> Optional[ListenerEntry]:
        """
        Remove the first entry, in priority order, satisfying predicate.

        Returns
        -------
        Optional[ListenerEntry]:
            The removed entry, or None if nothing matched. Only one entry is
            removed even when several match.
        """
        for index, entry in enumerate(self._entries):
            if predicate(entry):
                del self._keys[index]
                del self._entries[index]
                return entry
        return None

    def remove_all_matching(self, predicate: EntryPredicate) -> list[ListenerEntry]:
        """Remove every entry satisfying predicate; return them in priority order."""
        removed: list[ListenerEntry] = []
        kept_keys: list[tuple[float, int]] = []
        kept_entries: list[ListenerEntry] = []

        for key, entry in zip(self._keys, self._entries):
            if predicate(entry):
                removed.append(entry)
            else:
                kept_keys.append(key)
                kept_entries.append(entry)

        if removed:
            self._keys = kept_keys
            self._entries = kept_entries
        return removed

    def clear(self) -> None:
        self._keys.clear()
        self._entries.clear()

    # ------------------------------------------------------------------ #
    # Snapshots & Introspection
    # ------------------------------------------------------------------ #

    def duplicate(self) -> OrderedListenerSet:
        """Return an independent copy holding the same entries in the same order."""
        copy = OrderedListenerSet()
        copy._keys = list(self._keys)
        copy._entries = list(self._entries)
        copy._sequence = self._sequence
        return copy

    def to_ordered_list(self) -> list[ListenerEntry]:
        return list(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    @property
    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ListenerEntry]:
        return iter(list(self._entries))

    def __repr__(self) -> str:
        return f"OrderedListenerSet(size={len(self._entries)})"
