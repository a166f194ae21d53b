"""
Unit tests for OrderedListenerSet.

Covers priority ordering, stability among equal priorities, removal by
predicate and snapshot independence.
"""

from priority_emitter.event.listener_set import OrderedListenerSet
from priority_emitter.event.types import ListenerEntry


def _noop():
    pass


def _other():
    pass


def _ordered(listeners: OrderedListenerSet):
    return [(entry.listener, entry.priority) for entry in listeners.to_ordered_list()]


class TestOrdering:
    """Entries are kept priority-descending, stable for ties."""

    def test_higher_priority_first(self):
        """Entries should be ordered by descending priority."""
        listeners = OrderedListenerSet()
        low, mid, high = ListenerEntry(_noop, 1), ListenerEntry(_noop, 2), ListenerEntry(_noop, 3)
        for entry in (low, high, mid):
            listeners.insert(entry)

        assert listeners.to_ordered_list() == [high, mid, low]

    def test_equal_priority_keeps_insertion_order(self):
        """Equal priorities should keep insertion order."""
        listeners = OrderedListenerSet()
        entries = [ListenerEntry(lambda: None, 5) for _ in range(4)]
        for entry in entries:
            listeners.insert(entry)

        assert listeners.to_ordered_list() == entries

    def test_negative_and_infinite_priorities(self):
        """Negative and infinite priorities should sort correctly."""
        listeners = OrderedListenerSet()
        listeners.insert(ListenerEntry(_noop, float("-inf")))
        listeners.insert(ListenerEntry(_noop, -2.5))
        listeners.insert(ListenerEntry(_noop, float("inf")))
        listeners.insert(ListenerEntry(_noop, 0))

        assert [p for _, p in _ordered(listeners)] == [float("inf"), 0, -2.5, float("-inf")]

    def test_duplicates_are_kept(self):
        """Identical entries should both be kept."""
        listeners = OrderedListenerSet()
        listeners.insert(ListenerEntry(_noop, 1))
        listeners.insert(ListenerEntry(_noop, 1))

        assert listeners.size == 2
        assert len(listeners) == 2


class TestRemoval:
    """Predicate-based removal."""

    def test_remove_first_matching_removes_one(self):
        """Only the first match in order should be removed."""
        listeners = OrderedListenerSet()
        listeners.insert(ListenerEntry(_noop, 1))
        listeners.insert(ListenerEntry(_noop, 3))
        listeners.insert(ListenerEntry(_other, 2))

        removed = listeners.remove_first_matching(lambda e: e.listener is _noop)

        assert removed == ListenerEntry(_noop, 3)
        assert _ordered(listeners) == [(_other, 2), (_noop, 1)]

    def test_remove_first_matching_without_match(self):
        """No match should return None and change nothing."""
        listeners = OrderedListenerSet()
        listeners.insert(ListenerEntry(_noop, 1))

        assert listeners.remove_first_matching(lambda e: e.listener is _other) is None
        assert listeners.size == 1

    def test_remove_all_matching(self):
        """Every match should be removed and returned in order."""
        listeners = OrderedListenerSet()
        listeners.insert(ListenerEntry(_noop, 1, once=True))
        listeners.insert(ListenerEntry(_other, 2))
        listeners.insert(ListenerEntry(_noop, 4, once=True))
        listeners.insert(ListenerEntry(_noop, 3))

        removed = listeners.remove_all_matching(lambda e: e.listener is _noop and e.once)

        assert [e.priority for e in removed] == [4, 1]
        assert _ordered(listeners) == [(_noop, 3), (_other, 2)]

    def test_insert_after_removal_stays_ordered(self):
        """Inserting after a removal should keep the order."""
        listeners = OrderedListenerSet()
        listeners.insert(ListenerEntry(_noop, 2))
        listeners.insert(ListenerEntry(_other, 2))
        listeners.remove_all_matching(lambda e: e.listener is _noop)
        listeners.insert(ListenerEntry(_noop, 2))

        assert _ordered(listeners) == [(_other, 2), (_noop, 2)]


class TestSnapshots:
    """duplicate() and poll()."""

    def test_duplicate_is_independent(self):
        """Changes to a duplicate should not touch the original."""
        listeners = OrderedListenerSet()
        listeners.insert(ListenerEntry(_noop, 1))
        listeners.insert(ListenerEntry(_other, 2))

        copy = listeners.duplicate()
        listeners.insert(ListenerEntry(_noop, 9))
        copy.poll()

        assert listeners.size == 3
        assert _ordered(copy) == [(_noop, 1)]

    def test_duplicate_preserves_tie_order_for_later_inserts(self):
        """A duplicate should keep tie order for later inserts."""
        listeners = OrderedListenerSet()
        listeners.insert(ListenerEntry(_noop, 1))
        copy = listeners.duplicate()
        copy.insert(ListenerEntry(_other, 1))

        assert _ordered(copy) == [(_noop, 1), (_other, 1)]

    def test_poll_until_empty(self):
        """poll() should drain in order and then return None."""
        listeners = OrderedListenerSet()
        listeners.insert(ListenerEntry(_noop, 1))
        listeners.insert(ListenerEntry(_other, 2))

        assert listeners.poll().listener is _other
        assert listeners.poll().listener is _noop
        assert listeners.poll() is None
        assert listeners.is_empty()
