"""
Event system for the priority emitter.

Provides PriorityEventEmitter and the building blocks it is made of: the
ordered per-event listener set, the listener registry and the dispatch
context helpers.
"""

from priority_emitter.event.context import current_emitter
from priority_emitter.event.emitter import PriorityEventEmitter
from priority_emitter.event.listener_set import OrderedListenerSet
from priority_emitter.event.metrics import EventMetrics, EventMetricsRecorder
from priority_emitter.event.registry import ListenerRegistry, format_max_listeners_warning
from priority_emitter.event.types import Listener, ListenerEntry, RawListener

__all__ = [
    "PriorityEventEmitter",
    "ListenerRegistry",
    "OrderedListenerSet",
    "ListenerEntry",
    "Listener",
    "RawListener",
    "EventMetrics",
    "EventMetricsRecorder",
    "current_emitter",
    "format_max_listeners_warning",
]
