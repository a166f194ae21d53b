"""
EventMetrics and EventMetricsRecorder for the priority emitter.

Purpose
-------
Provides counters for emitter activity so hosts can observe how events are
dispatched without attaching listeners of their own.

Responsibilities
----------------
- Count emits that reached at least one listener, per event name
- Count listener invocations, early stops and listener exceptions
- Count max-listener warnings handed to the warning sink
- Provide immutable snapshots and a formatted summary

Design Decisions
----------------
- **Immutable snapshots**: EventMetrics is frozen; mutations go through recorder
- **Defaultdict usage**: Simplifies counting without key existence checks
- **Listener total is not tracked**: the registry already knows it, so the
  emitter passes it in when a snapshot is taken
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EventMetrics:
    """
    Immutable snapshot of emitter metrics.

    Attributes
    ----------
    events_emitted:
        Mapping of event names to dispatch passes that found listeners.
    listener_invocations:
        Mapping of event names to listener calls.
    early_stops:
        Mapping of event names to passes stopped by a listener's return value.
    listener_errors:
        Mapping of event names to listener calls that raised.
    max_listener_warnings:
        Mapping of event names to warnings handed to the sink.
    total_listeners:
        Registered listener entries across all event names.
    """

    events_emitted: dict[str, int] = field(default_factory=dict)
    listener_invocations: dict[str, int] = field(default_factory=dict)
    early_stops: dict[str, int] = field(default_factory=dict)
    listener_errors: dict[str, int] = field(default_factory=dict)
    max_listener_warnings: dict[str, int] = field(default_factory=dict)
    total_listeners: int = 0

    def get_summary(self) -> dict[str, Any]:
        """
        Generate a formatted summary of metrics.

        Examples
        --------
        >>> metrics = EventMetrics(
        ...     events_emitted={"ready": 4},
        ...     early_stops={"ready": 1},
        ... )
        >>> metrics.get_summary()["early_stop_rate"]
        25.0
        """
        total_emits = sum(self.events_emitted.values())
        total_stops = sum(self.early_stops.values())

        early_stop_rate = (total_stops / max(1, total_emits)) * 100.0

        return {
            "total_events_emitted": total_emits,
            "events_by_name": dict(self.events_emitted),
            "total_invocations": sum(self.listener_invocations.values()),
            "total_early_stops": total_stops,
            "total_errors": sum(self.listener_errors.values()),
            "total_max_listener_warnings": sum(self.max_listener_warnings.values()),
            "total_listeners": self.total_listeners,
            "early_stop_rate": round(early_stop_rate, 2),
        }


class EventMetricsRecorder:
    """
    Mutable metrics recorder for PriorityEventEmitter.

    Thread Safety
    -------------
    Not thread-safe, like the emitter that owns it.

    Examples
    --------
    >>> recorder = EventMetricsRecorder()
    >>> recorder.record_emit("ready")
    >>> recorder.record_invocation("ready")
    >>> recorder.snapshot(total_listeners=1).listener_invocations["ready"]
    1
    """

    def __init__(self) -> None:
        self._events_emitted: defaultdict[str, int] = defaultdict(int)
        self._listener_invocations: defaultdict[str, int] = defaultdict(int)
        self._early_stops: defaultdict[str, int] = defaultdict(int)
        self._listener_errors: defaultdict[str, int] = defaultdict(int)
        self._max_listener_warnings: defaultdict[str, int] = defaultdict(int)

    def record_emit(self, event_name: str) -> None:
        self._events_emitted[event_name] += 1

    def record_invocation(self, event_name: str) -> None:
        self._listener_invocations[event_name] += 1

    def record_early_stop(self, event_name: str) -> None:
        self._early_stops[event_name] += 1

    def record_error(self, event_name: str) -> None:
        self._listener_errors[event_name] += 1

    def record_warning(self, event_name: str) -> None:
        self._max_listener_warnings[event_name] += 1

    def snapshot(self, total_listeners: int = 0) -> EventMetrics:
        """
        Return an immutable snapshot of current metrics.

        Creates new dict instances to prevent accidental mutation leaks.
        """
        return EventMetrics(
            events_emitted=dict(self._events_emitted),
            listener_invocations=dict(self._listener_invocations),
            early_stops=dict(self._early_stops),
            listener_errors=dict(self._listener_errors),
            max_listener_warnings=dict(self._max_listener_warnings),
            total_listeners=total_listeners,
        )
