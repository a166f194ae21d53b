"""
PriorityEventEmitter: synchronous, priority-ordered publish/subscribe.

Purpose
-------
Public face of the event system. Registers listeners through the
ListenerRegistry and drives the emit protocol.

Emit Protocol
-------------
1. Unknown or empty event name: return False, nothing else happens.
2. Take a duplicate of the live listener set. The pass only ever iterates
   the duplicate, so listeners that register or remove listeners while
   running change later emits, never the pass in progress.
3. Poll entries from the duplicate, highest priority first:
   a. once-entry: remove every once-entry for that listener from the live
      set and emit ``removeListener`` for each removed entry;
   b. call the listener with the emitted arguments;
   c. a result of None or anything truthy continues, any other result
      (False, 0, "", ...) stops the pass.
4. Return True.

``newListener`` and ``removeListener`` are ordinary events dispatched through
the same protocol, so their listeners may add or remove listeners too.

Error Handling
--------------
- Invalid priorities and listeners raise InvalidArgumentError from the
  mutating call, before anything changes.
- Exceptions raised by listeners are not caught: they leave `emit()` and the
  rest of that pass is abandoned.

Thread Safety
-------------
Not thread-safe. Designed for single-threaded use; re-entrant calls from
inside listeners are supported.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Union

from priority_emitter.config import Config
from priority_emitter.constants import (
    DEFAULT_MAX_LISTENERS,
    DEFAULT_PRIORITY,
    NEW_LISTENER_EVENT,
    REMOVE_LISTENER_EVENT,
)
from priority_emitter.event.context import dispatch_context
from priority_emitter.event.metrics import EventMetrics, EventMetricsRecorder
from priority_emitter.event.registry import ListenerRegistry, WarningSink
from priority_emitter.event.types import Listener, Priority, RawListener
from priority_emitter.logging.logger import get_logger

logger = get_logger(__name__)


def _describe(listener: Listener) -> str:
    return getattr(listener, "__qualname__", None) or repr(listener)


class PriorityEventEmitter:
    """
    Synchronous event emitter with prioritized listeners.

    Listeners with a higher priority run first; listeners with equal priority
    run in registration order. A listener returning a falsy value other than
    None stops the remaining listeners of that emit.

    Examples
    --------
    >>> emitter = PriorityEventEmitter()
    >>> emitter.on("save", validate, priority=10).on("save", write)
    >>> emitter.emit("save", document)
    True

    >>> @emitter.once("shutdown")
    ... def close_files():
    ...     ...
    """

    DEFAULT_MAX_LISTENERS: int = DEFAULT_MAX_LISTENERS

    def __init__(
        self,
        max_listeners: Optional[int] = None,
        *,
        warning_sink: Optional[WarningSink] = None,
        enable_metrics: bool = True,
    ) -> None:
        """
        Parameters
        ----------
        max_listeners:
            Per-event ceiling before a leak warning is issued; 0 disables the
            warning. Defaults to ``Config.MAX_LISTENERS``.
        warning_sink:
            Callable receiving the formatted warning string. Defaults to the
            registry logger's ``warning``.
        enable_metrics:
            Whether to collect dispatch metrics.
        """
        if max_listeners is None:
            max_listeners = Config.MAX_LISTENERS

        self._registry = ListenerRegistry(max_listeners, warning_sink=warning_sink)
        self._metrics = EventMetricsRecorder()
        self._metrics_enabled = enable_metrics

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def _add(
        self,
        event_name: str,
        listener: Listener,
        priority: Priority,
        once: bool,
    ) -> PriorityEventEmitter:
        self._registry.register(event_name, listener, priority, once)

        already_warned = self._registry.is_warned(event_name)
        if not self._registry.check_limit(event_name) and not already_warned:
            if self._metrics_enabled:
                self._metrics.record_warning(event_name)

        logger.debug(
            "Listener registered",
            extra={
                "event_name": event_name,
                "listener_name": _describe(listener),
                "priority": priority,
                "once": once,
            },
        )

        self.emit(NEW_LISTENER_EVENT, event_name, listener, priority)
        return self

    def add_listener(
        self,
        event_name: str,
        listener: Listener,
        priority: Priority = DEFAULT_PRIORITY,
    ) -> PriorityEventEmitter:
        """
        Register listener for event_name.

        Raises
        ------
        InvalidArgumentError:
            If priority is not a real number (or is NaN) or listener is not
            callable. Nothing is registered in that case.
        """
        return self._add(event_name, listener, priority, once=False)

    def on(
        self,
        event_name: str,
        listener: Optional[Listener] = None,
        priority: Priority = DEFAULT_PRIORITY,
    ) -> Union[PriorityEventEmitter, Callable[[Listener], Listener]]:
        """
        Alias of `add_listener`.

        Without a listener, returns a decorator that registers the decorated
        function and hands it back unchanged.
        """
        if listener is None:

            def decorator(func: Listener) -> Listener:
                self.add_listener(event_name, func, priority)
                return func

            return decorator
        return self.add_listener(event_name, listener, priority)

    def prepend_listener(
        self,
        event_name: str,
        listener: Optional[Listener] = None,
        priority: Priority = DEFAULT_PRIORITY,
    ) -> Union[PriorityEventEmitter, Callable[[Listener], Listener]]:
        """Alias of `on`; order is decided by priority alone."""
        return self.on(event_name, listener, priority)

    def once(
        self,
        event_name: str,
        listener: Optional[Listener] = None,
        priority: Priority = DEFAULT_PRIORITY,
    ) -> Union[PriorityEventEmitter, Callable[[Listener], Listener]]:
        """
        Register listener to be removed the first time it fires.

        When it fires, every other once-registration of the same listener on
        this event is removed with it. Usable as a decorator like `on`.
        """
        if listener is None:

            def decorator(func: Listener) -> Listener:
                self._add(event_name, func, priority, once=True)
                return func

            return decorator
        return self._add(event_name, listener, priority, once=True)

    def prepend_once_listener(
        self,
        event_name: str,
        listener: Optional[Listener] = None,
        priority: Priority = DEFAULT_PRIORITY,
    ) -> Union[PriorityEventEmitter, Callable[[Listener], Listener]]:
        """Alias of `once`."""
        return self.once(event_name, listener, priority)

    # ------------------------------------------------------------------ #
    # Removal
    # ------------------------------------------------------------------ #

    def remove_listener(self, event_name: str, listener: Listener) -> PriorityEventEmitter:
        """
        Remove one registration of listener from event_name.

        The highest-priority registration goes first; call again to remove
        further duplicates. Emits ``removeListener`` only when something was
        removed.

        Raises
        ------
        InvalidArgumentError:
            ``field="listenerToRemove"`` if listener is not callable.
        """
        entry = self._registry.unregister(event_name, listener)
        if entry is None:
            return self

        logger.debug(
            "Listener removed",
            extra={
                "event_name": event_name,
                "listener_name": _describe(entry.listener),
                "priority": entry.priority,
            },
        )
        self.emit(REMOVE_LISTENER_EVENT, event_name, entry.listener, entry.priority)
        return self

    def off(self, event_name: str, listener: Listener) -> PriorityEventEmitter:
        """Alias of `remove_listener`."""
        return self.remove_listener(event_name, listener)

    def remove_all_listeners(self, event_name: Optional[str] = None) -> PriorityEventEmitter:
        """
        Without arguments forget every event name; otherwise empty one name.

        An emptied name stays in `event_names()`. Unknown names are ignored.
        No ``removeListener`` events are emitted.
        """
        removed = self._registry.clear(event_name)
        logger.debug(
            "Listeners cleared",
            extra={"event_name": event_name or "*", "removed": removed},
        )
        return self

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    def emit(self, event_name: str, *args: Any) -> bool:
        """
        Call the listeners of event_name with args, highest priority first.

        Returns
        -------
        bool:
            True if the event had at least one listener when called.
        """
        live = self._registry.lookup(event_name)
        if live is None or live.is_empty():
            return False

        pending = live.duplicate()
        if self._metrics_enabled:
            self._metrics.record_emit(event_name)

        with dispatch_context(self, event_name):
            while not pending.is_empty():
                entry = pending.poll()

                if entry.once:
                    for removed in self._registry.remove_once(event_name, entry.listener):
                        self.emit(
                            REMOVE_LISTENER_EVENT,
                            event_name,
                            removed.listener,
                            removed.priority,
                        )

                result = self._invoke(event_name, entry.listener, args)
                if result is None or result:
                    continue

                if self._metrics_enabled:
                    self._metrics.record_early_stop(event_name)
                logger.debug(
                    "Dispatch stopped by listener",
                    extra={
                        "event_name": event_name,
                        "listener_name": _describe(entry.listener),
                        "skipped": len(pending),
                    },
                )
                break

        return True

    def _invoke(self, event_name: str, listener: Listener, args: tuple) -> Any:
        if self._metrics_enabled:
            self._metrics.record_invocation(event_name)
        try:
            return listener(*args)
        except Exception as exc:
            if self._metrics_enabled:
                self._metrics.record_error(event_name)
            logger.debug(
                "Listener raised, abandoning dispatch",
                extra={
                    "event_name": event_name,
                    "listener_name": _describe(listener),
                    "error_type": type(exc).__name__,
                },
            )
            raise

    def invoke_listener(self, event_name: str, listener: Listener, *args: Any) -> Any:
        """Call one listener the way `emit` would, outside of a dispatch pass."""
        with dispatch_context(self, event_name):
            return self._invoke(event_name, listener, args)

    # ------------------------------------------------------------------ #
    # Introspection
    # ------------------------------------------------------------------ #

    def event_names(self) -> list[str]:
        """Event names in order of first registration, including emptied ones."""
        return self._registry.names()

    def listener_count(self, event_name: Optional[str] = None) -> int:
        return self._registry.count(event_name)

    def listeners(self, event_name: str) -> list[Listener]:
        """Registered listeners of event_name in dispatch order."""
        return [entry.listener for entry in self._registry.snapshot_entries(event_name)]

    def raw_listeners(self, event_name: str) -> list[RawListener]:
        """
        Wrappers for the listeners of event_name, in dispatch order.

        Each wrapper exposes ``listener`` and ``priority``; calling it removes
        a once-listener from the emitter before calling it.
        """
        return [
            RawListener(self, event_name, entry)
            for entry in self._registry.snapshot_entries(event_name)
        ]

    # ------------------------------------------------------------------ #
    # Max listeners
    # ------------------------------------------------------------------ #

    def set_max_listeners(self, n: int) -> PriorityEventEmitter:
        """Set the per-event warning ceiling; 0 means unbounded."""
        self._registry.max_listeners = n
        return self

    def get_max_listeners(self) -> int:
        return self._registry.max_listeners

    # ------------------------------------------------------------------ #
    # Metrics
    # ------------------------------------------------------------------ #

    def get_metrics(self) -> Optional[EventMetrics]:
        """Snapshot of dispatch metrics, or None when metrics are disabled."""
        if not self._metrics_enabled:
            return None
        return self._metrics.snapshot(total_listeners=self._registry.total_count())

    def get_metrics_summary(self) -> dict[str, Any]:
        metrics = self.get_metrics()
        if metrics is None:
            return {"metrics_enabled": False}
        return {"metrics_enabled": True, **metrics.get_summary()}

    def enable_metrics(self) -> None:
        self._metrics_enabled = True

    def disable_metrics(self) -> None:
        self._metrics_enabled = False

    def __repr__(self) -> str:
        return (
            f"PriorityEventEmitter(events={len(self._registry.names())}, "
            f"listeners={self._registry.total_count()}, "
            f"max_listeners={self._registry.max_listeners})"
        )
