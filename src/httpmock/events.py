"""
=============================================================================
EVENT EMITTER
=============================================================================

A minimal synchronous publish/subscribe service. The mock response
announces its lifecycle through it:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                   LIFECYCLE EVENTS                                  │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   send() / json() / jsonp()  ──►  "send"  then  "end"               │
    │   end()                      ──►  "end"                             │
    │   redirect()                 ──►  "end"                             │
    │   render()                   ──►  "render"  then  "end"             │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Delivery is synchronous and in registration order. Listener exceptions
are not caught: they propagate out of emit() and therefore out of the
response method that emitted.

Any object with the same method names can be injected into a response
in place of this class.

=============================================================================
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]

DEFAULT_MAX_LISTENERS = 10


@dataclass(eq=False)
class _Registration:
    listener: Listener
    once: bool = False


class EventEmitter:
    """
    Synchronous event emitter.

    Usage:
        emitter = EventEmitter()
        emitter.on("end", lambda: print("done"))
        emitter.emit("end")   # prints "done", returns True
    """

    def __init__(self, max_listeners: int = DEFAULT_MAX_LISTENERS):
        self._events: Dict[str, List[_Registration]] = {}
        self._max_listeners = max_listeners

    # =========================================================================
    # SUBSCRIPTION
    # =========================================================================

    def on(self, event: str, listener: Listener) -> "EventEmitter":
        """
        Register a listener for an event.

        Returns self for chaining. Registering more listeners than
        max_listeners for one event logs a warning (a likely leak) but
        still registers.
        """
        return self._add(event, _Registration(listener))

    add_listener = on

    def once(self, event: str, listener: Listener) -> "EventEmitter":
        """Register a listener that is removed before its first call."""
        return self._add(event, _Registration(listener, once=True))

    def remove_listener(self, event: str, listener: Listener) -> "EventEmitter":
        """Remove the most recently added registration of listener."""
        registrations = self._events.get(event, [])
        for index in range(len(registrations) - 1, -1, -1):
            if registrations[index].listener == listener:
                del registrations[index]
                break
        if not registrations:
            self._events.pop(event, None)
        return self

    def remove_all_listeners(self, event: Optional[str] = None) -> "EventEmitter":
        """Remove every listener of one event, or of all events."""
        if event is None:
            self._events.clear()
        else:
            self._events.pop(event, None)
        return self

    def set_max_listeners(self, n: int) -> "EventEmitter":
        """Set the per-event listener count above which a warning is logged (0 = no limit)."""
        if n < 0:
            raise ValueError(f"max listeners must be >= 0, got {n}")
        self._max_listeners = n
        return self

    def listeners(self, event: str) -> List[Listener]:
        """Copy of the listeners registered for event, in call order."""
        return [r.listener for r in self._events.get(event, [])]

    # =========================================================================
    # EMISSION
    # =========================================================================

    def emit(self, event: str, *args: Any) -> bool:
        """
        Call every listener of event with *args, in registration order.

        The list is snapshotted first, so listeners added or removed
        during emission only affect later emits.

        Returns:
            True if the event had listeners, False otherwise.
        """
        registrations = list(self._events.get(event, []))
        if not registrations:
            return False

        for registration in registrations:
            if registration.once:
                self._discard(event, registration)
            registration.listener(*args)

        return True

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _add(self, event: str, registration: _Registration) -> "EventEmitter":
        registrations = self._events.setdefault(event, [])
        registrations.append(registration)

        if self._max_listeners and len(registrations) == self._max_listeners + 1:
            logger.warning(
                f"Possible listener leak: {len(registrations)} listeners "
                f"added for '{event}' (max {self._max_listeners})"
            )
        return self

    def _discard(self, event: str, registration: _Registration) -> None:
        registrations = self._events.get(event)
        if registrations and registration in registrations:
            registrations.remove(registration)
            if not registrations:
                del self._events[event]
