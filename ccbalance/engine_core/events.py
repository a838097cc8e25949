"""
Events - Notifications for presentation layers.

The executor publishes; UI, audio and visual layers subscribe.
Delivery is fire-and-forget: a failing listener is logged and never
affects the action that triggered it.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import logging

from .action import Action, Actor
from .state import StateSnapshot


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateUpdated:
    """Fired after every accepted action."""
    action: Action
    actor: Actor
    snapshot: StateSnapshot


@dataclass(frozen=True)
class AIActed:
    """Fired after every accepted AI action."""
    action: Action
    snapshot: StateSnapshot


@dataclass(frozen=True)
class AudioCueRequested:
    """Best-effort request to play a sound."""
    cue: str
    action: Action


@dataclass(frozen=True)
class ControlStateChanged:
    """A player control should be disabled (cooldown started) or re-enabled."""
    control_id: str
    enabled: bool
    duration_ms: int = 0


Event = StateUpdated | AIActed | AudioCueRequested | ControlStateChanged
Listener = Callable[[Event], None]


class EventBus:
    """
    Synchronous publish/subscribe.

    Usage:
        bus = EventBus()
        bus.subscribe(StateUpdated, ui.refresh)
        bus.subscribe(None, log_everything)   # all events
    """

    def __init__(self):
        self._listeners: dict[type | None, list[Listener]] = {}

    def subscribe(self, event_type: type | None, listener: Listener):
        self._listeners.setdefault(event_type, []).append(listener)

    def unsubscribe(self, event_type: type | None, listener: Listener):
        listeners = self._listeners.get(event_type, [])
        if listener in listeners:
            listeners.remove(listener)

    def publish(self, event: Event):
        targets = self._listeners.get(type(event), []) + self._listeners.get(None, [])
        for listener in targets:
            try:
                listener(event)
            except Exception:
                logger.warning(
                    "Listener %r failed on %s", listener, type(event).__name__,
                    exc_info=True,
                )
