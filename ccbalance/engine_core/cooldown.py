"""
Cooldown Scheduler - Per-actor, per-action rate limiting.

Each actor has its own bucket of entries keyed by Action, so the AI and
the player never block each other. Expiry is lazy: an entry is stale once
its duration has elapsed on the monotonic clock, and stale entries are
treated as absent. No timers run in the background.

AI cooldowns scale with difficulty:

| Difficulty | Factor |
|------------|--------|
| 4+         | 0.5    |
| 3          | 1.0    |
| 2          | 3.0    |
| 1 / other  | 5.0    |

with a floor of 250 ms.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
import logging
import math
import threading
import time

from .action import Action, Actor
from .events import EventBus, ControlStateChanged


logger = logging.getLogger(__name__)

AI_MIN_COOLDOWN_MS = 250


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


def ai_cooldown_factor(difficulty: int) -> float:
    """Multiplier applied to AI cooldowns. Lower difficulty, slower AI."""
    if difficulty >= 4:
        return 0.5
    if difficulty == 3:
        return 1.0
    if difficulty == 2:
        return 3.0
    return 5.0


def effective_duration(base_ms: int, actor: Actor, difficulty: int) -> int:
    """Cooldown actually applied for an actor."""
    if actor == Actor.PLAYER:
        return base_ms
    return max(AI_MIN_COOLDOWN_MS, math.floor(base_ms * ai_cooldown_factor(difficulty)))


@dataclass(frozen=True)
class CooldownEntry:
    action: Action
    start_time: float  # ms on the scheduler clock
    duration: int  # ms

    def expired(self, now: float) -> bool:
        return now - self.start_time >= self.duration

    def remaining(self, now: float) -> float:
        return max(0.0, self.duration - (now - self.start_time))


class CooldownScheduler:
    """
    Tracks which actions are blocked for which actor.

    Knows nothing about chemistry. Player cooldown starts and releases are
    published as ControlStateChanged events so the UI can toggle buttons.

    Safe to share between threads: bucket reads and writes happen under an
    internal lock, and events are published after it is released.
    """

    def __init__(
        self,
        get_difficulty: Callable[[], int],
        clock: Callable[[], float] = monotonic_ms,
        events: EventBus | None = None,
    ):
        self._get_difficulty = get_difficulty
        self._clock = clock
        self._events = events
        self._lock = threading.RLock()
        self._buckets: dict[Actor, dict[Action, CooldownEntry]] = {
            Actor.PLAYER: {},
            Actor.AI: {},
        }

    def is_on_cooldown(self, action: Action, actor: Actor) -> bool:
        with self._lock:
            entry = self._buckets[actor].get(action)
            if entry is None:
                return False
            return not entry.expired(self._clock())

    def remaining_ms(self, action: Action, actor: Actor) -> float:
        """Time left before the action is available again (0 if available)."""
        with self._lock:
            entry = self._buckets[actor].get(action)
            if entry is None:
                return 0.0
            return entry.remaining(self._clock())

    def start_cooldown(self, action: Action, base_duration_ms: int, actor: Actor) -> CooldownEntry:
        """Start (or restart) the cooldown for an action, replacing any prior entry."""
        duration = base_duration_ms
        if actor == Actor.AI:
            duration = effective_duration(base_duration_ms, actor, self._get_difficulty())

        with self._lock:
            entry = CooldownEntry(action=action, start_time=self._clock(), duration=duration)
            self._buckets[actor][action] = entry
        logger.debug("Cooldown %s for %s: %d ms", action, actor.value, duration)

        if actor == Actor.PLAYER and self._events:
            self._events.publish(ControlStateChanged(
                control_id=action.control_id,
                enabled=False,
                duration_ms=duration,
            ))
        return entry

    def release_expired(self, actor: Actor | None = None) -> list[Action]:
        """
        Purge expired entries.

        Bookkeeping only; is_on_cooldown already ignores stale entries.
        Returns the released actions.
        """
        actors = [actor] if actor else list(self._buckets)
        released: list[tuple[Action, Actor]] = []
        with self._lock:
            now = self._clock()
            for a in actors:
                bucket = self._buckets[a]
                stale = [action for action, entry in bucket.items() if entry.expired(now)]
                for action in stale:
                    del bucket[action]
                released.extend((action, a) for action in stale)

        for action, a in released:
            self._notify_enabled(action, a)
        return [action for action, _ in released]

    def reset_cooldowns(self, actor: Actor):
        """Clear every entry for an actor immediately."""
        with self._lock:
            bucket = self._buckets[actor]
            cleared = list(bucket)
            bucket.clear()

        for action in cleared:
            self._notify_enabled(action, actor)
        logger.debug("Cooldowns reset for %s", actor.value)

    def active(self, actor: Actor) -> dict[Action, float]:
        """Actions still cooling down for an actor, with remaining ms."""
        with self._lock:
            now = self._clock()
            return {
                action: entry.remaining(now)
                for action, entry in self._buckets[actor].items()
                if not entry.expired(now)
            }

    def _notify_enabled(self, action: Action, actor: Actor):
        if actor == Actor.PLAYER and self._events:
            self._events.publish(ControlStateChanged(control_id=action.control_id, enabled=True))
