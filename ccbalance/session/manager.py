"""
Match Manager - Creates and manages matches.

LIFECYCLE:
1. Client picks a level -> match created (in-memory only)
2. During the match:
   - Player input and the AI loop both call Match.execute()
   - The executor serializes every state change
   - Round boundaries clear outstanding cooldowns
3. Match ends -> removed from memory, ALL state dropped

PERSISTENCE RULES:
- No database
- Match state is ephemeral
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
import logging
import time
import uuid

from ..config import Settings, DifficultySettings
from ..engine_core.action import Action, ActionResult, Actor
from ..engine_core.chemistry import ChemistryEngine
from ..engine_core.cooldown import CooldownScheduler, monotonic_ms
from ..engine_core.events import EventBus
from ..engine_core.executor import ActionExecutor
from ..engine_core.state import ChemicalState, LevelConfig, StateSnapshot
from ..levels import get_level


logger = logging.getLogger(__name__)


class MatchNotFoundError(KeyError):
    """Raised when a match id is unknown or the match has ended."""


class MatchStatus(Enum):
    """State of a match."""
    ACTIVE = "active"
    FINISHED = "finished"
    ABANDONED = "abandoned"


@dataclass
class Match:
    """
    One play-through of a level.

    Owns the chemical state and everything that acts on it. The state is
    only ever mutated through `executor`.
    """
    match_id: str
    level: LevelConfig
    state: ChemicalState
    difficulty: DifficultySettings
    scheduler: CooldownScheduler
    executor: ActionExecutor
    events: EventBus
    created_at: float

    status: MatchStatus = MatchStatus.ACTIVE
    round_number: int = 1
    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        return self.status == MatchStatus.ACTIVE

    def execute(self, action: Action, actor: Actor = Actor.PLAYER) -> ActionResult:
        return self.executor.execute(action, actor)

    def snapshot(self) -> StateSnapshot:
        return self.state.snapshot()

    def tick(self) -> list[Action]:
        """Release expired cooldowns for both actors."""
        return self.scheduler.release_expired()

    def reset_round(self):
        """
        Start a new round: every outstanding cooldown is cleared.

        State changes already applied stay applied.
        """
        self.scheduler.reset_cooldowns(Actor.PLAYER)
        self.scheduler.reset_cooldowns(Actor.AI)
        self.round_number += 1
        logger.info("Match %s entered round %d", self.match_id, self.round_number)

    def cooldowns(self, actor: Actor) -> dict[Action, float]:
        return self.scheduler.active(actor)


class MatchManager:
    """
    Manages matches.

    Responsibilities:
    - Create matches from level presets or custom levels
    - Track active matches
    - Clean up finished matches

    No persistence - matches are in-memory only.
    """

    def __init__(self, settings: Settings | None = None, clock: Callable[[], float] = monotonic_ms):
        self.settings = settings or Settings()
        self._clock = clock
        self._matches: dict[str, Match] = {}

    def create_match(
        self,
        level_id: str | None = None,
        difficulty: int | None = None,
        level: LevelConfig | None = None,
        chemistry: ChemistryEngine | None = None,
    ) -> Match:
        """
        Create a new match.

        Args:
            level_id: Preset id (ignored when `level` is given)
            difficulty: AI difficulty, defaults to settings
            level: Custom level configuration
            chemistry: Solver for custom levels; presets bring their own

        Returns:
            New active Match with K/Q computed for the starting state
        """
        if level is None:
            preset = get_level(level_id)
            level = preset.config
            chemistry = chemistry or preset.create_engine()

        events = EventBus()
        difficulty_settings = DifficultySettings(
            difficulty if difficulty is not None else self.settings.difficulty
        )
        scheduler = CooldownScheduler(
            get_difficulty=difficulty_settings.get_difficulty,
            clock=self._clock,
            events=events,
        )
        state = ChemicalState.from_level(level)
        executor = ActionExecutor(
            state=state,
            level=level,
            scheduler=scheduler,
            chemistry=chemistry,
            events=events,
            cooldowns_ms=self.settings.cooldowns_ms,
        )
        executor.recompute()

        match = Match(
            match_id=str(uuid.uuid4()),
            level=level,
            state=state,
            difficulty=difficulty_settings,
            scheduler=scheduler,
            executor=executor,
            events=events,
            created_at=time.time(),
        )
        self._matches[match.match_id] = match
        logger.info(
            "Created match %s on level %s (difficulty %d)",
            match.match_id, level.level_id, difficulty_settings.get_difficulty(),
        )
        return match

    def get_match(self, match_id: str) -> Match:
        match = self._matches.get(match_id)
        if not match:
            raise MatchNotFoundError(match_id)
        return match

    def end_match(self, match_id: str, reason: str = "finished") -> Match:
        """End a match and drop it from memory."""
        match = self._matches.pop(match_id, None)
        if not match:
            raise MatchNotFoundError(match_id)
        match.status = MatchStatus.FINISHED if reason == "finished" else MatchStatus.ABANDONED
        match.scheduler.reset_cooldowns(Actor.PLAYER)
        match.scheduler.reset_cooldowns(Actor.AI)
        logger.info("Ended match %s (%s)", match_id, reason)
        return match

    def list_active_matches(self) -> list[str]:
        return [mid for mid, match in self._matches.items() if match.is_active()]

    def cleanup_stale_matches(self, max_age_seconds: int = 3600) -> list[str]:
        """End matches older than max_age_seconds."""
        now = time.time()
        stale = [
            mid for mid, match in self._matches.items()
            if now - match.created_at > max_age_seconds
        ]
        for mid in stale:
            self.end_match(mid, reason="stale")
        return stale
