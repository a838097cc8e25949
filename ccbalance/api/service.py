"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages matches
3. Formats responses for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import math

from .schemas import (
    ActionRequest,
    ActionResponse,
    CooldownInfo,
    CreateMatchRequest,
    EndMatchResponse,
    HealthResponse,
    LevelInfo,
    LevelListResponse,
    MatchResponse,
    ResetCooldownsRequest,
    SnapshotInfo,
)
from .. import __version__
from ..engine_core.action import Action, Actor
from ..engine_core.chemistry import MassActionEngine, Reaction
from ..engine_core.state import LevelConfig, StateSnapshot
from ..levels import list_levels
from ..session import MatchManager, Match


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        match = service.create_match(CreateMatchRequest(level_id="haber"))
        result = service.execute(match.match_id, ActionRequest(action="heat"))
    """
    match_manager: MatchManager = field(default_factory=MatchManager)

    def health(self) -> HealthResponse:
        return HealthResponse(
            version=__version__,
            active_matches=len(self.match_manager.list_active_matches()),
        )

    def list_levels(self) -> LevelListResponse:
        return LevelListResponse(levels=[_level_info(p.config, p.reaction) for p in list_levels()])

    def create_match(self, request: CreateMatchRequest) -> MatchResponse:
        match = self.match_manager.create_match(
            level_id=request.level_id,
            difficulty=request.difficulty,
        )
        return self._match_to_response(match)

    def get_match(self, match_id: str) -> MatchResponse:
        match = self.match_manager.get_match(match_id)
        match.tick()
        return self._match_to_response(match)

    def execute(self, match_id: str, request: ActionRequest) -> ActionResponse:
        """Execute one action. Rejections come back with success=False."""
        match = self.match_manager.get_match(match_id)
        action = Action.parse(request.action.value, request.species)
        result = match.execute(action, Actor(request.actor.value))
        return ActionResponse(
            success=result.success,
            reason=result.reason,
            changes=list(result.changes),
            snapshot=_snapshot_info(match.snapshot()),
        )

    def reset_cooldowns(self, match_id: str, request: ResetCooldownsRequest) -> MatchResponse:
        match = self.match_manager.get_match(match_id)
        if request.actor is None:
            match.reset_round()
        else:
            match.scheduler.reset_cooldowns(Actor(request.actor.value))
        return self._match_to_response(match)

    def end_match(self, match_id: str) -> EndMatchResponse:
        match = self.match_manager.end_match(match_id, reason="abandoned")
        return EndMatchResponse(match_id=match_id, status=match.status.value)

    def _match_to_response(self, match: Match) -> MatchResponse:
        return MatchResponse(
            match_id=match.match_id,
            level=_level_info_for(match),
            status=match.status.value,
            difficulty=match.difficulty.get_difficulty(),
            round_number=match.round_number,
            snapshot=_snapshot_info(match.snapshot()),
            player_cooldowns=_cooldown_infos(match, Actor.PLAYER),
            ai_cooldowns=_cooldown_infos(match, Actor.AI),
        )


def _snapshot_info(snapshot: StateSnapshot) -> SnapshotInfo:
    return SnapshotInfo(
        K=_finite(snapshot.K),
        Q=_finite(snapshot.Q),
        concentrations=snapshot.concentrations,
        temperature=snapshot.temperature,
        pressure=snapshot.pressure,
        volume=snapshot.volume,
    )


def _finite(value: float | None) -> float | None:
    # JSON has no infinity; Q is infinite while a reactant is exhausted
    if value is None or not math.isfinite(value):
        return None
    return value


def _cooldown_infos(match: Match, actor: Actor) -> list[CooldownInfo]:
    return [
        CooldownInfo(
            action=action.kind.value,
            species=action.species,
            control_id=action.control_id,
            remaining_ms=remaining,
        )
        for action, remaining in match.cooldowns(actor).items()
    ]


def _level_info(config: LevelConfig, reaction: Reaction | None = None) -> LevelInfo:
    return LevelInfo(
        level_id=config.level_id,
        name=config.name or config.level_id,
        description=config.description,
        container_type=config.container_type.value,
        has_gas=config.has_gas,
        gas_species=sorted(config.gas_species),
        species=reaction.species if reaction else sorted(config.initial_concentrations),
        equation=reaction.equation() if reaction else None,
    )


def _level_info_for(match: Match) -> LevelInfo:
    reaction = None
    if isinstance(match.executor.chemistry, MassActionEngine):
        reaction = match.executor.chemistry.reaction
    return _level_info(match.level, reaction)
