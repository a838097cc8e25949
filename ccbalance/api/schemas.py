"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Error Codes:
- MATCH_NOT_FOUND: Match does not exist or has ended
- UNKNOWN_LEVEL: Level id has no preset
- INVALID_ACTION: Action name or payload is invalid
- VALIDATION_ERROR: Request body failed validation
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator


# =============================================================================
# Enums
# =============================================================================

class ActorName(str, Enum):
    PLAYER = "player"
    AI = "ai"


class ActionName(str, Enum):
    ADD_SPECIES = "add_species"
    HEAT = "heat"
    COOL = "cool"
    PRESSURIZE = "pressurize"
    DEPRESSURIZE = "depressurize"


class ErrorCode(str, Enum):
    """Structured error codes."""
    MATCH_NOT_FOUND = "MATCH_NOT_FOUND"
    UNKNOWN_LEVEL = "UNKNOWN_LEVEL"
    INVALID_ACTION = "INVALID_ACTION"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class SnapshotInfo(BaseModel):
    """Values presentation layers display after every action."""
    K: Optional[float] = None
    Q: Optional[float] = None
    concentrations: dict[str, float] = Field(default_factory=dict)
    temperature: float
    pressure: float
    volume: float

    model_config = {"from_attributes": True}


class CooldownInfo(BaseModel):
    """An action that is still cooling down."""
    action: str
    species: Optional[str] = None
    control_id: str
    remaining_ms: float = Field(ge=0.0)


class LevelInfo(BaseModel):
    level_id: str
    name: str
    description: str = ""
    container_type: str = Field(description="rigid or flexible")
    has_gas: bool
    gas_species: list[str] = Field(default_factory=list)
    species: list[str] = Field(default_factory=list)
    equation: Optional[str] = None


# =============================================================================
# Requests
# =============================================================================

class CreateMatchRequest(BaseModel):
    level_id: str
    difficulty: Optional[int] = Field(None, ge=1, description="AI difficulty, 1 (easy) to 4 (expert)")


class ActionRequest(BaseModel):
    action: ActionName
    species: Optional[str] = None
    actor: ActorName = ActorName.PLAYER

    @model_validator(mode="after")
    def check_species(self):
        if self.action == ActionName.ADD_SPECIES and not self.species:
            raise ValueError("add_species requires a species")
        if self.action != ActionName.ADD_SPECIES and self.species is not None:
            raise ValueError(f"{self.action.value} does not take a species")
        return self


class ResetCooldownsRequest(BaseModel):
    actor: Optional[ActorName] = Field(None, description="Omit to reset both actors")


# =============================================================================
# Responses
# =============================================================================

class MatchResponse(BaseModel):
    match_id: str
    level: LevelInfo
    status: str
    difficulty: int
    round_number: int = 1
    snapshot: SnapshotInfo
    player_cooldowns: list[CooldownInfo] = Field(default_factory=list)
    ai_cooldowns: list[CooldownInfo] = Field(default_factory=list)


class ActionResponse(BaseModel):
    success: bool
    reason: Optional[str] = None
    changes: list[str] = Field(default_factory=list)
    snapshot: SnapshotInfo


class LevelListResponse(BaseModel):
    levels: list[LevelInfo] = Field(default_factory=list)


class EndMatchResponse(BaseModel):
    match_id: str
    status: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    active_matches: int = 0


class ErrorResponse(BaseModel):
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None
