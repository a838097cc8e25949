"""
API Module - Client interface.

Exposes the engine via REST API. A client:
1. Lists levels
2. Creates a match
3. Sends player and AI actions
4. Reads snapshots and cooldowns
5. Resets cooldowns at round boundaries

All state is match-scoped. No persistence.
"""

from .schemas import (
    # Requests
    CreateMatchRequest,
    ActionRequest,
    ResetCooldownsRequest,
    # Responses
    MatchResponse,
    ActionResponse,
    LevelListResponse,
    EndMatchResponse,
    HealthResponse,
    ErrorResponse,
    # Shared
    SnapshotInfo,
    CooldownInfo,
    LevelInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateMatchRequest",
    "ActionRequest",
    "ResetCooldownsRequest",
    # Responses
    "MatchResponse",
    "ActionResponse",
    "LevelListResponse",
    "EndMatchResponse",
    "HealthResponse",
    "ErrorResponse",
    # Shared
    "SnapshotInfo",
    "CooldownInfo",
    "LevelInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
