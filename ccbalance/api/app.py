"""
FastAPI Application - REST API for game clients.

Endpoints:
    GET    /api/v1/health                          Liveness + version
    GET    /api/v1/levels                          List level presets
    POST   /api/v1/matches                         Create a match
    GET    /api/v1/matches/{id}                    Snapshot + cooldowns
    POST   /api/v1/matches/{id}/actions            Execute an action
    POST   /api/v1/matches/{id}/reset-cooldowns    Clear cooldowns
    DELETE /api/v1/matches/{id}                    End a match

A rejected action (still cooling down) is a normal 200 response with
success=false. All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional
import logging

from ..config import Settings, configure_logging


logger = logging.getLogger(__name__)


def create_app(service=None, settings: Settings | None = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (loaded from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        ActionRequest,
        ActionResponse,
        CreateMatchRequest,
        EndMatchResponse,
        ErrorCode,
        ErrorResponse,
        HealthResponse,
        LevelListResponse,
        MatchResponse,
        ResetCooldownsRequest,
    )
    from ..levels import UnknownLevelError
    from ..session import MatchManager, MatchNotFoundError

    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="CCBalance Engine API",
        description="Chemical equilibrium duel: execute player and AI actions under cooldowns.",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(match_manager=MatchManager(settings=settings))

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(MatchNotFoundError)
    async def match_not_found(request, exc: MatchNotFoundError):
        return make_error_response(
            ErrorCode.MATCH_NOT_FOUND,
            f"Match not found: {exc.args[0] if exc.args else ''}",
            status_code=404,
        )

    @app.exception_handler(UnknownLevelError)
    async def unknown_level(request, exc: UnknownLevelError):
        return make_error_response(ErrorCode.UNKNOWN_LEVEL, str(exc), status_code=404)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request, exc: RequestValidationError):
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            status_code=422,
            details={"errors": [str(e.get("msg")) for e in exc.errors()]},
        )

    # =========================================================================
    # Endpoints
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return api_service.health()

    @app.get("/api/v1/levels", response_model=LevelListResponse, tags=["Levels"])
    async def levels() -> LevelListResponse:
        return api_service.list_levels()

    @app.post(
        "/api/v1/matches",
        response_model=MatchResponse,
        status_code=201,
        responses={404: {"model": ErrorResponse}},
        tags=["Matches"],
        summary="Create a match on a level preset",
    )
    async def create_match(request: CreateMatchRequest) -> MatchResponse:
        return api_service.create_match(request)

    @app.get(
        "/api/v1/matches/{match_id}",
        response_model=MatchResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Matches"],
    )
    async def get_match(match_id: str) -> MatchResponse:
        return api_service.get_match(match_id)

    @app.post(
        "/api/v1/matches/{match_id}/actions",
        response_model=ActionResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
        tags=["Matches"],
        summary="Execute an action for the player or the AI",
    )
    async def execute_action(match_id: str, request: ActionRequest):
        try:
            return api_service.execute(match_id, request)
        except ValueError as e:
            return make_error_response(ErrorCode.INVALID_ACTION, str(e))

    @app.post(
        "/api/v1/matches/{match_id}/reset-cooldowns",
        response_model=MatchResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Matches"],
    )
    async def reset_cooldowns(
        match_id: str, request: Optional[ResetCooldownsRequest] = None
    ) -> MatchResponse:
        return api_service.reset_cooldowns(match_id, request or ResetCooldownsRequest())

    @app.delete(
        "/api/v1/matches/{match_id}",
        response_model=EndMatchResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Matches"],
    )
    async def end_match(match_id: str) -> EndMatchResponse:
        return api_service.end_match(match_id)

    logger.info("CCBalance API ready (%s)", settings.env)
    return app
