"""
FastAPI Application - REST API for Mines games.

Endpoints:
    POST   /api/v1/games                       Start a game (debits the bet)
    GET    /api/v1/games                       List active games
    GET    /api/v1/games/{id}                  Get game state
    DELETE /api/v1/games/{id}                  End a game
    POST   /api/v1/games/{id}/reveal           Reveal a tile
    POST   /api/v1/games/{id}/cashout          Cash out
    GET    /api/v1/games/{id}/advice           Advisory report for a mode
    GET    /api/v1/players/{id}/balance        Get balance
    POST   /api/v1/players/{id}/balance/reset  Reset balance
    GET    /api/v1/players/{id}/history        Recent games and stats

Hazards of unrevealed tiles are only included once the game is over.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional
import logging

from fastapi import FastAPI, Query
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import ALLOWED_ORIGINS, HISTORY_LIMIT, configure_logging
from ..engine_core.errors import MinesError
from .service import APIService
from .schemas import (
    # Request models
    StartGameRequest,
    RevealRequest,
    # Response models
    GameStateResponse,
    MoveResponse,
    AdviceResponse,
    BalanceResponse,
    HistoryResponse,
    GameListResponse,
    EndGameResponse,
    ErrorResponse,
    HealthResponse,
    # Enums
    ErrorCode,
    StrategyModeValue,
)

logger = logging.getLogger("nashmines.api")

ERROR_STATUS = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.INSUFFICIENT_BALANCE: 409,
}


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    configure_logging()

    app = FastAPI(
        title="NashMines API",
        description="""
Mines 5x5 game engine with an equilibrium strategy advisor.

## Game Flow

1. `POST /api/v1/games` debits the bet and deals a grid
2. `POST /reveal` one tile at a time; a hazard loses the bet
3. `POST /cashout` banks `bet x multiplier` once at least one tile is revealed
4. `GET /advice?mode=conservative|balanced|aggressive` at any point

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Game does not exist or was ended |
| `INVALID_TILE` | Tile id outside 0-24 |
| `INVALID_BET` | Bet amount is not positive |
| `INVALID_HAZARD_COUNT` | Hazard count outside 1-24 |
| `INSUFFICIENT_BALANCE` | Bet exceeds balance |
| `VALIDATION_ERROR` | Malformed request |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

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

    @app.exception_handler(MinesError)
    async def handle_mines_error(request, exc: MinesError) -> JSONResponse:
        error_code = ErrorCode(exc.error_code)
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
        return make_error_response(
            error_code,
            str(exc),
            status_code=ERROR_STATUS.get(error_code, 400),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request",
            status_code=422,
            details={"errors": [
                {"loc": list(e.get("loc", [])), "msg": e.get("msg", "")}
                for e in exc.errors()
            ]},
        )

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameStateResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid bet or hazard count"},
            409: {"model": ErrorResponse, "description": "Insufficient balance"},
        },
        tags=["Games"],
        summary="Start a new game",
    )
    async def start_game(body: StartGameRequest) -> GameStateResponse:
        """
        Start a new game.

        The bet is debited before the grid is dealt. Pass `random_seed`
        for a reproducible grid.
        """
        return api_service.start_game(body)

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List active games",
    )
    async def list_games() -> GameListResponse:
        games = api_service.list_games()
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(game_id: str) -> GameStateResponse:
        return api_service.get_game(game_id)

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        tags=["Games"],
        summary="End a game",
    )
    async def end_game(game_id: str) -> EndGameResponse:
        """End a game. Ending a game in progress forfeits the bet."""
        success = api_service.end_game(game_id)
        return EndGameResponse(success=success, game_id=game_id)

    # =========================================================================
    # Move Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games/{game_id}/reveal",
        response_model=MoveResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Tile id out of range"},
            404: {"model": ErrorResponse, "description": "Game not found"},
        },
        tags=["Moves"],
        summary="Reveal a tile",
    )
    async def reveal(game_id: str, body: RevealRequest) -> MoveResponse:
        """
        Reveal a tile.

        Revealing an already revealed tile, or any tile after the game
        ended, returns the unchanged game with `no_op=true`.
        """
        return api_service.reveal(game_id, body)

    @app.post(
        "/api/v1/games/{game_id}/cashout",
        response_model=MoveResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Moves"],
        summary="Cash out",
    )
    async def cash_out(game_id: str) -> MoveResponse:
        """Cash out. Pays nothing (`no_op=true`) before the first safe reveal."""
        return api_service.cash_out(game_id)

    @app.get(
        "/api/v1/games/{game_id}/advice",
        response_model=AdviceResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Advisor"],
        summary="Get advisory report",
    )
    async def get_advice(
        game_id: str,
        mode: Annotated[
            Optional[StrategyModeValue],
            Query(description="Advisor mode (default: the game's own mode)"),
        ] = None,
    ) -> AdviceResponse:
        return api_service.get_advice(game_id, mode.value if mode else None)

    # =========================================================================
    # Player Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/players/{player_id}/balance",
        response_model=BalanceResponse,
        tags=["Players"],
        summary="Get balance",
    )
    async def get_balance(player_id: str) -> BalanceResponse:
        return api_service.get_balance(player_id)

    @app.post(
        "/api/v1/players/{player_id}/balance/reset",
        response_model=BalanceResponse,
        tags=["Players"],
        summary="Reset balance",
    )
    async def reset_balance(player_id: str) -> BalanceResponse:
        return api_service.reset_balance(player_id)

    @app.get(
        "/api/v1/players/{player_id}/history",
        response_model=HistoryResponse,
        tags=["Players"],
        summary="Get game history",
    )
    async def get_history(
        player_id: str,
        limit: Annotated[int, Query(ge=1, le=500, description="Max games returned")] = HISTORY_LIMIT,
    ) -> HistoryResponse:
        """Most recent games first, with aggregate stats."""
        return api_service.get_history(player_id, limit)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="nashmines",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "NashMines API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn nashmines.api.app:app
app = create_app()
