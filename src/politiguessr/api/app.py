"""FastAPI application factory."""

import logging
from datetime import date

from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.responses import JSONResponse

from politiguessr.api.dependencies import (
    client_fingerprint,
    current_player,
    get_container,
)
from politiguessr.api.schemas import (
    BatchGuessRequest,
    DailyAlreadyPlayedResponse,
    DailyEntryModel,
    DailySubmitRequest,
    DailySubmitResponse,
    GameCompleteResponse,
    GameStartResponse,
    GuessRequest,
    GuessResultModel,
    LeaderboardEntryModel,
    LeaderboardResponse,
)
from politiguessr.app_logging import configure_logging
from politiguessr.containers import AppContainer
from politiguessr.domain.errors import GameError
from politiguessr.domain.leaderboard import LeaderboardScope
from politiguessr.domain.players import Player
from politiguessr.services.games import today


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Politiguessr")
    app.state.container = container

    @app.exception_handler(GameError)
    async def handle_game_error(request: Request, exc: GameError) -> JSONResponse:
        """Render game errors in the uniform error shape."""
        if exc.status_code >= 500:
            logger.warning(
                "Request failed on a dependency: path=%s error=%s",
                request.url.path,
                exc,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.code, "message": str(exc), **exc.details()},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/game")
    def start_game(
        player: Player | None = Depends(current_player),
        fingerprint: str = Depends(client_fingerprint),
        state_container: AppContainer = Depends(get_container),
    ) -> GameStartResponse:
        """Start an ad-hoc game, subject to the caller's daily limit."""
        start = state_container.game_service.start_game(player, fingerprint)
        return GameStartResponse.from_domain(
            start, state_container.settings.round_seconds
        )

    @app.post("/api/guess")
    def submit_guess(
        body: GuessRequest,
        state_container: AppContainer = Depends(get_container),
    ) -> GuessResultModel:
        """Reveal and score a single round."""
        result = state_container.game_service.submit_guess(
            body.session_token, body.round_number, body.guessed_margin
        )
        return GuessResultModel.from_domain(result)

    @app.post("/api/game/complete")
    def complete_game(
        body: BatchGuessRequest,
        player: Player | None = Depends(current_player),
        state_container: AppContainer = Depends(get_container),
    ) -> GameCompleteResponse:
        """Score a finished game and save it for signed-in players."""
        game = state_container.game_service.complete_game(
            body.session_token, body.guess_map(), player
        )
        return GameCompleteResponse.from_domain(game)

    @app.get("/api/daily")
    def start_daily(
        player: Player | None = Depends(current_player),
        state_container: AppContainer = Depends(get_container),
    ) -> GameStartResponse | DailyAlreadyPlayedResponse:
        """Return today's challenge, or the player's result if already played."""
        day = today()
        if player is not None:
            existing = state_container.leaderboard_service.entry_for(day, player)
            if existing is not None:
                row, rank = existing
                return DailyAlreadyPlayedResponse(
                    entry=DailyEntryModel(total_score=row.total_score, rank=rank),
                    leaderboard=_leaderboard(state_container, day),
                    challenge_date=day,
                )
        start = state_container.game_service.start_daily(day)
        return GameStartResponse.from_domain(
            start, state_container.settings.round_seconds
        )

    @app.post("/api/daily/submit")
    def submit_daily(
        body: DailySubmitRequest,
        player: Player | None = Depends(current_player),
        state_container: AppContainer = Depends(get_container),
    ) -> DailySubmitResponse:
        """Score the daily challenge and place it on the leaderboard."""
        submission = state_container.game_service.submit_daily(
            body.session_token, body.guess_map(), player, body.display_name
        )
        return DailySubmitResponse.from_domain(submission)

    @app.get("/api/daily/leaderboard")
    def daily_leaderboard(
        response: Response,
        day: date | None = Query(default=None, alias="date"),
        scope: LeaderboardScope = LeaderboardScope.ALL,
        state_container: AppContainer = Depends(get_container),
    ) -> LeaderboardResponse:
        """Return the ranked leaderboard for a challenge date."""
        response.headers["Cache-Control"] = "no-store"
        challenge_date = day or today()
        return LeaderboardResponse(
            leaderboard=_leaderboard(state_container, challenge_date, scope),
            challenge_date=challenge_date,
        )

    return app


def _leaderboard(
    state_container: AppContainer,
    day: date,
    scope: LeaderboardScope = LeaderboardScope.ALL,
) -> list[LeaderboardEntryModel]:
    return [
        LeaderboardEntryModel.from_domain(entry)
        for entry in state_container.leaderboard_service.rank(day, scope)
    ]
