"""Game orchestration: starting sessions and scoring submitted guesses."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from politiguessr.domain.errors import InvalidTokenError, RateLimitedError
from politiguessr.domain.leaderboard import DailySubmission
from politiguessr.domain.limits import LimitHint
from politiguessr.domain.players import Player
from politiguessr.domain.rounds import GuessResult, PublicRound
from politiguessr.services.game_data import GameData, public_rounds
from politiguessr.services.leaderboard import LeaderboardService
from politiguessr.services.rate_limits import RateLimiter
from politiguessr.services.scoring import ScoringEngine, find_round, total_score
from politiguessr.services.selector import select_daily, select_random
from politiguessr.services.tokens import SessionTokenCodec

_logger = logging.getLogger(__name__)


class GameRepository(Protocol):
    """Persistence interface for completed ad-hoc games."""

    def save_game(
        self, user_id: UUID, total_score: int, rounds: list[GuessResult]
    ) -> None:
        """Store a finished game for an identified player."""


@dataclass(frozen=True)
class GameStart:
    """A freshly issued game session."""

    session_token: str
    rounds: list[PublicRound]
    limit_hint: LimitHint | None = None
    challenge_date: date | None = None


@dataclass(frozen=True)
class CompletedGame:
    """Scored results of a whole session."""

    total_score: int
    rounds: list[GuessResult]
    saved: bool


@dataclass
class GameService:
    """Issues stateless game sessions and scores guesses against them."""

    game_data: GameData
    codec: SessionTokenCodec
    scoring: ScoringEngine
    rate_limiter: RateLimiter
    leaderboard: LeaderboardService
    game_repository: GameRepository
    rounds_per_game: int = 5
    maps_api_key: str | None = None

    def start_game(self, player: Player | None, fingerprint: str) -> GameStart:
        """Start an ad-hoc game after reserving it against the daily limit."""
        caller = self.rate_limiter.caller_for(player, fingerprint)
        decision = self.rate_limiter.check_and_reserve(caller, today())
        if not decision.allowed:
            _logger.info("Game start denied: tier=%s", decision.tier.value)
            raise RateLimitedError(decision.tier)

        locations = select_random(self.game_data.locations, self.rounds_per_game)
        token = self.codec.encode(self.game_data.secret_rounds(locations))
        return GameStart(
            session_token=token,
            rounds=public_rounds(locations, self.maps_api_key),
            limit_hint=self.rate_limiter.hint_for(decision),
        )

    def start_daily(self, day: date) -> GameStart:
        """Start the daily challenge shared by every player on ``day``."""
        locations = select_daily(day, self.game_data.locations, self.rounds_per_game)
        token = self.codec.encode(
            self.game_data.secret_rounds(locations), challenge_date=day
        )
        return GameStart(
            session_token=token,
            rounds=public_rounds(locations, self.maps_api_key),
            challenge_date=day,
        )

    def submit_guess(
        self, session_token: str, round_number: int, guessed: float | None
    ) -> GuessResult:
        """Reveal and score one round of a session."""
        claims = self.codec.decode(session_token)
        return self.scoring.score_round(
            find_round(claims.rounds, round_number), guessed
        )

    def complete_game(
        self,
        session_token: str,
        guesses: Mapping[int, float | None],
        player: Player | None,
    ) -> CompletedGame:
        """Score a whole session and keep it in the player's history."""
        claims = self.codec.decode(session_token)
        results = self.scoring.score_session(claims.rounds, guesses)
        total = total_score(results)
        if player is None:
            return CompletedGame(total_score=total, rounds=results, saved=False)
        self.game_repository.save_game(player.id, total, results)
        return CompletedGame(total_score=total, rounds=results, saved=True)

    def submit_daily(
        self,
        session_token: str,
        guesses: Mapping[int, float | None],
        player: Player | None,
        display_name: str | None,
    ) -> DailySubmission:
        """Score a daily challenge and record it on that day's leaderboard."""
        claims = self.codec.decode(session_token)
        if claims.challenge_date is None:
            raise InvalidTokenError
        results = self.scoring.score_session(claims.rounds, guesses)
        return self.leaderboard.submit(
            claims.challenge_date, player, display_name, results
        )


def today() -> date:
    """Return the current UTC calendar date."""
    return datetime.now(tz=UTC).date()
