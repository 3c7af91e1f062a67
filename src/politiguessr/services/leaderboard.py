"""Daily challenge leaderboard ranking and submissions."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from politiguessr.domain.errors import DependencyUnavailableError
from politiguessr.domain.leaderboard import (
    DailyScoreRecord,
    DailyScoreRow,
    DailySubmission,
    LeaderboardEntry,
    LeaderboardScope,
)
from politiguessr.domain.players import Player
from politiguessr.domain.rounds import GuessResult
from politiguessr.services.scoring import total_score

_logger = logging.getLogger(__name__)

MAX_DISPLAY_NAME_LENGTH = 20
GUEST_NAME = "Guest"


class ScoreRepository(Protocol):
    """Persistence interface for daily challenge scores."""

    def insert_score(self, record: DailyScoreRecord) -> DailyScoreRow:
        """Insert a submission and return the stored row.

        Raises DuplicateSubmissionError when the user already has a row for
        the day.
        """

    def count_ahead(
        self, day: date, total_score: int, submitted_at: datetime | None
    ) -> int:
        """Count rows with a higher total, plus equal totals submitted earlier."""

    def list_scores(
        self, day: date, scope: LeaderboardScope, limit: int
    ) -> list[DailyScoreRow]:
        """Return rows by total descending, then submission time ascending."""

    def get_score(self, day: date, user_id: UUID) -> DailyScoreRow | None:
        """Return a user's row for the day, if present."""


@dataclass
class LeaderboardService:
    """Ranks daily totals and records submissions."""

    repository: ScoreRepository
    leaderboard_size: int = 20

    def rank(
        self,
        day: date,
        scope: LeaderboardScope = LeaderboardScope.ALL,
        limit: int | None = None,
    ) -> list[LeaderboardEntry]:
        """Return ranked entries for a day; ties go to the earlier submission."""
        rows = self.repository.list_scores(day, scope, limit or self.leaderboard_size)
        return [
            LeaderboardEntry(
                display_name=row.display_name,
                is_registered=row.is_registered,
                total_score=row.total_score,
                rank=position,
            )
            for position, row in enumerate(rows, start=1)
        ]

    def rank_of(
        self, day: date, total: int, submitted_at: datetime | None = None
    ) -> int:
        """Return the rank a total holds on a day without listing every entry."""
        return 1 + self.repository.count_ahead(day, total, submitted_at)

    def entry_for(self, day: date, player: Player) -> tuple[DailyScoreRow, int] | None:
        """Return a player's existing entry and its rank, if they played."""
        row = self.repository.get_score(day, player.id)
        if row is None:
            return None
        return row, self.rank_of(day, row.total_score, row.submitted_at)

    def submit(
        self,
        day: date,
        player: Player | None,
        display_name: str | None,
        results: list[GuessResult],
    ) -> DailySubmission:
        """Record a day's total and return its rank with the current leaderboard."""
        resolved_name = resolve_display_name(player, display_name)
        total = total_score(results)
        row = self.repository.insert_score(
            DailyScoreRecord(
                challenge_date=day,
                user_id=player.id if player else None,
                display_name=resolved_name,
                is_registered=player is not None,
                total_score=total,
                rounds=results,
            )
        )
        _logger.info(
            "Daily score submitted: day=%s registered=%s total=%s",
            day,
            player is not None,
            total,
        )
        rank: int | None = None
        leaderboard: list[LeaderboardEntry] = []
        try:
            rank = self.rank_of(day, total, row.submitted_at)
            leaderboard = self.rank(day)
        except DependencyUnavailableError:
            # Row already committed.
            _logger.warning(
                "Daily score stored without ranking: day=%s rank=%s", day, rank
            )
        return DailySubmission(
            challenge_date=day,
            display_name=resolved_name,
            total_score=total,
            rank=rank,
            rounds=results,
            leaderboard=leaderboard,
        )


def resolve_display_name(player: Player | None, requested: str | None) -> str:
    """Return the name shown on the leaderboard."""
    if player is not None:
        return player.display_name
    cleaned = (requested or "").strip()[:MAX_DISPLAY_NAME_LENGTH]
    return cleaned or GUEST_NAME
