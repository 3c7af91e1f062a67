"""Supabase repository for daily challenge scores."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from politiguessr.adapters.supabase_errors import UNIQUE_VIOLATION, execute
from politiguessr.domain.errors import (
    DependencyUnavailableError,
    DuplicateSubmissionError,
)
from politiguessr.domain.leaderboard import (
    DailyScoreRecord,
    DailyScoreRow,
    LeaderboardScope,
)
from politiguessr.domain.rounds import GuessResult
from politiguessr.services.leaderboard import ScoreRepository

_logger = logging.getLogger(__name__)

_TABLE = "daily_challenge_scores"
_COLUMNS = (
    "challenge_date, user_id, display_name, is_registered, total_score, submitted_at"
)


@dataclass
class SupabaseScoreRepository(ScoreRepository):
    """Supabase implementation for daily scores.

    The table has a unique constraint on ``(challenge_date, user_id)``;
    anonymous rows carry a null user id and are therefore never rejected.
    """

    client: Client

    def insert_score(self, record: DailyScoreRecord) -> DailyScoreRow:
        """Insert a submission row and return it."""
        try:
            response = (
                self.client.table(_TABLE)
                .insert(
                    {
                        "challenge_date": record.challenge_date.isoformat(),
                        "user_id": str(record.user_id) if record.user_id else None,
                        "display_name": record.display_name,
                        "is_registered": record.is_registered,
                        "total_score": record.total_score,
                        "rounds": serialize_results(record.rounds),
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise DuplicateSubmissionError from exc
            _logger.warning("Daily score insert failed: code=%s", exc.code)
            raise DependencyUnavailableError("Failed to save score") from exc
        except httpx.HTTPError as exc:
            raise DependencyUnavailableError("Failed to save score") from exc
        if not response.data:
            raise DependencyUnavailableError("Failed to save score")
        return _parse_row(response.data[0])

    def count_ahead(
        self, day: date, total_score: int, submitted_at: datetime | None
    ) -> int:
        """Count rows ranked ahead of a total on a day."""
        higher = execute(
            self.client.table(_TABLE)
            .select("total_score", count="exact", head=True)
            .eq("challenge_date", day.isoformat())
            .gt("total_score", total_score),
            "rank count",
        )
        ahead = higher.count or 0
        if submitted_at is None:
            return ahead
        earlier_ties = execute(
            self.client.table(_TABLE)
            .select("total_score", count="exact", head=True)
            .eq("challenge_date", day.isoformat())
            .eq("total_score", total_score)
            .lt("submitted_at", submitted_at.isoformat()),
            "rank tie count",
        )
        return ahead + (earlier_ties.count or 0)

    def list_scores(
        self, day: date, scope: LeaderboardScope, limit: int
    ) -> list[DailyScoreRow]:
        """Return ordered rows for a day."""
        query = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("challenge_date", day.isoformat())
        )
        if scope is LeaderboardScope.REGISTERED:
            query = query.eq("is_registered", True)
        response = execute(
            query.order("total_score", desc=True)
            .order("submitted_at", desc=False)
            .limit(limit),
            "leaderboard listing",
        )
        return [_parse_row(row) for row in response.data or []]

    def get_score(self, day: date, user_id: UUID) -> DailyScoreRow | None:
        """Return a user's row for the day, if present."""
        response = execute(
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("challenge_date", day.isoformat())
            .eq("user_id", str(user_id))
            .limit(1),
            "daily score lookup",
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])


def serialize_results(results: list[GuessResult]) -> list[dict[str, object]]:
    """Return the JSON detail stored alongside a total."""
    return [
        {
            "roundNumber": result.round_number,
            "fips": result.fips,
            "county": result.county,
            "state": result.state,
            "town": result.town,
            "actualMargin": result.actual_margin,
            "guessedMargin": result.guessed_margin,
            "score": result.score,
        }
        for result in results
    ]


def _parse_row(row: dict[str, object]) -> DailyScoreRow:
    user_id = row.get("user_id")
    submitted_at = _parse_submitted_at(row.get("submitted_at"))
    return DailyScoreRow(
        challenge_date=date.fromisoformat(str(row["challenge_date"])[:10]),
        user_id=UUID(str(user_id)) if user_id else None,
        display_name=str(row.get("display_name", "")),
        is_registered=bool(row.get("is_registered", False)),
        total_score=int(row.get("total_score", 0)),
        submitted_at=submitted_at,
    )


def _parse_submitted_at(raw: object) -> datetime:
    """Return the store-assigned submission time used to break ties."""
    if not isinstance(raw, str) or not raw:
        _logger.warning("Daily score row without submitted_at")
        raise DependencyUnavailableError("Malformed daily score row")
    try:
        return datetime.fromisoformat(raw)
    except ValueError as exc:
        _logger.warning("Daily score row with bad submitted_at: %s", raw)
        raise DependencyUnavailableError("Malformed daily score row") from exc
