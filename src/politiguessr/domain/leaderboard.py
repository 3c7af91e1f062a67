"""Domain models for the daily challenge leaderboard."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID

from politiguessr.domain.rounds import GuessResult


class LeaderboardScope(str, Enum):
    """Which submissions take part in a leaderboard listing."""

    ALL = "all"
    REGISTERED = "registered"


@dataclass(frozen=True)
class DailyScoreRecord:
    """A daily challenge submission to be stored."""

    challenge_date: date
    user_id: UUID | None
    display_name: str
    is_registered: bool
    total_score: int
    rounds: list[GuessResult]


@dataclass(frozen=True)
class DailyScoreRow:
    """A stored daily challenge submission."""

    challenge_date: date
    user_id: UUID | None
    display_name: str
    is_registered: bool
    total_score: int
    submitted_at: datetime


@dataclass(frozen=True)
class LeaderboardEntry:
    """A ranked leaderboard line."""

    display_name: str
    is_registered: bool
    total_score: int
    rank: int


@dataclass(frozen=True)
class DailySubmission:
    """Result returned to the player who just submitted.

    The score is stored before it is ranked. When the ranking reads fail
    afterwards, ``rank`` is None and ``leaderboard`` is empty.
    """

    challenge_date: date
    display_name: str
    total_score: int
    rank: int | None
    rounds: list[GuessResult]
    leaderboard: list[LeaderboardEntry]
