"""Pydantic models for the public JSON API."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from politiguessr.domain.leaderboard import DailySubmission, LeaderboardEntry
from politiguessr.domain.rounds import GuessResult, PublicRound
from politiguessr.services.games import CompletedGame, GameStart


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GuessRequest(CamelModel):
    """A single-round guess."""

    session_token: str
    round_number: int
    guessed_margin: float | None = Field(default=None, allow_inf_nan=False)


class RoundGuess(CamelModel):
    """Guess for one round inside a batch."""

    round_number: int
    guessed_margin: float | None = Field(default=None, allow_inf_nan=False)


class BatchGuessRequest(CamelModel):
    """Guesses for every round of a session."""

    session_token: str
    guesses: list[RoundGuess] = Field(default_factory=list)

    @field_validator("guesses")
    @classmethod
    def _unique_rounds(cls, guesses: list[RoundGuess]) -> list[RoundGuess]:
        numbers = [guess.round_number for guess in guesses]
        if len(set(numbers)) != len(numbers):
            raise ValueError("each round may only be guessed once")
        return guesses

    def guess_map(self) -> dict[int, float | None]:
        """Return guesses keyed by round number."""
        return {guess.round_number: guess.guessed_margin for guess in self.guesses}


class DailySubmitRequest(BatchGuessRequest):
    """Daily challenge submission."""

    display_name: str | None = Field(default=None, max_length=100)


class PublicRoundModel(CamelModel):
    """Round as shown before the reveal."""

    round_number: int
    lat: float
    lng: float
    heading: float
    panorama_url: str

    @classmethod
    def from_domain(cls, public: PublicRound) -> "PublicRoundModel":
        return cls(
            round_number=public.round_number,
            lat=public.lat,
            lng=public.lng,
            heading=public.heading,
            panorama_url=public.panorama_url,
        )


class GameStartResponse(CamelModel):
    """A new game or daily challenge session."""

    session_token: str
    rounds: list[PublicRoundModel]
    round_seconds: int
    tier: str | None = None
    daily_limit: int | None = None
    challenge_date: date | None = None

    @classmethod
    def from_domain(cls, start: GameStart, round_seconds: int) -> "GameStartResponse":
        hint = start.limit_hint
        return cls(
            session_token=start.session_token,
            rounds=[PublicRoundModel.from_domain(public) for public in start.rounds],
            round_seconds=round_seconds,
            tier=hint.tier.value if hint else None,
            daily_limit=hint.limit if hint else None,
            challenge_date=start.challenge_date,
        )


class GuessResultModel(CamelModel):
    """Revealed answer and score for a round."""

    round_number: int
    fips: str
    county: str
    state: str
    town: str | None
    actual_margin: float
    guessed_margin: float
    score: int

    @classmethod
    def from_domain(cls, result: GuessResult) -> "GuessResultModel":
        return cls(
            round_number=result.round_number,
            fips=result.fips,
            county=result.county,
            state=result.state,
            town=result.town,
            actual_margin=result.actual_margin,
            guessed_margin=result.guessed_margin,
            score=result.score,
        )


class GameCompleteResponse(CamelModel):
    """Scored session."""

    total_score: int
    rounds: list[GuessResultModel]
    saved: bool

    @classmethod
    def from_domain(cls, game: CompletedGame) -> "GameCompleteResponse":
        return cls(
            total_score=game.total_score,
            rounds=[GuessResultModel.from_domain(result) for result in game.rounds],
            saved=game.saved,
        )


class LeaderboardEntryModel(CamelModel):
    """Leaderboard line."""

    display_name: str
    is_registered: bool
    total_score: int
    rank: int

    @classmethod
    def from_domain(cls, entry: LeaderboardEntry) -> "LeaderboardEntryModel":
        return cls(
            display_name=entry.display_name,
            is_registered=entry.is_registered,
            total_score=entry.total_score,
            rank=entry.rank,
        )


class LeaderboardResponse(CamelModel):
    """Leaderboard for a challenge date."""

    leaderboard: list[LeaderboardEntryModel]
    challenge_date: date


class DailyEntryModel(CamelModel):
    """The caller's own daily result."""

    total_score: int
    rank: int


class DailyAlreadyPlayedResponse(CamelModel):
    """Returned instead of a session when a player already submitted today."""

    already_played: bool = True
    entry: DailyEntryModel
    leaderboard: list[LeaderboardEntryModel]
    challenge_date: date


class DailySubmitResponse(CamelModel):
    """Daily challenge result with rank and leaderboard."""

    total_score: int
    rank: int | None
    display_name: str
    challenge_date: date
    rounds: list[GuessResultModel]
    leaderboard: list[LeaderboardEntryModel]

    @classmethod
    def from_domain(cls, submission: DailySubmission) -> "DailySubmitResponse":
        return cls(
            total_score=submission.total_score,
            rank=submission.rank,
            display_name=submission.display_name,
            challenge_date=submission.challenge_date,
            rounds=[
                GuessResultModel.from_domain(result) for result in submission.rounds
            ],
            leaderboard=[
                LeaderboardEntryModel.from_domain(entry)
                for entry in submission.leaderboard
            ],
        )
