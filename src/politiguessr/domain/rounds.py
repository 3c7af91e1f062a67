"""Domain models for game rounds."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class SecretRound:
    """Hidden answer for a single round, carried only inside a session token."""

    round_number: int
    fips: str
    county: str
    state: str
    margin: float
    town: str | None = None


@dataclass(frozen=True)
class PublicRound:
    """Round data that is safe to send before the reveal."""

    round_number: int
    lat: float
    lng: float
    heading: float
    panorama_url: str


@dataclass(frozen=True)
class GuessResult:
    """Scored outcome of a single guess."""

    round_number: int
    fips: str
    county: str
    state: str
    town: str | None
    actual_margin: float
    guessed_margin: float
    score: int


@dataclass(frozen=True)
class SessionClaims:
    """Authenticated contents of a decoded session token."""

    rounds: list[SecretRound]
    issued_at: int
    challenge_date: date | None = None
