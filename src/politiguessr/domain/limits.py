"""Domain models for daily game limits."""

from dataclasses import dataclass
from enum import Enum


class Tier(str, Enum):
    """Caller class that determines the daily game allowance."""

    ANON = "anon"
    FREE = "free"
    PRO = "pro"


@dataclass(frozen=True)
class Caller:
    """Identity used as the key for daily game counters."""

    tier: Tier
    key: str


@dataclass(frozen=True)
class RateLimitDecision:
    """Authoritative result of a game-start reservation."""

    allowed: bool
    tier: Tier
    limit: int | None


@dataclass(frozen=True)
class LimitHint:
    """Allowance shown to the client as `tier` and `dailyLimit`.

    Informational only; the server decides with a RateLimitDecision.
    """

    tier: Tier
    limit: int | None
