"""Daily game-start limits per caller tier."""

import hashlib
import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from politiguessr.domain.errors import DependencyUnavailableError
from politiguessr.domain.limits import Caller, LimitHint, RateLimitDecision, Tier
from politiguessr.domain.players import Player

_logger = logging.getLogger(__name__)

FINGERPRINT_HASH_LENGTH = 32


class GameCounterRepository(Protocol):
    """Atomic daily counters of started games."""

    def check_and_increment(self, caller_key: str, day: date, limit: int) -> bool:
        """Increment the counter only if it is below ``limit``; return whether it was.

        Raises DependencyUnavailableError when the store cannot be reached.
        """


def hash_fingerprint(fingerprint: str, salt: str) -> str:
    """Return a salted, truncated hash so raw network origins are never stored."""
    digest = hashlib.sha256(f"{fingerprint}{salt}".encode()).hexdigest()
    return digest[:FINGERPRINT_HASH_LENGTH]


@dataclass
class RateLimiter:
    """Authoritative game-start limiter backed by atomic store counters."""

    counters: GameCounterRepository
    fingerprint_salt: str
    anon_daily_limit: int = 3
    standard_daily_limit: int = 6

    def caller_for(self, player: Player | None, fingerprint: str) -> Caller:
        """Return the counter identity for a request."""
        if player is not None:
            return Caller(tier=player.tier, key=f"user:{player.id}")
        hashed = hash_fingerprint(fingerprint, self.fingerprint_salt)
        return Caller(tier=Tier.ANON, key=f"anon:{hashed}")

    def limit_for(self, tier: Tier) -> int | None:
        """Return the daily cap for a tier, or None when unlimited."""
        if tier is Tier.PRO:
            return None
        if tier is Tier.FREE:
            return self.standard_daily_limit
        return self.anon_daily_limit

    def check_and_reserve(self, caller: Caller, day: date) -> RateLimitDecision:
        """Reserve one game start for ``caller`` on ``day`` if the tier allows it.

        The check and the increment happen in a single store operation. When
        that store is unavailable the request is allowed.
        """
        limit = self.limit_for(caller.tier)
        if limit is None:
            return RateLimitDecision(allowed=True, tier=caller.tier, limit=None)
        try:
            allowed = self.counters.check_and_increment(caller.key, day, limit)
        except DependencyUnavailableError:
            _logger.warning(
                "Game counter unavailable, allowing game start: tier=%s day=%s",
                caller.tier.value,
                day,
            )
            return RateLimitDecision(allowed=True, tier=caller.tier, limit=limit)
        return RateLimitDecision(allowed=allowed, tier=caller.tier, limit=limit)

    def hint_for(self, decision: RateLimitDecision) -> LimitHint:
        """Return the client-side hint matching a decision."""
        return LimitHint(tier=decision.tier, limit=decision.limit)
