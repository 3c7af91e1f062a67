"""Client-visible game errors."""

from politiguessr.domain.limits import Tier


class GameError(Exception):
    """Base class for errors reported to API clients."""

    code = "game_error"
    status_code = 400

    def details(self) -> dict[str, object]:
        """Extra fields for the error response body."""
        return {}


class InvalidTokenError(GameError):
    """The session token is malformed, stale or fails authentication."""

    code = "invalid_session"
    status_code = 401

    def __init__(self) -> None:
        super().__init__("Invalid or expired session")


class UnknownRoundError(GameError):
    """A guess refers to a round that is not part of the session."""

    code = "unknown_round"
    status_code = 404

    def __init__(self, round_number: int) -> None:
        super().__init__(f"Round {round_number} is not part of this session")
        self.round_number = round_number

    def details(self) -> dict[str, object]:
        return {"roundNumber": self.round_number}


class RateLimitedError(GameError):
    """The caller has used up the daily game allowance for their tier."""

    code = "limit_reached"
    status_code = 429

    def __init__(self, tier: Tier) -> None:
        super().__init__("Daily game limit reached")
        self.tier = tier

    def details(self) -> dict[str, object]:
        return {"tier": self.tier.value}


class DuplicateSubmissionError(GameError):
    """The player already has a ranked entry for the day."""

    code = "already_submitted"
    status_code = 409

    def __init__(self) -> None:
        super().__init__("Already submitted today")


class DependencyUnavailableError(GameError):
    """The backing store or identity provider could not be reached."""

    code = "dependency_unavailable"
    status_code = 503

    def details(self) -> dict[str, object]:
        return {"retryable": True}
