"""Scoring of margin guesses."""

import math
from collections.abc import Mapping
from dataclasses import dataclass

from politiguessr.domain.errors import UnknownRoundError
from politiguessr.domain.rounds import GuessResult, SecretRound

MAX_ROUND_SCORE = 100
MISSING_GUESS = 0.0


@dataclass(frozen=True)
class ScoringEngine:
    """Scores guesses against actual margins within a fixed guess domain."""

    guess_min: float = -50.0
    guess_max: float = 50.0

    def __post_init__(self) -> None:
        if self.guess_min > self.guess_max:
            raise ValueError("guess_min must not exceed guess_max")

    def normalize_guess(self, guessed: float | None) -> float:
        """Clamp a guess to the domain; missing or non-finite guesses count as even."""
        if guessed is None or not math.isfinite(guessed):
            guessed = MISSING_GUESS
        return min(max(guessed, self.guess_min), self.guess_max)

    def score(self, actual: float, guessed: float | None) -> int:
        """Return ``max(0, round(100 - |actual - guessed|))`` with halves rounded up."""
        diff = abs(actual - self.normalize_guess(guessed))
        return max(0, math.floor(MAX_ROUND_SCORE - diff + 0.5))

    def score_round(self, secret: SecretRound, guessed: float | None) -> GuessResult:
        """Score a single round."""
        normalized = self.normalize_guess(guessed)
        return GuessResult(
            round_number=secret.round_number,
            fips=secret.fips,
            county=secret.county,
            state=secret.state,
            town=secret.town,
            actual_margin=secret.margin,
            guessed_margin=normalized,
            score=self.score(secret.margin, normalized),
        )

    def score_session(
        self, rounds: list[SecretRound], guesses: Mapping[int, float | None]
    ) -> list[GuessResult]:
        """Score every round of a session.

        Rounds without a guess are scored with the even sentinel. A guess for a
        round that is not in the session fails the whole batch.
        """
        known = {secret.round_number for secret in rounds}
        for round_number in guesses:
            if round_number not in known:
                raise UnknownRoundError(round_number)
        return [
            self.score_round(secret, guesses.get(secret.round_number))
            for secret in sorted(rounds, key=lambda secret: secret.round_number)
        ]


def find_round(rounds: list[SecretRound], round_number: int) -> SecretRound:
    """Return the round with ``round_number`` or raise UnknownRoundError."""
    for secret in rounds:
        if secret.round_number == round_number:
            return secret
    raise UnknownRoundError(round_number)


def total_score(results: list[GuessResult]) -> int:
    """Return the sum of round scores."""
    return sum(result.score for result in results)
