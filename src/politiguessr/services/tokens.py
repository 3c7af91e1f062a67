"""Stateless, HMAC-authenticated session tokens.

A token carries the hidden answers for one game back to the client::

    base64url(payload) "." base64url(HMAC-SHA256(key, payload))

Any process holding the shared secret can verify a token issued by any
other process, so no server-side session table is needed.
"""

import base64
import hashlib
import hmac
import json
import re
import time
from dataclasses import dataclass
from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from politiguessr.domain.errors import InvalidTokenError
from politiguessr.domain.rounds import SecretRound, SessionClaims

TOKEN_VERSION = 1
CLOCK_SKEW_SECONDS = 60

_SEGMENT_RE = re.compile(r"[A-Za-z0-9_-]+")


class _RoundPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    round_number: int = Field(ge=1)
    fips: str
    county: str
    state: str
    margin: float = Field(allow_inf_nan=False)
    town: str | None = None


class _TokenPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    v: Literal[1]
    iat: int
    day: date | None = None
    rounds: list[_RoundPayload] = Field(min_length=1)


@dataclass(frozen=True)
class SessionTokenCodec:
    """Encodes secret rounds into tokens and authenticates them on the way back."""

    secret: str
    max_age_seconds: int | None = None

    def __post_init__(self) -> None:
        if not self.secret:
            raise ValueError("session secret must not be empty")

    def encode(
        self,
        rounds: list[SecretRound],
        *,
        challenge_date: date | None = None,
        issued_at: int | None = None,
    ) -> str:
        """Return a signed token for ``rounds``."""
        if not rounds:
            raise ValueError("a session needs at least one round")
        numbers = [secret.round_number for secret in rounds]
        if len(set(numbers)) != len(numbers):
            raise ValueError("round numbers must be unique within a session")
        payload = _canonical_json(
            {
                "v": TOKEN_VERSION,
                "iat": int(time.time()) if issued_at is None else issued_at,
                "day": challenge_date.isoformat() if challenge_date else None,
                "rounds": [_round_to_dict(secret) for secret in rounds],
            }
        )
        return f"{_b64encode(payload)}.{_b64encode(self._sign(payload))}"

    def decode(self, token: str, *, now: float | None = None) -> SessionClaims:
        """Authenticate ``token`` and return its claims.

        Raises InvalidTokenError for every kind of failure.
        """
        payload = self._authenticate(token)
        try:
            parsed = _TokenPayload.model_validate_json(payload)
        except ValidationError as exc:
            raise InvalidTokenError from exc

        numbers = [secret.round_number for secret in parsed.rounds]
        if len(set(numbers)) != len(numbers):
            raise InvalidTokenError
        if self._is_stale(parsed.iat, time.time() if now is None else now):
            raise InvalidTokenError

        return SessionClaims(
            rounds=[SecretRound(**secret.model_dump()) for secret in parsed.rounds],
            issued_at=parsed.iat,
            challenge_date=parsed.day,
        )

    def _authenticate(self, token: str) -> bytes:
        if not isinstance(token, str):
            raise InvalidTokenError
        payload_segment, separator, signature_segment = token.rpartition(".")
        if not separator:
            raise InvalidTokenError
        payload = _b64decode(payload_segment)
        signature = _b64decode(signature_segment)
        if not hmac.compare_digest(signature, self._sign(payload)):
            raise InvalidTokenError
        return payload

    def _sign(self, payload: bytes) -> bytes:
        return hmac.new(self.secret.encode("utf-8"), payload, hashlib.sha256).digest()

    def _is_stale(self, issued_at: int, now: float) -> bool:
        if self.max_age_seconds is None:
            return False
        if issued_at > now + CLOCK_SKEW_SECONDS:
            return True
        return now - issued_at > self.max_age_seconds


def _round_to_dict(secret: SecretRound) -> dict[str, object]:
    return {
        "round_number": secret.round_number,
        "fips": secret.fips,
        "county": secret.county,
        "state": secret.state,
        "margin": secret.margin,
        "town": secret.town,
    }


def _canonical_json(value: dict[str, object]) -> bytes:
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def _b64encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64decode(segment: str) -> bytes:
    """Decode unpadded base64url, accepting only the canonical spelling."""
    if not _SEGMENT_RE.fullmatch(segment):
        raise InvalidTokenError
    try:
        raw = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
    except ValueError as exc:
        raise InvalidTokenError from exc
    if _b64encode(raw) != segment:
        raise InvalidTokenError
    return raw
