"""Resolution of identified players from bearer tokens."""

from dataclasses import dataclass
from typing import Protocol

from politiguessr.domain.players import Player

_BEARER_PREFIX = "bearer "


class IdentityProvider(Protocol):
    """External identity provider holding accounts and profiles."""

    def get_player(self, access_token: str) -> Player | None:
        """Return the player for a valid access token, or None."""


@dataclass
class PlayerService:
    """Maps request credentials to players; anonymous callers map to None."""

    identity_provider: IdentityProvider

    def resolve(self, authorization: str | None) -> Player | None:
        """Return the player for an ``Authorization`` header value."""
        access_token = parse_bearer_token(authorization)
        if access_token is None:
            return None
        return self.identity_provider.get_player(access_token)


def parse_bearer_token(authorization: str | None) -> str | None:
    """Extract the token from a ``Bearer`` authorization header."""
    if not authorization:
        return None
    if not authorization.lower().startswith(_BEARER_PREFIX):
        return None
    token = authorization[len(_BEARER_PREFIX) :].strip()
    return token or None
