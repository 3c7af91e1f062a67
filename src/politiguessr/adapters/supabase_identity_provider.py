"""Supabase Auth identity provider with profile lookup."""

import logging
from dataclasses import dataclass
from uuid import UUID

import httpx
from supabase import Client
from supabase_auth.errors import AuthApiError, AuthError, AuthRetryableError

from politiguessr.adapters.supabase_errors import execute
from politiguessr.domain.errors import DependencyUnavailableError
from politiguessr.domain.limits import Tier
from politiguessr.domain.players import Player
from politiguessr.services.players import IdentityProvider

_logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = "Player"
SERVER_ERROR_STATUS = 500


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Verifies access tokens with Supabase Auth and reads the ``profiles`` row."""

    client: Client

    def get_player(self, access_token: str) -> Player | None:
        """Return the player for an access token, or None if it is rejected."""
        try:
            response = self.client.auth.get_user(access_token)
        except (AuthRetryableError, httpx.HTTPError) as exc:
            _logger.warning("Identity provider unreachable: %s", type(exc).__name__)
            raise DependencyUnavailableError("Identity provider unavailable") from exc
        except AuthApiError as exc:
            if exc.status >= SERVER_ERROR_STATUS:
                _logger.warning("Identity provider failed: status=%s", exc.status)
                raise DependencyUnavailableError(
                    "Identity provider unavailable"
                ) from exc
            _logger.info("Access token rejected: status=%s", exc.status)
            return None
        except AuthError as exc:
            _logger.info("Access token rejected: %s", type(exc).__name__)
            return None
        user = response.user if response else None
        if user is None:
            return None

        profile_response = execute(
            self.client.table("profiles")
            .select("tier, username")
            .eq("id", str(user.id))
            .limit(1),
            "profile lookup",
        )
        profile = profile_response.data[0] if profile_response.data else {}
        return Player(
            id=UUID(str(user.id)),
            tier=Tier.PRO if profile.get("tier") == Tier.PRO.value else Tier.FREE,
            display_name=_display_name(profile.get("username"), user.email),
        )


def _display_name(username: object, email: str | None) -> str:
    if isinstance(username, str) and username.strip():
        return username.strip()
    if email and email.split("@", maxsplit=1)[0]:
        return email.split("@", maxsplit=1)[0]
    return DEFAULT_DISPLAY_NAME
