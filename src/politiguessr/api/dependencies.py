"""Request-scoped dependencies for the API routes."""

from fastapi import Header, Request

from politiguessr.config import parse_forwarded_for
from politiguessr.containers import AppContainer
from politiguessr.domain.players import Player

UNKNOWN_FINGERPRINT = "unknown"


def get_container(request: Request) -> AppContainer:
    """Return the application container."""
    return request.app.state.container


def current_player(
    request: Request, authorization: str | None = Header(default=None)
) -> Player | None:
    """Resolve the signed-in player, or None for anonymous callers."""
    return get_container(request).player_service.resolve(authorization)


def client_fingerprint(
    request: Request,
    x_forwarded_for: str | None = Header(default=None),
    x_real_ip: str | None = Header(default=None),
) -> str:
    """Return the caller's network origin, used only in hashed form."""
    forwarded = parse_forwarded_for(x_forwarded_for)
    if forwarded:
        return forwarded
    if x_real_ip and x_real_ip.strip():
        return x_real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_FINGERPRINT
