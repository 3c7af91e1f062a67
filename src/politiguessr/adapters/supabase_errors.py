"""Translation of Supabase client failures into game errors."""

import logging
from typing import Protocol

import httpx
from postgrest.exceptions import APIError

from politiguessr.domain.errors import DependencyUnavailableError

_logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


class _Executable(Protocol):
    def execute(self) -> object: ...


def execute(query: _Executable, action: str) -> object:
    """Run a PostgREST query, raising DependencyUnavailableError on failure."""
    try:
        return query.execute()
    except APIError as exc:
        _logger.warning("Supabase %s failed: code=%s", action, exc.code)
        raise DependencyUnavailableError(f"Supabase {action} failed") from exc
    except httpx.HTTPError as exc:
        _logger.warning("Supabase %s unreachable: %s", action, exc)
        raise DependencyUnavailableError(f"Supabase {action} failed") from exc
