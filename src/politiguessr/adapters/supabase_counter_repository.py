"""Supabase-backed atomic daily game counters."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from politiguessr.adapters.supabase_errors import execute
from politiguessr.services.rate_limits import GameCounterRepository

CHECK_AND_INCREMENT_FUNCTION = "check_and_increment_game_count"


@dataclass
class SupabaseGameCounterRepository(GameCounterRepository):
    """Counts game starts through a single-statement database function."""

    client: Client

    def check_and_increment(self, caller_key: str, day: date, limit: int) -> bool:
        """Reserve a game start if the caller is below ``limit`` for ``day``."""
        response = execute(
            self.client.rpc(
                CHECK_AND_INCREMENT_FUNCTION,
                {"p_caller": caller_key, "p_date": day.isoformat(), "p_limit": limit},
            ),
            "game counter check",
        )
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        return data is True
