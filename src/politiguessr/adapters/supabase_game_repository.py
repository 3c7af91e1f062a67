"""Supabase repository for finished ad-hoc games."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from politiguessr.adapters.supabase_errors import execute
from politiguessr.adapters.supabase_score_repository import serialize_results
from politiguessr.domain.rounds import GuessResult
from politiguessr.services.games import GameRepository


@dataclass
class SupabaseGameRepository(GameRepository):
    """Supabase implementation for game history."""

    client: Client

    def save_game(
        self, user_id: UUID, total_score: int, rounds: list[GuessResult]
    ) -> None:
        """Insert a games row."""
        execute(
            self.client.table("games").insert(
                {
                    "user_id": str(user_id),
                    "total_score": total_score,
                    "rounds": serialize_results(rounds),
                }
            ),
            "game save",
        )
