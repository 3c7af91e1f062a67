"""Dependency container wiring for the application."""

from dataclasses import dataclass
from pathlib import Path

from supabase import create_client

from politiguessr.adapters.json_game_data import JsonGameDataSource
from politiguessr.adapters.supabase_counter_repository import (
    SupabaseGameCounterRepository,
)
from politiguessr.adapters.supabase_game_repository import SupabaseGameRepository
from politiguessr.adapters.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from politiguessr.adapters.supabase_score_repository import SupabaseScoreRepository
from politiguessr.config import Settings
from politiguessr.services.game_data import GameData
from politiguessr.services.games import GameService
from politiguessr.services.leaderboard import LeaderboardService
from politiguessr.services.players import PlayerService
from politiguessr.services.rate_limits import RateLimiter
from politiguessr.services.scoring import ScoringEngine
from politiguessr.services.tokens import SessionTokenCodec


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    player_service: PlayerService
    game_service: GameService
    leaderboard_service: LeaderboardService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    game_data = GameData.load(JsonGameDataSource(Path(resolved_settings.data_dir)))
    leaderboard_service = LeaderboardService(
        repository=SupabaseScoreRepository(supabase_client),
        leaderboard_size=resolved_settings.leaderboard_size,
    )
    rate_limiter = RateLimiter(
        counters=SupabaseGameCounterRepository(supabase_client),
        fingerprint_salt=resolved_settings.session_secret,
        anon_daily_limit=resolved_settings.anon_daily_limit,
        standard_daily_limit=resolved_settings.standard_daily_limit,
    )
    game_service = GameService(
        game_data=game_data,
        codec=SessionTokenCodec(
            secret=resolved_settings.session_secret,
            max_age_seconds=resolved_settings.session_max_age_seconds,
        ),
        scoring=ScoringEngine(
            guess_min=resolved_settings.guess_min,
            guess_max=resolved_settings.guess_max,
        ),
        rate_limiter=rate_limiter,
        leaderboard=leaderboard_service,
        game_repository=SupabaseGameRepository(supabase_client),
        rounds_per_game=resolved_settings.rounds_per_game,
        maps_api_key=resolved_settings.google_maps_api_key,
    )
    player_service = PlayerService(SupabaseIdentityProvider(supabase_client))

    return AppContainer(
        settings=resolved_settings,
        player_service=player_service,
        game_service=game_service,
        leaderboard_service=leaderboard_service,
    )
