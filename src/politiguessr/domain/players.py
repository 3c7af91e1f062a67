"""Domain models for identified players."""

from dataclasses import dataclass
from uuid import UUID

from politiguessr.domain.limits import Tier


@dataclass(frozen=True)
class Player:
    """An account resolved from the identity provider."""

    id: UUID
    tier: Tier
    display_name: str
