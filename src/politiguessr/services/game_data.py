"""Read-only location and election data, loaded once per process."""

import logging
from dataclasses import dataclass, field
from typing import Protocol
from urllib.parse import urlencode

from politiguessr.domain.locations import Location, RegionResult
from politiguessr.domain.rounds import PublicRound, SecretRound

_logger = logging.getLogger(__name__)

_STREET_VIEW_URL = "https://maps.googleapis.com/maps/api/streetview"
_UNKNOWN_COUNTY = "Unknown County"
_UNKNOWN_STATE = "Unknown"


class GameDataSource(Protocol):
    """Source of the static game data sets."""

    def load_locations(self) -> list[Location]:
        """Return every playable location."""

    def load_results(self) -> dict[str, RegionResult]:
        """Return election results keyed by county FIPS code."""


@dataclass(frozen=True)
class GameData:
    """Immutable snapshot of the locations and the round fact table."""

    locations: tuple[Location, ...]
    results: dict[str, RegionResult] = field(default_factory=dict)

    @classmethod
    def load(cls, source: GameDataSource) -> "GameData":
        """Read both data sets from ``source``."""
        locations = tuple(source.load_locations())
        results = source.load_results()
        _logger.info(
            "Loaded game data: locations=%s results=%s", len(locations), len(results)
        )
        return cls(locations=locations, results=results)

    def result_for(self, fips: str) -> RegionResult:
        """Return the result for a county, or an even placeholder if missing."""
        result = self.results.get(fips)
        if result is None:
            _logger.warning("No election result for location: fips=%s", fips)
            return RegionResult(
                fips=fips, county=_UNKNOWN_COUNTY, state=_UNKNOWN_STATE, margin=0.0
            )
        return result

    def secret_rounds(self, locations: list[Location]) -> list[SecretRound]:
        """Resolve the hidden answer for each selected location, numbered from 1."""
        rounds = []
        for index, location in enumerate(locations, start=1):
            result = self.result_for(location.fips)
            rounds.append(
                SecretRound(
                    round_number=index,
                    fips=location.fips,
                    county=result.county,
                    state=result.state,
                    margin=result.margin,
                    town=location.town,
                )
            )
        return rounds


def public_rounds(
    locations: list[Location], maps_api_key: str | None
) -> list[PublicRound]:
    """Build the client-safe view of the selected locations, numbered from 1."""
    return [
        PublicRound(
            round_number=index,
            lat=location.lat,
            lng=location.lng,
            heading=location.heading,
            panorama_url=street_view_url(location, maps_api_key),
        )
        for index, location in enumerate(locations, start=1)
    ]


def street_view_url(location: Location, api_key: str | None) -> str:
    """Return the Street View static image URL for a location."""
    params: dict[str, object] = {
        "size": "640x400",
        "location": f"{location.lat},{location.lng}",
        "heading": location.heading,
        "pitch": 0,
        "fov": 90,
    }
    if api_key:
        params["key"] = api_key
    return f"{_STREET_VIEW_URL}?{urlencode(params)}"
