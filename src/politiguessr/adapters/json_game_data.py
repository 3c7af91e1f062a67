"""JSON file source for the static game data."""

import json
from dataclasses import dataclass
from pathlib import Path

from politiguessr.domain.locations import Location, RegionResult
from politiguessr.services.game_data import GameDataSource

LOCATIONS_FILE = "locations.json"
RESULTS_FILE = "election-results.json"


@dataclass
class JsonGameDataSource(GameDataSource):
    """Reads ``locations.json`` and ``election-results.json`` from a directory."""

    data_dir: Path

    def load_locations(self) -> list[Location]:
        """Return every curated location."""
        rows = _read_json(self.data_dir / LOCATIONS_FILE)
        if not isinstance(rows, list):
            raise ValueError(f"{LOCATIONS_FILE} must contain a list")
        return [_parse_location(row) for row in rows]

    def load_results(self) -> dict[str, RegionResult]:
        """Return county results keyed by FIPS code."""
        rows = _read_json(self.data_dir / RESULTS_FILE)
        if not isinstance(rows, dict):
            raise ValueError(f"{RESULTS_FILE} must contain an object")
        return {
            str(fips).zfill(5): _parse_result(str(fips).zfill(5), row)
            for fips, row in rows.items()
        }


def _read_json(path: Path) -> object:
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def _parse_location(row: dict[str, object]) -> Location:
    town = row.get("town")
    return Location(
        lat=float(row["lat"]),
        lng=float(row["lng"]),
        fips=str(row["fips"]).zfill(5),
        heading=float(row.get("heading", 0.0)),
        town=str(town) if town else None,
    )


def _parse_result(fips: str, row: dict[str, object]) -> RegionResult:
    return RegionResult(
        fips=fips,
        county=str(row.get("county", "")),
        state=str(row.get("state", "")),
        margin=float(row.get("margin", 0.0)),
    )
