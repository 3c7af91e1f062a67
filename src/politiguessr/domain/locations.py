"""Domain models for the static location and election data."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """A playable Street View point."""

    lat: float
    lng: float
    fips: str
    heading: float
    town: str | None = None


@dataclass(frozen=True)
class RegionResult:
    """Election result for a county.

    ``margin`` is R% minus D%: positive leans Republican, negative leans
    Democratic, magnitude is the winning margin in points.
    """

    fips: str
    county: str
    state: str
    margin: float
