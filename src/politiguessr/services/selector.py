"""Round selection for daily challenges and ad-hoc games."""

import logging
import random
from collections.abc import Callable, Sequence
from datetime import date

from politiguessr.domain.locations import Location

_logger = logging.getLogger(__name__)

_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_UINT32 = 2**32


def daily_seed(day: date) -> int:
    """Return the 32-bit seed for a calendar date."""
    return (day.year * 10000 + day.month * 100 + day.day) % _UINT32


def seeded_random(seed: int) -> Callable[[], float]:
    """Return a reproducible generator of floats in [0, 1)."""
    state = seed % _UINT32

    def draw() -> float:
        nonlocal state
        state = (_LCG_MULTIPLIER * state + _LCG_INCREMENT) % _UINT32
        return state / _UINT32

    return draw


def select_daily(
    day: date, locations: Sequence[Location], count: int
) -> list[Location]:
    """Return the same ordered subset of locations for every caller on ``day``.

    Uses a Fisher-Yates shuffle driven by a linear congruential generator
    seeded from the date alone, so no coordination between processes is
    needed.
    """
    pool = list(locations)
    _warn_if_short(pool, count)
    draw = seeded_random(daily_seed(day))
    for i in range(len(pool) - 1, 0, -1):
        j = int(draw() * (i + 1))
        pool[i], pool[j] = pool[j], pool[i]
    return pool[: max(count, 0)]


def select_random(locations: Sequence[Location], count: int) -> list[Location]:
    """Return a random ordered subset of locations."""
    _warn_if_short(locations, count)
    return random.sample(list(locations), min(max(count, 0), len(locations)))


def _warn_if_short(locations: Sequence[Location], count: int) -> None:
    if len(locations) < count:
        _logger.warning(
            "Location pool smaller than requested rounds: available=%s requested=%s",
            len(locations),
            count,
        )
