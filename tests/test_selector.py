"""Tests for round selection."""

from datetime import date

from politiguessr.domain.locations import Location
from politiguessr.services.selector import (
    daily_seed,
    seeded_random,
    select_daily,
    select_random,
)
from tests.conftest import make_locations


def _labelled(labels: str) -> list[Location]:
    return [Location(lat=0.0, lng=0.0, fips=label, heading=0.0) for label in labels]


def test_daily_seed_encodes_date() -> None:
    assert daily_seed(date(2025, 3, 1)) == 20250301


def test_seeded_random_is_reproducible() -> None:
    first = seeded_random(20250301)
    second = seeded_random(20250301)

    draws = [first() for _ in range(5)]

    assert draws == [second() for _ in range(5)]
    assert draws[0] == 1242837240 / 2**32
    assert all(0.0 <= value < 1.0 for value in draws)


def test_select_daily_matches_reference_shuffle() -> None:
    picked = select_daily(date(2025, 3, 1), _labelled("abcdef"), 3)

    assert [location.fips for location in picked] == ["c", "d", "a"]


def test_select_daily_same_date_same_rounds() -> None:
    pool = make_locations(500)

    first = select_daily(date(2025, 3, 1), pool, 5)
    second = select_daily(date(2025, 3, 1), list(pool), 5)

    assert len(first) == 5
    assert first == second
    assert len({location.fips for location in first}) == 5


def test_select_daily_changes_with_date() -> None:
    pool = make_locations(500)

    assert select_daily(date(2025, 3, 1), pool, 5) != select_daily(
        date(2025, 3, 2), pool, 5
    )


def test_select_daily_does_not_mutate_pool() -> None:
    pool = make_locations(20)
    snapshot = list(pool)

    select_daily(date(2025, 3, 1), pool, 5)

    assert pool == snapshot


def test_select_daily_short_pool_returns_everything() -> None:
    pool = make_locations(3)

    picked = select_daily(date(2025, 3, 1), pool, 5)

    assert sorted(location.fips for location in picked) == sorted(
        location.fips for location in pool
    )


def test_select_random_returns_distinct_subset() -> None:
    pool = make_locations(50)

    picked = select_random(pool, 5)

    assert len(picked) == 5
    assert len({location.fips for location in picked}) == 5
    assert all(location in pool for location in picked)


def test_select_random_short_pool_and_zero_count() -> None:
    pool = make_locations(2)

    assert len(select_random(pool, 5)) == 2
    assert select_random(pool, 0) == []
