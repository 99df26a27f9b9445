from datetime import timedelta

import pytest

from geofallback.services.location_cache import LOCATION_KEY, LocationCache
from tests.helpers import make_entry


def test_insert_then_get_returns_same_entry(cache, clock):
    entry = make_entry(fetched_at=clock())
    cache.insert(LOCATION_KEY, entry)

    assert cache.get(LOCATION_KEY) == entry


def test_get_missing_key_returns_none(cache):
    assert cache.get(LOCATION_KEY) is None
    assert cache.get("other") is None


def test_ttl_scenario_hit_before_and_miss_after(cache, clock):
    cache.insert(LOCATION_KEY, make_entry(fetched_at=clock()))

    clock.advance(4.9)
    assert cache.get(LOCATION_KEY) is not None

    clock.advance(0.2)
    assert cache.get(LOCATION_KEY) is None


def test_entry_exactly_at_ttl_is_expired(cache, clock):
    cache.insert(LOCATION_KEY, make_entry(fetched_at=clock()))
    clock.advance(5)

    assert cache.get(LOCATION_KEY) is None


def test_get_does_not_physically_remove_expired_entry(cache, clock):
    cache.insert(LOCATION_KEY, make_entry(fetched_at=clock()))
    clock.advance(10)

    assert cache.get(LOCATION_KEY) is None
    assert len(cache) == 1


def test_insert_overwrites_existing_entry(cache, clock):
    cache.insert(LOCATION_KEY, make_entry(fetched_at=clock()))
    newer = make_entry("DE", "Germany", (51.0, 10.0), fetched_at=clock())
    cache.insert(LOCATION_KEY, newer)

    assert cache.get(LOCATION_KEY) == newer
    assert len(cache) == 1


def test_insert_of_already_expired_entry_reads_as_miss(cache, clock):
    cache.insert(LOCATION_KEY, make_entry(fetched_at=clock() - timedelta(seconds=6)))

    assert cache.get(LOCATION_KEY) is None


def test_sweep_removes_all_and_only_expired(cache, clock):
    cache.insert("old", make_entry(fetched_at=clock()))
    clock.advance(3)
    cache.insert("fresh", make_entry("DE", "Germany", (51.0, 10.0), fetched_at=clock()))
    clock.advance(2)  # "old" is now exactly ttl old

    assert cache.sweep() == 1
    assert len(cache) == 1
    assert cache.get("fresh") is not None


def test_sweep_is_idempotent(cache, clock):
    cache.insert(LOCATION_KEY, make_entry(fetched_at=clock()))
    clock.advance(6)

    assert cache.sweep() == 1
    assert cache.sweep() == 0
    assert len(cache) == 0


def test_sweep_on_empty_cache_is_noop(cache):
    assert cache.sweep() == 0


def test_entries_are_immutable(cache, clock):
    cache.insert(LOCATION_KEY, make_entry(fetched_at=clock()))
    entry = cache.get(LOCATION_KEY)

    with pytest.raises(AttributeError):
        entry.country_code = "XX"  # type: ignore[misc]
    assert cache.get(LOCATION_KEY).country_code == "CH"


def test_ttl_accepts_seconds_and_timedelta():
    assert LocationCache(30).ttl == timedelta(seconds=30)
    assert LocationCache(timedelta(minutes=1)).ttl == timedelta(seconds=60)


@pytest.mark.parametrize("ttl", [0, -1, timedelta(0)])
def test_ttl_must_be_positive(ttl):
    with pytest.raises(ValueError):
        LocationCache(ttl)


def test_entry_exposes_latitude_and_longitude():
    entry = make_entry(coordinates=(47.5, 8.25))
    assert entry.latitude == 47.5
    assert entry.longitude == 8.25
