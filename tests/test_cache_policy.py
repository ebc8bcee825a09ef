"""
Tests for the country-list staleness rule.
"""
import pytest

from covid_stats.services.cache.cache_policy import CachePolicy, DEFAULT_CACHE_DURATION_MS
from tests.conftest import FakeClock, HOUR_MS, START_MS


class TestCachePolicy:
    """Test CachePolicy.is_stale boundaries."""

    def test_default_duration_is_one_hour(self):
        assert DEFAULT_CACHE_DURATION_MS == HOUR_MS
        assert CachePolicy().cache_duration_ms == HOUR_MS

    def test_missing_marker_is_stale(self, policy):
        assert policy.is_stale(None)

    def test_zero_marker_is_stale(self, policy):
        assert policy.is_stale(0)

    def test_recent_marker_is_fresh(self, policy):
        assert not policy.is_stale(START_MS - 1000)

    def test_age_equal_to_duration_is_not_stale(self, policy):
        assert not policy.is_stale(START_MS - HOUR_MS)

    def test_age_one_ms_past_duration_is_stale(self, policy):
        assert policy.is_stale(START_MS - HOUR_MS - 1)

    @pytest.mark.parametrize("duration", [0, 1, 60_000, HOUR_MS, 24 * HOUR_MS])
    def test_boundary_holds_for_any_duration(self, duration):
        clock = FakeClock()
        policy = CachePolicy(cache_duration_ms=duration, clock=clock)
        marker = clock.now - duration
        assert not policy.is_stale(marker)
        clock.advance(1)
        assert policy.is_stale(marker)

    def test_age_ms(self, policy):
        assert policy.age_ms(None) is None
        assert policy.age_ms(START_MS - 500) == 500
