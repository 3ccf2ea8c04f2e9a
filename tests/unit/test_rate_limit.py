"""
Unit tests for rate limiting.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest
from freezegun import freeze_time
from unittest.mock import AsyncMock, Mock, patch

from ratethedogs.utils.rate_limit import KeyedRateLimiter, RateLimiter


class TestKeyedRateLimiter:
    """Tests for the per-key request limiter."""

    def test_allows_up_to_limit(self):
        limiter = KeyedRateLimiter(limit=3, window=60)

        with freeze_time("2026-03-01 12:00:00"):
            assert [limiter.hit("anon") for _ in range(4)] == [True, True, True, False]

    def test_keys_are_independent(self):
        limiter = KeyedRateLimiter(limit=1, window=60)

        with freeze_time("2026-03-01 12:00:00"):
            assert limiter.hit("a")
            assert limiter.hit("b")
            assert not limiter.hit("a")

    def test_window_slides(self):
        limiter = KeyedRateLimiter(limit=2, window=60)

        with freeze_time("2026-03-01 12:00:00") as frozen:
            assert limiter.hit("anon")
            frozen.tick(30)
            assert limiter.hit("anon")
            assert not limiter.hit("anon")

            # First call leaves the window
            frozen.tick(31)
            assert limiter.hit("anon")
            assert not limiter.hit("anon")

    def test_rejected_calls_are_not_counted(self):
        limiter = KeyedRateLimiter(limit=1, window=60)

        with freeze_time("2026-03-01 12:00:00") as frozen:
            assert limiter.hit("anon")
            frozen.tick(50)
            assert not limiter.hit("anon")
            frozen.tick(11)
            assert limiter.hit("anon")

    def test_reset(self):
        limiter = KeyedRateLimiter(limit=1, window=60)
        limiter.hit("a")
        limiter.hit("b")

        limiter.reset("a")
        assert limiter.hit("a")
        assert not limiter.hit("b")

        limiter.reset()
        assert limiter.hit("b")

    def test_expired_keys_are_dropped(self):
        with freeze_time("2026-03-01 12:00:00") as frozen:
            limiter = KeyedRateLimiter(limit=1, window=60)
            for i in range(1000):
                limiter.hit(f"anon-{i}")
            assert len(limiter._hits) == 1000

            frozen.tick(3600)
            assert limiter.hit("fresh")

        assert list(limiter._hits) == ["fresh"]

    def test_keys_inside_window_are_kept(self):
        with freeze_time("2026-03-01 12:00:00") as frozen:
            limiter = KeyedRateLimiter(limit=1, window=60)
            limiter.hit("old")
            frozen.tick(50)
            limiter.hit("recent")
            frozen.tick(15)
            limiter.hit("new")

            assert set(limiter._hits) == {"recent", "new"}
            assert not limiter.hit("recent")

    def test_concurrent_hits_respect_limit(self):
        limiter = KeyedRateLimiter(limit=10, window=60)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: limiter.hit("anon"), range(100)))

        assert results.count(True) == 10
        assert len(limiter._hits["anon"]) == 10


class TestRateLimiter:
    """Tests for the outgoing call limiter."""

    @pytest.mark.asyncio
    async def test_acquire_under_limit_does_not_sleep(self):
        limiter = RateLimiter(calls_per_minute=5)

        with patch("ratethedogs.utils.rate_limit.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            for _ in range(5):
                await limiter.acquire()

        mock_sleep.assert_not_awaited()
        assert len(limiter.calls) == 5

    @pytest.mark.asyncio
    async def test_acquire_over_limit_waits(self):
        limiter = RateLimiter(calls_per_minute=1)
        clock = [1000.0]

        async def advance(seconds):
            clock[0] += seconds

        fake_time = Mock()
        fake_time.time.side_effect = lambda: clock[0]

        with patch("ratethedogs.utils.rate_limit.time", fake_time), \
                patch("ratethedogs.utils.rate_limit.asyncio.sleep",
                      new_callable=AsyncMock, side_effect=advance) as mock_sleep:
            await limiter.acquire()
            await limiter.acquire()

        mock_sleep.assert_awaited_once_with(60.0)
        assert limiter.calls == [1060.0]
