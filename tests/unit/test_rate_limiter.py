"""
Unit tests for the sliding-window rate limiter.
"""

from unittest.mock import patch

import pytest
from fastapi import FastAPI

from marketplace.api.middleware.rate_limiter import RateLimiterMiddleware

CLOCK = "marketplace.api.middleware.rate_limiter.time.monotonic"


@pytest.fixture
def limiter():
    with patch(CLOCK, return_value=0.0):
        return RateLimiterMiddleware(FastAPI(), max_requests=2, window_seconds=60)


class TestRateLimiter:
    """Test cases for RateLimiterMiddleware."""

    def test_blocks_after_max_requests(self, limiter):
        with patch(CLOCK, return_value=1.0):
            assert limiter._is_allowed("10.0.0.1")
            assert limiter._is_allowed("10.0.0.1")
            assert not limiter._is_allowed("10.0.0.1")
            assert limiter._is_allowed("10.0.0.2")

    def test_window_slides(self, limiter):
        with patch(CLOCK, return_value=1.0):
            limiter._is_allowed("10.0.0.1")
            limiter._is_allowed("10.0.0.1")

        with patch(CLOCK, return_value=61.5):
            assert limiter._is_allowed("10.0.0.1")

    def test_idle_addresses_are_forgotten(self, limiter):
        with patch(CLOCK, return_value=1.0):
            for host in range(50):
                limiter._is_allowed(f"10.0.1.{host}")
        assert len(limiter.requests) == 50

        with patch(CLOCK, return_value=90.0):
            limiter._is_allowed("10.0.0.9")

        assert list(limiter.requests) == ["10.0.0.9"]

    def test_active_addresses_survive_sweep(self, limiter):
        with patch(CLOCK, return_value=1.0):
            limiter._is_allowed("10.0.0.1")
        with patch(CLOCK, return_value=50.0):
            limiter._is_allowed("10.0.0.2")

        with patch(CLOCK, return_value=70.0):
            limiter._is_allowed("10.0.0.3")

        assert set(limiter.requests) == {"10.0.0.2", "10.0.0.3"}
