from __future__ import annotations

import time

import pytest

from marketplace.infrastructure.auth.rate_limit import (
    RATE_LIMITS,
    InMemoryRateLimitStore,
    RateLimitConfig,
    RateLimiter,
    RateLimitSweeper,
    check_rate_limit,
    default_limiter,
)
from marketplace.infrastructure.container import Container
from marketplace.shared.config import AppConfig

WINDOW_MS = 15 * 60 * 1000


class FakeClock:
    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def limiter(clock: FakeClock) -> RateLimiter:
    return RateLimiter(InMemoryRateLimitStore(), clock=clock)


def test_presets() -> None:
    assert RATE_LIMITS["login"] == RateLimitConfig(max_attempts=5, window_ms=WINDOW_MS)
    assert RATE_LIMITS["signup"] == RateLimitConfig(max_attempts=3, window_ms=60 * 60 * 1000)
    assert RATE_LIMITS["verify"].max_attempts == 10


def test_sixth_login_attempt_is_blocked(limiter: RateLimiter, clock: FakeClock) -> None:
    config = RATE_LIMITS["login"]
    results = [limiter.check("1.2.3.4", config) for _ in range(5)]

    assert [r.success for r in results] == [True] * 5
    assert [r.remaining for r in results] == [4, 3, 2, 1, 0]
    assert {r.reset_at for r in results} == {clock.now + WINDOW_MS}

    blocked = limiter.check("1.2.3.4", config)
    assert blocked.success is False
    assert blocked.remaining == 0
    assert blocked.reset_at == clock.now + WINDOW_MS


def test_blocked_until_reset_time_passes(limiter: RateLimiter, clock: FakeClock) -> None:
    config = RateLimitConfig(max_attempts=1, window_ms=1000)
    first = limiter.check("client", config)

    clock.now = first.reset_at
    assert limiter.check("client", config).success is False

    clock.now = first.reset_at + 1
    reopened = limiter.check("client", config)
    assert reopened.success is True
    assert reopened.remaining == 0
    assert reopened.reset_at == clock.now + 1000


def test_identifiers_are_independent(limiter: RateLimiter) -> None:
    config = RateLimitConfig(max_attempts=1, window_ms=1000)
    limiter.check("a", config)

    assert limiter.check("a", config).success is False
    assert limiter.check("b", config).success is True


def test_sweep_drops_only_expired_entries(limiter: RateLimiter, clock: FakeClock) -> None:
    limiter.check("old", RateLimitConfig(max_attempts=5, window_ms=1000))
    limiter.check("fresh", RateLimitConfig(max_attempts=5, window_ms=10_000))

    clock.now += 5000
    assert limiter.sweep() == 1
    assert limiter.store.get("old") is None
    assert limiter.store.get("fresh") is not None


def test_store_returns_copies() -> None:
    store = InMemoryRateLimitStore()
    limiter = RateLimiter(store, clock=FakeClock())
    limiter.check("x", RateLimitConfig(max_attempts=3, window_ms=1000))

    entry = store.get("x")
    assert entry is not None
    entry.count = 99
    assert store.get("x").count == 1


def test_sweeper_runs_in_background(clock: FakeClock) -> None:
    store = InMemoryRateLimitStore()
    limiter = RateLimiter(store, clock=clock)
    limiter.check("client", RateLimitConfig(max_attempts=5, window_ms=10))
    clock.now += 1000

    sweeper = RateLimitSweeper(limiter, interval_seconds=0.01)
    sweeper.start()
    try:
        deadline = time.monotonic() + 2
        while len(store) and time.monotonic() < deadline:
            time.sleep(0.01)
        assert len(store) == 0
        assert sweeper.is_running()
    finally:
        sweeper.stop()

    assert not sweeper.is_running()


def test_module_level_check_uses_default_limiter() -> None:
    config = RateLimitConfig(max_attempts=1, window_ms=60_000)
    identifier = f"module-level-{time.monotonic_ns()}"

    assert check_rate_limit(identifier, config).success is True
    assert check_rate_limit(identifier, config).success is False
    assert default_limiter().store.get(identifier) is not None


def test_container_shares_and_sweeps_the_process_wide_limiter(app_config: AppConfig) -> None:
    container = Container(app_config)

    assert container.rate_limiter is default_limiter()
    assert Container(app_config).rate_limiter is container.rate_limiter

    config = RateLimitConfig(max_attempts=1, window_ms=-1)
    check_rate_limit("stale-client", config)
    assert default_limiter().store.get("stale-client") is not None

    container.rate_limiter.sweep()
    assert default_limiter().store.get("stale-client") is None
