# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Fixed-window rate limiting for authentication endpoints.

Counters live in a pluggable :class:`RateLimitStore`. The default store keeps
them in process memory, so limits are per process and reset on restart; a
shared backend only needs ``get``/``set``/``sweep``.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Protocol

from marketplace.shared.logging import logger

SWEEP_INTERVAL_SECONDS = 5 * 60


@dataclass(slots=True)
class RateLimitEntry:
    count: int
    reset_at: int  # epoch milliseconds


@dataclass(slots=True, frozen=True)
class RateLimitConfig:
    max_attempts: int
    window_ms: int


@dataclass(slots=True, frozen=True)
class RateLimitResult:
    success: bool
    remaining: int
    reset_at: int


RATE_LIMITS: dict[str, RateLimitConfig] = {
    "login": RateLimitConfig(max_attempts=5, window_ms=15 * 60 * 1000),
    "signup": RateLimitConfig(max_attempts=3, window_ms=60 * 60 * 1000),
    "verify": RateLimitConfig(max_attempts=10, window_ms=60 * 60 * 1000),
}


class RateLimitStore(Protocol):
    def get(self, identifier: str) -> RateLimitEntry | None: ...
    def set(self, identifier: str, entry: RateLimitEntry) -> None: ...
    def sweep(self, now_ms: int) -> int: ...


class InMemoryRateLimitStore(RateLimitStore):
    def __init__(self) -> None:
        self._entries: dict[str, RateLimitEntry] = {}
        self._lock = Lock()

    def get(self, identifier: str) -> RateLimitEntry | None:
        with self._lock:
            entry = self._entries.get(identifier)
            if entry is None:
                return None
            return RateLimitEntry(count=entry.count, reset_at=entry.reset_at)

    def set(self, identifier: str, entry: RateLimitEntry) -> None:
        with self._lock:
            self._entries[identifier] = RateLimitEntry(count=entry.count, reset_at=entry.reset_at)

    def sweep(self, now_ms: int) -> int:
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.reset_at < now_ms]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def _now_ms() -> int:
    return int(time.time() * 1000)


class RateLimiter:
    def __init__(
        self,
        store: RateLimitStore | None = None,
        *,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self._store = store if store is not None else InMemoryRateLimitStore()
        self._clock = clock
        self._lock = Lock()

    @property
    def store(self) -> RateLimitStore:
        return self._store

    def now_ms(self) -> int:
        return self._clock()

    def check(self, identifier: str, config: RateLimitConfig) -> RateLimitResult:
        with self._lock:
            return self._check(identifier, config)

    def _check(self, identifier: str, config: RateLimitConfig) -> RateLimitResult:
        now = self._clock()
        entry = self._store.get(identifier)

        if entry is None or entry.reset_at < now:
            reset_at = now + config.window_ms
            self._store.set(identifier, RateLimitEntry(count=1, reset_at=reset_at))
            return RateLimitResult(
                success=True, remaining=config.max_attempts - 1, reset_at=reset_at
            )

        if entry.count >= config.max_attempts:
            logger.warning(
                f"rate_limit: blocked identifier={identifier} "
                f"count={entry.count} reset_at={entry.reset_at}"
            )
            return RateLimitResult(success=False, remaining=0, reset_at=entry.reset_at)

        entry.count += 1
        self._store.set(identifier, entry)
        return RateLimitResult(
            success=True,
            remaining=config.max_attempts - entry.count,
            reset_at=entry.reset_at,
        )

    def sweep(self) -> int:
        removed = self._store.sweep(self._clock())
        if removed:
            logger.debug(f"rate_limit: swept {removed} expired entries")
        return removed


class RateLimitSweeper:
    """Daemon thread that periodically drops expired entries."""

    def __init__(self, limiter: RateLimiter, interval_seconds: float = SWEEP_INTERVAL_SECONDS) -> None:
        self._limiter = limiter
        self._interval = interval_seconds
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name="rate-limit-sweeper", daemon=True
        )
        self._thread.start()
        logger.info(f"rate_limit: sweeper started interval={self._interval}s")

    def stop(self, timeout: float | None = 1.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self._limiter.sweep()
            except Exception:
                logger.exception("rate_limit: sweep failed")


# Process-wide counters shared by every container; swept by RateLimitSweeper.
_default_limiter = RateLimiter()


def check_rate_limit(identifier: str, config: RateLimitConfig) -> RateLimitResult:
    return _default_limiter.check(identifier, config)


def default_limiter() -> RateLimiter:
    return _default_limiter


__all__ = [
    "RATE_LIMITS",
    "InMemoryRateLimitStore",
    "RateLimitConfig",
    "RateLimitEntry",
    "RateLimitResult",
    "RateLimitSweeper",
    "RateLimitStore",
    "RateLimiter",
    "check_rate_limit",
    "default_limiter",
]
