# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
from collections.abc import Callable
from functools import wraps

from flask import Request, current_app, request

from marketplace.infrastructure.auth.rate_limit import RATE_LIMITS, RateLimiter
from marketplace.shared.errors.base import RateLimitedError

EXTENSION_KEY = "marketplace.rate_limiter"

_ACTION_LABELS = {"verify": "verification"}


def client_identifier(req: Request) -> str:
    forwarded = req.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip() or "unknown"
    real_ip = req.headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    return req.headers.get("User-Agent") or "unknown"


def minutes_until(reset_at_ms: int, now_ms: int) -> int:
    return math.ceil((reset_at_ms - now_ms) / 60000)


def install_rate_limiter(app, limiter: RateLimiter, *, enabled: bool = True) -> None:
    app.extensions[EXTENSION_KEY] = limiter
    app.config["RATE_LIMIT_ENABLED"] = enabled


def rate_limit(action: str):
    """Apply the ``RATE_LIMITS[action]`` window to a view, keyed by client."""
    config = RATE_LIMITS[action]
    label = _ACTION_LABELS.get(action, action)

    def decorator(f: Callable):
        @wraps(f)
        def wrapper(*args, **kwargs):
            limiter: RateLimiter | None = current_app.extensions.get(EXTENSION_KEY)
            if limiter is None or not current_app.config.get("RATE_LIMIT_ENABLED", True):
                return f(*args, **kwargs)

            result = limiter.check(f"{action}:{client_identifier(request)}", config)
            if not result.success:
                minutes = minutes_until(result.reset_at, limiter.now_ms())
                raise RateLimitedError(
                    f"Too many {label} attempts. Please try again in {minutes} minutes.",
                    result.reset_at,
                )
            return f(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["client_identifier", "install_rate_limiter", "minutes_until", "rate_limit"]
