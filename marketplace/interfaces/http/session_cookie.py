# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps

from flask import Request, Response, g, request

from marketplace.domain.users.entities import Session
from marketplace.domain.users.exceptions import NotAuthenticatedError
from marketplace.shared.logging import logger

SESSION_COOKIE = "session_token"


@dataclass(slots=True, frozen=True)
class CookieSettings:
    secure: bool = False
    samesite: str = "Lax"


def read_session_token(req: Request) -> str | None:
    auth = req.headers.get("Authorization", "")
    if auth.startswith("Bearer "):
        token = auth[7:].strip()
        if token:
            return token
    return req.cookies.get(SESSION_COOKIE) or None


def set_session_cookie(response: Response, session: Session, settings: CookieSettings) -> None:
    response.set_cookie(
        SESSION_COOKIE,
        session.token,
        expires=session.expires_at,
        httponly=True,
        secure=settings.secure,
        samesite=settings.samesite,
        path="/",
    )


def clear_session_cookie(response: Response, settings: CookieSettings) -> None:
    response.delete_cookie(
        SESSION_COOKIE,
        path="/",
        httponly=True,
        secure=settings.secure,
        samesite=settings.samesite,
    )


def session_required(f):
    """Resolve the caller's session via ``self._session_use_case`` or answer 401."""

    @wraps(f)
    def inner(self, *args, **kwargs):
        data = self._session_use_case.execute(read_session_token(request))
        if data is None:
            logger.warning(f"Unauthenticated {request.method} {request.path}")
            raise NotAuthenticatedError()
        g.user_id = data.user_id
        g.session_data = data
        return f(self, *args, **kwargs)

    return inner


__all__ = [
    "SESSION_COOKIE",
    "CookieSettings",
    "clear_session_cookie",
    "read_session_token",
    "session_required",
    "set_session_cookie",
]
