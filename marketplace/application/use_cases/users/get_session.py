# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace.domain.users.entities import SessionData
from marketplace.domain.users.repositories import SessionRepository, UserRepository


class GetCurrentSessionUseCase:
    def __init__(self, *, users: UserRepository, sessions: SessionRepository) -> None:
        self._users = users
        self._sessions = sessions

    def execute(self, token: str | None) -> SessionData | None:
        if not token:
            return None
        session = self._sessions.find_by_token(token)
        if session is None:
            return None
        user = self._users.find_by_id(session.user_id)
        if user is None:
            return None
        return SessionData(session_id=session.id, user_id=user.id, user=user)
