"""Use-case for ending a login session."""

from __future__ import annotations

from marketplace.domain.users.repositories import SessionRepository


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionRepository) -> None:
        self._sessions = sessions

    def execute(self, token: str | None) -> bool:
        if not token:
            return False
        session = self._sessions.find_by_token(token)
        if session is None:
            return False
        return self._sessions.delete(session.id)
