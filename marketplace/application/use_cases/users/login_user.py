# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta

from marketplace.domain.users.entities import Session, User
from marketplace.domain.users.exceptions import EmailNotVerifiedError, InvalidCredentialsError
from marketplace.domain.users.repositories import PasswordHasher, SessionRepository, UserRepository
from marketplace.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
        session_lifetime: timedelta = timedelta(days=7),
        require_verified_email: bool = True,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._session_lifetime = session_lifetime
        self._require_verified_email = require_verified_email

    def execute(self, email: str, password: str) -> tuple[User, Session]:
        user = self._users.find_by_email(email.strip())
        if user is None:
            logger.info("login: unknown email")
            raise InvalidCredentialsError("email")

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info(f"login: bad password for user_id={user.id}")
            raise InvalidCredentialsError("password")

        if self._require_verified_email and not user.is_verified:
            raise EmailNotVerifiedError()

        session = self._sessions.create(user.id, self._session_lifetime)
        return user, session
