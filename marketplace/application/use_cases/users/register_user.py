# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from urllib.parse import urlencode

from marketplace.domain.exceptions import DuplicateRecordError
from marketplace.domain.users.entities import NewUser, User
from marketplace.domain.users.exceptions import UserAlreadyExistsError
from marketplace.domain.users.repositories import (
    Mailer,
    PasswordHasher,
    UserRepository,
    VerificationTokenRepository,
)
from marketplace.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        verification_tokens: VerificationTokenRepository,
        password_hasher: PasswordHasher,
        mailer: Mailer,
        base_url: str,
        token_lifetime: timedelta = timedelta(minutes=30),
    ) -> None:
        self._users = users
        self._verification_tokens = verification_tokens
        self._password_hasher = password_hasher
        self._mailer = mailer
        self._base_url = base_url.rstrip("/")
        self._token_lifetime = token_lifetime

    def verification_url(self, token: str) -> str:
        return f"{self._base_url}/verify-email?{urlencode({'token': token})}"

    def execute(self, new_user: NewUser) -> tuple[User, str]:
        now = datetime.now(UTC)
        user = User(
            id=str(uuid.uuid4()),
            email=new_user.email.strip(),
            password_hash=self._password_hasher.hash(new_user.password),
            name=new_user.name.strip(),
            username=new_user.username,
            phone=new_user.phone,
            country=new_user.country,
            created_at=now,
            updated_at=now,
        )
        try:
            persisted = self._users.add(user)
        except DuplicateRecordError as exc:
            logger.info(f"signup: rejected duplicate {exc.field}")
            raise UserAlreadyExistsError(exc.field) from exc

        token, _ = self._verification_tokens.create(persisted.id, self._token_lifetime)
        self._mailer.send_verification(persisted, self.verification_url(token))
        return persisted, token
