# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace.domain.users.entities import User
from marketplace.domain.users.exceptions import InvalidVerificationTokenError, UserNotFoundError
from marketplace.domain.users.repositories import UserRepository, VerificationTokenRepository
from marketplace.shared.logging import logger


class VerifyEmailUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        verification_tokens: VerificationTokenRepository,
    ) -> None:
        self._users = users
        self._verification_tokens = verification_tokens

    def execute(self, token: str) -> User:
        user_id = self._verification_tokens.find_user_id(token)
        if user_id is None:
            raise InvalidVerificationTokenError()

        verified = self._users.mark_email_verified(user_id)
        if verified is None:
            raise UserNotFoundError(user_id)

        removed = self._verification_tokens.delete_for_user(user_id)
        logger.info(f"verification: user_id={user_id} verified, {removed} token(s) removed")
        return verified
