# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Protocol

from .entities import NewUser, Session, User, VerificationToken


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_username(self, username: str) -> User | None: ...
    def find_by_id(self, user_id: str) -> User | None: ...

    def add(self, user: User) -> User:
        """Insert ``user``; raises ``DuplicateRecordError`` on email/username conflict."""
        ...

    def update(
        self, user_id: str, changes: Mapping[str, Any], *, expected_version: int | None = None
    ) -> User | None: ...
    def mark_email_verified(self, user_id: str) -> User | None: ...
    def delete(self, user_id: str) -> bool: ...


class SessionRepository(Protocol):
    def create(self, user_id: str, duration: timedelta) -> Session: ...
    def find_by_token(self, token: str) -> Session | None: ...
    def find_by_id(self, session_id: str) -> Session | None: ...
    def delete(self, session_id: str) -> bool: ...
    def delete_for_user(self, user_id: str) -> int: ...
    def cleanup_expired(self) -> int: ...


class VerificationTokenRepository(Protocol):
    def create(self, user_id: str, duration: timedelta) -> tuple[str, VerificationToken]: ...
    def find_user_id(self, token: str) -> str | None: ...
    def delete(self, token_id: str) -> bool: ...
    def delete_for_user(self, user_id: str) -> int: ...
    def cleanup_expired(self) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class Mailer(Protocol):
    def send_verification(self, user: User, verification_url: str) -> None: ...


__all__ = [
    "Mailer",
    "NewUser",
    "PasswordHasher",
    "SessionRepository",
    "UserRepository",
    "VerificationTokenRepository",
]
