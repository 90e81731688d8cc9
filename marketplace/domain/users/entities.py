# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass(slots=True, frozen=True)
class User:

    id: str
    email: str
    password_hash: str
    name: str
    username: str
    created_at: datetime
    updated_at: datetime
    phone: str | None = None
    country: str | None = None
    email_verified: datetime | None = None
    version: int = 1

    @property
    def is_verified(self) -> bool:
        return self.email_verified is not None

    def public_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "username": self.username,
            "phone": self.phone,
            "country": self.country,
            "emailVerified": _iso(self.email_verified),
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


@dataclass(slots=True, frozen=True)
class NewUser:
    email: str
    password: str
    name: str
    username: str
    phone: str | None = None
    country: str | None = None


@dataclass(slots=True, frozen=True)
class Session:

    id: str
    user_id: str
    token: str
    expires_at: datetime
    created_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at <= (now or datetime.now(UTC))


@dataclass(slots=True, frozen=True)
class VerificationToken:

    id: str
    user_id: str
    token_hash: str
    expires_at: datetime
    created_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at <= (now or datetime.now(UTC))


@dataclass(slots=True, frozen=True)
class SessionData:
    session_id: str
    user_id: str
    user: User = field(repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "userId": self.user_id,
            "user": self.user.public_dict(),
        }
