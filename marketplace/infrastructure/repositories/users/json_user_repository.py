# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from marketplace.application.services.tokens import generate_token, hash_token, verify_token
from marketplace.domain.users.entities import Session, User, VerificationToken
from marketplace.domain.users.repositories import (
    SessionRepository,
    UserRepository,
    VerificationTokenRepository,
)
from marketplace.infrastructure.storage.json_store import JsonFileStore
from marketplace.shared.logging import logger

USERS = "users"
SESSIONS = "sessions"
VERIFICATION_TOKENS = "verificationTokens"

_USER_FIELDS = {"email", "password_hash", "name", "username", "phone", "country", "email_verified"}


def _parse_dt(value: str | None) -> datetime | None:
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _to_json(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _user_from_record(row: Mapping[str, Any]) -> User:
    return User(
        id=row["id"],
        email=row["email"],
        password_hash=row["password_hash"],
        name=row["name"],
        username=row["username"],
        phone=row.get("phone"),
        country=row.get("country"),
        email_verified=_parse_dt(row.get("email_verified")),
        created_at=_parse_dt(row["created_at"]),
        updated_at=_parse_dt(row["updated_at"]),
        version=int(row.get("version", 1)),
    )


def _user_to_record(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "password_hash": user.password_hash,
        "name": user.name,
        "username": user.username,
        "phone": user.phone,
        "country": user.country,
        "email_verified": _to_json(user.email_verified),
        "created_at": _to_json(user.created_at),
        "updated_at": _to_json(user.updated_at),
        "version": user.version,
    }


def _session_from_record(row: Mapping[str, Any]) -> Session:
    return Session(
        id=row["id"],
        user_id=row["user_id"],
        token=row["token"],
        expires_at=_parse_dt(row["expires_at"]),
        created_at=_parse_dt(row["created_at"]),
    )


def _token_from_record(row: Mapping[str, Any]) -> VerificationToken:
    return VerificationToken(
        id=row["id"],
        user_id=row["user_id"],
        token_hash=row["token_hash"],
        expires_at=_parse_dt(row["expires_at"]),
        created_at=_parse_dt(row["created_at"]),
    )


def _is_expired(row: Mapping[str, Any], now: datetime) -> bool:
    return _parse_dt(row["expires_at"]) <= now


class JsonUserRepository(UserRepository):
    def __init__(self, store: JsonFileStore) -> None:
        self._store = store

    def find_by_email(self, email: str) -> User | None:
        wanted = email.casefold()
        row = self._store.find(USERS, lambda r: r["email"].casefold() == wanted)
        return _user_from_record(row) if row else None

    def find_by_username(self, username: str) -> User | None:
        wanted = username.casefold()
        row = self._store.find(USERS, lambda r: r["username"].casefold() == wanted)
        return _user_from_record(row) if row else None

    def find_by_id(self, user_id: str) -> User | None:
        row = self._store.find(USERS, lambda r: r["id"] == user_id)
        return _user_from_record(row) if row else None

    def add(self, user: User) -> User:
        record = _user_to_record(user)
        if not record["id"]:
            record["id"] = str(uuid.uuid4())
        stored = self._store.insert(USERS, record, unique=("email", "username"))
        logger.info(f"users: created user_id={stored['id']}")
        return _user_from_record(stored)

    def update(
        self, user_id: str, changes: Mapping[str, Any], *, expected_version: int | None = None
    ) -> User | None:
        unknown = set(changes) - _USER_FIELDS
        if unknown:
            raise ValueError(f"Cannot update user fields: {sorted(unknown)}")
        patch = {key: _to_json(value) for key, value in changes.items()}
        row = self._store.update(
            USERS, lambda r: r["id"] == user_id, patch, expected_version=expected_version
        )
        return _user_from_record(row) if row else None

    def mark_email_verified(self, user_id: str) -> User | None:
        return self.update(user_id, {"email_verified": datetime.now(UTC)})

    def delete(self, user_id: str) -> bool:
        return self._store.delete(USERS, lambda r: r["id"] == user_id)


class JsonSessionRepository(SessionRepository):
    def __init__(self, store: JsonFileStore) -> None:
        self._store = store

    def create(self, user_id: str, duration: timedelta) -> Session:
        now = datetime.now(UTC)
        session = Session(
            id=str(uuid.uuid4()),
            user_id=user_id,
            token=generate_token(),
            expires_at=now + duration,
            created_at=now,
        )
        self._store.insert(
            SESSIONS,
            {
                "id": session.id,
                "user_id": session.user_id,
                "token": session.token,
                "expires_at": session.expires_at.isoformat(),
                "created_at": session.created_at.isoformat(),
            },
        )
        logger.info(f"sessions: created session_id={session.id} user_id={user_id}")
        return session

    def _live(self, row: Mapping[str, Any] | None) -> Session | None:
        if row is None:
            return None
        if _is_expired(row, datetime.now(UTC)):
            self.delete(row["id"])
            logger.debug(f"sessions: dropped expired session_id={row['id']}")
            return None
        return _session_from_record(row)

    def find_by_token(self, token: str) -> Session | None:
        return self._live(self._store.find(SESSIONS, lambda r: r["token"] == token))

    def find_by_id(self, session_id: str) -> Session | None:
        return self._live(self._store.find(SESSIONS, lambda r: r["id"] == session_id))

    def delete(self, session_id: str) -> bool:
        return self._store.delete(SESSIONS, lambda r: r["id"] == session_id)

    def delete_for_user(self, user_id: str) -> int:
        return self._store.delete_where(SESSIONS, lambda r: r["user_id"] == user_id)

    def cleanup_expired(self) -> int:
        now = datetime.now(UTC)
        return self._store.delete_where(SESSIONS, lambda r: _is_expired(r, now))


class JsonVerificationTokenRepository(VerificationTokenRepository):
    def __init__(self, store: JsonFileStore) -> None:
        self._store = store

    def create(self, user_id: str, duration: timedelta) -> tuple[str, VerificationToken]:
        plain = generate_token()
        now = datetime.now(UTC)
        record = VerificationToken(
            id=str(uuid.uuid4()),
            user_id=user_id,
            token_hash=hash_token(plain),
            expires_at=now + duration,
            created_at=now,
        )
        self._store.insert(
            VERIFICATION_TOKENS,
            {
                "id": record.id,
                "user_id": record.user_id,
                "token_hash": record.token_hash,
                "expires_at": record.expires_at.isoformat(),
                "created_at": record.created_at.isoformat(),
            },
        )
        return plain, record

    def find_user_id(self, token: str) -> str | None:
        row = self._store.find(VERIFICATION_TOKENS, lambda r: verify_token(r["token_hash"], token))
        if row is None:
            return None
        if _is_expired(row, datetime.now(UTC)):
            self.delete(row["id"])
            logger.info(f"verification: expired token for user_id={row['user_id']}")
            return None
        return _token_from_record(row).user_id

    def delete(self, token_id: str) -> bool:
        return self._store.delete(VERIFICATION_TOKENS, lambda r: r["id"] == token_id)

    def delete_for_user(self, user_id: str) -> int:
        return self._store.delete_where(VERIFICATION_TOKENS, lambda r: r["user_id"] == user_id)

    def cleanup_expired(self) -> int:
        now = datetime.now(UTC)
        return self._store.delete_where(VERIFICATION_TOKENS, lambda r: _is_expired(r, now))
