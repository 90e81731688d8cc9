# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import uuid
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from marketplace.application.services.tokens import generate_token, hash_token
from marketplace.domain.exceptions import ConcurrentUpdateError, DuplicateRecordError
from marketplace.domain.users.entities import Session as DomainSession
from marketplace.domain.users.entities import User as DomainUser
from marketplace.domain.users.entities import VerificationToken as DomainVerificationToken
from marketplace.domain.users.repositories import (
    SessionRepository,
    UserRepository,
    VerificationTokenRepository,
)
from marketplace.infrastructure.db.models import SessionRow, User, VerificationTokenRow
from marketplace.infrastructure.db.session import Database
from marketplace.shared.logging import logger

_USER_FIELDS = {"email", "password_hash", "name", "username", "phone", "country", "email_verified"}


def _aware(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain_user(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        name=row.name,
        username=row.username,
        phone=row.phone,
        country=row.country,
        email_verified=_aware(row.email_verified),
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
        version=row.version,
    )


def _duplicate_field(exc: IntegrityError) -> str:
    message = str(exc.orig).lower()
    return "username" if "username" in message else "email"


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def _find_one(self, *criteria) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.scalars(select(User).where(*criteria)).first()
            return _to_domain_user(row) if row else None

    def find_by_email(self, email: str) -> DomainUser | None:
        return self._find_one(func.lower(User.email) == email.lower())

    def find_by_username(self, username: str) -> DomainUser | None:
        return self._find_one(func.lower(User.username) == username.lower())

    def find_by_id(self, user_id: str) -> DomainUser | None:
        return self._find_one(User.id == user_id)

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with self._db.session_scope() as session:
                row = User(
                    id=user.id or str(uuid.uuid4()),
                    email=user.email,
                    password_hash=user.password_hash,
                    name=user.name,
                    username=user.username,
                    phone=user.phone,
                    country=user.country,
                    email_verified=user.email_verified,
                    created_at=user.created_at,
                    updated_at=user.updated_at,
                )
                session.add(row)
                session.flush()
                created = _to_domain_user(row)
        except IntegrityError as exc:
            raise DuplicateRecordError(User.__tablename__, _duplicate_field(exc)) from exc
        logger.info(f"users: created user_id={created.id}")
        return created

    def update(
        self, user_id: str, changes: Mapping[str, Any], *, expected_version: int | None = None
    ) -> DomainUser | None:
        unknown = set(changes) - _USER_FIELDS
        if unknown:
            raise ValueError(f"Cannot update user fields: {sorted(unknown)}")
        try:
            with self._db.session_scope() as session:
                row = session.get(User, user_id)
                if row is None:
                    return None
                if expected_version is not None and row.version != expected_version:
                    raise ConcurrentUpdateError(User.__tablename__, expected_version, row.version)
                for key, value in changes.items():
                    setattr(row, key, value)
                session.flush()
                return _to_domain_user(row)
        except StaleDataError as exc:
            raise ConcurrentUpdateError(User.__tablename__, expected_version or 0, -1) from exc
        except IntegrityError as exc:
            raise DuplicateRecordError(User.__tablename__, _duplicate_field(exc)) from exc

    def mark_email_verified(self, user_id: str) -> DomainUser | None:
        return self.update(user_id, {"email_verified": datetime.now(UTC)})

    def delete(self, user_id: str) -> bool:
        with self._db.session_scope() as session:
            result = session.execute(delete(User).where(User.id == user_id))
            return result.rowcount > 0


class SqlAlchemySessionRepository(SessionRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def create(self, user_id: str, duration: timedelta) -> DomainSession:
        now = datetime.now(UTC)
        session_obj = DomainSession(
            id=str(uuid.uuid4()),
            user_id=user_id,
            token=generate_token(),
            expires_at=now + duration,
            created_at=now,
        )
        with self._db.session_scope() as session:
            session.add(
                SessionRow(
                    id=session_obj.id,
                    user_id=user_id,
                    token=session_obj.token,
                    expires_at=session_obj.expires_at,
                    created_at=now,
                )
            )
        logger.info(f"sessions: created session_id={session_obj.id} user_id={user_id}")
        return session_obj

    def _find_live(self, *criteria) -> DomainSession | None:
        with self._db.session_scope() as session:
            row = session.scalars(select(SessionRow).where(*criteria)).first()
            if row is None:
                return None
            expires_at = _aware(row.expires_at)
            if expires_at <= datetime.now(UTC):
                session.delete(row)
                logger.debug(f"sessions: dropped expired session_id={row.id}")
                return None
            return DomainSession(
                id=row.id,
                user_id=row.user_id,
                token=row.token,
                expires_at=expires_at,
                created_at=_aware(row.created_at),
            )

    def find_by_token(self, token: str) -> DomainSession | None:
        return self._find_live(SessionRow.token == token)

    def find_by_id(self, session_id: str) -> DomainSession | None:
        return self._find_live(SessionRow.id == session_id)

    def delete(self, session_id: str) -> bool:
        with self._db.session_scope() as session:
            return session.execute(delete(SessionRow).where(SessionRow.id == session_id)).rowcount > 0

    def delete_for_user(self, user_id: str) -> int:
        with self._db.session_scope() as session:
            return session.execute(delete(SessionRow).where(SessionRow.user_id == user_id)).rowcount

    def cleanup_expired(self) -> int:
        with self._db.session_scope() as session:
            result = session.execute(
                delete(SessionRow).where(SessionRow.expires_at <= datetime.now(UTC))
            )
            return result.rowcount


class SqlAlchemyVerificationTokenRepository(VerificationTokenRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def create(self, user_id: str, duration: timedelta) -> tuple[str, DomainVerificationToken]:
        plain = generate_token()
        now = datetime.now(UTC)
        record = DomainVerificationToken(
            id=str(uuid.uuid4()),
            user_id=user_id,
            token_hash=hash_token(plain),
            expires_at=now + duration,
            created_at=now,
        )
        with self._db.session_scope() as session:
            session.add(
                VerificationTokenRow(
                    id=record.id,
                    user_id=user_id,
                    token_hash=record.token_hash,
                    expires_at=record.expires_at,
                    created_at=now,
                )
            )
        return plain, record

    def find_user_id(self, token: str) -> str | None:
        with self._db.session_scope() as session:
            row = session.scalars(
                select(VerificationTokenRow).where(
                    VerificationTokenRow.token_hash == hash_token(token)
                )
            ).first()
            if row is None:
                return None
            if _aware(row.expires_at) <= datetime.now(UTC):
                session.delete(row)
                logger.info(f"verification: expired token for user_id={row.user_id}")
                return None
            return row.user_id

    def delete(self, token_id: str) -> bool:
        with self._db.session_scope() as session:
            result = session.execute(
                delete(VerificationTokenRow).where(VerificationTokenRow.id == token_id)
            )
            return result.rowcount > 0

    def delete_for_user(self, user_id: str) -> int:
        with self._db.session_scope() as session:
            result = session.execute(
                delete(VerificationTokenRow).where(VerificationTokenRow.user_id == user_id)
            )
            return result.rowcount

    def cleanup_expired(self) -> int:
        with self._db.session_scope() as session:
            result = session.execute(
                delete(VerificationTokenRow).where(
                    VerificationTokenRow.expires_at <= datetime.now(UTC)
                )
            )
            return result.rowcount
