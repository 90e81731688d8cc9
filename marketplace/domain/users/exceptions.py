# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from marketplace.shared.errors.base import DomainError, field_error


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT

    def __init__(self, field: str = "email") -> None:
        super().__init__(
            errors=[field_error(field, f"A user with this {field} already exists")],
        )
        self.field = field


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED

    def __init__(self, field: str = "email") -> None:
        super().__init__(errors=[field_error(field, "Invalid email or password")])
        self.field = field


class EmailNotVerifiedError(DomainError):
    code = "email_not_verified"
    status = HTTPStatus.FORBIDDEN

    def __init__(self) -> None:
        super().__init__(
            errors=[
                field_error(
                    "email",
                    "Please verify your email before logging in. "
                    "Check your inbox for the verification link.",
                )
            ]
        )


class InvalidVerificationTokenError(DomainError):
    code = "invalid_verification_token"
    status = HTTPStatus.BAD_REQUEST

    def __init__(self) -> None:
        super().__init__(
            errors=[field_error("token", "Invalid or expired verification token")]
        )


class UserNotFoundError(DomainError):
    code = "user_not_found"
    status = HTTPStatus.NOT_FOUND

    def __init__(self, user_id: str) -> None:
        super().__init__(context={"user_id": user_id})


class NotAuthenticatedError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
