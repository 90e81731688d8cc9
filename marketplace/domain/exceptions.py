# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from marketplace.shared.errors.base import AppError


class InvariantViolationError(ValueError):
    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {super().__str__()}"
        return super().__str__()


InvariantViolation = InvariantViolationError


class DuplicateRecordError(AppError):
    """A unique field (compared case-insensitively) already holds this value."""

    def __init__(self, collection: str, field: str) -> None:
        super().__init__(
            code="duplicate_record",
            status=HTTPStatus.CONFLICT,
            context={"collection": collection, "field": field},
        )
        self.field = field


class ConcurrentUpdateError(AppError):
    def __init__(self, collection: str, expected: int, actual: int) -> None:
        super().__init__(
            code="concurrent_update",
            status=HTTPStatus.CONFLICT,
            context={"collection": collection, "expected_version": expected, "actual_version": actual},
        )
