# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def format_pydantic_errors(exc: PydanticValidationError) -> list[dict[str, Any]]:
    errors_list = []

    for error in exc.errors():
        loc = error.get("loc", ())
        field_path = ".".join(str(part) for part in loc if part is not None)

        entry: dict[str, Any] = {
            "field": field_path or "general",
            "type": error.get("type", "value_error"),
            "message": error.get("msg", "Invalid value"),
        }

        ctx = error.get("ctx")
        if ctx:
            entry["ctx"] = {key: str(value) for key, value in ctx.items()}

        errors_list.append(entry)

    return errors_list


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    errors = format_pydantic_errors(exc)
    context = {"fields": sorted({entry["field"] for entry in errors})}
    raise ValidationError(errors=errors, context=context) from exc


__all__ = [
    "format_pydantic_errors",
    "raise_validation_error",
]
