# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Masks credentials, session tokens and contact data in log messages."""

from __future__ import annotations

import re
from typing import Any

_MASK = "***REDACTED***"

_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(secret[_-]?key\s*[:=]\s*['\"]?)([\w\-]{16,})", re.I), rf"\1{_MASK}"),
    # bearer headers and session cookies
    (re.compile(r"(bearer\s+)([\w\-.]{20,})", re.I), rf"\1{_MASK}"),
    (re.compile(r"(session_token=)([^;\s&]+)", re.I), rf"\1{_MASK}"),
    # verification links and token=... pairs
    (re.compile(r"([?&]token=)([^&\s]+)", re.I), rf"\1{_MASK}"),
    (re.compile(r"(\btoken\s*[:=]\s*['\"]?)([\w\-.]{20,})", re.I), rf"\1{_MASK}"),
    (re.compile(r"(password(?:_hash)?\s*[:=]\s*['\"]?)([^'\"\s,}]{6,})", re.I), rf"\1{_MASK}"),
    (re.compile(r"((?:postgres(?:ql)?|mysql)(?:\+\w+)?://[^:/\s]+:)([^@\s]+)(@)"), rf"\1{_MASK}\3"),
    # local part only
    (re.compile(r"[\w.%+-]+@([\w-]+(?:\.[\w-]+)*\.[a-zA-Z]{2,})"), r"***@\1"),
    (re.compile(r"(phone\s*[:=]\s*['\"]?)(\+?\d{7,15})"), r"\1+***"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru filter: rewrites ``record["message"]`` in place and never drops it."""
    if "message" in record:
        record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["sanitize_message", "sanitize_record"]
