# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Opaque token helpers.

Tokens are high-entropy random strings, so a single SHA-256 pass is enough to
store them: lookups need a deterministic digest, not a slow KDF.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
import uuid


def generate_token() -> str:
    return f"{uuid.uuid4()}-{secrets.token_hex(32)}"


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def verify_token(token_hash: str, token: str) -> bool:
    return hmac.compare_digest(token_hash.encode("utf-8"), hash_token(token).encode("utf-8"))


__all__ = ["generate_token", "hash_token", "verify_token"]
