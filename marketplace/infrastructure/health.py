# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from marketplace.infrastructure.db.session import Database
from marketplace.infrastructure.storage.json_store import JsonFileStore


def check_storage(storage: JsonFileStore | Database) -> bool:
    storage.check()
    return True


__all__ = ["check_storage"]
