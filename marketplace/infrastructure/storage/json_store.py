# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Flat-file JSON storage.

Each collection is one ``<name>.json`` file holding a list of objects. Every
operation loads the whole collection, mutates it in memory and rewrites the
file. Read-modify-write cycles are serialized per collection inside one
process; separate processes still race (last writer wins).
"""

from __future__ import annotations

import json
import os
import re
from collections import defaultdict
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime
from pathlib import Path
from threading import Lock, RLock
from typing import Any

from marketplace.domain.exceptions import ConcurrentUpdateError, DuplicateRecordError
from marketplace.shared.errors.base import InfrastructureError
from marketplace.shared.logging import logger

Record = dict[str, Any]
Predicate = Callable[[Record], bool]

_COLLECTION_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class StorageCorruptedError(InfrastructureError):
    def __init__(self, collection: str) -> None:
        super().__init__("storage_corrupted", context={"collection": collection})


def utcnow_iso() -> str:
    return datetime.now(UTC).isoformat()


def _fold(value: Any) -> Any:
    return value.casefold() if isinstance(value, str) else value


class JsonFileStore:
    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)
        self._locks: defaultdict[str, RLock] = defaultdict(RLock)
        self._locks_guard = Lock()

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, collection: str) -> Path:
        if not _COLLECTION_RE.fullmatch(collection):
            msg = f"Invalid collection name: {collection!r}"
            raise ValueError(msg)
        return self._root / f"{collection}.json"

    def _lock(self, collection: str) -> RLock:
        with self._locks_guard:
            return self._locks[collection]

    def read(self, collection: str) -> list[Record]:
        path = self._path(collection)
        try:
            with open(path, encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError:
            return []

        try:
            loaded = json.loads(content)
        except json.JSONDecodeError as exc:
            logger.error(f"json_store: unreadable collection={collection} path={path}: {exc}")
            raise StorageCorruptedError(collection) from exc

        if not isinstance(loaded, list) or not all(isinstance(x, dict) for x in loaded):
            logger.error(f"json_store: collection={collection} is not a list of objects")
            raise StorageCorruptedError(collection)
        return loaded

    def write(self, collection: str, records: Iterable[Mapping[str, Any]]) -> None:
        path = self._path(collection)
        data = [dict(r) for r in records]
        with self._lock(collection):
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp = path.with_suffix(path.suffix + ".tmp")
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        logger.debug(f"json_store: wrote collection={collection} records={len(data)}")

    def find(self, collection: str, predicate: Predicate) -> Record | None:
        for record in self.read(collection):
            if predicate(record):
                return record
        return None

    def insert(
        self,
        collection: str,
        record: Mapping[str, Any],
        *,
        unique: Iterable[str] = (),
    ) -> Record:
        """Append ``record`` unless a case-insensitive match exists on a ``unique`` field."""
        new_record = dict(record)
        new_record.setdefault("version", 1)
        with self._lock(collection):
            records = self.read(collection)
            for field in unique:
                wanted = _fold(new_record.get(field))
                if wanted is None:
                    continue
                if any(_fold(existing.get(field)) == wanted for existing in records):
                    raise DuplicateRecordError(collection, field)
            records.append(new_record)
            self.write(collection, records)
        return new_record

    def update(
        self,
        collection: str,
        predicate: Predicate,
        patch: Mapping[str, Any],
        *,
        expected_version: int | None = None,
    ) -> Record | None:
        with self._lock(collection):
            records = self.read(collection)
            index = next((i for i, r in enumerate(records) if predicate(r)), -1)
            if index == -1:
                return None

            current = records[index]
            version = int(current.get("version", 1))
            if expected_version is not None and expected_version != version:
                raise ConcurrentUpdateError(collection, expected_version, version)

            updated = {**current, **patch, "updated_at": utcnow_iso(), "version": version + 1}
            records[index] = updated
            self.write(collection, records)
        return updated

    def delete(self, collection: str, predicate: Predicate) -> bool:
        return self.delete_where(collection, predicate) > 0

    def delete_where(self, collection: str, predicate: Predicate) -> int:
        with self._lock(collection):
            records = self.read(collection)
            remaining = [r for r in records if not predicate(r)]
            removed = len(records) - len(remaining)
            if removed:
                self.write(collection, remaining)
        return removed

    def check(self) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        if not os.access(self._root, os.W_OK):
            raise InfrastructureError("storage_not_writable", context={"root": str(self._root)})


__all__ = [
    "JsonFileStore",
    "StorageCorruptedError",
    "utcnow_iso",
]
