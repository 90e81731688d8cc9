# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify

from marketplace.infrastructure.db.session import Database
from marketplace.infrastructure.health import check_storage
from marketplace.infrastructure.storage.json_store import JsonFileStore
from marketplace.shared.logging import logger


class MiscController:
    def __init__(self, *, storage: JsonFileStore | Database, backend: str) -> None:
        self._storage = storage
        self._backend = backend

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True, "backend": self._backend}
        try:
            check_storage(self._storage)
            status["storage"] = "ok"
        except Exception as exc:
            logger.error(f"health: storage check failed ({type(exc).__name__})")
            status["ok"] = False
            status["storage"] = "error"
            return jsonify(status), 503
        return jsonify(status), 200
