from __future__ import annotations

from pathlib import Path

import pytest

from marketplace.infrastructure.auth import rate_limit
from marketplace.shared.config import (
    AppConfig,
    AuthConfig,
    CatalogConfig,
    SecurityConfig,
    StorageConfig,
)

FAST_HASH_METHOD = "scrypt:1024:8:1"


@pytest.fixture(autouse=True)
def _isolated_log_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "logs" / "app.log"))


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        app_env="development",
        secret_key="test",
        base_url="http://localhost:3000",
        storage=StorageConfig(backend="json", directory=tmp_path / "mockdb"),
        auth=AuthConfig(password_hash_method=FAST_HASH_METHOD),
        security=SecurityConfig(enable_rate_limit=True, allowed_origins=["http://localhost:3000"]),
        catalog=CatalogConfig(size=50, seed=7, items_per_page=12),
    )


@pytest.fixture(autouse=True)
def _fresh_rate_limiter(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(rate_limit, "_default_limiter", rate_limit.RateLimiter())
