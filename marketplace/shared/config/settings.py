# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


INSECURE_SECRET_KEYS = frozenset({"", "dev", "development", "test", "changeme"})


def _parse_flag(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class StorageConfig(BaseSettings):
    backend: str = Field("json", alias="STORAGE_BACKEND")
    directory: Path = Field(Path("mockdb"), alias="STORAGE_DIR")
    database_url: str = Field("sqlite:///marketplace.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = SettingsConfigDict(
        validate_by_name=True, env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("backend", mode="after")
    @classmethod
    def _check_backend(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "sqlalchemy"):
            raise ValueError("STORAGE_BACKEND must be 'json' or 'sqlalchemy'")
        return value


class AuthConfig(BaseSettings):
    session_duration_seconds: int = Field(
        7 * 24 * 60 * 60, ge=60, alias="SESSION_DURATION_SECONDS"
    )
    verification_token_minutes: int = Field(30, ge=1, alias="VERIFICATION_TOKEN_MINUTES")
    # 64 MiB per hash: 128 * r * n bytes
    password_hash_method: str = Field("scrypt:65536:8:1", alias="PASSWORD_HASH_METHOD")
    require_verified_email: bool = Field(True, alias="REQUIRE_VERIFIED_EMAIL")

    model_config = SettingsConfigDict(
        validate_by_name=True, env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("require_verified_email", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _parse_flag(value)


class SecurityConfig(BaseSettings):
    # Cookie security
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Lax", alias="COOKIE_SAMESITE")

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    # Rate limiting
    enable_rate_limit: bool = Field(True, alias="ENABLE_RATE_LIMIT")
    rate_limit_sweep_seconds: float = Field(300.0, ge=1.0, alias="RATE_LIMIT_SWEEP_SECONDS")

    # HSTS
    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = SettingsConfigDict(
        validate_by_name=True, env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("cookie_secure", "enable_rate_limit", "enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _parse_flag(value)


class CatalogConfig(BaseSettings):
    size: int = Field(50, ge=0, alias="CATALOG_SIZE")
    seed: int | None = Field(None, alias="CATALOG_SEED")
    items_per_page: int = Field(12, ge=1, le=100, alias="ITEMS_PER_PAGE")

    model_config = SettingsConfigDict(
        validate_by_name=True, env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


def _storage_config_factory() -> StorageConfig:
    return StorageConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


def _catalog_config_factory() -> CatalogConfig:
    return CatalogConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    base_url: str = Field("http://localhost:3000", alias="BASE_URL")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    storage: StorageConfig = Field(default_factory=_storage_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)
    catalog: CatalogConfig = Field(default_factory=_catalog_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_by_name=True,
        validate_assignment=True,
        extra="ignore",
        arbitrary_types_allowed=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_flag(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self
        if self.secret_key in INSECURE_SECRET_KEYS:
            raise ValueError(
                "SECRET_KEY must be a strong random value when APP_ENV=production "
                "(e.g. secrets.token_urlsafe(32))"
            )
        for warning in self.production_warnings():
            print(f"[config] production warning: {warning}", file=sys.stderr)
        return self

    def production_warnings(self) -> list[str]:
        checks = {
            "ALLOWED_ORIGINS contains '*'": "*" in self.security.allowed_origins,
            "ENABLE_HSTS is off": not self.security.enable_hsts,
            "STORAGE_BACKEND=json keeps users in flat files": self.storage.backend == "json",
        }
        return [message for message, failed in checks.items() if failed]

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def use_secure_cookies(self) -> bool:
        return self.security.cookie_secure or self.is_production()


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = ["AppConfig", "AuthConfig", "CatalogConfig", "SecurityConfig", "StorageConfig", "load_config"]
