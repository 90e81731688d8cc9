# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from marketplace.application.services.password_hashing import WerkzeugPasswordHasher
from marketplace.application.use_cases.maintenance.cleanup_expired import CleanupExpiredUseCase
from marketplace.application.use_cases.products.browse_products import (
    BrowseProductsUseCase,
    GetProductUseCase,
    ListCategoriesUseCase,
)
from marketplace.application.use_cases.users.get_session import GetCurrentSessionUseCase
from marketplace.application.use_cases.users.login_user import LoginUserUseCase
from marketplace.application.use_cases.users.logout_user import LogoutUserUseCase
from marketplace.application.use_cases.users.register_user import RegisterUserUseCase
from marketplace.application.use_cases.users.verify_email import VerifyEmailUseCase
from marketplace.domain.products.repositories import ProductRepository
from marketplace.domain.users.repositories import (
    Mailer,
    SessionRepository,
    UserRepository,
    VerificationTokenRepository,
)
from marketplace.infrastructure.auth.rate_limit import (
    RateLimiter,
    RateLimitSweeper,
    default_limiter,
)
from marketplace.infrastructure.db.session import Database
from marketplace.infrastructure.mail import ConsoleMailer
from marketplace.infrastructure.products.mock_catalog import InMemoryProductRepository
from marketplace.infrastructure.repositories.users.json_user_repository import (
    JsonSessionRepository,
    JsonUserRepository,
    JsonVerificationTokenRepository,
)
from marketplace.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
    SqlAlchemyVerificationTokenRepository,
)
from marketplace.infrastructure.storage.json_store import JsonFileStore
from marketplace.interfaces.http.controllers.auth_controller import AuthController
from marketplace.interfaces.http.controllers.misc_controller import MiscController
from marketplace.interfaces.http.controllers.products_controller import ProductsController
from marketplace.interfaces.http.session_cookie import CookieSettings
from marketplace.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or load_config()

    @property
    def uses_sql(self) -> bool:
        return self.config.storage.backend == "sqlalchemy"

    # Storage

    @cached_property
    def json_store(self) -> JsonFileStore:
        return JsonFileStore(self.config.storage.directory)

    @cached_property
    def database(self) -> Database:
        database = Database.from_config(self.config.storage)
        database.init_schema()
        return database

    @property
    def storage(self) -> JsonFileStore | Database:
        return self.database if self.uses_sql else self.json_store

    @cached_property
    def user_repository(self) -> UserRepository:
        if self.uses_sql:
            return SqlAlchemyUserRepository(self.database)
        return JsonUserRepository(self.json_store)

    @cached_property
    def session_repository(self) -> SessionRepository:
        if self.uses_sql:
            return SqlAlchemySessionRepository(self.database)
        return JsonSessionRepository(self.json_store)

    @cached_property
    def verification_token_repository(self) -> VerificationTokenRepository:
        if self.uses_sql:
            return SqlAlchemyVerificationTokenRepository(self.database)
        return JsonVerificationTokenRepository(self.json_store)

    @cached_property
    def product_repository(self) -> ProductRepository:
        return InMemoryProductRepository.from_config(
            self.config.catalog.size, self.config.catalog.seed
        )

    # Services

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(self.config.auth.password_hash_method)

    @cached_property
    def mailer(self) -> Mailer:
        return ConsoleMailer()

    @cached_property
    def rate_limiter(self) -> RateLimiter:
        return default_limiter()

    @cached_property
    def rate_limit_sweeper(self) -> RateLimitSweeper:
        return RateLimitSweeper(
            self.rate_limiter, self.config.security.rate_limit_sweep_seconds
        )

    @cached_property
    def cookie_settings(self) -> CookieSettings:
        return CookieSettings(
            secure=self.config.use_secure_cookies(),
            samesite=self.config.security.cookie_samesite,
        )

    # Use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            verification_tokens=self.verification_token_repository,
            password_hasher=self.password_hasher,
            mailer=self.mailer,
            base_url=self.config.base_url,
            token_lifetime=timedelta(minutes=self.config.auth.verification_token_minutes),
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
            session_lifetime=timedelta(seconds=self.config.auth.session_duration_seconds),
            require_verified_email=self.config.auth.require_verified_email,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_repository)

    @cached_property
    def verify_email_use_case(self) -> VerifyEmailUseCase:
        return VerifyEmailUseCase(
            users=self.user_repository,
            verification_tokens=self.verification_token_repository,
        )

    @cached_property
    def get_session_use_case(self) -> GetCurrentSessionUseCase:
        return GetCurrentSessionUseCase(
            users=self.user_repository, sessions=self.session_repository
        )

    @cached_property
    def browse_products_use_case(self) -> BrowseProductsUseCase:
        return BrowseProductsUseCase(products=self.product_repository)

    @cached_property
    def get_product_use_case(self) -> GetProductUseCase:
        return GetProductUseCase(products=self.product_repository)

    @cached_property
    def list_categories_use_case(self) -> ListCategoriesUseCase:
        return ListCategoriesUseCase(products=self.product_repository)

    @cached_property
    def cleanup_expired_use_case(self) -> CleanupExpiredUseCase:
        return CleanupExpiredUseCase(
            sessions=self.session_repository,
            verification_tokens=self.verification_token_repository,
        )

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            verify_use_case=self.verify_email_use_case,
            session_use_case=self.get_session_use_case,
            cookie_settings=self.cookie_settings,
        )

    @cached_property
    def products_controller(self) -> ProductsController:
        return ProductsController(
            browse_use_case=self.browse_products_use_case,
            get_product_use_case=self.get_product_use_case,
            categories_use_case=self.list_categories_use_case,
            session_use_case=self.get_session_use_case,
            items_per_page=self.config.catalog.items_per_page,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(storage=self.storage, backend=self.config.storage.backend)
