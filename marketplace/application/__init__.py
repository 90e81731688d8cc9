# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.maintenance.cleanup_expired import CleanupExpiredUseCase
from .use_cases.products.browse_products import (
    BrowseProductsUseCase,
    GetProductUseCase,
    ListCategoriesUseCase,
    ProductNotFoundError,
    ProductPage,
    ProductQuery,
)
from .use_cases.users.get_session import GetCurrentSessionUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase
from .use_cases.users.verify_email import VerifyEmailUseCase

__all__ = [
    "BrowseProductsUseCase",
    "CleanupExpiredUseCase",
    "GetCurrentSessionUseCase",
    "GetProductUseCase",
    "ListCategoriesUseCase",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "ProductNotFoundError",
    "ProductPage",
    "ProductQuery",
    "RegisterUserUseCase",
    "VerifyEmailUseCase",
]
