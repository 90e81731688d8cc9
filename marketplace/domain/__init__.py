# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import (
    ConcurrentUpdateError,
    DuplicateRecordError,
    InvariantViolation,
    InvariantViolationError,
)
from .products.entities import Product, ProductCategory, ProductFilter
from .products.listing import ALL_CATEGORIES, SortOption
from .products.pagination import PaginationResult, get_page_numbers, paginate
from .users.entities import NewUser, Session, SessionData, User, VerificationToken

__all__ = [
    "ALL_CATEGORIES",
    "ConcurrentUpdateError",
    "DuplicateRecordError",
    "InvariantViolation",
    "InvariantViolationError",
    "NewUser",
    "PaginationResult",
    "Product",
    "ProductCategory",
    "ProductFilter",
    "Session",
    "SessionData",
    "SortOption",
    "User",
    "VerificationToken",
    "get_page_numbers",
    "paginate",
]
