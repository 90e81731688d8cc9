# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Category filter, text search and price sort over an in-memory product list.

All functions are pure: inputs are never mutated and a new list is returned.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum

from .entities import Product, ProductFilter

ALL_CATEGORIES = "all"


class SortOption(StrEnum):
    DEFAULT = "default"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"


def filter_by_category(products: Sequence[Product], category_id: str | None) -> list[Product]:
    if not category_id or category_id == ALL_CATEGORIES:
        return list(products)
    return [p for p in products if p.category_id == category_id]


def search_products(products: Sequence[Product], query: str | None) -> list[Product]:
    needle = (query or "").strip().lower()
    if not needle:
        return list(products)
    return [
        p
        for p in products
        if needle in p.name.lower() or needle in p.description.lower()
    ]


def sort_products(products: Sequence[Product], sort: SortOption | str) -> list[Product]:
    option = SortOption(sort)
    if option is SortOption.PRICE_ASC:
        return sorted(products, key=lambda p: p.price)
    if option is SortOption.PRICE_DESC:
        return sorted(products, key=lambda p: p.price, reverse=True)
    return list(products)


def apply_filters(
    products: Sequence[Product],
    *,
    category_id: str | None = ALL_CATEGORIES,
    query: str | None = "",
    sort: SortOption | str = SortOption.DEFAULT,
) -> list[Product]:
    result = filter_by_category(products, category_id)
    result = search_products(result, query)
    return sort_products(result, sort)


def filter_products(products: Sequence[Product], product_filter: ProductFilter) -> list[Product]:
    return [p for p in products if product_filter.matches(p)]


__all__ = [
    "ALL_CATEGORIES",
    "SortOption",
    "apply_filters",
    "filter_by_category",
    "filter_products",
    "search_products",
    "sort_products",
]
