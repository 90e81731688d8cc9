# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Catalog entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class ProductCategory:
    id: str
    name: str
    slug: str
    description: str
    parent_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "description": self.description,
            "parentId": self.parent_id,
        }


@dataclass(slots=True, frozen=True)
class Product:
    """A listed item; ``price`` is in minor currency units (cents)."""

    id: str
    name: str
    description: str
    price: int
    currency: str
    image_url: str
    category_id: str
    seller_id: str
    stock: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        if self.price < 0:
            raise InvariantViolation("price must be non-negative", field="price")
        if self.stock < 0:
            raise InvariantViolation("stock must be non-negative", field="stock")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "currency": self.currency,
            "imageUrl": self.image_url,
            "categoryId": self.category_id,
            "sellerId": self.seller_id,
            "stock": self.stock,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
        }


@dataclass(slots=True, frozen=True)
class ProductFilter:
    """Conjunction of optional criteria; unset criteria match everything."""

    category_id: str | None = None
    min_price: int | None = None
    max_price: int | None = None
    search_query: str | None = None
    seller_id: str | None = None
    is_active: bool | None = None

    def __post_init__(self) -> None:
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise InvariantViolation("min_price must not exceed max_price", field="min_price")

    def matches(self, product: Product) -> bool:
        if self.category_id and product.category_id != self.category_id:
            return False
        if self.min_price is not None and product.price < self.min_price:
            return False
        if self.max_price is not None and product.price > self.max_price:
            return False
        if self.search_query:
            query = self.search_query.lower()
            if query not in product.name.lower() and query not in product.description.lower():
                return False
        if self.seller_id and product.seller_id != self.seller_id:
            return False
        if self.is_active is not None and product.is_active != self.is_active:
            return False
        return True
