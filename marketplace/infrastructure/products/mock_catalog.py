# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Generated product catalog used until a real product store exists."""

from __future__ import annotations

import random
import string
from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from marketplace.domain.products.entities import Product, ProductCategory, ProductFilter
from marketplace.domain.products.listing import filter_products
from marketplace.domain.products.repositories import ProductRepository
from marketplace.shared.logging import logger

MOCK_CATEGORIES: tuple[ProductCategory, ...] = (
    ProductCategory("cat-electronics", "Electronics", "electronics", "Electronic devices and gadgets"),
    ProductCategory("cat-clothing", "Clothing", "clothing", "Apparel and fashion items"),
    ProductCategory("cat-home", "Home & Garden", "home-garden", "Home decor and garden supplies"),
    ProductCategory("cat-books", "Books", "books", "Books and reading materials"),
    ProductCategory(
        "cat-sports", "Sports & Outdoors", "sports-outdoors", "Sports equipment and outdoor gear"
    ),
)

PRODUCT_NAMES: dict[str, tuple[str, ...]] = {
    "cat-electronics": (
        "Wireless Headphones",
        "Smart Watch",
        "Laptop Stand",
        "USB-C Hub",
        "Mechanical Keyboard",
        "Webcam HD",
        "Portable Charger",
        "Bluetooth Speaker",
    ),
    "cat-clothing": (
        "Cotton T-Shirt",
        "Denim Jeans",
        "Running Shoes",
        "Winter Jacket",
        "Casual Sneakers",
        "Leather Wallet",
        "Baseball Cap",
        "Yoga Pants",
    ),
    "cat-home": (
        "Coffee Maker",
        "Table Lamp",
        "Throw Pillow",
        "Wall Clock",
        "Plant Pot",
        "Kitchen Knife Set",
        "Candle Set",
        "Bath Towels",
    ),
    "cat-books": (
        "The Great Novel",
        "Programming Guide",
        "Cookbook Collection",
        "History of Art",
        "Science Fiction Anthology",
        "Business Strategy",
        "Travel Guide",
        "Mystery Thriller",
    ),
    "cat-sports": (
        "Yoga Mat",
        "Dumbbell Set",
        "Tennis Racket",
        "Camping Tent",
        "Bicycle Helmet",
        "Water Bottle",
        "Resistance Bands",
        "Running Backpack",
    ),
}

DESCRIPTIONS: tuple[str, ...] = (
    "High-quality product with excellent durability and performance.",
    "Perfect for everyday use, combining style and functionality.",
    "Premium materials and craftsmanship for lasting value.",
    "Designed with attention to detail and user comfort in mind.",
    "A must-have item for enthusiasts and beginners alike.",
    "Exceptional quality at an affordable price point.",
    "Innovative design meets practical functionality.",
    "Built to last with a focus on sustainability.",
)

PLACEHOLDER_IMAGES: tuple[str, ...] = (
    "https://images.unsplash.com/photo-1505740420928-5e560c06d30e?w=800",
    "https://images.unsplash.com/photo-1523275335684-37898b6baf30?w=800",
    "https://images.unsplash.com/photo-1572635196237-14b3f281503f?w=800",
    "https://images.unsplash.com/photo-1560343090-f0409e92791a?w=800",
    "https://images.unsplash.com/photo-1526170375885-4d8ecf77b99f?w=800",
    "https://images.unsplash.com/photo-1503602642458-232111445657?w=800",
    "https://images.unsplash.com/photo-1542291026-7eec264c27ff?w=800",
    "https://images.unsplash.com/photo-1490114538077-0a7f8cb49891?w=800",
)

MIN_PRICE = 1000
MAX_PRICE = 50999

_BASE36 = string.digits + string.ascii_lowercase


def _suffix(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(_BASE36, k=length))


def generate_mock_product(rng: random.Random | None = None, **overrides: Any) -> Product:
    rng = rng or random.Random()
    category_id = rng.choice(list(PRODUCT_NAMES))
    now = datetime.now(UTC)
    product = Product(
        id=f"prod-{_suffix(rng, 9)}",
        name=rng.choice(PRODUCT_NAMES[category_id]),
        description=rng.choice(DESCRIPTIONS),
        price=rng.randint(MIN_PRICE, MAX_PRICE),
        currency="USD",
        image_url=rng.choice(PLACEHOLDER_IMAGES),
        category_id=category_id,
        seller_id=f"seller-{_suffix(rng, 5)}",
        stock=rng.randint(0, 99),
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    return replace(product, **overrides) if overrides else product


def generate_mock_products(count: int = 10, *, seed: int | None = None) -> list[Product]:
    rng = random.Random(seed)
    return [generate_mock_product(rng) for _ in range(count)]


def generate_mock_category(**overrides: Any) -> ProductCategory:
    category = ProductCategory(
        id=f"cat-{_suffix(random.Random(), 9)}",
        name="Sample Category",
        slug="sample-category",
        description="A sample category for testing",
    )
    return replace(category, **overrides) if overrides else category


def get_mock_categories() -> list[ProductCategory]:
    return list(MOCK_CATEGORIES)


class InMemoryProductRepository(ProductRepository):
    """Read-only product source over a fixed list, generated once per process."""

    def __init__(
        self,
        products: Sequence[Product],
        categories: Sequence[ProductCategory] = MOCK_CATEGORIES,
    ) -> None:
        self._products = tuple(products)
        self._by_id = {p.id: p for p in self._products}
        self._categories = tuple(categories)

    @classmethod
    def from_config(cls, size: int, seed: int | None = None) -> InMemoryProductRepository:
        products = generate_mock_products(size, seed=seed)
        logger.info(f"catalog: generated {len(products)} mock products (seed={seed})")
        return cls(products)

    def list_all(self) -> list[Product]:
        return list(self._products)

    def list_active(self) -> list[Product]:
        return filter_products(self._products, ProductFilter(is_active=True))

    def find_by_id(self, product_id: str) -> Product | None:
        return self._by_id.get(product_id)

    def list_by_category(self, category_id: str) -> list[Product]:
        return filter_products(self._products, ProductFilter(category_id=category_id))

    def search(self, query: str) -> list[Product]:
        return filter_products(self._products, ProductFilter(search_query=query))

    def list_categories(self) -> list[ProductCategory]:
        return list(self._categories)


__all__ = [
    "DESCRIPTIONS",
    "InMemoryProductRepository",
    "MOCK_CATEGORIES",
    "PLACEHOLDER_IMAGES",
    "PRODUCT_NAMES",
    "generate_mock_category",
    "generate_mock_product",
    "generate_mock_products",
    "get_mock_categories",
]
