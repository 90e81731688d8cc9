# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus

from marketplace.domain.products.entities import Product, ProductCategory
from marketplace.domain.products.listing import ALL_CATEGORIES, SortOption, apply_filters
from marketplace.domain.products.pagination import PaginationResult, get_page_numbers, paginate
from marketplace.domain.products.repositories import ProductRepository
from marketplace.shared.errors.base import DomainError


class ProductNotFoundError(DomainError):
    code = "product_not_found"
    status = HTTPStatus.NOT_FOUND

    def __init__(self, product_id: str) -> None:
        super().__init__(context={"product_id": product_id})


@dataclass(slots=True, frozen=True)
class ProductQuery:
    category_id: str = ALL_CATEGORIES
    query: str = ""
    sort: SortOption = SortOption.DEFAULT
    page: int = 1
    per_page: int = 12


@dataclass(slots=True, frozen=True)
class ProductPage:
    pagination: PaginationResult[Product]
    page_numbers: list[int]


class BrowseProductsUseCase:
    def __init__(self, *, products: ProductRepository, max_visible_pages: int = 5) -> None:
        self._products = products
        self._max_visible_pages = max_visible_pages

    def execute(self, query: ProductQuery) -> ProductPage:
        filtered = apply_filters(
            self._products.list_active(),
            category_id=query.category_id,
            query=query.query,
            sort=query.sort,
        )
        result = paginate(
            filtered,
            current_page=query.page,
            total_items=len(filtered),
            items_per_page=query.per_page,
        )
        return ProductPage(
            pagination=result,
            page_numbers=get_page_numbers(
                result.current_page, result.total_pages, self._max_visible_pages
            ),
        )


class GetProductUseCase:
    def __init__(self, *, products: ProductRepository) -> None:
        self._products = products

    def execute(self, product_id: str) -> Product:
        product = self._products.find_by_id(product_id)
        if product is None or not product.is_active:
            raise ProductNotFoundError(product_id)
        return product


class ListCategoriesUseCase:
    def __init__(self, *, products: ProductRepository) -> None:
        self._products = products

    def execute(self) -> list[ProductCategory]:
        return list(self._products.list_categories())
