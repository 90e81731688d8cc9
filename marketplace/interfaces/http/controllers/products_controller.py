# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from marketplace.application.use_cases.products.browse_products import (
    BrowseProductsUseCase,
    GetProductUseCase,
    ListCategoriesUseCase,
)
from marketplace.application.use_cases.users.get_session import GetCurrentSessionUseCase
from marketplace.interfaces.http.dto.products import ProductQueryDTO, product_payload
from marketplace.interfaces.http.session_cookie import session_required
from marketplace.shared.errors.validation import raise_validation_error


class ProductsController:
    def __init__(
        self,
        *,
        browse_use_case: BrowseProductsUseCase,
        get_product_use_case: GetProductUseCase,
        categories_use_case: ListCategoriesUseCase,
        session_use_case: GetCurrentSessionUseCase,
        items_per_page: int = 12,
    ) -> None:
        self._browse_use_case = browse_use_case
        self._get_product_use_case = get_product_use_case
        self._categories_use_case = categories_use_case
        self._session_use_case = session_use_case
        self._items_per_page = items_per_page

    def list_products(self) -> tuple[Response, int]:
        try:
            dto = ProductQueryDTO.model_validate(request.args.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        page = self._browse_use_case.execute(dto.to_query(self._items_per_page))
        payload = {
            "items": [product_payload(p) for p in page.pagination.items],
            "pagination": page.pagination.meta(),
            "pageNumbers": page.page_numbers,
            "filters": {"category": dto.category, "q": dto.q, "sort": str(dto.sort)},
        }
        return jsonify(payload), 200

    @session_required
    def product_detail(self, product_id: str) -> tuple[Response, int]:
        product = self._get_product_use_case.execute(product_id)
        return jsonify(product_payload(product)), 200

    def list_categories(self) -> tuple[Response, int]:
        categories = self._categories_use_case.execute()
        return jsonify({"items": [c.to_dict() for c in categories]}), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("products", __name__, url_prefix="/api")
        bp.add_url_rule("/products", view_func=self.list_products, methods=["GET"])
        bp.add_url_rule(
            "/products/<product_id>", view_func=self.product_detail, methods=["GET"]
        )
        bp.add_url_rule("/categories", view_func=self.list_categories, methods=["GET"])
        return bp
