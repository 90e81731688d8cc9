# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Product, ProductCategory


class ProductRepository(Protocol):
    def list_all(self) -> Sequence[Product]: ...
    def list_active(self) -> Sequence[Product]: ...
    def find_by_id(self, product_id: str) -> Product | None: ...
    def list_categories(self) -> Sequence[ProductCategory]: ...
