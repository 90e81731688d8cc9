# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class PaginationResult(Generic[T]):  # noqa: UP046
    items: list[T]
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool
    start_index: int
    end_index: int

    def meta(self) -> dict[str, Any]:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalItems": self.total_items,
            "itemsPerPage": self.items_per_page,
            "hasNextPage": self.has_next_page,
            "hasPreviousPage": self.has_previous_page,
            "startIndex": self.start_index,
            "endIndex": self.end_index,
        }


def paginate(
    items: Sequence[T],
    *,
    current_page: int,
    total_items: int,
    items_per_page: int,
) -> PaginationResult[T]:
    if items_per_page < 1:
        raise ValueError("items_per_page must be at least 1")

    total_pages = math.ceil(total_items / items_per_page)
    # max() last so an empty list still lands on page 1
    page = max(1, min(current_page, total_pages))

    start_index = (page - 1) * items_per_page
    end_index = min(start_index + items_per_page, total_items)

    return PaginationResult(
        items=list(items[start_index:end_index]),
        current_page=page,
        total_pages=total_pages,
        total_items=total_items,
        items_per_page=items_per_page,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
        start_index=start_index,
        end_index=end_index,
    )


def get_page_numbers(current_page: int, total_pages: int, max_visible: int = 5) -> list[int]:
    """Page links to render around ``current_page``.

    With an even ``max_visible`` and a page away from both edges the window is
    ``max_visible + 1`` wide; pagination widgets rely on that shape.
    """
    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    half_visible = max_visible // 2
    start_page = max(1, current_page - half_visible)
    end_page = min(total_pages, current_page + half_visible)

    if current_page <= half_visible:
        end_page = min(max_visible, total_pages)
    elif current_page >= total_pages - half_visible:
        start_page = max(1, total_pages - max_visible + 1)

    return list(range(start_page, end_page + 1))


__all__ = ["PaginationResult", "get_page_numbers", "paginate"]
