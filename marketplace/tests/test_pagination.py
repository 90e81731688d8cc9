from __future__ import annotations

import pytest

from marketplace.domain.products.pagination import get_page_numbers, paginate

ITEMS = [{"id": i + 1, "name": f"Item {i + 1}"} for i in range(50)]


def test_first_page() -> None:
    result = paginate(ITEMS, current_page=1, total_items=50, items_per_page=10)

    assert len(result.items) == 10
    assert result.items[0] == {"id": 1, "name": "Item 1"}
    assert result.items[9] == {"id": 10, "name": "Item 10"}
    assert result.current_page == 1
    assert result.total_pages == 5
    assert result.has_next_page is True
    assert result.has_previous_page is False
    assert (result.start_index, result.end_index) == (0, 10)


def test_middle_page() -> None:
    result = paginate(ITEMS, current_page=3, total_items=50, items_per_page=10)

    assert [item["id"] for item in result.items] == list(range(21, 31))
    assert result.has_next_page is True
    assert result.has_previous_page is True
    assert (result.start_index, result.end_index) == (20, 30)


def test_last_page() -> None:
    result = paginate(ITEMS, current_page=5, total_items=50, items_per_page=10)

    assert result.items[0]["id"] == 41
    assert result.items[-1]["id"] == 50
    assert result.has_next_page is False
    assert result.has_previous_page is True


def test_partial_last_page() -> None:
    items = [{"id": i + 1} for i in range(55)]
    result = paginate(items, current_page=6, total_items=55, items_per_page=10)

    assert len(result.items) == 5
    assert result.total_pages == 6
    assert result.has_next_page is False


@pytest.mark.parametrize(("requested", "expected"), [(100, 5), (0, 1), (-3, 1)])
def test_page_is_clamped(requested: int, expected: int) -> None:
    result = paginate(ITEMS, current_page=requested, total_items=50, items_per_page=10)

    assert result.current_page == expected
    assert 1 <= result.current_page <= result.total_pages


def test_clamped_result_is_stable() -> None:
    first = paginate(ITEMS, current_page=100, total_items=50, items_per_page=10)
    again = paginate(ITEMS, current_page=first.current_page, total_items=50, items_per_page=10)

    assert again == first


def test_single_page() -> None:
    result = paginate(ITEMS[:5], current_page=1, total_items=5, items_per_page=10)

    assert len(result.items) == 5
    assert result.total_pages == 1
    assert result.has_next_page is False
    assert result.has_previous_page is False


def test_empty_list() -> None:
    result = paginate([], current_page=1, total_items=0, items_per_page=10)

    assert result.items == []
    assert result.total_pages == 0
    assert result.current_page == 1
    assert result.has_next_page is False
    assert result.has_previous_page is False


def test_zero_items_per_page_is_rejected() -> None:
    with pytest.raises(ValueError):
        paginate(ITEMS, current_page=1, total_items=50, items_per_page=0)


def test_meta_uses_camel_case_keys() -> None:
    meta = paginate(ITEMS, current_page=2, total_items=50, items_per_page=10).meta()

    assert meta["currentPage"] == 2
    assert meta["totalPages"] == 5
    assert meta["hasPreviousPage"] is True
    assert "items" not in meta


@pytest.mark.parametrize(
    ("current", "total", "max_visible", "expected"),
    [
        (1, 3, 5, [1, 2, 3]),
        (1, 10, 5, [1, 2, 3, 4, 5]),
        (5, 10, 5, [3, 4, 5, 6, 7]),
        (10, 10, 5, [6, 7, 8, 9, 10]),
        (5, 10, 4, [3, 4, 5, 6, 7]),
        (1, 1, 5, [1]),
        (50, 100, 5, [48, 49, 50, 51, 52]),
        (2, 10, 5, [1, 2, 3, 4, 5]),
        (9, 10, 5, [6, 7, 8, 9, 10]),
    ],
)
def test_get_page_numbers(current: int, total: int, max_visible: int, expected: list[int]) -> None:
    assert get_page_numbers(current, total, max_visible) == expected


def test_get_page_numbers_without_pages() -> None:
    assert get_page_numbers(1, 0) == []
