from __future__ import annotations

import pytest

from marketplace.utils.formatting import capitalize, format_cents, format_currency, truncate


@pytest.mark.parametrize(
    ("amount", "currency", "expected"),
    [
        (1234.5, "USD", "$1,234.50"),
        (0, "USD", "$0.00"),
        (99.99, "EUR", "€99.99"),
        (-5, "USD", "-$5.00"),
        (10, "CHF", "CHF 10.00"),
    ],
)
def test_format_currency(amount: float, currency: str, expected: str) -> None:
    assert format_currency(amount, currency) == expected


def test_format_cents() -> None:
    assert format_cents(15000) == "$150.00"
    assert format_cents(1999) == "$19.99"


def test_capitalize_and_truncate() -> None:
    assert capitalize("hello") == "Hello"
    assert capitalize("") == ""
    assert truncate("short", 10) == "short"
    assert truncate("a longer sentence", 8) == "a longer..."
