# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal

_CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥"}
_ZERO_DECIMAL_CURRENCIES = {"JPY"}


def format_currency(amount: Decimal | float | int, currency: str = "USD") -> str:
    """en-US style money string, e.g. ``format_currency(1234.5) == "$1,234.50"``."""
    code = currency.upper()
    places = Decimal("1") if code in _ZERO_DECIMAL_CURRENCIES else Decimal("0.01")
    value = Decimal(str(amount)).quantize(places, rounding=ROUND_HALF_EVEN)
    sign = "-" if value < 0 else ""
    digits = f"{abs(value):,}"
    symbol = _CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{code} {digits}"
    return f"{sign}{symbol}{digits}"


def format_cents(cents: int, currency: str = "USD") -> str:
    return format_currency(Decimal(cents) / 100, currency)


def capitalize(value: str) -> str:
    if not value:
        return ""
    return value[0].upper() + value[1:]


def truncate(value: str, max_length: int) -> str:
    if len(value) <= max_length:
        return value
    return value[:max_length] + "..."


__all__ = ["capitalize", "format_cents", "format_currency", "truncate"]
