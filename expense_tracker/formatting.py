"""Formatting utilities for amounts and dates."""

from __future__ import annotations

from datetime import date
from typing import Union

from .config import CURRENCY_SYMBOL


def format_amount(amount: Union[float, int]) -> str:
    """Two-decimal amount without grouping, e.g. ``'1234.50'``."""
    return f"{float(amount):.2f}"


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with grouping.

    Example:
        >>> format_currency(1234.5)
        '₹1,234.50'
        >>> format_currency(1234.5, include_sign=False)
        '1,234.50'
    """
    formatted = f"{float(amount):,.2f}"
    return f"{CURRENCY_SYMBOL}{formatted}" if include_sign else formatted


def format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")
