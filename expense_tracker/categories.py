"""Fixed enumerations used to classify expenses.

``CATEGORIES`` is a closed set and its order is significant: charts and
summary tables list categories in exactly this order.
"""

from __future__ import annotations

from typing import Optional, Tuple

CATEGORIES: Tuple[str, ...] = (
    'Rent',
    'Outside Food',
    'Grocery',
    'Family and Friends',
    'Travel',
    'Entertainment',
    'Utilities',
    'Shopping',
    'Healthcare',
    'Education',
    'Transportation',
    'Insurance',
    'Investments',
    'Personal Care',
    'Home Maintenance',
    'Gifts',
    'Subscriptions',
    'Other',
)

PAYMENT_METHODS: Tuple[str, ...] = (
    'Cash',
    'Debit Card',
    'Credit Card',
    'UPI',
    'Bank Transfer',
    'Wallet',
    'Other',
)


def is_category(value: Optional[str]) -> bool:
    return value in CATEGORIES


def is_payment_method(value: Optional[str]) -> bool:
    return value in PAYMENT_METHODS
