from __future__ import annotations

from datetime import date
from itertools import count

import pytest

from expense_tracker.folder_store import FolderStore
from expense_tracker.models import Expense


@pytest.fixture
def id_factory():
    """Deterministic ids standing in for millisecond timestamps."""
    counter = count(1000)
    return lambda: next(counter)


@pytest.fixture
def store(id_factory):
    return FolderStore(id_factory=id_factory)


def make_expense(expense_id, folder_id, amount=10.0, category='Grocery', when=None, title=None, **extra):
    return Expense(
        id=expense_id,
        title=title or f"Expense {expense_id}",
        amount=amount,
        category=category,
        date=when or date.today(),
        folder_id=folder_id,
        **extra,
    )
