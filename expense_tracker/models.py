"""Folder and expense records.

Both records are immutable: the store never edits a folder in place, it
builds a replacement with :func:`dataclasses.replace` and swaps the whole
collection.  The dictionary form (``to_dict`` / ``from_dict``) is shared by
local storage, share links and the spreadsheet export, and keeps the
camelCase keys used by earlier saved data (``folderId``, ``paymentMethod``).
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple


def new_id() -> int:
    """Return a millisecond creation timestamp used as a record id.

    Two records created within the same millisecond collide; nothing
    guards against that.
    """
    return int(time.time() * 1000)


def parse_date(value: Any) -> date:
    """Coerce an ISO string, ``date`` or ``datetime`` to a ``date``."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        raise ValueError("empty date")
    # Accept full ISO timestamps and keep only the calendar date
    return date.fromisoformat(text[:10])


def parse_stored_amount(value: Any) -> float:
    """Coerce a stored amount, rejecting negative and non-finite values."""
    amount = float(value)
    if not math.isfinite(amount) or amount < 0:
        raise ValueError(f"amount must be a finite non-negative number, got {value!r}")
    return amount


def clean_tags(tags: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    if tags is None:
        return ()
    if isinstance(tags, str):
        tags = tags.split(',')
    cleaned: List[str] = []
    for tag in tags:
        text = str(tag).strip()
        if text and text not in cleaned:
            cleaned.append(text)
    return tuple(cleaned)


@dataclass(frozen=True)
class Expense:
    id: int
    title: str
    amount: float
    category: str
    date: date
    folder_id: int
    description: Optional[str] = None
    payment_method: Optional[str] = None
    tags: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'id': self.id,
            'title': self.title,
            'amount': self.amount,
            'category': self.category,
            'date': self.date.isoformat(),
            'folderId': self.folder_id,
        }
        if self.description:
            data['description'] = self.description
        if self.payment_method:
            data['paymentMethod'] = self.payment_method
        data['tags'] = list(self.tags)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], folder_id: Optional[int] = None) -> 'Expense':
        if not isinstance(data, dict):
            raise ValueError(f"expense record must be an object, got {type(data).__name__}")
        owner = data.get('folderId', folder_id)
        if owner is None:
            raise ValueError(f"expense {data.get('id')!r} has no folderId")
        return cls(
            id=int(data['id']),
            title=str(data['title']),
            amount=parse_stored_amount(data['amount']),
            category=str(data['category']),
            date=parse_date(data['date']),
            folder_id=int(owner),
            description=data.get('description') or None,
            payment_method=data.get('paymentMethod') or None,
            tags=clean_tags(data.get('tags')),
        )


@dataclass(frozen=True)
class Folder:
    id: int
    name: str
    expenses: Tuple[Expense, ...] = field(default_factory=tuple)

    def with_name(self, name: str) -> 'Folder':
        return replace(self, name=name)

    def with_expenses(self, expenses: Iterable[Expense]) -> 'Folder':
        return replace(self, expenses=tuple(expenses))

    def find_expense(self, expense_id: int) -> Optional[Expense]:
        for expense in self.expenses:
            if expense.id == expense_id:
                return expense
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'expenses': [expense.to_dict() for expense in self.expenses],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Folder':
        if not isinstance(data, dict):
            raise ValueError(f"folder record must be an object, got {type(data).__name__}")
        folder_id = int(data['id'])
        raw_expenses = data.get('expenses') or []
        if not isinstance(raw_expenses, list):
            raise ValueError(f"folder {folder_id} expenses must be a list")
        return cls(
            id=folder_id,
            name=str(data['name']),
            expenses=tuple(Expense.from_dict(item, folder_id) for item in raw_expenses),
        )


def folders_to_dicts(folders: Iterable[Folder]) -> List[Dict[str, Any]]:
    return [folder.to_dict() for folder in folders]


def folders_from_dicts(records: Any) -> Tuple[Folder, ...]:
    if not isinstance(records, list):
        raise ValueError(f"folder collection must be a list, got {type(records).__name__}")
    return tuple(Folder.from_dict(record) for record in records)
