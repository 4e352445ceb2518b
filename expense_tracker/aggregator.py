"""Aggregator - cross-folder views derived from the Folder Store.

All views start from :func:`flatten_expenses`, which lays every expense out
as one DataFrame row annotated with its folder's name.  Row order is
folder order, then insertion order inside each folder; the "recent" view
relies on that order and deliberately does not sort by date.
"""

from __future__ import annotations

import calendar
from datetime import date
from typing import Any, Dict, Iterable, Optional, Tuple

import pandas as pd

from .categories import CATEGORIES
from .config import RECENT_LIMIT
from .folder_store import FolderStore
from .models import Folder

EXPENSE_COLUMNS = [
    'id',
    'title',
    'amount',
    'category',
    'date',
    'folderId',
    'description',
    'paymentMethod',
    'tags',
    'folderName',
]


def flatten_expenses(folders: Iterable[Folder]) -> pd.DataFrame:
    """Return every expense across ``folders`` as one row, with ``folderName``."""
    rows = []
    for folder in folders:
        for expense in folder.expenses:
            row = {column: None for column in EXPENSE_COLUMNS}
            row.update(expense.to_dict())
            row['date'] = expense.date
            row['folderName'] = folder.name
            rows.append(row)
    if not rows:
        return pd.DataFrame(columns=EXPENSE_COLUMNS)
    frame = pd.DataFrame(rows, columns=EXPENSE_COLUMNS)
    frame['amount'] = pd.to_numeric(frame['amount'], errors='coerce').fillna(0.0)
    return frame


def recent_expenses(frame: pd.DataFrame, limit: int = RECENT_LIMIT) -> pd.DataFrame:
    """First ``limit`` rows of the flattened frame, in insertion order."""
    return frame.head(limit)


def current_month_bounds(today: Optional[date] = None) -> Tuple[date, date]:
    """First and last calendar day of the month containing ``today``."""
    today = today or date.today()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def _empty_totals() -> pd.Series:
    totals = pd.Series(0.0, index=pd.Index(list(CATEGORIES), name='category'), name='amount')
    return totals


def monthly_category_totals(frame: pd.DataFrame, today: Optional[date] = None) -> pd.Series:
    """Sum of amounts per category for the current calendar month.

    The result is indexed by the full category set in its display order;
    categories without spending this month report ``0.0``.  Expenses filed
    under a category outside the fixed set are ignored.
    """
    if frame.empty:
        return _empty_totals()
    start, end = current_month_bounds(today)
    dates = pd.to_datetime(frame['date']).dt.date
    in_month = frame[(dates >= start) & (dates <= end)]
    if in_month.empty:
        return _empty_totals()
    totals = in_month.groupby('category')['amount'].sum()
    totals = totals.reindex(list(CATEGORIES), fill_value=0.0).astype(float)
    totals.index.name = 'category'
    totals.name = 'amount'
    return totals


def quick_summary(folders: Iterable[Folder], frame: Optional[pd.DataFrame] = None) -> Dict[str, Any]:
    """Totals shown on the home page."""
    folders = tuple(folders)
    if frame is None:
        frame = flatten_expenses(folders)
    total = float(frame['amount'].sum()) if not frame.empty else 0.0
    return {
        'total': total,
        'category_count': int(frame['category'].nunique()) if not frame.empty else 0,
        'folder_count': len(folders),
        'folder_names': [folder.name for folder in folders],
    }


class SummaryCache:
    """Memoized derived views, invalidated whenever the store changes."""

    def __init__(self, store: FolderStore) -> None:
        self._store = store
        self._cache: Dict[Any, Any] = {}
        self._unsubscribe = store.subscribe(self._invalidate)

    def _invalidate(self, _folders: Tuple[Folder, ...]) -> None:
        self._cache.clear()

    def close(self) -> None:
        self._unsubscribe()
        self._cache.clear()

    def _memo(self, key: Any, compute):
        if key not in self._cache:
            self._cache[key] = compute()
        return self._cache[key]

    def expenses(self) -> pd.DataFrame:
        return self._memo('flat', lambda: flatten_expenses(self._store.folders))

    def recent(self, limit: int = RECENT_LIMIT) -> pd.DataFrame:
        return self._memo(('recent', limit), lambda: recent_expenses(self.expenses(), limit))

    def monthly_totals(self, today: Optional[date] = None) -> pd.Series:
        bounds = current_month_bounds(today)
        return self._memo(
            ('monthly', bounds),
            lambda: monthly_category_totals(self.expenses(), bounds[0]),
        )

    def summary(self) -> Dict[str, Any]:
        return self._memo('summary', lambda: quick_summary(self._store.folders, self.expenses()))

    def workbook(self) -> bytes:
        """The ``.xlsx`` export of the current folders."""
        from .exporter import export_workbook
        return self._memo('workbook', lambda: export_workbook(self._store.folders))
