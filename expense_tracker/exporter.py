"""Spreadsheet export of every expense across all folders."""

from __future__ import annotations

from io import BytesIO
from typing import Iterable

import pandas as pd

from .aggregator import flatten_expenses
from .config import EXPORT_SHEET
from .models import Folder


def export_frame(folders: Iterable[Folder]) -> pd.DataFrame:
    """One row per expense with all its fields plus ``folderName``.

    Dates are written as ISO strings and tags as a comma-separated list so
    the sheet reads the same in any spreadsheet application.
    """
    frame = flatten_expenses(folders).copy()
    if frame.empty:
        return frame
    frame['date'] = frame['date'].map(lambda value: value.isoformat())
    frame['tags'] = frame['tags'].map(lambda tags: ', '.join(tags or []))
    return frame


def export_workbook(folders: Iterable[Folder], sheet_name: str = EXPORT_SHEET) -> bytes:
    """Return the bytes of an ``.xlsx`` workbook with a single sheet."""
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        export_frame(folders).to_excel(writer, sheet_name=sheet_name, index=False)
    return buffer.getvalue()
