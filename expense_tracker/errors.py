"""Exception types raised by the expense tracker core."""

from __future__ import annotations

from typing import Iterable, List, Optional


class ExpenseTrackerError(Exception):
    """Base class for all expense tracker errors."""


class ValidationError(ExpenseTrackerError, ValueError):
    """Raised when user-supplied fields cannot produce a valid record."""

    def __init__(self, message: str, fields: Optional[Iterable[str]] = None) -> None:
        super().__init__(message)
        self.fields: List[str] = list(fields or [])


class UnknownFolderError(ExpenseTrackerError, KeyError):
    def __init__(self, folder_id: int) -> None:
        super().__init__(f"No folder with id {folder_id}")
        self.folder_id = folder_id

    def __str__(self) -> str:
        return self.args[0]


class UnknownExpenseError(ExpenseTrackerError, KeyError):
    def __init__(self, expense_id: int, folder_id: Optional[int] = None) -> None:
        where = f" in folder {folder_id}" if folder_id is not None else ""
        super().__init__(f"No expense with id {expense_id}{where}")
        self.expense_id = expense_id
        self.folder_id = folder_id

    def __str__(self) -> str:
        return self.args[0]


class ShareLinkError(ExpenseTrackerError):
    """Raised when a shared-link payload cannot be decoded."""


class StorageError(ExpenseTrackerError):
    """Raised when persisted state cannot be read back."""
