"""Folder Store - the single source of truth for folders and their expenses.

Every mutation builds a new tuple of folders (copying only the folder that
changed) and then notifies subscribers with the new snapshot.  The
Streamlit session attaches two subscribers: one that persists the
collection to local storage and one that invalidates the cached summary
views.  A failed operation raises before the snapshot is swapped, so
subscribers only ever see consistent collections.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Tuple

from .errors import UnknownExpenseError, UnknownFolderError, ValidationError
from .models import Expense, Folder, new_id

logger = logging.getLogger(__name__)

Listener = Callable[[Tuple[Folder, ...]], None]


def check_back_references(folders: Iterable[Folder]) -> None:
    """Raise ``ValidationError`` on duplicate ids or an expense stored outside its folder.

    Expense ids must be unique across the whole collection, since lookups
    and edits address an expense by id alone.
    """
    seen_folders = set()
    seen_expenses = set()
    for folder in folders:
        if folder.id in seen_folders:
            raise ValidationError(f"Duplicate folder id {folder.id}", ['id'])
        seen_folders.add(folder.id)
        for expense in folder.expenses:
            if expense.id in seen_expenses:
                raise ValidationError(f"Duplicate expense id {expense.id}", ['id'])
            seen_expenses.add(expense.id)
            if expense.folder_id != folder.id:
                raise ValidationError(
                    f"Expense {expense.id} references folder {expense.folder_id} "
                    f"but is stored in folder {folder.id}",
                    ['folderId'],
                )


def _require_name(name: Optional[str]) -> str:
    if name is None or not str(name).strip():
        raise ValidationError("Folder name is required", ['name'])
    return str(name)


class FolderStore:
    """Ordered collection of folders with change notification."""

    def __init__(
        self,
        folders: Iterable[Folder] = (),
        id_factory: Callable[[], int] = new_id,
    ) -> None:
        snapshot = tuple(folders)
        check_back_references(snapshot)
        self._folders: Tuple[Folder, ...] = snapshot
        self._listeners: List[Listener] = []
        self._id_factory = id_factory

    # Observation -------------------------------------------------------------

    @property
    def folders(self) -> Tuple[Folder, ...]:
        return self._folders

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, folders: Tuple[Folder, ...], action: str) -> None:
        self._folders = folders
        logger.debug("%s -> %d folders", action, len(folders))
        for listener in list(self._listeners):
            listener(folders)

    # Lookups -----------------------------------------------------------------

    def find_folder(self, folder_id: int) -> Optional[Folder]:
        for folder in self._folders:
            if folder.id == folder_id:
                return folder
        return None

    def get_folder(self, folder_id: int) -> Folder:
        folder = self.find_folder(folder_id)
        if folder is None:
            raise UnknownFolderError(folder_id)
        return folder

    def find_expense(self, expense_id: int) -> Optional[Expense]:
        for folder in self._folders:
            expense = folder.find_expense(expense_id)
            if expense is not None:
                return expense
        return None

    def _replace_folder(self, updated: Folder) -> Tuple[Folder, ...]:
        return tuple(updated if folder.id == updated.id else folder for folder in self._folders)

    # Folder operations -------------------------------------------------------

    def add_folder(self, name: str) -> Folder:
        folder = Folder(id=self._id_factory(), name=_require_name(name), expenses=())
        self._commit(self._folders + (folder,), f"add folder {folder.id}")
        return folder

    def rename_folder(self, folder_id: int, name: str) -> Folder:
        cleaned = _require_name(name)
        updated = self.get_folder(folder_id).with_name(cleaned)
        self._commit(self._replace_folder(updated), f"rename folder {folder_id}")
        return updated

    def delete_folder(self, folder_id: int) -> Folder:
        removed = self.get_folder(folder_id)
        remaining = tuple(folder for folder in self._folders if folder.id != folder_id)
        self._commit(remaining, f"delete folder {folder_id} ({len(removed.expenses)} expenses)")
        return removed

    def replace_all(self, folders: Iterable[Folder]) -> None:
        snapshot = tuple(folders)
        check_back_references(snapshot)
        self._commit(snapshot, "replace all")

    # Expense operations ------------------------------------------------------

    def add_expense(self, folder_id: int, expense: Expense) -> Expense:
        if expense.folder_id != folder_id:
            raise ValidationError(
                f"Expense belongs to folder {expense.folder_id}, not {folder_id}", ['folderId']
            )
        folder = self.get_folder(folder_id)
        if self.find_expense(expense.id) is not None:
            raise ValidationError(f"Duplicate expense id {expense.id}", ['id'])
        updated = folder.with_expenses(folder.expenses + (expense,))
        self._commit(self._replace_folder(updated), f"add expense {expense.id}")
        return expense

    def update_expense(self, folder_id: int, expense: Expense) -> Expense:
        if expense.folder_id != folder_id:
            raise ValidationError(
                f"Expense belongs to folder {expense.folder_id}, not {folder_id}", ['folderId']
            )
        folder = self.get_folder(folder_id)
        if folder.find_expense(expense.id) is None:
            raise UnknownExpenseError(expense.id, folder_id)
        updated = folder.with_expenses(
            expense if existing.id == expense.id else existing for existing in folder.expenses
        )
        self._commit(self._replace_folder(updated), f"update expense {expense.id}")
        return expense

    def delete_expense(self, folder_id: int, expense_id: int) -> Expense:
        folder = self.get_folder(folder_id)
        removed = folder.find_expense(expense_id)
        if removed is None:
            raise UnknownExpenseError(expense_id, folder_id)
        updated = folder.with_expenses(e for e in folder.expenses if e.id != expense_id)
        self._commit(self._replace_folder(updated), f"delete expense {expense_id}")
        return removed

    def save_expense(self, expense: Expense, editing: bool = False) -> Expense:
        """Add ``expense`` to its folder, or replace the existing one when editing."""
        if editing:
            return self.update_expense(expense.folder_id, expense)
        return self.add_expense(expense.folder_id, expense)
