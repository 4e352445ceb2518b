"""UI actions that sit between Streamlit widgets and the Folder Store.

Streamlit reruns the whole script on every click, so multi-step
interactions (confirming a deletion, editing an expense) keep their
progress in ``st.session_state``.  The helpers here take that state as a
plain mapping so they can be exercised without a running app.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import MutableMapping, Optional

from .editor import ExpenseForm, build_expense
from .errors import UnknownExpenseError
from .folder_store import FolderStore
from .models import Expense, Folder

logger = logging.getLogger(__name__)

PENDING_DELETE_KEY = 'pending_delete'
EDITOR_KEY = 'expense_editor'

FOLDER_DELETE_PROMPT = (
    "Are you sure you want to delete this folder? All expenses in this folder will be deleted."
)
EXPENSE_DELETE_PROMPT = "Are you sure you want to delete this expense?"


# Folders -------------------------------------------------------------------


def add_folder_from_input(store: FolderStore, name: Optional[str]) -> Optional[Folder]:
    """Create a folder from the text box; blank input is ignored."""
    if not name or not name.strip():
        return None
    return store.add_folder(name)


def rename_folder_from_input(store: FolderStore, folder_id: int, name: Optional[str]) -> Optional[Folder]:
    if not name or not name.strip():
        return None
    return store.rename_folder(folder_id, name)


# Deletion confirmation -----------------------------------------------------


@dataclass(frozen=True)
class PendingDeletion:
    kind: str  # 'folder' or 'expense'
    folder_id: int
    expense_id: Optional[int] = None

    @property
    def prompt(self) -> str:
        return FOLDER_DELETE_PROMPT if self.kind == 'folder' else EXPENSE_DELETE_PROMPT


def request_folder_deletion(state: MutableMapping, folder_id: int) -> PendingDeletion:
    pending = PendingDeletion(kind='folder', folder_id=folder_id)
    state[PENDING_DELETE_KEY] = pending
    return pending


def request_expense_deletion(state: MutableMapping, folder_id: int, expense_id: int) -> PendingDeletion:
    pending = PendingDeletion(kind='expense', folder_id=folder_id, expense_id=expense_id)
    state[PENDING_DELETE_KEY] = pending
    return pending


def pending_deletion(state: MutableMapping) -> Optional[PendingDeletion]:
    return state.get(PENDING_DELETE_KEY)


def resolve_deletion(store: FolderStore, state: MutableMapping, confirmed: bool) -> bool:
    """Carry out (or cancel) the pending deletion. Returns True if something was deleted."""
    pending = state.pop(PENDING_DELETE_KEY, None)
    if pending is None or not confirmed:
        return False
    if pending.kind == 'folder':
        store.delete_folder(pending.folder_id)
        target = editor_target(state)
        if target is not None and target.folder_id == pending.folder_id:
            close_editor(state)
    else:
        store.delete_expense(pending.folder_id, pending.expense_id)
        target = editor_target(state)
        if target is not None and target.expense_id == pending.expense_id:
            close_editor(state)
    return True


# Expense editor ------------------------------------------------------------


@dataclass(frozen=True)
class EditorTarget:
    folder_id: int
    expense_id: Optional[int] = None

    @property
    def editing(self) -> bool:
        return self.expense_id is not None


def open_editor(state: MutableMapping, folder_id: int, expense_id: Optional[int] = None) -> EditorTarget:
    target = EditorTarget(folder_id=folder_id, expense_id=expense_id)
    state[EDITOR_KEY] = target
    return target


def editor_target(state: MutableMapping) -> Optional[EditorTarget]:
    return state.get(EDITOR_KEY)


def close_editor(state: MutableMapping) -> None:
    state.pop(EDITOR_KEY, None)


def editing_expense(store: FolderStore, target: EditorTarget) -> Optional[Expense]:
    if not target.editing:
        return None
    expense = store.find_expense(target.expense_id)
    if expense is None:
        raise UnknownExpenseError(target.expense_id, target.folder_id)
    return expense


def initial_form(store: FolderStore, target: EditorTarget) -> ExpenseForm:
    expense = editing_expense(store, target)
    return ExpenseForm.from_expense(expense) if expense is not None else ExpenseForm.blank()


def submit_expense(store: FolderStore, state: MutableMapping, form: ExpenseForm) -> Expense:
    """Validate the form and save it to the store, closing the editor.

    Raises ``ValidationError`` without touching the store or the editor
    state when the form is incomplete.
    """
    target = editor_target(state)
    if target is None:
        raise RuntimeError("No expense editor is open")
    editing = editing_expense(store, target)
    expense = build_expense(form, target.folder_id, editing=editing)
    store.save_expense(expense, editing=editing is not None)
    close_editor(state)
    logger.debug("Saved expense %s in folder %s", expense.id, expense.folder_id)
    return expense
