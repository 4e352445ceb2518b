"""Share links - encode a full snapshot of the tracker into a URL.

A share link is the app URL with a single query parameter::

    ?shared=<base64 of JSON {"folders": [...], "expenses": [...]}>

``folders`` is the folder collection exactly as it is persisted;
``expenses`` is the flattened expense list (each with ``folderName``) that
the home page shows.  Loading a link replaces the current folders with the
decoded ones.  A malformed link is logged and otherwise ignored.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import quote, urlsplit, urlunsplit

from .categories import is_category, is_payment_method
from .config import SHARE_PARAM
from .errors import ShareLinkError
from .folder_store import FolderStore, check_back_references
from .models import Folder, folders_from_dicts, folders_to_dicts

logger = logging.getLogger(__name__)


@dataclass
class SharedSnapshot:
    folders: Tuple[Folder, ...]
    expenses: List[Dict[str, Any]] = field(default_factory=list)


def _flattened_records(folders: Iterable[Folder]) -> List[Dict[str, Any]]:
    records = []
    for folder in folders:
        for expense in folder.expenses:
            record = expense.to_dict()
            record['folderName'] = folder.name
            records.append(record)
    return records


def encode_snapshot(folders: Iterable[Folder]) -> str:
    """Base64 text of the JSON ``{folders, expenses}`` payload."""
    folders = tuple(folders)
    payload = {
        'folders': folders_to_dicts(folders),
        'expenses': _flattened_records(folders),
    }
    text = json.dumps(payload, separators=(',', ':'), ensure_ascii=False)
    return base64.b64encode(text.encode('utf-8')).decode('ascii')


def build_share_link(base_url: str, folders: Iterable[Folder], param: str = SHARE_PARAM) -> str:
    """Return ``base_url`` with its query replaced by the encoded snapshot."""
    encoded = quote(encode_snapshot(folders), safe='')
    parts = urlsplit(base_url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, f"{param}={encoded}", ''))


def decode_snapshot(encoded: str) -> SharedSnapshot:
    """Inverse of :func:`encode_snapshot`.

    Raises:
        ShareLinkError: for any payload that is not valid base64, not valid
            JSON, lacks ``folders`` / ``expenses``, or holds invalid records.
    """
    if not encoded or not str(encoded).strip():
        raise ShareLinkError("Shared payload is empty")
    # An unquoted '+' arrives as a space after query-string decoding
    text = str(encoded).strip().replace(' ', '+')
    try:
        raw = base64.b64decode(text, validate=True)
        payload = json.loads(raw.decode('utf-8'))
    except (binascii.Error, UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise ShareLinkError(f"Shared payload is not base64-encoded JSON: {exc}") from exc
    if not isinstance(payload, dict) or 'folders' not in payload or 'expenses' not in payload:
        raise ShareLinkError("Shared payload must contain 'folders' and 'expenses'")
    expenses = payload['expenses']
    if not isinstance(expenses, list):
        raise ShareLinkError("Shared 'expenses' must be a list")
    try:
        folders = folders_from_dicts(payload['folders'])
        check_back_references(folders)
        _check_choices(folders)
    except (KeyError, TypeError, ValueError, OverflowError) as exc:
        raise ShareLinkError(f"Shared folders are malformed: {exc}") from exc
    return SharedSnapshot(folders=folders, expenses=list(expenses))


def _check_choices(folders: Iterable[Folder]) -> None:
    # Shared records must hold the same choices the expense form offers
    for folder in folders:
        for expense in folder.expenses:
            if not is_category(expense.category):
                raise ValueError(f"expense {expense.id} has unknown category {expense.category!r}")
            if expense.payment_method is not None and not is_payment_method(expense.payment_method):
                raise ValueError(
                    f"expense {expense.id} has unknown payment method {expense.payment_method!r}"
                )


def _first_value(value: Any) -> Optional[str]:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def load_shared_state(store: FolderStore, params: Mapping[str, Any], param: str = SHARE_PARAM) -> bool:
    """Replace the store's folders with a shared snapshot, if one was passed.

    Returns ``True`` when shared state was loaded.  A failure of any kind is
    reported to the log only; the store is left untouched.
    """
    encoded = _first_value(params.get(param)) if params else None
    if encoded is None:
        return False
    try:
        snapshot = decode_snapshot(encoded)
        store.replace_all(snapshot.folders)
    except Exception:
        logger.exception("Error loading shared data")
        return False
    logger.info(
        "Loaded shared data: %d folders, %d expenses",
        len(snapshot.folders),
        sum(len(folder.expenses) for folder in snapshot.folders),
    )
    return True
