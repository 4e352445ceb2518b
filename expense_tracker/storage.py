"""Local key/value storage backed by a JSON file.

This is the app's "local storage": a flat mapping of string keys to JSON
values kept in one file in the data directory.  The folder collection is
stored under ``config.STORAGE_KEY``; it is read once when a session starts
and rewritten after every change to the Folder Store.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from . import config
from .errors import StorageError
from .models import Folder, folders_from_dicts, folders_to_dicts

logger = logging.getLogger(__name__)


class LocalStorage:
    """Minimal ``getItem`` / ``setItem`` store persisted to a JSON file."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path or config.STORAGE_PATH)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Local storage file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"Local storage file {self.path} must hold a JSON object")
        return data

    def get_item(self, key: str) -> Optional[Any]:
        return self._read().get(key)

    def set_item(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open('w', encoding='utf-8') as handle:
            json.dump(data, handle, indent=2, ensure_ascii=False)
        logger.debug("Wrote key %r to %s", key, self.path)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            with self.path.open('w', encoding='utf-8') as handle:
                json.dump(data, handle, indent=2, ensure_ascii=False)


def load_folders(storage: Optional[LocalStorage] = None, key: str = config.STORAGE_KEY) -> Tuple[Folder, ...]:
    """Read the saved folder collection; an absent key means no folders yet."""
    storage = storage or LocalStorage()
    records = storage.get_item(key)
    if records is None:
        return ()
    try:
        return folders_from_dicts(records)
    except (KeyError, TypeError, ValueError, OverflowError) as exc:
        raise StorageError(f"Saved folders under {key!r} are malformed: {exc}") from exc


def save_folders(
    folders: Iterable[Folder],
    storage: Optional[LocalStorage] = None,
    key: str = config.STORAGE_KEY,
) -> None:
    storage = storage or LocalStorage()
    storage.set_item(key, folders_to_dicts(folders))


def persist_on_change(storage: LocalStorage, key: str = config.STORAGE_KEY):
    """Build a Folder Store listener that saves every new snapshot."""

    def listener(folders: Tuple[Folder, ...]) -> None:
        save_folders(folders, storage, key)

    return listener
