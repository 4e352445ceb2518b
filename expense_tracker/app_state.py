"""Per-session application state.

Each Streamlit session owns exactly one :class:`TrackerApp`: the Folder
Store loaded from local storage, a persistence subscriber, and the cached
summary views.  It lives in ``st.session_state`` so every page of the
session works on the same store.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, MutableMapping, Optional

from . import config
from .aggregator import SummaryCache
from .folder_store import FolderStore
from .share import load_shared_state
from .storage import LocalStorage, load_folders, persist_on_change

logger = logging.getLogger(__name__)

APP_STATE_KEY = 'tracker_app'
_LOGGING_CONFIGURED = False


@dataclass
class TrackerApp:
    store: FolderStore
    views: SummaryCache
    storage: LocalStorage
    loaded_shared: bool = False


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _LOGGING_CONFIGURED = True


def init_app(
    state: MutableMapping[str, Any],
    params: Optional[Mapping[str, Any]] = None,
    storage: Optional[LocalStorage] = None,
) -> TrackerApp:
    """Return the session's app, creating it on first use.

    Creation reads saved folders once, then applies a ``?shared=`` link if
    one was passed.  The shared snapshot goes through the store like any
    other change, so it is persisted as well.
    """
    existing = state.get(APP_STATE_KEY)
    if existing is not None:
        return existing

    storage = storage or LocalStorage()
    store = FolderStore(load_folders(storage))
    store.subscribe(persist_on_change(storage))
    views = SummaryCache(store)
    loaded_shared = load_shared_state(store, params or {})
    app = TrackerApp(store=store, views=views, storage=storage, loaded_shared=loaded_shared)
    state[APP_STATE_KEY] = app
    logger.debug("Session started with %d folders", len(store.folders))
    return app


def get_app() -> TrackerApp:
    """Streamlit accessor used by the pages."""
    import streamlit as st

    configure_logging()
    config.ensure_data_directories()
    return init_app(st.session_state, st.query_params)
