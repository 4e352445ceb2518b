"""Shared sidebar components for the multi-page tracker.

Every page renders the same sidebar: the Share and Export actions that the
original navbar carried.  Returns the session's :class:`TrackerApp` so the
page can keep working with it.
"""

from __future__ import annotations

from typing import Dict

import streamlit as st

try:
    from . import config
    from .app_state import get_app
    from .notices import dismiss_notice, show_notice
    from .share import build_share_link
    from .ui_components import TrackerUI
except ImportError:
    # Fallback for when running as script
    import sys
    from pathlib import Path
    project_root = Path(__file__).parent.parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))
    from expense_tracker import config
    from expense_tracker.app_state import get_app
    from expense_tracker.notices import dismiss_notice, show_notice
    from expense_tracker.share import build_share_link
    from expense_tracker.ui_components import TrackerUI

SHARE_LINK_KEY = 'share_link'


def render_shared_sidebar() -> Dict:
    """Render sidebar elements available on all pages.

    Returns:
        Dict with keys: 'app', 'ui'
    """
    ui = TrackerUI()
    app = get_app()

    st.sidebar.subheader("🔗 Share")
    if st.sidebar.button("Share", help="Create a link containing all your folders and expenses"):
        st.session_state[SHARE_LINK_KEY] = build_share_link(config.PUBLIC_URL, app.store.folders)

    share_link = st.session_state.get(SHARE_LINK_KEY)
    if share_link:
        _render_share_panel(ui, share_link)

    st.sidebar.subheader("📥 Export")
    st.sidebar.download_button(
        label="Export to Excel",
        data=app.views.workbook(),
        file_name=config.EXPORT_FILENAME,
        mime=config.EXPORT_MIME,
    )

    if app.loaded_shared:
        st.sidebar.info("Loaded folders from a shared link.")

    return {'app': app, 'ui': ui}


def _render_share_panel(ui: TrackerUI, share_link: str) -> None:
    with st.sidebar.container(border=True):
        st.markdown("**Share Expense Tracker**")
        st.caption("Share this link with your friend to collaborate on expenses:")
        st.code(share_link, language=None, wrap_lines=True)
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Copy Link", key="copy_share_link", type="primary"):
                ui.copy_to_clipboard(share_link)
                show_notice(st.session_state, "Link copied to clipboard!")
        with col2:
            if st.button("Close", key="close_share_link"):
                st.session_state.pop(SHARE_LINK_KEY, None)
                dismiss_notice(st.session_state)
                st.rerun()
