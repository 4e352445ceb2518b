"""Monthly Expense Tracker - home page.

This is the landing page of the multi-page Streamlit app: recent expenses
and a quick summary across all folders.  The Folders and Summary pages
live in the pages/ directory.

To run the app from the command line::

    python run_tracker.py
"""

from __future__ import annotations

import streamlit as st

from .shared_sidebar import render_shared_sidebar


def main() -> None:
    """Entry point for the home page."""
    st.set_page_config(
        page_title="Monthly Expense Tracker",
        page_icon="💸",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    sidebar_data = render_shared_sidebar()
    app = sidebar_data['app']
    ui = sidebar_data['ui']

    ui.render_header()
    ui.render_notice()
    st.subheader("Welcome to Monthly Expense Tracker")

    if not app.store.folders:
        _render_welcome_screen()

    col1, col2 = st.columns(2)
    with col1:
        ui.render_recent_expenses(app.views.recent())
    with col2:
        ui.render_quick_summary(app.views.summary())

    ui.render_footer()


def _render_welcome_screen() -> None:
    st.markdown("""
    Keep track of where your money goes each month:

    - 📁 **Folders**: group expenses however you like (a flat, a trip, a project)
    - 📊 **Summary**: see this month's spending per category
    - 🔗 **Share**: send a link with a copy of all your folders
    - 📥 **Export**: download every expense as an Excel sheet

    Open the **Folders** page in the sidebar to create your first folder.
    """)
