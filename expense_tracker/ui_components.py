"""Streamlit UI components for the expense tracker.

The page scripts stay short by delegating layout to :class:`TrackerUI`.
Nothing in here mutates the Folder Store directly; widgets report what the
user did and the pages route that through :mod:`actions`.
"""

from __future__ import annotations

import json
import time
from datetime import date
from typing import Any, Callable, Dict, Optional

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from . import config
from .categories import CATEGORIES, PAYMENT_METHODS
from .editor import ExpenseForm
from .formatting import format_amount, format_currency, format_date
from .notices import active_notice

NOTICE_REFRESH_SECONDS = 0.5


class TrackerUI:
    """Layout helpers shared by every page."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock

    def render_header(self) -> None:
        st.title("💸 Monthly Expense Tracker")

    def render_notice(self) -> None:
        """Show the active notice in a fragment that re-checks its deadline.

        Streamlit only reruns a page on interaction, so the fragment's own
        timer is what clears the notice once it expires.
        """
        if active_notice(st.session_state, clock=self.clock) is None:
            return
        st.fragment(self._render_notice_body, run_every=NOTICE_REFRESH_SECONDS)()

    def _render_notice_body(self) -> None:
        notice = active_notice(st.session_state, clock=self.clock)
        if notice is None:
            return
        if notice.kind == 'success':
            st.success(notice.message)
        else:
            st.info(notice.message)

    def render_footer(self) -> None:
        st.divider()
        st.caption(config.FOOTER_TEXT)

    # Expense display ------------------------------------------------------

    def render_expense_item(self, row: Dict[str, Any], show_folder: bool = True) -> None:
        col1, col2 = st.columns([3, 1])
        with col1:
            st.markdown(f"**{row['title']}**")
            badges = [f":blue-background[{row['category']}]"]
            if show_folder and row.get('folderName'):
                badges.append(f":violet-background[{row['folderName']}]")
            st.markdown(" ".join(badges) + f" &nbsp; {format_date(row['date'])}")
        with col2:
            st.markdown(f"**{format_amount(row['amount'])}**")

    def render_recent_expenses(self, recent: pd.DataFrame) -> None:
        with st.container(border=True):
            st.subheader("Recent Expenses")
            if recent.empty:
                st.caption("No expenses yet. Add some from the Folders page.")
                return
            for _, row in recent.iterrows():
                self.render_expense_item(row.to_dict())

    def render_quick_summary(self, summary: Dict[str, Any]) -> None:
        with st.container(border=True):
            st.subheader("Quick Summary")
            col1, col2, col3 = st.columns(3)
            col1.metric("Total Expenses", format_amount(summary['total']))
            col2.metric("Categories", summary['category_count'])
            col3.metric("Folders", summary['folder_count'])
            if summary['folder_names']:
                st.markdown("**Folder Names:** " + " ".join(
                    f":gray-background[{name}]" for name in summary['folder_names']
                ))

    def render_category_table(self, totals: pd.Series) -> None:
        table = totals.rename('Amount').reset_index().rename(columns={'category': 'Category'})
        table['Amount'] = table['Amount'].map(format_currency)
        st.dataframe(table, hide_index=True, use_container_width=True)

    # Forms ----------------------------------------------------------------

    def render_expense_form(
        self,
        initial: ExpenseForm,
        editing: bool,
        key: str = "expense_form",
        on_cancel: Optional[Callable[[], None]] = None,
    ) -> Optional[ExpenseForm]:
        """Render the add/edit form; returns the entered values on submit."""
        with st.form(key, clear_on_submit=False):
            st.subheader("Edit Expense" if editing else "Add New Expense")
            title = st.text_input("Title *", value=initial.title)
            amount = st.number_input(
                "Amount *",
                min_value=0.0,
                value=float(initial.amount) if initial.amount not in ('', None) else None,
                step=1.0,
                format="%.2f",
            )
            category = st.selectbox(
                "Category *",
                options=list(CATEGORIES),
                index=CATEGORIES.index(initial.category) if initial.category in CATEGORIES else None,
                placeholder="Select a category",
            )
            expense_date = st.date_input(
                "Date *",
                value=initial.date if isinstance(initial.date, date) else date.today(),
            )
            with st.expander("More details", expanded=bool(initial.description or initial.payment_method or initial.tags)):
                payment_method = st.selectbox(
                    "Payment method",
                    options=list(PAYMENT_METHODS),
                    index=PAYMENT_METHODS.index(initial.payment_method) if initial.payment_method in PAYMENT_METHODS else None,
                    placeholder="Not specified",
                )
                description = st.text_area("Description", value=initial.description)
                tags = st.text_input("Tags", value=initial.tags, help="Comma-separated, e.g. weekly, shared")
            col_save, col_cancel = st.columns(2)
            submitted = col_save.form_submit_button("Update Expense" if editing else "Save Expense", type="primary")
            cancelled = col_cancel.form_submit_button("Cancel")
        if cancelled:
            if on_cancel is not None:
                on_cancel()
            return None
        if not submitted:
            return None
        return ExpenseForm(
            title=title or '',
            amount='' if amount is None else amount,
            category=category or '',
            date=expense_date,
            description=description or '',
            payment_method=payment_method or '',
            tags=tags or '',
        )

    # Sharing --------------------------------------------------------------

    def copy_to_clipboard(self, text: str) -> None:
        """Ask the browser to copy ``text``; completion is not reported back."""
        components.html(
            f"<script>navigator.clipboard.writeText({json.dumps(text)});</script>",
            height=0,
        )
