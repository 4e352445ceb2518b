"""Top-level package for the Monthly Expense Tracker.

The primary modules are:

* ``folder_store`` – the folder/expense collection and its mutations
* ``editor`` – validation of the expense form
* ``aggregator`` – derived views (recent expenses, monthly category totals)
* ``share`` / ``exporter`` – share links and the Excel export
* ``dashboard`` – the Streamlit home page; other pages live in ``pages/``

To run the app from the command line you can execute:

```bash
python run_tracker.py
```
"""

from . import aggregator  # noqa: F401  # re-exported for convenience
from . import folder_store  # noqa: F401  # re-exported for convenience
# Import dashboard lazily.  Streamlit may not be installed in all
# environments (e.g. during unit testing).
try:
    from . import dashboard  # type: ignore  # noqa: F401
except ModuleNotFoundError:
    dashboard = None  # type: ignore


__all__ = ["aggregator", "folder_store", "dashboard"]
