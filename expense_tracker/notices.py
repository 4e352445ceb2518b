"""Short-lived notices such as "Link copied to clipboard!".

A notice stores its own deadline instead of owning a timer.  Streamlit
re-renders on every interaction, so each render asks for the active notice
and gets nothing once the deadline has passed; there is nothing to cancel
and nothing fires after the page is gone.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, MutableMapping, Optional

from .config import NOTICE_SECONDS

NOTICE_STATE_KEY = 'notice'


@dataclass(frozen=True)
class Notice:
    message: str
    expires_at: float
    kind: str = 'success'

    def is_active(self, now: float) -> bool:
        return now < self.expires_at


def show_notice(
    state: MutableMapping,
    message: str,
    kind: str = 'success',
    duration: float = NOTICE_SECONDS,
    clock: Callable[[], float] = time.monotonic,
) -> Notice:
    notice = Notice(message=message, expires_at=clock() + duration, kind=kind)
    state[NOTICE_STATE_KEY] = notice
    return notice


def active_notice(state: MutableMapping, clock: Callable[[], float] = time.monotonic) -> Optional[Notice]:
    """Return the current notice, dropping it from ``state`` once expired."""
    notice = state.get(NOTICE_STATE_KEY)
    if notice is None:
        return None
    if not notice.is_active(clock()):
        state.pop(NOTICE_STATE_KEY, None)
        return None
    return notice


def dismiss_notice(state: MutableMapping) -> None:
    state.pop(NOTICE_STATE_KEY, None)
