"""
Shared UI helper utilities for the schemagrid Streamlit application.

Notes:
    - ``run`` drives controller coroutines to completion from Streamlit callbacks;
      each rerun is a single thread of control, so one event loop per call is enough.
    - Notification drain turns CollectingNotifier entries into toasts.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

import streamlit as st

from schemagrid.grid import CollectingNotifier, Notification, Severity

T = TypeVar("T")

_ICONS: dict[Severity, str] = {
    Severity.SUCCESS: "✅",
    Severity.INFO: "ℹ️",
    Severity.WARNING: "⚠️",
    Severity.ERROR: "🚨",
}


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a controller coroutine to completion."""
    return asyncio.run(coro)


def toast_text(note: Notification) -> str:
    """Markdown text for one notification.

    Examples:
        >>> toast_text(Notification("Success", "Saved", Severity.SUCCESS))
        '**Success**: Saved'
    """
    return f"**{note.title}**: {note.message}" if note.message else f"**{note.title}**"


def show_notifications(notifier: CollectingNotifier) -> None:
    """Drain pending notifications into Streamlit toasts."""
    for note in notifier.drain():
        st.toast(toast_text(note), icon=_ICONS.get(note.severity))
