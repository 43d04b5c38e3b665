"""
schemagrid App UI package.

This package contains the Streamlit UI for the record manager. It exposes the
high-level orchestration and focused modules for separate concerns.

Modules:
    - app: Streamlit application orchestrator (streamlit_app).
    - header: Object-type selector and "<Label> Manager" title.
    - helpers: Coroutine runner and notification toasts.

Usage:
    from app.ui import streamlit_app
    streamlit_app(default_object="Account")
"""

from __future__ import annotations

from .app import streamlit_app
from .header import render_header

__all__ = [
    "streamlit_app",
    "render_header",
]
