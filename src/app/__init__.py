"""
Top-level Streamlit app package.

This package hosts the interactive schemagrid record manager (Streamlit) decoupled
from the schemagrid.* library modules. The grid widget adapter, demo catalog and
UI shell live here; compilation, enrichment and load orchestration stay in schemagrid.

CLI entrypoint (configured in pyproject.toml):
    schemagrid-app = app.main:main
"""

from __future__ import annotations
