"""
schemagrid App entrypoint.

This module provides the CLI entrypoint to launch the Streamlit UI. It defers
all UI composition to the app.ui package and exists solely to start Streamlit
programmatically or render directly when already running under Streamlit.

Usage:
    - Python execution (hands process to Streamlit):
        python -m app.main --object Account --page-size 25

    - Streamlit direct:
        streamlit run src/app/main.py -- --object Account --page-size 25
"""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
import sys
from dataclasses import replace
from pathlib import Path

from app.ui import streamlit_app
from schemagrid.grid import GridSettings


def _settings(page_size: int | None) -> GridSettings:
    settings = GridSettings.load()
    if page_size is not None and page_size >= 1:
        settings = replace(settings, page_size=page_size)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return settings


def main(argv: list[str] | None = None) -> None:
    """Console entrypoint that launches Streamlit with the schemagrid UI.

    If already executing within a Streamlit server (environment variable
    STREAMLIT_SERVER_PORT is set), this function renders the app directly.
    Otherwise, it execs "python -m streamlit run <this_module>" to leverage
    Streamlit's reloader and argument parsing, passing through any supported
    options after "--".

    Args:
        argv (list[str] | None): Optional list of CLI arguments. If None,
            sys.argv[1:] is used.

    Examples:
        python -m app.main --object Account --page-size 25
        streamlit run src/app/main.py -- --object Contact
    """
    args = list(sys.argv[1:] if argv is None else argv)

    parser = argparse.ArgumentParser(description="schemagrid Streamlit App")
    parser.add_argument("--object", default=None, help="Object type opened on start (e.g. Account)")
    parser.add_argument(
        "--page-size",
        type=int,
        default=None,
        help="Records per page (overrides SCHEMAGRID_PAGE_SIZE and TOML settings).",
    )
    ns = parser.parse_args(args)

    # If invoked within Streamlit, just render
    if os.environ.get("STREAMLIT_SERVER_PORT"):
        streamlit_app(default_object=ns.object, settings=_settings(ns.page_size))
        return

    # Otherwise, exec streamlit run on this module to take over the process
    app_path = Path(__file__).resolve()
    cmd = [sys.executable, "-m", "streamlit", "run", str(app_path)]

    passthrough: list[str] = []
    if ns.object:
        passthrough += ["--object", ns.object]
    if ns.page_size is not None:
        passthrough += ["--page-size", str(int(ns.page_size))]
    if passthrough:
        cmd += ["--"] + passthrough

    try:
        os.execv(sys.executable, cmd)
    except OSError:
        subprocess.run(cmd, check=False)


if __name__ == "__main__":
    # Support: --object, --page-size after '--' when using `streamlit run`
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("--object", default=None)
    parser.add_argument("--page-size", type=int, default=None)
    ns, _ = parser.parse_known_args(sys.argv[1:])
    streamlit_app(default_object=ns.object, settings=_settings(ns.page_size))
