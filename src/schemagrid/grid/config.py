"""
Configuration for the schemagrid load orchestrator.

Defines GridSettings, a frozen dataclass carrying runtime configuration for grid
behavior. Defaults are sourced from schemagrid.core.constants (the single source of
truth).

Loading precedence
- environment (SCHEMAGRID_*) > TOML (schemagrid.toml or [tool.schemagrid.grid]) > defaults.

Notes
- Invalid values are ignored and the previous value is kept; page size and default
  field count must be >= 1.
- Depends only on stdlib and schemagrid.core.constants.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from schemagrid.core.constants import (
    DEFAULT_CURRENCY_CODE,
    DEFAULT_FIELD_COUNT,
    DEFAULT_NAME_FIELD,
    DEFAULT_PAGE_SIZE,
    DEFAULT_PRIMARY_KEY,
)

__all__ = ["GridSettings"]

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class GridSettings:
    """
    Runtime settings for a GridController session.

    Attributes:
        page_size (int): Records per page.
        default_field_count (int): Number of auto-selected columns before the user customizes.
        currency_code (str): ISO currency code for CURRENCY columns.
        primary_key_field (str): Record primary-key apiName (used for edits and ranking).
        name_field (str): Field used as the link label for URL columns when selected.
        log_level (str): Level applied by the app entrypoint's logging setup.

    Examples:
        >>> GridSettings(page_size=25).page_size
        25
    """

    page_size: int = DEFAULT_PAGE_SIZE
    default_field_count: int = DEFAULT_FIELD_COUNT
    currency_code: str = DEFAULT_CURRENCY_CODE
    primary_key_field: str = DEFAULT_PRIMARY_KEY
    name_field: str = DEFAULT_NAME_FIELD
    log_level: str = "INFO"

    @classmethod
    def _apply_mapping(cls, base: GridSettings, cfg: dict[str, Any] | None) -> GridSettings:
        """Apply a loose config mapping onto GridSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        def _positive_int(v: Any) -> int | None:
            try:
                n = int(v)
            except (TypeError, ValueError):
                return None
            return n if n >= 1 else None

        if "page_size" in cfg:
            n = _positive_int(cfg["page_size"])
            if n is not None:
                s = replace(s, page_size=n)

        if "default_field_count" in cfg:
            n = _positive_int(cfg["default_field_count"])
            if n is not None:
                s = replace(s, default_field_count=n)

        if isinstance(cfg.get("currency_code"), str) and cfg["currency_code"].strip():
            s = replace(s, currency_code=cfg["currency_code"].strip().upper())

        if isinstance(cfg.get("primary_key_field"), str) and cfg["primary_key_field"].strip():
            s = replace(s, primary_key_field=cfg["primary_key_field"].strip())

        if isinstance(cfg.get("name_field"), str) and cfg["name_field"].strip():
            s = replace(s, name_field=cfg["name_field"].strip())

        if isinstance(cfg.get("log_level"), str):
            level = cfg["log_level"].strip().upper()
            if level in _LOG_LEVELS:
                s = replace(s, log_level=level)

        return s

    @classmethod
    def from_env(cls, base: GridSettings | None = None, prefix: str = "SCHEMAGRID_") -> GridSettings:
        """
        Build GridSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - SCHEMAGRID_PAGE_SIZE
            - SCHEMAGRID_DEFAULT_FIELD_COUNT
            - SCHEMAGRID_CURRENCY_CODE
            - SCHEMAGRID_PRIMARY_KEY_FIELD
            - SCHEMAGRID_NAME_FIELD
            - SCHEMAGRID_LOG_LEVEL
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for key in (
            "page_size",
            "default_field_count",
            "currency_code",
            "primary_key_field",
            "name_field",
            "log_level",
        ):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> GridSettings:
        """
        Build GridSettings from a TOML file.

        Search order when `path` is None:
            1) ./schemagrid.toml (with either a [grid] table or top-level keys)
            2) ./pyproject.toml under [tool.schemagrid.grid]

        Returns defaults if no file is present or it cannot be parsed.
        """
        s = cls()

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "schemagrid.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                section = tool.get("schemagrid", {}) if isinstance(tool, dict) else {}
                cfg = section.get("grid") if isinstance(section, dict) else None
            elif isinstance(data.get("grid"), dict):
                cfg = data["grid"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> GridSettings:
        """
        Load GridSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults.
        """
        s = cls.from_toml(path)
        return cls.from_env(base=s)
