"""
Exception types raised across schemagrid.

Provides typed exceptions for the failure categories the grid distinguishes:
- MetadataFetchError when the schema service is unreachable or the object type is invalid.
- RecordFetchError when a paged record fetch fails.
- UpdateError when inline edits cannot be saved.
- ValidationGap when a selected field is missing from the accessible-field metadata.

Notes:
    - The load orchestrator catches every one of these at its boundary and routes
      them to the notification sink; only strict column compilation lets
      ValidationGap escape to the caller.
    - This module uses only the Python standard library and has no side effects.

Examples:
    >>> from schemagrid.core.errors import error_message
    >>> class ServerError(Exception):
    ...     body = {"message": "FIELD_CUSTOM_VALIDATION_EXCEPTION"}
    >>> error_message(ServerError("ignored"))
    'FIELD_CUSTOM_VALIDATION_EXCEPTION'
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "GridError",
    "MetadataFetchError",
    "RecordFetchError",
    "UpdateError",
    "ValidationGap",
    "CellTypeError",
    "ConfigError",
    "error_message",
]


class GridError(Exception):
    """Base class for schemagrid failures."""


class MetadataFetchError(GridError):
    """Schema service call failed for an object type (label, fields or enum values)."""

    def __init__(self, message: str, *, object_type: str | None = None, source: str = "") -> None:
        super().__init__(message)
        self.object_type = object_type
        self.source = source


class RecordFetchError(GridError):
    """A record page could not be loaded; previously displayed rows stay in place."""


class UpdateError(GridError):
    """Edited records were rejected; drafts are retained so the user can retry."""


class ValidationGap(GridError, KeyError):
    """
    Selected apiNames missing from the current accessible-field metadata.

    Attributes:
        missing (tuple[str, ...]): The selected apiNames that have no metadata.
    """

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = tuple(missing)
        super().__init__(f"selected fields without metadata: {', '.join(self.missing)}")

    def __str__(self) -> str:
        return self.args[0]


class CellTypeError(GridError):
    """Custom cell type registration or attribute misuse."""


class ConfigError(GridError, ValueError):
    """Invalid grid configuration value."""


def error_message(exc: BaseException) -> str:
    """
    Extract a user-facing message from a service exception.

    Remote services commonly attach a structured ``body`` with a ``message`` key;
    that message wins over ``str(exc)``.

    Args:
        exc (BaseException): The raised exception.

    Returns:
        str: Best available message (never empty).
    """
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        msg = body.get("message")
        if isinstance(msg, str) and msg:
            return msg
    text = str(exc)
    return text or type(exc).__name__
