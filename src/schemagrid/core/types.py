"""
Canonical semantic types and the raw type-tag normalizer.

Maps the schema service's heterogeneous raw type tags (STRING, DOUBLE, PICKLIST,
GEOLOCATION, ...) onto a small closed vocabulary used uniformly for rendering
decisions. The normalizer is a total, pure function: unknown or missing tags fall
back to TEXT and nothing here ever raises.

Mapping
-------
| Raw tags                                   | CanonicalType
|--------------------------------------------|--------------
| STRING, TEXT, ID, REFERENCE, EMAIL         | text
| URL                                        | url
| PHONE                                      | phone
| BOOLEAN                                    | boolean
| CURRENCY                                   | currency
| PERCENT                                    | percent
| DOUBLE, INTEGER, LONG, DECIMAL             | number
| DATE                                       | date
| DATETIME                                   | datetime
| LOCATION, GEOLOCATION                      | location
| PICKLIST, MULTIPICKLIST                    | enum

Examples
--------
>>> from schemagrid.core.types import CanonicalType, normalize_type
>>> normalize_type("picklist") is CanonicalType.ENUM
True
>>> normalize_type("Geolocation").value
'location'
>>> normalize_type(None) is CanonicalType.TEXT
True
"""

from __future__ import annotations

from enum import Enum
from typing import Any

__all__ = [
    "CanonicalType",
    "RAW_TYPE_MAP",
    "normalize_type",
    "is_enum_type",
]


class CanonicalType(Enum):
    """
    Normalized semantic category of a field.

    Serialized values are lower_snake; member names are UPPER_SNAKE.
    """

    TEXT = "text"
    URL = "url"
    PHONE = "phone"
    BOOLEAN = "boolean"
    CURRENCY = "currency"
    PERCENT = "percent"
    NUMBER = "number"
    DATE = "date"
    DATETIME = "datetime"
    LOCATION = "location"
    ENUM = "enum"


def _table(entries: dict[CanonicalType, tuple[str, ...]]) -> dict[str, CanonicalType]:
    return {tag: kind for kind, tags in entries.items() for tag in tags}


RAW_TYPE_MAP: dict[str, CanonicalType] = _table(
    {
        CanonicalType.TEXT: ("STRING", "TEXT", "ID", "REFERENCE", "EMAIL"),
        CanonicalType.URL: ("URL",),
        CanonicalType.PHONE: ("PHONE",),
        CanonicalType.BOOLEAN: ("BOOLEAN",),
        CanonicalType.CURRENCY: ("CURRENCY",),
        CanonicalType.PERCENT: ("PERCENT",),
        CanonicalType.NUMBER: ("DOUBLE", "INTEGER", "LONG", "DECIMAL"),
        CanonicalType.DATE: ("DATE",),
        CanonicalType.DATETIME: ("DATETIME",),
        CanonicalType.LOCATION: ("LOCATION", "GEOLOCATION"),
        CanonicalType.ENUM: ("PICKLIST", "MULTIPICKLIST"),
    }
)


def normalize_type(raw: Any) -> CanonicalType:
    """
    Map a raw type tag to its CanonicalType.

    Args:
        raw (Any): Raw tag from field metadata; usually a string, possibly None.

    Returns:
        CanonicalType: Mapped type; TEXT for unknown, empty or non-string input.
    """
    if not isinstance(raw, str) or not raw:
        return CanonicalType.TEXT
    return RAW_TYPE_MAP.get(raw.strip().upper(), CanonicalType.TEXT)


def is_enum_type(raw: Any) -> bool:
    """Return True when the raw tag denotes an enumerated (picklist-like) field."""
    return normalize_type(raw) is CanonicalType.ENUM
