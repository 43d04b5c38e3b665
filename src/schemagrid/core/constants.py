"""
schemagrid core defaults and ranking weights.

Defines the type sets and score weights used by the default-field ranker, plus the
grid defaults consumed by the load orchestrator and settings loader. This module is
zero-IO and uses only the Python standard library.

Notes:
    - Raw type tags are compared upper-case; the schema service vocabulary is
      SOAP-style (STRING, PICKLIST, DOUBLE, ...).
    - Nothing here names an object-type-specific field other than the generic
      primary key and name-field hints.
"""

from __future__ import annotations


__all__ = [
    "EXCLUDED_DEFAULT_TYPES",
    "TEXTLIKE_TYPES",
    "NUMERIC_TYPES",
    "TEMPORAL_TYPES",
    "LONG_TEXT_TYPES",
    "NAME_FIELD_SCORE",
    "EXTERNAL_ID_SCORE",
    "TEXTLIKE_SCORE",
    "NUMERIC_SCORE",
    "TEMPORAL_SCORE",
    "LONG_TEXT_PENALTY",
    "PRIMARY_KEY_PENALTY",
    "INACCESSIBLE_PENALTY",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_FIELD_COUNT",
    "DEFAULT_CURRENCY_CODE",
    "DEFAULT_PRIMARY_KEY",
    "DEFAULT_NAME_FIELD",
]

# Raw types never chosen as default columns.
EXCLUDED_DEFAULT_TYPES: frozenset[str] = frozenset({"BASE64", "ADDRESS", "LOCATION"})

TEXTLIKE_TYPES: frozenset[str] = frozenset({"STRING", "PICKLIST", "PHONE", "EMAIL", "URL"})
NUMERIC_TYPES: frozenset[str] = frozenset({"DOUBLE", "CURRENCY", "INTEGER"})
TEMPORAL_TYPES: frozenset[str] = frozenset({"DATE", "DATETIME"})
LONG_TEXT_TYPES: frozenset[str] = frozenset({"TEXTAREA", "LONGTEXTAREA", "RICH_TEXT_AREA"})

NAME_FIELD_SCORE: int = 100
EXTERNAL_ID_SCORE: int = 20
TEXTLIKE_SCORE: int = 12
NUMERIC_SCORE: int = 8
TEMPORAL_SCORE: int = 6
LONG_TEXT_PENALTY: int = -8
PRIMARY_KEY_PENALTY: int = -4
INACCESSIBLE_PENALTY: int = -100

DEFAULT_PAGE_SIZE: int = 10
DEFAULT_FIELD_COUNT: int = 4
DEFAULT_CURRENCY_CODE: str = "USD"
DEFAULT_PRIMARY_KEY: str = "Id"
DEFAULT_NAME_FIELD: str = "Name"
