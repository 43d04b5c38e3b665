"""
Default-field ranking and selection.

Scores accessible fields so that human-friendly columns (the name field, external
ids, short text and picklists, numbers, dates) come first, then picks the top N
apiNames. The ranking is domain-agnostic: it never references an object-type-specific
field name, only the generic primary-key hint.

Scoring (summed)
----------------
| Condition                                      | Score
|------------------------------------------------|------
| designated name field                          | +100
| external identifier                            | +20
| STRING, PICKLIST, PHONE, EMAIL, URL            | +12
| DOUBLE, CURRENCY, INTEGER                      | +8
| DATE, DATETIME                                 | +6
| TEXTAREA, LONGTEXTAREA, RICH_TEXT_AREA         | -8
| apiName equals the primary key                 | -4
| explicitly inaccessible                        | -100

Examples
--------
>>> from schemagrid.core.models import FieldMetadata
>>> from schemagrid.core.ranking import select_default_fields
>>> fields = [
...     FieldMetadata(api_name="Name", raw_type="STRING", is_name_field=True),
...     FieldMetadata(api_name="Industry", raw_type="PICKLIST"),
...     FieldMetadata(api_name="Notes", raw_type="TEXTAREA"),
... ]
>>> select_default_fields(fields, 2)
['Name', 'Industry']
"""

from __future__ import annotations

from collections.abc import Sequence

from .constants import (
    DEFAULT_FIELD_COUNT,
    DEFAULT_PRIMARY_KEY,
    EXCLUDED_DEFAULT_TYPES,
    EXTERNAL_ID_SCORE,
    INACCESSIBLE_PENALTY,
    LONG_TEXT_PENALTY,
    LONG_TEXT_TYPES,
    NAME_FIELD_SCORE,
    NUMERIC_SCORE,
    NUMERIC_TYPES,
    PRIMARY_KEY_PENALTY,
    TEMPORAL_SCORE,
    TEMPORAL_TYPES,
    TEXTLIKE_SCORE,
    TEXTLIKE_TYPES,
)
from .models import FieldMetadata

__all__ = ["score_field", "is_default_candidate", "select_default_fields"]


def score_field(field: FieldMetadata, primary_key: str = DEFAULT_PRIMARY_KEY) -> int:
    """
    Score a field for default-column selection.

    Args:
        field (FieldMetadata): Field to score.
        primary_key (str): apiName of the record's primary-key field.

    Returns:
        int: Summed score (higher is more display-worthy).
    """
    tag = field.type_tag
    s = 0
    if field.is_name_field:
        s += NAME_FIELD_SCORE
    if field.is_external_id:
        s += EXTERNAL_ID_SCORE
    if tag in TEXTLIKE_TYPES:
        s += TEXTLIKE_SCORE
    if tag in NUMERIC_TYPES:
        s += NUMERIC_SCORE
    if tag in TEMPORAL_TYPES:
        s += TEMPORAL_SCORE
    if tag in LONG_TEXT_TYPES:
        s += LONG_TEXT_PENALTY
    if field.api_name == primary_key:
        s += PRIMARY_KEY_PENALTY
    if field.is_accessible is False:
        s += INACCESSIBLE_PENALTY
    return s


def is_default_candidate(field: FieldMetadata) -> bool:
    """True when the field may be auto-selected (named, accessible, not an excluded type)."""
    return (
        bool(field.api_name)
        and field.is_accessible is not False
        and field.type_tag not in EXCLUDED_DEFAULT_TYPES
    )


def select_default_fields(
    fields: Sequence[FieldMetadata],
    count: int = DEFAULT_FIELD_COUNT,
    primary_key: str = DEFAULT_PRIMARY_KEY,
) -> list[str]:
    """
    Pick up to ``count`` distinct apiNames to show when the user has not chosen any.

    Candidates are stable-sorted by descending score, so ties keep input order and the
    result is deterministic for a fixed input ordering.

    Args:
        fields (Sequence[FieldMetadata]): Accessible-field metadata in service order.
        count (int): Maximum number of apiNames to return.
        primary_key (str): apiName of the primary-key field (slightly demoted).

    Returns:
        list[str]: Selected apiNames (length <= count, no duplicates).

    Notes:
        When no field qualifies (sparse metadata), the first ``count`` non-blank
        apiNames of the raw input are returned without the type exclusion. Fields
        flagged inaccessible are never returned, fallback included.
    """
    if count <= 0:
        return []
    candidates = sorted(
        (f for f in fields if is_default_candidate(f)),
        key=lambda f: score_field(f, primary_key),
        reverse=True,
    )
    picked: list[str] = []
    for f in candidates:
        if f.api_name not in picked:
            picked.append(f.api_name)
        if len(picked) >= count:
            break
    if picked:
        return picked

    fallback: list[str] = []
    for f in fields:
        if f.api_name and f.is_accessible is not False and f.api_name not in fallback:
            fallback.append(f.api_name)
        if len(fallback) >= count:
            break
    return fallback
