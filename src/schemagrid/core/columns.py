"""
Column compiler: field metadata + selected apiNames -> ColumnDescriptor list.

Each CanonicalType maps to a ColumnKind, a small function returning the render-kind
name and its type attributes. The mapping lives in a registry (COLUMN_KINDS); a new
semantic type is supported by registering one entry, callers stay unchanged.

Render kinds
------------
| CanonicalType | kind        | type attributes
|---------------|-------------|------------------------------------------------------------
| date          | date-local  | year numeric, month/day 2-digit (no timezone shift)
| datetime      | date        | year numeric, month/day/hour/minute/second 2-digit, hour12
| currency      | currency    | currencyCode, maximumFractionDigits=2
| percent       | percent     | maximumFractionDigits=2
| number        | number      | minimumIntegerDigits=1, maximumFractionDigits=2
| boolean       | boolean     | -
| phone         | phone       | -
| url           | url         | target=_blank, label={fieldName: <name field>} when selected
| location      | location    | -
| enum          | picklist    | placeholder "Select <label>", options={fieldName: <x>Options}
| text          | text        | -

Examples
--------
>>> from schemagrid.core.models import FieldMetadata
>>> from schemagrid.core.columns import compile_columns
>>> f = FieldMetadata(api_name="Industry", label="Industry", raw_type="PICKLIST")
>>> col = compile_columns([f], ["Industry"])[0]
>>> col.kind, col.type_attributes["options"]
('picklist', {'fieldName': 'industryOptions'})
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .cells import PICKLIST_KIND
from .constants import DEFAULT_CURRENCY_CODE, DEFAULT_NAME_FIELD
from .errors import ValidationGap
from .models import ColumnDescriptor, FieldMetadata
from .types import CanonicalType

__all__ = [
    "CompileContext",
    "ColumnKind",
    "COLUMN_KINDS",
    "register_column_kind",
    "options_property_name",
    "find_validation_gaps",
    "compile_column",
    "compile_columns",
]

logger = logging.getLogger("schemagrid.columns")


@dataclass(frozen=True)
class CompileContext:
    """Inputs shared by every column of one compile pass."""

    selected: tuple[str, ...] = ()
    currency_code: str = DEFAULT_CURRENCY_CODE
    name_field: str = DEFAULT_NAME_FIELD


ColumnKind = Callable[[FieldMetadata, CompileContext], tuple[str, dict[str, Any]]]


def options_property_name(api_name: str) -> str:
    """Row property carrying an enum field's options: ``Industry`` -> ``industryOptions``."""
    return api_name[:1].lower() + api_name[1:] + "Options"


def _plain(kind: str) -> ColumnKind:
    def build(field: FieldMetadata, ctx: CompileContext) -> tuple[str, dict[str, Any]]:
        return kind, {}

    return build


def _date(field: FieldMetadata, ctx: CompileContext) -> tuple[str, dict[str, Any]]:
    return "date-local", {"year": "numeric", "month": "2-digit", "day": "2-digit"}


def _datetime(field: FieldMetadata, ctx: CompileContext) -> tuple[str, dict[str, Any]]:
    return "date", {
        "year": "numeric",
        "month": "2-digit",
        "day": "2-digit",
        "hour": "2-digit",
        "minute": "2-digit",
        "second": "2-digit",
        "hour12": True,
    }


def _currency(field: FieldMetadata, ctx: CompileContext) -> tuple[str, dict[str, Any]]:
    return "currency", {"currencyCode": ctx.currency_code, "maximumFractionDigits": 2}


def _percent(field: FieldMetadata, ctx: CompileContext) -> tuple[str, dict[str, Any]]:
    return "percent", {"maximumFractionDigits": 2}


def _number(field: FieldMetadata, ctx: CompileContext) -> tuple[str, dict[str, Any]]:
    return "number", {"minimumIntegerDigits": 1, "maximumFractionDigits": 2}


def _url(field: FieldMetadata, ctx: CompileContext) -> tuple[str, dict[str, Any]]:
    attrs: dict[str, Any] = {"target": "_blank"}
    if ctx.name_field in ctx.selected:
        attrs["label"] = {"fieldName": ctx.name_field}
    return "url", attrs


def _picklist(field: FieldMetadata, ctx: CompileContext) -> tuple[str, dict[str, Any]]:
    return PICKLIST_KIND, {
        "placeholder": f"Select {field.label}",
        "options": {"fieldName": options_property_name(field.api_name)},
    }


# Registry
COLUMN_KINDS: dict[CanonicalType, ColumnKind] = {
    CanonicalType.DATE: _date,
    CanonicalType.DATETIME: _datetime,
    CanonicalType.CURRENCY: _currency,
    CanonicalType.PERCENT: _percent,
    CanonicalType.NUMBER: _number,
    CanonicalType.BOOLEAN: _plain("boolean"),
    CanonicalType.PHONE: _plain("phone"),
    CanonicalType.URL: _url,
    CanonicalType.LOCATION: _plain("location"),
    CanonicalType.ENUM: _picklist,
    CanonicalType.TEXT: _plain("text"),
}


def register_column_kind(canonical_type: CanonicalType, kind: ColumnKind) -> None:
    """Add or replace the ColumnKind used for a CanonicalType."""
    COLUMN_KINDS[canonical_type] = kind


def _index(fields: Iterable[FieldMetadata]) -> dict[str, FieldMetadata]:
    by_name: dict[str, FieldMetadata] = {}
    for f in fields:
        if f.api_name and f.is_accessible is not False:
            by_name.setdefault(f.api_name, f)
    return by_name


def find_validation_gaps(fields: Iterable[FieldMetadata], selected: Iterable[str]) -> list[str]:
    """Selected apiNames with no accessible metadata, in selection order."""
    by_name = _index(fields)
    return [name for name in dict.fromkeys(selected) if name not in by_name]


def compile_column(
    field: FieldMetadata,
    ctx: CompileContext,
    kinds: Mapping[CanonicalType, ColumnKind] | None = None,
) -> ColumnDescriptor:
    table = COLUMN_KINDS if kinds is None else kinds
    canonical = field.canonical_type
    build = table.get(canonical) or table.get(CanonicalType.TEXT) or _plain("text")
    kind, attrs = build(field, ctx)
    return ColumnDescriptor(
        label=field.label,
        field_name=field.api_name,
        kind=kind,
        editable=field.is_updateable,
        type_attributes=attrs,
        canonical_type=canonical,
    )


def compile_columns(
    fields: Sequence[FieldMetadata],
    selected: Sequence[str],
    *,
    currency_code: str = DEFAULT_CURRENCY_CODE,
    name_field: str = DEFAULT_NAME_FIELD,
    strict: bool = False,
    kinds: Mapping[CanonicalType, ColumnKind] | None = None,
) -> list[ColumnDescriptor]:
    """
    Compile one ColumnDescriptor per selected field, in selection order.

    Args:
        fields (Sequence[FieldMetadata]): Accessible-field metadata.
        selected (Sequence[str]): apiNames to display; duplicates are collapsed.
        currency_code (str): Currency code for CURRENCY columns.
        name_field (str): Field used as the URL link label when it is also selected.
        strict (bool): Raise ValidationGap instead of dropping unknown selections.
        kinds (Mapping[CanonicalType, ColumnKind] | None): Registry override.

    Returns:
        list[ColumnDescriptor]: Descriptors; pure and idempotent for equal inputs.

    Raises:
        ValidationGap: Only when ``strict`` and a selection has no metadata.
    """
    by_name = _index(fields)
    order = list(dict.fromkeys(selected))
    missing = [name for name in order if name not in by_name]
    if missing:
        if strict:
            raise ValidationGap(missing)
        logger.debug("dropping selected fields without metadata: %s", missing)

    ctx = CompileContext(
        selected=tuple(order), currency_code=currency_code, name_field=name_field
    )
    return [compile_column(by_name[name], ctx, kinds) for name in order if name in by_name]
