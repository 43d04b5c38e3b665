"""
In-memory reference services backed by Polars frames.

These implement the SchemaService and RecordService protocols for the Streamlit demo
and for tests. Records for each object type live in a ``polars.DataFrame``; search,
filter, sort and paging are expressed as a lazy query and collected per fetch.

Query semantics
---------------
- search: case-insensitive substring over the selected String columns.
- filter: equals / contains / starts_with, case-insensitive on text; Date columns
  compare by ISO date, Datetime columns compare by calendar day for ``equals``.
- sort: ascending/descending on one column, nulls last.
- projection: primary key + selected fields that exist in the frame.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any

import polars as pl

from schemagrid.core.constants import DEFAULT_PRIMARY_KEY
from schemagrid.core.errors import MetadataFetchError, RecordFetchError, UpdateError
from schemagrid.core.models import (
    FetchParams,
    FieldMetadata,
    FilterOperator,
    RecordPage,
    SortDirection,
)
from schemagrid.core.types import is_enum_type

__all__ = [
    "ObjectSchema",
    "CatalogSchemaService",
    "FrameRecordService",
    "describe_frame",
]


@dataclass(frozen=True)
class ObjectSchema:
    """Label, field metadata and enum values of one object type."""

    label: str
    fields: tuple[FieldMetadata, ...]
    enum_values: Mapping[str, tuple[str, ...]] = field(default_factory=dict)


def _raw_type_for(dtype: pl.DataType) -> str:
    if dtype == pl.Boolean:
        return "BOOLEAN"
    if dtype == pl.Date:
        return "DATE"
    if isinstance(dtype, pl.Datetime):
        return "DATETIME"
    if dtype.is_integer():
        return "INTEGER"
    if dtype.is_float() or isinstance(dtype, pl.Decimal):
        return "DOUBLE"
    return "STRING"


def describe_frame(
    df: pl.DataFrame,
    *,
    primary_key: str = DEFAULT_PRIMARY_KEY,
    name_field: str | None = None,
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
) -> tuple[FieldMetadata, ...]:
    """
    Derive field metadata from a frame's schema.

    Args:
        df (pl.DataFrame): Records of one object type.
        primary_key (str): Primary-key column (reported as ID, not updateable).
        name_field (str | None): Column flagged as the designated name field.
        overrides (Mapping[str, Mapping[str, Any]] | None): Per-column metadata
            overrides in service (camelCase) shape, e.g. ``{"Industry": {"type": "PICKLIST"}}``.

    Returns:
        tuple[FieldMetadata, ...]: One entry per column, in column order.
    """
    extra = overrides or {}
    out: list[FieldMetadata] = []
    for name, dtype in df.schema.items():
        payload: dict[str, Any] = {
            "apiName": name,
            "label": name,
            "type": "ID" if name == primary_key else _raw_type_for(dtype),
            "isUpdateable": name != primary_key,
            "isAccessible": True,
            "isNameField": name == name_field,
        }
        payload.update(extra.get(name, {}))
        out.append(FieldMetadata.model_validate(payload))
    return tuple(out)


class CatalogSchemaService:
    """Schema service over a fixed catalog of ObjectSchema entries."""

    def __init__(self, catalog: Mapping[str, ObjectSchema]) -> None:
        self._catalog = dict(catalog)

    def _get(self, object_type: str) -> ObjectSchema:
        try:
            return self._catalog[object_type]
        except KeyError as exc:
            raise MetadataFetchError(
                f"Invalid object type: {object_type}", object_type=object_type
            ) from exc

    def object_types(self) -> list[str]:
        return list(self._catalog)

    async def get_object_label(self, object_type: str) -> str:
        return self._get(object_type).label

    async def get_accessible_fields(self, object_type: str) -> list[FieldMetadata]:
        return [f for f in self._get(object_type).fields if f.is_accessible]

    async def get_enum_values(self, object_type: str) -> dict[str, list[str]]:
        schema = self._get(object_type)
        enum_fields = {f.api_name for f in schema.fields if f.is_accessible and is_enum_type(f.raw_type)}
        return {name: list(values) for name, values in schema.enum_values.items() if name in enum_fields}


class FrameRecordService:
    """
    Record service over one ``polars.DataFrame`` per object type.

    Args:
        frames (Mapping[str, pl.DataFrame]): Object type -> records.
        primary_key (str): Primary-key column present in every frame.
    """

    def __init__(self, frames: Mapping[str, pl.DataFrame], primary_key: str = DEFAULT_PRIMARY_KEY) -> None:
        self.frames: dict[str, pl.DataFrame] = dict(frames)
        self.primary_key = primary_key

    def _frame(self, object_type: str) -> pl.DataFrame:
        try:
            return self.frames[object_type]
        except KeyError as exc:
            raise RecordFetchError(f"Invalid object type: {object_type}") from exc

    def _filter_expr(self, df: pl.DataFrame, params: FetchParams) -> pl.Expr | None:
        clause = params.filter
        if not clause.is_active:
            return None
        if clause.field not in df.columns:
            raise RecordFetchError(f"Invalid filter field: {clause.field}")
        dtype = df.schema[clause.field]
        col = pl.col(clause.field)
        value = clause.value

        if clause.operator is FilterOperator.EQUALS and (dtype == pl.Date or isinstance(dtype, pl.Datetime)):
            try:
                day = date.fromisoformat(value[:10])
            except ValueError as exc:
                raise RecordFetchError(f"Invalid date value: {value}") from exc
            return (col if dtype == pl.Date else col.dt.date()) == day

        text = col.cast(pl.String).str.to_lowercase()
        needle = value.lower()
        if clause.operator is FilterOperator.EQUALS:
            return text == needle
        if clause.operator is FilterOperator.CONTAINS:
            return text.str.contains(needle, literal=True)
        return text.str.starts_with(needle)

    async def get_records(self, params: FetchParams) -> RecordPage:
        df = self._frame(params.object_type)
        lf = df.lazy()

        keyword = params.search_keyword.strip().lower()
        if keyword:
            text_cols = [c for c in params.selected_fields if c in df.columns and df.schema[c] == pl.String]
            if text_cols:
                hit = pl.any_horizontal(
                    [pl.col(c).str.to_lowercase().str.contains(keyword, literal=True) for c in text_cols]
                )
                lf = lf.filter(hit.fill_null(False))
            else:
                lf = lf.filter(pl.lit(False))

        expr = self._filter_expr(df, params)
        if expr is not None:
            lf = lf.filter(expr.fill_null(False))

        if params.sort_by and params.sort_by in df.columns:
            lf = lf.sort(
                params.sort_by,
                descending=params.sort_direction is SortDirection.DESC,
                nulls_last=True,
                maintain_order=True,
            )

        total = int(lf.select(pl.len()).collect().item())
        cols = list(dict.fromkeys(c for c in (self.primary_key, *params.selected_fields) if c in df.columns))
        offset = (params.page_number - 1) * params.page_size
        page = lf.slice(offset, params.page_size).select(cols).collect()
        return RecordPage(records=page.to_dicts(), total_count=total)

    def _locate(self, record_id: Any) -> str:
        for object_type, df in self.frames.items():
            if self.primary_key in df.columns and df.filter(pl.col(self.primary_key) == record_id).height:
                return object_type
        raise UpdateError(f"Record not found: {record_id}")

    async def update_records(self, changed: Sequence[Mapping[str, Any]]) -> None:
        """
        Merge partial records into their frames; all-or-nothing.

        Raises:
            UpdateError: Missing primary key, unknown record, unknown column, or a value
                that cannot be cast to the column's dtype.
        """
        staged = dict(self.frames)
        for rec in changed:
            record_id = rec.get(self.primary_key)
            if record_id is None:
                raise UpdateError(f"Missing {self.primary_key} on edited record")
            object_type = self._locate(record_id)
            df = staged[object_type]
            updates = {k: v for k, v in rec.items() if k != self.primary_key}
            unknown = [k for k in updates if k not in df.columns]
            if unknown:
                raise UpdateError(f"No such column '{unknown[0]}' on entity '{object_type}'")
            match = pl.col(self.primary_key) == record_id
            try:
                df = df.with_columns(
                    [
                        pl.when(match)
                        .then(pl.lit(v).cast(df.schema[k], strict=True))
                        .otherwise(pl.col(k))
                        .alias(k)
                        for k, v in updates.items()
                    ]
                )
            except pl.exceptions.PolarsError as exc:
                raise UpdateError(f"Invalid value for {object_type} {record_id}: {exc}") from exc
            staged[object_type] = df
        self.frames = staged

