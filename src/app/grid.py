"""
Grid widget adapter: column descriptors and rows -> Streamlit data editor inputs.

This module translates schemagrid ColumnDescriptors into ``st.column_config``
objects, turns enriched Rows into a Polars frame for ``st.data_editor``, and diffs
the edited frame back into partial records for GridController.save_edits.

Notes:
    - Standard render kinds map through STANDARD_KINDS; any kind registered in the
      CellTypeRegistry (e.g. ``picklist``) is dispatched to the cell type's edit view.
    - Streamlit select columns hold one option list per column; the list is resolved
      from the first row (every row carries the same options for a field).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import polars as pl
import streamlit as st

from schemagrid.core.cells import CellTypeRegistry
from schemagrid.core.enrich import Row
from schemagrid.core.models import ColumnDescriptor

__all__ = [
    "STANDARD_KINDS",
    "column_config_for",
    "build_column_config",
    "rows_to_frame",
    "diff_edits",
]

ConfigBuilder = Callable[[ColumnDescriptor], Any]


def _fraction_format(col: ColumnDescriptor, suffix: str = "") -> str:
    digits = int(col.type_attributes.get("maximumFractionDigits", 2))
    return f"%.{digits}f{suffix}"


def _text(col: ColumnDescriptor) -> Any:
    return st.column_config.TextColumn(col.label, disabled=not col.editable)


def _number(col: ColumnDescriptor) -> Any:
    return st.column_config.NumberColumn(
        col.label, format=_fraction_format(col), disabled=not col.editable
    )


def _currency(col: ColumnDescriptor) -> Any:
    code = col.type_attributes.get("currencyCode", "")
    return st.column_config.NumberColumn(
        col.label, format=_fraction_format(col, f" {code}" if code else ""), disabled=not col.editable
    )


def _percent(col: ColumnDescriptor) -> Any:
    return st.column_config.NumberColumn(
        col.label, format=_fraction_format(col, "%%"), disabled=not col.editable
    )


def _boolean(col: ColumnDescriptor) -> Any:
    return st.column_config.CheckboxColumn(col.label, disabled=not col.editable)


def _date_local(col: ColumnDescriptor) -> Any:
    return st.column_config.DateColumn(col.label, format="YYYY-MM-DD", disabled=not col.editable)


def _datetime(col: ColumnDescriptor) -> Any:
    fmt = "YYYY-MM-DD hh:mm:ss A" if col.type_attributes.get("hour12") else "YYYY-MM-DD HH:mm:ss"
    return st.column_config.DatetimeColumn(col.label, format=fmt, disabled=not col.editable)


def _url(col: ColumnDescriptor) -> Any:
    return st.column_config.LinkColumn(col.label, disabled=not col.editable)


def _location(col: ColumnDescriptor) -> Any:
    return st.column_config.TextColumn(col.label, disabled=True)


STANDARD_KINDS: dict[str, ConfigBuilder] = {
    "text": _text,
    "phone": _text,
    "number": _number,
    "currency": _currency,
    "percent": _percent,
    "boolean": _boolean,
    "date-local": _date_local,
    "date": _datetime,
    "url": _url,
    "location": _location,
}


def column_config_for(col: ColumnDescriptor, row: Row, cell_types: CellTypeRegistry) -> Any:
    """Build the Streamlit column config for one descriptor."""
    if col.kind in cell_types:
        spec = cell_types.render_edit(col, row)
        if spec.widget == "select":
            return st.column_config.SelectboxColumn(
                col.label,
                options=[opt.value for opt in spec.options],
                help=spec.placeholder,
                disabled=not col.editable,
            )
        return _text(col)
    builder = STANDARD_KINDS.get(col.kind, _text)
    return builder(col)


def build_column_config(
    columns: Sequence[ColumnDescriptor],
    rows: Sequence[Row],
    cell_types: CellTypeRegistry,
    primary_key: str = "Id",
) -> dict[str, Any]:
    """Column config for every descriptor; the primary key column is hidden."""
    probe = rows[0] if rows else Row({})
    config: dict[str, Any] = {primary_key: None}
    for col in columns:
        config[col.field_name] = column_config_for(col, probe, cell_types)
    return config


def rows_to_frame(rows: Sequence[Row], columns: Sequence[ColumnDescriptor], primary_key: str = "Id") -> pl.DataFrame:
    """Frame with the primary key followed by one column per descriptor, in order."""
    names = list(dict.fromkeys([primary_key, *(c.field_name for c in columns)]))
    if not rows:
        return pl.DataFrame({name: [] for name in names})
    return pl.DataFrame([{name: row.get(name) for name in names} for row in rows])


def diff_edits(before: pl.DataFrame, after: pl.DataFrame, primary_key: str = "Id") -> list[dict[str, Any]]:
    """
    Partial records for rows whose values changed in the editor.

    Rows are matched by position (the editor is fixed-size); each change carries the
    primary key plus only the edited columns.
    """
    changed: list[dict[str, Any]] = []
    for old, new in zip(before.to_dicts(), after.to_dicts(), strict=False):
        delta = {k: v for k, v in new.items() if k != primary_key and old.get(k) != v}
        if delta:
            changed.append({primary_key: old.get(primary_key), **delta})
    return changed
