"""
Row enrichment: attach per-row option lists for enumerated fields.

Rows are read-only mappings built fresh on every load. Option lists live in an
explicit side-map keyed by field apiName; the widget-facing derived property
(``Industry`` -> ``industryOptions``) is answered from that side-map on lookup,
so nothing is injected into the underlying record.

Examples
--------
>>> from schemagrid.core.models import EnumOption, FieldMetadata
>>> from schemagrid.core.enrich import enrich_rows
>>> fields = [FieldMetadata(api_name="Industry", raw_type="PICKLIST")]
>>> sets = {"Industry": [EnumOption(label="Energy", value="Energy")]}
>>> rec = {"Id": "001", "Industry": "Energy"}
>>> row = enrich_rows([rec], fields, sets)[0]
>>> row["industryOptions"][0].label, "industryOptions" in rec
('Energy', False)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from .columns import options_property_name
from .models import EnumOption, EnumValueSet, FieldMetadata
from .types import CanonicalType

__all__ = ["Row", "enum_field_names", "enrich_rows"]


class Row(Mapping[str, Any]):
    """
    Immutable grid row: base record values plus enum options per field.

    Attributes:
        record (dict[str, Any]): Copy of the base record values.
        options (dict[str, tuple[EnumOption, ...]]): Field apiName -> option list.

    Notes:
        ``row[options_property_name(api_name)]`` resolves to ``options_for(api_name)``.
    """

    __slots__ = ("_values", "_options", "_derived")

    def __init__(
        self,
        values: Mapping[str, Any],
        options: Mapping[str, Sequence[EnumOption]] | None = None,
    ) -> None:
        self._values: dict[str, Any] = dict(values)
        self._options: dict[str, tuple[EnumOption, ...]] = {
            name: tuple(opts) for name, opts in (options or {}).items()
        }
        self._derived: dict[str, str] = {options_property_name(name): name for name in self._options}

    def __getitem__(self, key: str) -> Any:
        if key in self._derived:
            return self._options[self._derived[key]]
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        yield from self._values
        for key in self._derived:
            if key not in self._values:
                yield key

    def __len__(self) -> int:
        return len(self._values) + sum(1 for key in self._derived if key not in self._values)

    def __repr__(self) -> str:
        return f"Row({self._values!r}, options={sorted(self._options)!r})"

    @property
    def record(self) -> dict[str, Any]:
        return dict(self._values)

    @property
    def options(self) -> dict[str, tuple[EnumOption, ...]]:
        return dict(self._options)

    def options_for(self, api_name: str) -> tuple[EnumOption, ...]:
        return self._options.get(api_name, ())

    def to_dict(self) -> dict[str, Any]:
        """Materialize for a widget: record values plus derived ``<x>Options`` lists of dicts."""
        out = dict(self._values)
        for key, name in self._derived.items():
            out[key] = [opt.model_dump() for opt in self._options[name]]
        return out


def enum_field_names(fields: Iterable[FieldMetadata]) -> list[str]:
    """apiNames of enumerated fields, in metadata order."""
    return [f.api_name for f in fields if f.api_name and f.canonical_type is CanonicalType.ENUM]


def enrich_rows(
    records: Iterable[Mapping[str, Any]],
    fields: Sequence[FieldMetadata],
    value_sets: EnumValueSet | None,
) -> list[Row]:
    """
    Build a new Row per record with option lists for every ENUM field.

    Args:
        records (Iterable[Mapping[str, Any]]): Base records (or previously built Rows).
        fields (Sequence[FieldMetadata]): Accessible-field metadata.
        value_sets (EnumValueSet | None): Enum values per field; None while not yet fetched.

    Returns:
        list[Row]: Fresh rows; inputs are never mutated. Enum fields without a value
        set get an empty option list.
    """
    names = enum_field_names(fields)
    sets = value_sets or {}
    options = {name: sets.get(name, []) for name in names}
    rows: list[Row] = []
    for rec in records:
        base = rec.record if isinstance(rec, Row) else rec
        rows.append(Row(base, options))
    return rows
