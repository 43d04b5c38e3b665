"""
Pluggable custom cell types for the grid widget.

A custom cell type is a self-contained capability bundle: a read view, an edit view,
and the set of type attributes it accepts. Widgets keep a CellTypeRegistry keyed by
render-kind name and dispatch any column whose kind is registered to the bundle,
so new semantic types are added by registration, not by editing the compiler.

Attribute references
--------------------
Column type attributes may point at a per-row property with ``{"fieldName": key}``
(e.g. ``options={"fieldName": "industryOptions"}``). ``resolve_attributes`` swaps
those references for the row's value before a view is rendered.

Examples
--------
>>> from schemagrid.core.cells import default_cell_types, PICKLIST_KIND
>>> from schemagrid.core.models import EnumOption
>>> cell = default_cell_types().get(PICKLIST_KIND)
>>> opts = [EnumOption(label="Banking", value="banking")]
>>> cell.render_view("banking", {"options": opts})
'Banking'
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from .errors import CellTypeError
from .models import ColumnDescriptor, EnumOption

__all__ = [
    "PICKLIST_KIND",
    "EditSpec",
    "CellType",
    "PicklistCellType",
    "CellTypeRegistry",
    "default_cell_types",
    "resolve_attributes",
]

PICKLIST_KIND = "picklist"


@dataclass(frozen=True)
class EditSpec:
    """What an edit view needs to present: input widget, current value, choices."""

    widget: str
    value: Any = None
    options: tuple[EnumOption, ...] = ()
    placeholder: str | None = None


@runtime_checkable
class CellType(Protocol):
    """Capability set every custom cell type implements."""

    name: str
    attributes: frozenset[str]

    def render_view(self, value: Any, attrs: Mapping[str, Any]) -> str: ...

    def render_edit(self, value: Any, attrs: Mapping[str, Any]) -> EditSpec: ...


def _as_options(raw: Any) -> tuple[EnumOption, ...]:
    if not raw:
        return ()
    out: list[EnumOption] = []
    for item in raw:
        if isinstance(item, EnumOption):
            out.append(item)
        elif isinstance(item, Mapping):
            out.append(EnumOption.model_validate(item))
        else:
            out.append(EnumOption(label=str(item), value=str(item)))
    return tuple(out)


@dataclass(frozen=True)
class PicklistCellType:
    """
    Enumerated-value cell: shows the option label, edits through a select.

    Attributes:
        name (str): Render-kind name the compiler emits for ENUM columns.
        attributes (frozenset[str]): Accepted type attributes.
    """

    name: str = PICKLIST_KIND
    attributes: frozenset[str] = field(
        default=frozenset({"label", "placeholder", "options", "value", "context", "variant", "name"})
    )

    def _check(self, attrs: Mapping[str, Any]) -> None:
        unknown = set(attrs) - self.attributes
        if unknown:
            raise CellTypeError(f"{self.name}: unsupported attributes {sorted(unknown)}")

    def render_view(self, value: Any, attrs: Mapping[str, Any]) -> str:
        self._check(attrs)
        if value is None:
            return ""
        for opt in _as_options(attrs.get("options")):
            if opt.value == value:
                return opt.label
        return str(value)

    def render_edit(self, value: Any, attrs: Mapping[str, Any]) -> EditSpec:
        self._check(attrs)
        return EditSpec(
            widget="select",
            value=value,
            options=_as_options(attrs.get("options")),
            placeholder=attrs.get("placeholder"),
        )


def resolve_attributes(type_attributes: Mapping[str, Any], row: Mapping[str, Any]) -> dict[str, Any]:
    """Replace ``{"fieldName": key}`` references with the row's value for ``key``."""
    resolved: dict[str, Any] = {}
    for name, value in type_attributes.items():
        if isinstance(value, Mapping) and set(value) == {"fieldName"}:
            resolved[name] = row.get(value["fieldName"])
        else:
            resolved[name] = value
    return resolved


class CellTypeRegistry:
    """
    Named custom cell types available to a grid widget.

    Examples:
        >>> reg = CellTypeRegistry()
        >>> reg.register(PicklistCellType())
        >>> "picklist" in reg
        True
    """

    def __init__(self, cell_types: Iterable[CellType] = ()) -> None:
        self._types: dict[str, CellType] = {}
        for cell_type in cell_types:
            self.register(cell_type)

    def register(self, cell_type: CellType, *, replace: bool = False) -> None:
        if not isinstance(cell_type, CellType):
            raise CellTypeError(f"not a cell type: {cell_type!r}")
        if cell_type.name in self._types and not replace:
            raise CellTypeError(f"cell type already registered: {cell_type.name}")
        self._types[cell_type.name] = cell_type

    def get(self, name: str) -> CellType:
        try:
            return self._types[name]
        except KeyError as exc:
            raise CellTypeError(f"unknown cell type: {name}") from exc

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def names(self) -> list[str]:
        return list(self._types)

    def render_view(self, column: ColumnDescriptor, row: Mapping[str, Any]) -> str:
        """Dispatch a column's read view for one row."""
        cell = self.get(column.kind)
        attrs = resolve_attributes(column.type_attributes, row)
        return cell.render_view(row.get(column.field_name), attrs)

    def render_edit(self, column: ColumnDescriptor, row: Mapping[str, Any]) -> EditSpec:
        """Dispatch a column's edit view for one row."""
        cell = self.get(column.kind)
        attrs = resolve_attributes(column.type_attributes, row)
        return cell.render_edit(row.get(column.field_name), attrs)


def default_cell_types() -> CellTypeRegistry:
    """Registry pre-loaded with the built-in picklist cell type."""
    return CellTypeRegistry([PicklistCellType()])
