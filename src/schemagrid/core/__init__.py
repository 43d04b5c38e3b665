"""
Core contracts for schemagrid (types, models, ranking, columns, cells, enrichment).

## Contracts (single source of truth)
- Types: CanonicalType and the raw type-tag normalizer.
- Models: FieldMetadata, EnumOption/EnumValueSet, ColumnDescriptor, FetchParams, RecordPage.
- Ranking: default-field scoring and top-N selection.
- Columns: ColumnKind registry and the column compiler.
- Cells: pluggable custom cell types (picklist) and their registry.
- Enrich: immutable Rows with per-field enum option side-maps.
- Errors: typed failures routed by the load orchestrator.

## Notes
- Zero-IO policy: stdlib + pydantic only; no network or file access.
- Downstream: schemagrid.grid orchestrates loads on top of these pure functions;
  app renders descriptors and rows through Streamlit.
"""

from __future__ import annotations

from .cells import PICKLIST_KIND, CellType, CellTypeRegistry, PicklistCellType, default_cell_types
from .columns import compile_columns, options_property_name, register_column_kind
from .enrich import Row, enrich_rows
from .errors import (
    GridError,
    MetadataFetchError,
    RecordFetchError,
    UpdateError,
    ValidationGap,
)
from .models import (
    ColumnDescriptor,
    EnumOption,
    EnumValueSet,
    FetchParams,
    FieldMetadata,
    FilterClause,
    FilterOperator,
    RecordPage,
    SortDirection,
)
from .ranking import score_field, select_default_fields
from .types import CanonicalType, normalize_type

__all__ = [
    "CanonicalType",
    "normalize_type",
    "FieldMetadata",
    "EnumOption",
    "EnumValueSet",
    "ColumnDescriptor",
    "FilterClause",
    "FilterOperator",
    "SortDirection",
    "FetchParams",
    "RecordPage",
    "score_field",
    "select_default_fields",
    "compile_columns",
    "options_property_name",
    "register_column_kind",
    "PICKLIST_KIND",
    "CellType",
    "CellTypeRegistry",
    "PicklistCellType",
    "default_cell_types",
    "Row",
    "enrich_rows",
    "GridError",
    "MetadataFetchError",
    "RecordFetchError",
    "UpdateError",
    "ValidationGap",
]
