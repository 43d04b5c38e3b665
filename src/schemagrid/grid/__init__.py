"""
schemagrid.grid: load orchestration for schema-driven grids.

## Responsibilities
- GridController owns load state and metadata slots, sequences the metadata fetches,
  builds fetch parameters, suppresses stale record responses and recompiles columns.
- GridSettings loads runtime configuration (env > TOML > defaults).
- Service protocols describe the schema service, record service and notifier.
- Polars-backed in-memory services implement those protocols for the app and tests.

## Import DAG discipline
- Depends on stdlib, polars (memory services only) and schemagrid.core.
- MUST NOT import the app package.
"""

from __future__ import annotations

from .config import GridSettings
from .controller import GridController
from .memory import CatalogSchemaService, FrameRecordService, ObjectSchema, describe_frame
from .services import (
    CollectingNotifier,
    Notification,
    Notifier,
    RecordService,
    SchemaService,
    Severity,
)
from .state import FilterUi, LoadState, Phase, total_pages

__all__ = [
    "GridController",
    "GridSettings",
    "LoadState",
    "FilterUi",
    "Phase",
    "total_pages",
    "SchemaService",
    "RecordService",
    "Notifier",
    "Notification",
    "Severity",
    "CollectingNotifier",
    "ObjectSchema",
    "CatalogSchemaService",
    "FrameRecordService",
    "describe_frame",
]
