"""
GridController: the load orchestrator for one grid session.

Owns the LoadState, the three metadata slots (object label, accessible fields, enum
value sets), the compiled columns and the enriched rows. User interactions mutate
state through the handler coroutines below; every record fetch is issued through
``reload()``.

Lifecycle
---------
uninitialized -> awaiting_metadata (open) -> ready (fields arrived) -> loading -> ready
A failed accessible-fields fetch moves the session to ``error``; a failed record fetch
returns to ``ready`` with the previous rows kept.

Ordering rules
--------------
- The three metadata fetches run concurrently and may complete in any order. Each
  completion updates only its own slot; column compilation and row enrichment re-run
  with whatever metadata is present.
- Only the accessible-fields completion issues a record fetch (the selected fields
  come from it). Enum values and the label re-enrich locally without refetching.
- Record fetches carry a monotonically increasing sequence number. A completion is
  applied only when it belongs to the latest issued fetch; earlier completions,
  successful or failed, are discarded.
- Nothing raises past the controller: service failures are wrapped into
  MetadataFetchError / RecordFetchError / UpdateError, logged, and surfaced through
  the Notifier where the user needs to know.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from schemagrid.core.cells import CellTypeRegistry, default_cell_types
from schemagrid.core.columns import compile_columns, find_validation_gaps
from schemagrid.core.enrich import Row, enrich_rows
from schemagrid.core.errors import (
    MetadataFetchError,
    RecordFetchError,
    UpdateError,
    error_message,
)
from schemagrid.core.models import (
    ColumnDescriptor,
    EnumOption,
    EnumValueSet,
    FetchParams,
    FieldMetadata,
    FilterClause,
    FilterOperator,
    RecordPage,
    SortDirection,
    enum_value_set_from_raw,
    parse_fields,
)
from schemagrid.core.ranking import select_default_fields
from schemagrid.core.types import CanonicalType

from .config import GridSettings
from .services import Notifier, RecordService, SchemaService, Severity
from .state import FilterUi, LoadState, Phase, total_pages

__all__ = ["GridController"]

logger = logging.getLogger("schemagrid.controller")


def _parse_operator(value: Any) -> FilterOperator | None:
    if value is None or value == "":
        return None
    if isinstance(value, FilterOperator):
        return value
    text = str(value).strip()
    for op in FilterOperator:
        if text in (op.value, op.label) or text.replace("_", "").lower() == op.value.replace("_", ""):
            return op
    raise ValueError(f"unknown filter operator: {value!r}")


class GridController:
    """
    Orchestrates metadata, load state and record fetches for one grid.

    Args:
        schema (SchemaService): Source of object label, field metadata and enum values.
        records (RecordService): Paged record fetches and updates.
        notifier (Notifier): User notification sink.
        settings (GridSettings | None): Page size, default column count, currency, etc.
        cell_types (CellTypeRegistry | None): Custom cell types offered to the widget.

    Examples:
        >>> import asyncio
        >>> from app.demo import build_demo_services  # doctest: +SKIP
        >>> from schemagrid.grid import CollectingNotifier  # doctest: +SKIP
        >>> ctrl = GridController(*build_demo_services(), CollectingNotifier())  # doctest: +SKIP
        >>> asyncio.run(ctrl.open("Account"))  # doctest: +SKIP
        >>> ctrl.is_first_page  # doctest: +SKIP
        True
    """

    def __init__(
        self,
        schema: SchemaService,
        records: RecordService,
        notifier: Notifier,
        settings: GridSettings | None = None,
        *,
        cell_types: CellTypeRegistry | None = None,
    ) -> None:
        self._schema = schema
        self._records = records
        self._notifier = notifier
        self.settings = settings or GridSettings()
        self.cell_types = cell_types or default_cell_types()
        self._session = 0
        self._seq = 0
        self._reset(None)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def _reset(self, object_type: str | None) -> None:
        self.object_type: str | None = object_type
        self.state = LoadState(page_size=self.settings.page_size)
        self.phase = Phase.UNINITIALIZED
        self.object_label = ""
        self.header_title = ""
        self.header_icon = ""
        self.accessible_fields: list[FieldMetadata] | None = None
        self.value_sets: EnumValueSet | None = None
        self.columns: list[ColumnDescriptor] = []
        self.rows: list[Row] = []
        self.total_count = 0
        self.total_pages = 1
        self.draft_values: list[dict[str, Any]] = []
        self.filter_ui = FilterUi()
        self.user_customized_fields = False

    async def open(self, object_type: str) -> None:
        """
        Start a session for an object type and fetch its metadata concurrently.

        Metadata and record completions of an earlier session (a previous ``open``)
        are ignored.
        """
        self._session += 1
        self._seq += 1
        session = self._session
        self._reset(object_type)
        self.phase = Phase.AWAITING_METADATA
        logger.info("opening grid for %s", object_type)
        await asyncio.gather(
            self._fetch_label(session, object_type),
            self._fetch_fields(session, object_type),
            self._fetch_enum_values(session, object_type),
        )

    def close(self) -> None:
        """Tear the session down; in-flight completions become stale."""
        self._session += 1
        self._seq += 1
        self._reset(None)

    # ------------------------------------------------------------------
    # Metadata completions
    # ------------------------------------------------------------------

    def _metadata_failed(self, object_type: str, source: str, exc: Exception) -> MetadataFetchError:
        err = MetadataFetchError(error_message(exc), object_type=object_type, source=source)
        logger.warning("%s metadata unavailable for %s: %s", source, object_type, err)
        return err

    async def _fetch_label(self, session: int, object_type: str) -> None:
        try:
            label = await self._schema.get_object_label(object_type)
        except Exception as exc:
            if session == self._session:
                self._metadata_failed(object_type, "label", exc)
            return
        if session != self._session:
            return
        self.apply_object_label(label)

    async def _fetch_fields(self, session: int, object_type: str) -> None:
        try:
            fields = parse_fields(await self._schema.get_accessible_fields(object_type))
        except Exception as exc:
            if session == self._session:
                self._metadata_failed(object_type, "fields", exc)
                self.phase = Phase.ERROR
            return
        if session != self._session:
            return
        self.apply_accessible_fields(fields)
        await self.reload()

    async def _fetch_enum_values(self, session: int, object_type: str) -> None:
        try:
            value_sets = enum_value_set_from_raw(await self._schema.get_enum_values(object_type))
        except Exception as exc:
            if session == self._session:
                self._metadata_failed(object_type, "enum values", exc)
            return
        if session != self._session:
            return
        self.apply_enum_values(value_sets)

    def apply_object_label(self, label: str) -> None:
        self.object_label = label or ""
        self.header_title = f"{self.object_label} Manager" if self.object_label else ""
        self.header_icon = f"standard:{(self.object_type or '').lower()}"

    def apply_accessible_fields(self, fields: Sequence[FieldMetadata]) -> None:
        """Store field metadata, pick defaults (unless customized), recompile, re-enrich."""
        self.accessible_fields = list(fields)
        if not self.user_customized_fields:
            self.state.selected_fields = select_default_fields(
                self.accessible_fields,
                self.settings.default_field_count,
                self.settings.primary_key_field,
            )
            logger.debug("default fields for %s: %s", self.object_type, self.state.selected_fields)
        self._recompile()
        self.rows = self._enrich(self.rows)
        if self.state.filter_field:
            self.filter_ui = self._filter_ui_for(self.state.filter_field)
        if self.phase in (Phase.AWAITING_METADATA, Phase.ERROR):
            self.phase = Phase.READY

    def apply_enum_values(self, value_sets: EnumValueSet) -> None:
        """Store enum value sets and re-enrich the current rows (no refetch)."""
        self.value_sets = dict(value_sets)
        self.rows = self._enrich(self.rows)
        if self.state.filter_field:
            self.filter_ui = self._filter_ui_for(self.state.filter_field)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    def _recompile(self) -> None:
        if self.accessible_fields is None:
            self.columns = []
            return
        self.columns = compile_columns(
            self.accessible_fields,
            self.state.selected_fields,
            currency_code=self.settings.currency_code,
            name_field=self.settings.name_field,
        )

    def _enrich(self, records: Iterable[Mapping[str, Any]]) -> list[Row]:
        return enrich_rows(records, self.accessible_fields or [], self.value_sets)

    def _field(self, api_name: str) -> FieldMetadata | None:
        for f in self.accessible_fields or []:
            if f.api_name == api_name:
                return f
        return None

    def _filter_ui_for(self, api_name: str) -> FilterUi:
        fd = self._field(api_name)
        canonical = fd.canonical_type if fd is not None else None
        if canonical is CanonicalType.DATE:
            return FilterUi(is_date_field=True)
        if canonical is CanonicalType.DATETIME:
            return FilterUi(is_datetime_field=True)
        sets = self.value_sets or {}
        if api_name in sets:
            return FilterUi(is_enum_field=True, options=list(sets[api_name]))
        return FilterUi()

    @property
    def field_options(self) -> list[EnumOption]:
        """Filter-dropdown candidates: selected fields that have accessible metadata."""
        by_name = {f.api_name: f for f in self.accessible_fields or [] if f.api_name}
        return [
            EnumOption(label=by_name[name].label, value=name)
            for name in self.state.selected_fields
            if name in by_name
        ]

    @property
    def available_field_options(self) -> list[EnumOption]:
        """Every accessible field, for the column picker."""
        return [
            EnumOption(label=f.label, value=f.api_name)
            for f in self.accessible_fields or []
            if f.api_name
        ]

    @property
    def operator_options(self) -> list[EnumOption]:
        return [EnumOption(label=op.label, value=op.value) for op in FilterOperator]

    @property
    def dropped_fields(self) -> list[str]:
        """Selected fields silently left out of the columns (no accessible metadata)."""
        if self.accessible_fields is None:
            return []
        return find_validation_gaps(self.accessible_fields, self.state.selected_fields)

    @property
    def fetch_sequence(self) -> int:
        """Sequence number of the latest issued record fetch."""
        return self._seq

    @property
    def is_first_page(self) -> bool:
        return self.state.page_number == 1

    @property
    def is_last_page(self) -> bool:
        return self.state.page_number == self.total_pages

    # ------------------------------------------------------------------
    # Record loading
    # ------------------------------------------------------------------

    def build_fetch_params(self) -> FetchParams:
        s = self.state
        return FetchParams(
            object_type=self.object_type or "",
            search_keyword=s.search_keyword,
            filter=FilterClause(field=s.filter_field, operator=s.filter_operator, value=s.filter_value),
            page_number=s.page_number,
            page_size=s.page_size,
            sort_by=s.sort_by,
            sort_direction=s.sort_direction,
            selected_fields=tuple(s.selected_fields),
        )

    async def reload(self) -> bool:
        """
        Fetch the current page for the current state.

        Returns:
            bool: True when this fetch's result was applied; False when it failed, was
            superseded by a newer fetch, or field metadata has not arrived yet.
        """
        if self.object_type is None or self.accessible_fields is None:
            return False
        params = self.build_fetch_params()
        self._seq += 1
        seq = self._seq
        self.phase = Phase.LOADING
        logger.debug("record fetch #%d: %s", seq, params.to_payload())
        try:
            result = await self._records.get_records(params)
            page = result if isinstance(result, RecordPage) else RecordPage.model_validate(result)
        except Exception as exc:
            if seq != self._seq:
                logger.debug("discarding stale failure of record fetch #%d", seq)
                return False
            err = RecordFetchError(error_message(exc))
            logger.warning("record fetch #%d for %s failed: %s", seq, self.object_type, err)
            self._notifier.notify("Error loading records", str(err), Severity.ERROR)
            self.phase = Phase.READY
            return False
        if seq != self._seq:
            logger.debug("discarding stale result of record fetch #%d (latest #%d)", seq, self._seq)
            return False
        self.total_count = page.total_count
        self.total_pages = total_pages(page.total_count, self.state.page_size)
        self.rows = self._enrich(page.records)
        self.draft_values = []
        self.phase = Phase.READY
        return True

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def search(self, keyword: str | None) -> bool:
        self.state.search_keyword = (keyword or "").strip()
        self.state.page_number = 1
        return await self.reload()

    async def sort(self, field_name: str, direction: Any) -> bool:
        try:
            parsed = SortDirection.parse(direction)
        except ValueError:
            logger.warning("unknown sort direction %r; using ascending", direction)
            parsed = SortDirection.ASC
        self.state.sort_by = field_name or None
        self.state.sort_direction = parsed if field_name else None
        self.state.page_number = 1
        return await self.reload()

    def change_filter_field(self, api_name: str | None) -> None:
        """Select the filter field; resets value and toggles. Applied by ``apply_filter``."""
        self.state.filter_field = api_name or ""
        self.state.filter_value = ""
        self.filter_ui = self._filter_ui_for(self.state.filter_field) if api_name else FilterUi()

    def set_filter_operator(self, operator: Any) -> None:
        try:
            self.state.filter_operator = _parse_operator(operator)
        except ValueError:
            logger.warning("ignoring unknown filter operator %r", operator)
            self.state.filter_operator = None

    def set_filter_value(self, value: Any) -> None:
        if value is None:
            self.state.filter_value = ""
        elif hasattr(value, "isoformat"):
            self.state.filter_value = value.isoformat()
        else:
            self.state.filter_value = str(value)

    async def apply_filter(self) -> bool:
        self.state.page_number = 1
        return await self.reload()

    async def clear_filters(self) -> bool:
        self.state.reset_filters()
        self.filter_ui = FilterUi()
        self.draft_values = []
        return await self.reload()

    async def next_page(self) -> bool:
        if self.state.page_number >= self.total_pages:
            return False
        self.state.page_number += 1
        return await self.reload()

    async def previous_page(self) -> bool:
        if self.state.page_number <= 1:
            return False
        self.state.page_number -= 1
        return await self.reload()

    async def save_field_selection(self, api_names: Iterable[str]) -> bool:
        """Replace the displayed fields, recompile columns, return to page 1 and reload."""
        self.state.selected_fields = list(dict.fromkeys(n for n in api_names if n))
        self.user_customized_fields = True
        self._recompile()
        dropped = self.dropped_fields
        if dropped:
            logger.info("selected fields without metadata left out: %s", dropped)
        self.state.page_number = 1
        return await self.reload()

    def set_draft_values(self, drafts: Iterable[Mapping[str, Any]]) -> None:
        self.draft_values = [dict(d) for d in drafts]

    async def save_edits(self, changed: Iterable[Mapping[str, Any]] | None = None) -> bool:
        """
        Persist inline edits (defaults to the current drafts).

        On success drafts are cleared and the page reloads; on failure the server
        message is surfaced and the drafts are kept for a retry.
        """
        records = [dict(c) for c in (self.draft_values if changed is None else changed)]
        if not records:
            return False
        try:
            await self._records.update_records(records)
        except Exception as exc:
            err = UpdateError(error_message(exc))
            logger.warning("update of %d record(s) failed: %s", len(records), err)
            self._notifier.notify("Error updating records", str(err), Severity.ERROR)
            self.draft_values = records
            return False
        self._notifier.notify("Success", "Records updated successfully", Severity.SUCCESS)
        self.draft_values = []
        await self.reload()
        return True
