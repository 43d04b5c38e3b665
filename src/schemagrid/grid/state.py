"""
Load state, filter-input toggles and pagination math for a grid session.

LoadState is mutated only by GridController handlers; every change of result
membership or ordering resets page_number to 1 before the next fetch.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from schemagrid.core.constants import DEFAULT_PAGE_SIZE
from schemagrid.core.models import EnumOption, FilterOperator, SortDirection

__all__ = ["Phase", "LoadState", "FilterUi", "total_pages"]


class Phase(Enum):
    """Lifecycle of a grid session."""

    UNINITIALIZED = "uninitialized"
    AWAITING_METADATA = "awaiting_metadata"
    READY = "ready"
    LOADING = "loading"
    ERROR = "error"


@dataclass
class LoadState:
    """Search, filter, sort, paging and field selection driving record fetches."""

    search_keyword: str = ""
    filter_field: str = ""
    filter_operator: FilterOperator | None = None
    filter_value: str = ""
    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    sort_by: str | None = None
    sort_direction: SortDirection | None = None
    selected_fields: list[str] = field(default_factory=list)

    def reset_filters(self) -> None:
        """Restore search, filter, page and sort to initial values (selection and size kept)."""
        self.search_keyword = ""
        self.filter_field = ""
        self.filter_operator = None
        self.filter_value = ""
        self.page_number = 1
        self.sort_by = None
        self.sort_direction = None


@dataclass
class FilterUi:
    """Which value input the filter bar shows for the current filter field."""

    is_enum_field: bool = False
    is_date_field: bool = False
    is_datetime_field: bool = False
    options: list[EnumOption] = field(default_factory=list)


def total_pages(total_count: int, page_size: int) -> int:
    """
    Number of pages for a result set; never less than 1.

    Examples:
        >>> total_pages(0, 10), total_pages(10, 10), total_pages(11, 10)
        (1, 1, 2)
    """
    if page_size < 1:
        return 1
    return max(1, math.ceil(max(0, total_count) / page_size))
