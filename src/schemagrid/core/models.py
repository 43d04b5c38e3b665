"""
Pydantic v2 models for field metadata, enum value sets, column descriptors and
record-fetch parameters.

Responsibilities
- Validate schema-service payloads (camelCase keys) into frozen FieldMetadata.
- Convert raw enum value payloads (bare strings or {label, value}) into EnumOption lists.
- Describe compiled grid columns (ColumnDescriptor) and emit the widget-facing dict.
- Carry record-fetch parameters (FetchParams) and paged results (RecordPage).

Style
- Zero-IO (stdlib + pydantic only).
- Python attribute names are lower_snake; wire aliases keep the services' camelCase.

Examples
--------
>>> from schemagrid.core.models import FieldMetadata
>>> f = FieldMetadata.model_validate(
...     {"apiName": "Industry", "label": "Industry", "type": "PICKLIST", "isUpdateable": True}
... )
>>> f.canonical_type.value, f.is_accessible
('enum', True)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationInfo,
    field_validator,
    model_validator,
)

from .types import CanonicalType, normalize_type

__all__ = [
    "FieldMetadata",
    "EnumOption",
    "EnumValueSet",
    "ColumnDescriptor",
    "FilterOperator",
    "SortDirection",
    "FilterClause",
    "FetchParams",
    "RecordPage",
    "parse_fields",
    "enum_value_set_from_raw",
]


class FieldMetadata(BaseModel):
    """
    Describe-level metadata for one field of an object type.

    Attributes:
        api_name (str): Field API name (alias ``apiName``). May be empty for sparse payloads.
        label (str): Human label; defaults to api_name when absent.
        raw_type (str | None): Raw type tag as reported by the schema service (alias ``type``).
        is_updateable (bool): Whether inline edits are allowed.
        is_accessible (bool): Whether the current user may read the field.
        is_name_field (bool): Whether this is the object's designated name field.
        is_external_id (bool): Whether the field is an external identifier.

    Notes:
        Instances are immutable; one per field per object type, cached for the session.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    api_name: str = Field(default="", alias="apiName")
    label: str = ""
    raw_type: str | None = Field(default=None, alias="type")
    is_updateable: bool = Field(default=False, alias="isUpdateable")
    is_accessible: bool = Field(default=True, alias="isAccessible")
    is_name_field: bool = Field(default=False, alias="isNameField")
    is_external_id: bool = Field(default=False, alias="isExternalId")

    @field_validator("api_name", "label", mode="before")
    @classmethod
    def _none_to_blank(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("is_updateable", "is_accessible", "is_name_field", "is_external_id", mode="before")
    @classmethod
    def _none_to_default_flag(cls, v: Any, info: ValidationInfo) -> Any:
        return cls.model_fields[info.field_name].default if v is None else v

    @model_validator(mode="before")
    @classmethod
    def _default_label(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and not data.get("label"):
            name = data.get("apiName", data.get("api_name"))
            if name:
                data = {**data, "label": name}
        return data

    @property
    def canonical_type(self) -> CanonicalType:
        return normalize_type(self.raw_type)

    @property
    def type_tag(self) -> str:
        """Upper-cased raw tag ('' when missing) for set-membership checks."""
        return (self.raw_type or "").strip().upper()


_FIELDS_ADAPTER: TypeAdapter[list[FieldMetadata]] = TypeAdapter(list[FieldMetadata])


def parse_fields(payload: Iterable[Any]) -> list[FieldMetadata]:
    """
    Validate a schema-service field list into FieldMetadata instances.

    Args:
        payload (Iterable[Any]): Dicts (camelCase or snake_case keys) or FieldMetadata.

    Returns:
        list[FieldMetadata]: Validated metadata in input order.

    Raises:
        pydantic.ValidationError: If an entry cannot be coerced.
    """
    return _FIELDS_ADAPTER.validate_python(list(payload))


class EnumOption(BaseModel):
    """One selectable value of an enumerated field."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: str


EnumValueSet = dict[str, list[EnumOption]]


def enum_value_set_from_raw(raw: Mapping[str, Iterable[Any]] | None) -> EnumValueSet:
    """
    Build an EnumValueSet from a loose service payload.

    Bare strings become ``{label: v, value: v}``; mappings are validated as
    EnumOption; EnumOption instances pass through. Order is preserved.

    Args:
        raw (Mapping[str, Iterable[Any]] | None): Field apiName -> values.

    Returns:
        EnumValueSet: Field apiName -> ordered option list.
    """
    out: EnumValueSet = {}
    for api_name, values in (raw or {}).items():
        options: list[EnumOption] = []
        for v in values or ():
            if isinstance(v, EnumOption):
                options.append(v)
            elif isinstance(v, Mapping):
                options.append(EnumOption.model_validate(v))
            else:
                options.append(EnumOption(label=str(v), value=str(v)))
        out[str(api_name)] = options
    return out


class ColumnDescriptor(BaseModel):
    """
    Declarative spec telling the grid widget how to display and edit one field.

    Attributes:
        label (str): Column header.
        field_name (str): Field apiName; always a member of the selected-field set.
        kind (str): Render-kind name (standard kind or a registered custom cell type).
        editable (bool): Mirrors FieldMetadata.is_updateable.
        sortable (bool): Columns are always sortable server-side.
        type_attributes (dict[str, Any]): Render/edit attributes for the kind.
        canonical_type (CanonicalType): Normalized type the kind was derived from.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    field_name: str
    kind: str
    editable: bool = False
    sortable: bool = True
    type_attributes: dict[str, Any] = Field(default_factory=dict)
    canonical_type: CanonicalType = CanonicalType.TEXT

    def to_widget(self) -> dict[str, Any]:
        """Return the camelCase dict consumed by the grid widget."""
        col: dict[str, Any] = {
            "label": self.label,
            "fieldName": self.field_name,
            "type": self.kind,
            "editable": self.editable,
            "sortable": self.sortable,
        }
        if self.type_attributes:
            col["typeAttributes"] = dict(self.type_attributes)
        return col


class FilterOperator(Enum):
    """Filter comparison applied by the record service."""

    EQUALS = "equals"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"

    @property
    def label(self) -> str:
        return _OPERATOR_LABELS[self]


_OPERATOR_LABELS: dict[FilterOperator, str] = {
    FilterOperator.EQUALS: "Equals",
    FilterOperator.CONTAINS: "Contains",
    FilterOperator.STARTS_WITH: "Starts With",
}


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Any) -> SortDirection:
        """
        Coerce a widget-provided direction ("asc", "DESC", "descending", ...).

        Raises:
            ValueError: If the value is not a recognized direction.
        """
        if isinstance(value, SortDirection):
            return value
        if isinstance(value, str):
            lo = value.strip().lower()
            if lo in ("asc", "ascending"):
                return cls.ASC
            if lo in ("desc", "descending"):
                return cls.DESC
        raise ValueError(f"unknown sort direction: {value!r}")


class FilterClause(BaseModel):
    """Single field filter; all parts empty means no filter."""

    model_config = ConfigDict(frozen=True)

    field: str = ""
    operator: FilterOperator | None = None
    value: str = ""

    @property
    def is_active(self) -> bool:
        return bool(self.field and self.operator is not None and self.value != "")


class FetchParams(BaseModel):
    """
    Parameters of one record fetch, snapshotted from the load state.

    Examples:
        >>> FetchParams(object_type="Account", selected_fields=("Name",)).to_payload()["pageNumber"]
        1
    """

    model_config = ConfigDict(frozen=True)

    object_type: str
    search_keyword: str = ""
    filter: FilterClause = Field(default_factory=FilterClause)
    page_number: int = Field(default=1, ge=1)
    page_size: int = Field(default=10, ge=1)
    sort_by: str | None = None
    sort_direction: SortDirection | None = None
    selected_fields: tuple[str, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        """Flat camelCase payload in the record service's wire shape."""
        return {
            "objectApiName": self.object_type,
            "searchKeyword": self.search_keyword,
            "field": self.filter.field,
            "operator": self.filter.operator.value if self.filter.operator else "",
            "value": self.filter.value,
            "pageNumber": self.page_number,
            "pageSize": self.page_size,
            "sortBy": self.sort_by,
            "sortDirection": self.sort_direction.value if self.sort_direction else None,
            "selectedFields": list(self.selected_fields),
        }


class RecordPage(BaseModel):
    """One page of records plus the total count matching the query."""

    model_config = ConfigDict(populate_by_name=True)

    records: list[dict[str, Any]] = Field(default_factory=list)
    total_count: int = Field(default=0, ge=0, alias="totalCount")
