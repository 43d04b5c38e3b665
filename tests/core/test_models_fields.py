import pytest
from pydantic import ValidationError

from schemagrid.core.models import (
    ColumnDescriptor,
    EnumOption,
    FetchParams,
    FieldMetadata,
    FilterClause,
    FilterOperator,
    RecordPage,
    SortDirection,
    enum_value_set_from_raw,
    parse_fields,
)
from schemagrid.core.types import CanonicalType


def test_field_metadata_from_service_payload() -> None:
    f = FieldMetadata.model_validate(
        {
            "apiName": "AnnualRevenue",
            "label": "Annual Revenue",
            "type": "CURRENCY",
            "isUpdateable": True,
            "isExternalId": False,
            "somethingElse": "ignored",
        }
    )
    assert f.api_name == "AnnualRevenue"
    assert f.canonical_type is CanonicalType.CURRENCY
    assert f.type_tag == "CURRENCY"
    assert f.is_updateable is True
    assert f.is_accessible is True
    assert f.is_name_field is False


def test_field_metadata_label_defaults_to_api_name() -> None:
    assert FieldMetadata.model_validate({"apiName": "Phone"}).label == "Phone"
    assert FieldMetadata(api_name="Rating", label=None).label == "Rating"


def test_field_metadata_sparse_payload_is_tolerated() -> None:
    f = FieldMetadata.model_validate({"apiName": None, "type": None})
    assert f.api_name == ""
    assert f.label == ""
    assert f.type_tag == ""
    assert f.canonical_type is CanonicalType.TEXT


def test_field_metadata_is_frozen() -> None:
    f = FieldMetadata(api_name="Name")
    with pytest.raises(ValidationError):
        f.api_name = "Other"  # type: ignore[misc]


def test_parse_fields_accepts_dicts_and_instances() -> None:
    existing = FieldMetadata(api_name="Name", raw_type="STRING")
    out = parse_fields([existing, {"apiName": "Industry", "type": "PICKLIST"}])
    assert [f.api_name for f in out] == ["Name", "Industry"]
    assert out[1].canonical_type is CanonicalType.ENUM


def test_enum_value_set_from_raw_accepts_strings_and_mappings() -> None:
    sets = enum_value_set_from_raw(
        {
            "Industry": ["Banking", {"label": "Energy & Utilities", "value": "Energy"}],
            "Rating": [],
        }
    )
    assert sets["Industry"] == [
        EnumOption(label="Banking", value="Banking"),
        EnumOption(label="Energy & Utilities", value="Energy"),
    ]
    assert sets["Rating"] == []
    assert enum_value_set_from_raw(None) == {}


def test_column_descriptor_widget_dict_omits_empty_attributes() -> None:
    plain = ColumnDescriptor(label="Name", field_name="Name", kind="text", editable=True)
    assert plain.to_widget() == {
        "label": "Name",
        "fieldName": "Name",
        "type": "text",
        "editable": True,
        "sortable": True,
    }
    money = ColumnDescriptor(
        label="Revenue",
        field_name="AnnualRevenue",
        kind="currency",
        type_attributes={"currencyCode": "USD", "maximumFractionDigits": 2},
    )
    assert money.to_widget()["typeAttributes"] == {"currencyCode": "USD", "maximumFractionDigits": 2}


def test_filter_operator_labels() -> None:
    assert [op.value for op in FilterOperator] == ["equals", "contains", "starts_with"]
    assert FilterOperator.STARTS_WITH.label == "Starts With"


@pytest.mark.parametrize("raw", ["asc", "ASC", "ascending", SortDirection.ASC])
def test_sort_direction_parse_ascending(raw) -> None:
    assert SortDirection.parse(raw) is SortDirection.ASC


def test_sort_direction_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        SortDirection.parse("sideways")
    with pytest.raises(ValueError):
        SortDirection.parse(None)


def test_filter_clause_active_requires_all_parts() -> None:
    assert not FilterClause().is_active
    assert not FilterClause(field="Name", operator=FilterOperator.EQUALS).is_active
    assert not FilterClause(field="Name", value="x").is_active
    assert FilterClause(field="Name", operator=FilterOperator.CONTAINS, value="x").is_active


def test_fetch_params_payload_shape() -> None:
    params = FetchParams(
        object_type="Account",
        search_keyword="acme",
        filter=FilterClause(field="Industry", operator=FilterOperator.EQUALS, value="Energy"),
        page_number=3,
        page_size=25,
        sort_by="Name",
        sort_direction=SortDirection.DESC,
        selected_fields=("Name", "Industry"),
    )
    assert params.to_payload() == {
        "objectApiName": "Account",
        "searchKeyword": "acme",
        "field": "Industry",
        "operator": "equals",
        "value": "Energy",
        "pageNumber": 3,
        "pageSize": 25,
        "sortBy": "Name",
        "sortDirection": "desc",
        "selectedFields": ["Name", "Industry"],
    }


def test_fetch_params_rejects_page_below_one() -> None:
    with pytest.raises(ValidationError):
        FetchParams(object_type="Account", page_number=0)


def test_record_page_accepts_wire_alias() -> None:
    page = RecordPage.model_validate({"records": [{"Id": "1"}], "totalCount": 41})
    assert page.total_count == 41
    assert page.records == [{"Id": "1"}]


def test_null_flags_fall_back_to_field_defaults() -> None:
    fields = parse_fields(
        [
            {
                "apiName": "Name",
                "type": "STRING",
                "isAccessible": None,
                "isUpdateable": None,
                "isNameField": None,
                "isExternalId": None,
            }
        ]
    )
    assert len(fields) == 1
    f = fields[0]
    assert f.is_accessible is True
    assert f.is_updateable is False
    assert f.is_name_field is False
    assert f.is_external_id is False
