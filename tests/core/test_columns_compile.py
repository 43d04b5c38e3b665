import logging

import pytest

from schemagrid.core.cells import PICKLIST_KIND
from schemagrid.core.columns import (
    COLUMN_KINDS,
    CompileContext,
    compile_column,
    compile_columns,
    find_validation_gaps,
    options_property_name,
    register_column_kind,
)
from schemagrid.core.errors import ValidationGap
from schemagrid.core.models import FieldMetadata
from schemagrid.core.types import CanonicalType

FIELDS = [
    FieldMetadata(api_name="Name", label="Account Name", raw_type="STRING", is_updateable=True, is_name_field=True),
    FieldMetadata(api_name="Industry", label="Industry", raw_type="PICKLIST", is_updateable=True),
    FieldMetadata(api_name="Website", label="Website", raw_type="URL", is_updateable=True),
    FieldMetadata(api_name="AnnualRevenue", label="Annual Revenue", raw_type="CURRENCY", is_updateable=True),
    FieldMetadata(api_name="Share", label="Share", raw_type="PERCENT"),
    FieldMetadata(api_name="Employees", label="Employees", raw_type="INTEGER"),
    FieldMetadata(api_name="Since", label="Since", raw_type="DATE"),
    FieldMetadata(api_name="CreatedDate", label="Created", raw_type="DATETIME"),
    FieldMetadata(api_name="Active", label="Active", raw_type="BOOLEAN"),
    FieldMetadata(api_name="Phone", label="Phone", raw_type="PHONE"),
    FieldMetadata(api_name="Geo", label="Geo", raw_type="GEOLOCATION"),
    FieldMetadata(api_name="Secret", label="Secret", raw_type="STRING", is_accessible=False),
]


def test_picklist_column_references_row_options() -> None:
    [col] = compile_columns(FIELDS, ["Industry"])
    assert col.kind == PICKLIST_KIND
    assert col.label == "Industry"
    assert col.editable is True
    assert col.type_attributes == {
        "placeholder": "Select Industry",
        "options": {"fieldName": "industryOptions"},
    }
    assert col.canonical_type is CanonicalType.ENUM


def test_kinds_and_attributes_per_type() -> None:
    cols = {c.field_name: c for c in compile_columns(FIELDS, [f.api_name for f in FIELDS[:-1]])}
    assert cols["Name"].kind == "text" and cols["Name"].type_attributes == {}
    assert cols["AnnualRevenue"].kind == "currency"
    assert cols["AnnualRevenue"].type_attributes == {"currencyCode": "USD", "maximumFractionDigits": 2}
    assert cols["Share"].type_attributes == {"maximumFractionDigits": 2}
    assert cols["Employees"].type_attributes == {"minimumIntegerDigits": 1, "maximumFractionDigits": 2}
    assert cols["Since"].kind == "date-local"
    assert cols["Since"].type_attributes == {"year": "numeric", "month": "2-digit", "day": "2-digit"}
    assert cols["CreatedDate"].kind == "date"
    assert cols["CreatedDate"].type_attributes["hour12"] is True
    assert cols["CreatedDate"].type_attributes["second"] == "2-digit"
    assert cols["Active"].kind == "boolean"
    assert cols["Phone"].kind == "phone"
    assert cols["Geo"].kind == "location"
    assert cols["Share"].editable is False


def test_url_label_only_when_name_field_selected() -> None:
    [_, with_name] = compile_columns(FIELDS, ["Name", "Website"])
    assert with_name.type_attributes == {"target": "_blank", "label": {"fieldName": "Name"}}
    [without] = compile_columns(FIELDS, ["Website"])
    assert without.type_attributes == {"target": "_blank"}


def test_currency_code_is_configurable() -> None:
    [col] = compile_columns(FIELDS, ["AnnualRevenue"], currency_code="EUR")
    assert col.type_attributes["currencyCode"] == "EUR"


def test_selection_order_duplicates_and_unknowns() -> None:
    cols = compile_columns(FIELDS, ["Phone", "Name", "Phone", "Missing__c", "Secret"])
    assert [c.field_name for c in cols] == ["Phone", "Name"]


def test_compile_is_idempotent() -> None:
    selected = ["Name", "Industry", "Website"]
    assert compile_columns(FIELDS, selected) == compile_columns(FIELDS, selected)


def test_strict_mode_raises_validation_gap() -> None:
    with pytest.raises(ValidationGap) as info:
        compile_columns(FIELDS, ["Name", "Missing__c", "Secret"], strict=True)
    assert info.value.missing == ("Missing__c", "Secret")


def test_dropped_fields_are_logged(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="schemagrid.columns"):
        compile_columns(FIELDS, ["Missing__c"])
    assert "Missing__c" in caplog.text


def test_find_validation_gaps() -> None:
    assert find_validation_gaps(FIELDS, ["Name", "Nope", "Nope", "Secret"]) == ["Nope", "Secret"]


def test_options_property_name() -> None:
    assert options_property_name("Industry") == "industryOptions"
    assert options_property_name("Lead_Source__c") == "lead_Source__cOptions"


def test_custom_kind_table_overrides_registry() -> None:
    def stars(field, ctx):
        return "rating-stars", {"max": 5}

    table = {**COLUMN_KINDS, CanonicalType.NUMBER: stars}
    col = compile_column(FIELDS[5], CompileContext(selected=("Employees",)), table)
    assert (col.kind, col.type_attributes) == ("rating-stars", {"max": 5})
    # module registry untouched
    assert compile_columns(FIELDS, ["Employees"])[0].kind == "number"


def test_registered_kind_applies_to_compiled_columns(monkeypatch) -> None:
    def stars(field, ctx):
        return "rating-stars", {"max": 5}

    monkeypatch.setitem(COLUMN_KINDS, CanonicalType.NUMBER, COLUMN_KINDS[CanonicalType.NUMBER])
    register_column_kind(CanonicalType.NUMBER, stars)

    col = compile_columns(FIELDS, ["Employees"])[0]
    assert (col.kind, col.type_attributes) == ("rating-stars", {"max": 5})
