from schemagrid.core.enrich import Row, enrich_rows, enum_field_names
from schemagrid.core.models import EnumOption, FieldMetadata

FIELDS = [
    FieldMetadata(api_name="Name", raw_type="STRING"),
    FieldMetadata(api_name="Industry", raw_type="PICKLIST"),
    FieldMetadata(api_name="Rating", raw_type="PICKLIST"),
]
SETS = {"Industry": [EnumOption(label="Energy", value="Energy")]}


def test_rows_carry_options_without_mutating_records() -> None:
    records = [{"Id": "1", "Name": "Acme", "Industry": "Energy"}]
    snapshot = [dict(r) for r in records]
    rows = enrich_rows(records, FIELDS, SETS)
    assert records == snapshot
    assert rows[0] is not records[0]
    assert rows[0]["Name"] == "Acme"
    assert rows[0]["industryOptions"] == (EnumOption(label="Energy", value="Energy"),)
    assert rows[0]["ratingOptions"] == ()
    assert rows[0].record == records[0]


def test_missing_value_sets_give_empty_lists() -> None:
    [row] = enrich_rows([{"Id": "1"}], FIELDS, None)
    assert row.options == {"Industry": (), "Rating": ()}
    assert row.get("industryOptions") == ()


def test_re_enrichment_builds_new_rows() -> None:
    first = enrich_rows([{"Id": "1", "Industry": "Energy"}], FIELDS, None)
    second = enrich_rows(first, FIELDS, SETS)
    assert second[0] is not first[0]
    assert first[0]["industryOptions"] == ()
    assert second[0].options_for("Industry")[0].value == "Energy"
    assert second[0].record == {"Id": "1", "Industry": "Energy"}


def test_row_mapping_protocol_and_to_dict() -> None:
    row = Row({"Id": "1", "Industry": "Energy"}, SETS)
    assert list(row) == ["Id", "Industry", "industryOptions"]
    assert len(row) == 3
    assert row.to_dict() == {
        "Id": "1",
        "Industry": "Energy",
        "industryOptions": [{"label": "Energy", "value": "Energy"}],
    }
    assert "Row(" in repr(row)


def test_enum_field_names() -> None:
    assert enum_field_names(FIELDS) == ["Industry", "Rating"]
