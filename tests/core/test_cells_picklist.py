import pytest

from schemagrid.core.cells import (
    PICKLIST_KIND,
    CellType,
    CellTypeRegistry,
    EditSpec,
    PicklistCellType,
    default_cell_types,
    resolve_attributes,
)
from schemagrid.core.columns import compile_columns
from schemagrid.core.enrich import enrich_rows
from schemagrid.core.errors import CellTypeError
from schemagrid.core.models import EnumOption, FieldMetadata

OPTS = [EnumOption(label="Banking", value="BANK"), EnumOption(label="Energy", value="NRG")]


def test_picklist_view_shows_option_label() -> None:
    cell = PicklistCellType()
    assert cell.render_view("BANK", {"options": OPTS}) == "Banking"
    assert cell.render_view("OTHER", {"options": OPTS}) == "OTHER"
    assert cell.render_view(None, {"options": OPTS}) == ""


def test_picklist_edit_is_a_select() -> None:
    spec = PicklistCellType().render_edit("NRG", {"options": OPTS, "placeholder": "Select Industry"})
    assert spec == EditSpec(widget="select", value="NRG", options=tuple(OPTS), placeholder="Select Industry")


def test_picklist_rejects_unknown_attributes() -> None:
    with pytest.raises(CellTypeError):
        PicklistCellType().render_view("BANK", {"colour": "red"})


def test_resolve_attributes_reads_row_property() -> None:
    row = {"Industry": "BANK", "industryOptions": OPTS}
    attrs = resolve_attributes({"options": {"fieldName": "industryOptions"}, "placeholder": "p"}, row)
    assert attrs == {"options": OPTS, "placeholder": "p"}


def test_registry_dispatches_compiled_columns_against_enriched_rows() -> None:
    fields = [FieldMetadata(api_name="Industry", label="Industry", raw_type="PICKLIST", is_updateable=True)]
    [col] = compile_columns(fields, ["Industry"])
    [row] = enrich_rows([{"Id": "1", "Industry": "NRG"}], fields, {"Industry": OPTS})
    reg = default_cell_types()
    assert reg.render_view(col, row) == "Energy"
    spec = reg.render_edit(col, row)
    assert spec.widget == "select"
    assert [o.value for o in spec.options] == ["BANK", "NRG"]
    assert spec.placeholder == "Select Industry"


def test_registry_registration_rules() -> None:
    reg = CellTypeRegistry()
    reg.register(PicklistCellType())
    assert PICKLIST_KIND in reg
    assert reg.names() == [PICKLIST_KIND]
    with pytest.raises(CellTypeError):
        reg.register(PicklistCellType())
    reg.register(PicklistCellType(), replace=True)
    with pytest.raises(CellTypeError):
        reg.get("rating-stars")
    with pytest.raises(CellTypeError):
        reg.register(object())  # type: ignore[arg-type]


def test_custom_cell_type_satisfies_protocol() -> None:
    class Stars:
        name = "rating-stars"
        attributes = frozenset({"max"})

        def render_view(self, value, attrs):
            return "*" * int(value or 0)

        def render_edit(self, value, attrs):
            return EditSpec(widget="number", value=value)

    assert isinstance(Stars(), CellType)
    reg = CellTypeRegistry([Stars()])
    assert reg.get("rating-stars").render_view(3, {}) == "***"
