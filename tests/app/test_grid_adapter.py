from __future__ import annotations

import asyncio

import polars as pl

from app.demo import ACCOUNT_ENUMS, build_demo_services
from app.grid import build_column_config, diff_edits, rows_to_frame
from schemagrid.core.cells import default_cell_types
from schemagrid.core.models import ColumnDescriptor
from schemagrid.grid import CollectingNotifier, GridController


def _account_controller() -> GridController:
    ctrl = GridController(*build_demo_services(), CollectingNotifier())
    asyncio.run(ctrl.open("Account"))
    return ctrl


def test_demo_account_defaults_and_paging() -> None:
    ctrl = _account_controller()
    assert ctrl.header_title == "Account Manager"
    assert ctrl.state.selected_fields == ["Name", "AccountNumber", "Industry", "Type"]
    assert (ctrl.total_count, ctrl.total_pages, len(ctrl.rows)) == (25, 3, 10)


def test_demo_contact_defaults() -> None:
    ctrl = GridController(*build_demo_services(), CollectingNotifier())
    asyncio.run(ctrl.open("Contact"))
    assert ctrl.state.selected_fields == ["Name", "Email", "Phone", "LeadSource"]
    assert ctrl.total_count == 12


def test_column_config_uses_picklist_select_and_hides_key() -> None:
    ctrl = _account_controller()
    config = build_column_config(ctrl.columns, ctrl.rows, ctrl.cell_types)
    assert config["Id"] is None
    industry = config["Industry"]
    assert industry["type_config"]["type"] == "selectbox"
    assert industry["type_config"]["options"] == list(ACCOUNT_ENUMS["Industry"])
    assert config["Name"]["type_config"]["type"] == "text"


def test_column_config_standard_kinds() -> None:
    cols = [
        ColumnDescriptor(label="Revenue", field_name="AnnualRevenue", kind="currency", editable=True,
                         type_attributes={"currencyCode": "EUR", "maximumFractionDigits": 2}),
        ColumnDescriptor(label="Active", field_name="Active", kind="boolean"),
        ColumnDescriptor(label="Since", field_name="Since", kind="date-local"),
        ColumnDescriptor(label="Created", field_name="CreatedDate", kind="date", type_attributes={"hour12": True}),
        ColumnDescriptor(label="Site", field_name="Website", kind="url"),
        ColumnDescriptor(label="Mystery", field_name="X", kind="sparkline"),
    ]
    config = build_column_config(cols, [], default_cell_types())
    assert config["AnnualRevenue"]["type_config"]["type"] == "number"
    assert config["AnnualRevenue"]["type_config"]["format"] == "%.2f EUR"
    assert config["AnnualRevenue"]["disabled"] is False
    assert config["Active"]["type_config"]["type"] == "checkbox"
    assert config["Since"]["type_config"]["type"] == "date"
    assert config["CreatedDate"]["type_config"]["type"] == "datetime"
    assert config["Website"]["type_config"]["type"] == "link"
    assert config["X"]["type_config"]["type"] == "text"


def test_rows_to_frame_orders_columns() -> None:
    ctrl = _account_controller()
    frame = rows_to_frame(ctrl.rows, ctrl.columns)
    assert frame.columns == ["Id", "Name", "AccountNumber", "Industry", "Type"]
    assert frame.height == 10
    empty = rows_to_frame([], ctrl.columns)
    assert empty.shape == (0, 5)


def test_diff_edits_emits_partial_records() -> None:
    before = pl.DataFrame({"Id": ["1", "2"], "Name": ["Acme", "Blue"], "Industry": ["Energy", "Retail"]})
    after = pl.DataFrame({"Id": ["1", "2"], "Name": ["Acme", "Blue Co"], "Industry": ["Energy", "Banking"]})
    assert diff_edits(before, after) == [{"Id": "2", "Name": "Blue Co", "Industry": "Banking"}]
    assert diff_edits(before, before) == []


def test_inline_edit_round_trip_through_controller() -> None:
    ctrl = _account_controller()
    before = rows_to_frame(ctrl.rows, ctrl.columns)
    after = before.with_columns(
        pl.when(pl.col("Id") == "00100002").then(pl.lit("Banking")).otherwise(pl.col("Industry")).alias("Industry")
    )
    ctrl.set_draft_values(diff_edits(before, after))
    assert ctrl.draft_values == [{"Id": "00100002", "Industry": "Banking"}]
    assert asyncio.run(ctrl.save_edits()) is True
    assert {r["Id"]: r["Industry"] for r in ctrl.rows}["00100002"] == "Banking"
