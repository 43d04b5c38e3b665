"""
Streamlit application orchestrator for schemagrid.

This module composes the header, the toolbar (search, filter, column picker, sort),
the editable grid and the pagination footer around one GridController kept in
``st.session_state``. Widgets call controller handlers from ``on_change`` /
``on_click`` callbacks, which run before the rerun that repaints the page.

Responsibilities:
    - Configure Streamlit page.
    - Build the controller once per browser session from GridSettings and the demo services.
    - Translate widget events into controller handlers.
    - Render the data editor and route inline edits back through ``save_edits``.

Notes:
    - The data editor is keyed by the controller's fetch sequence so a fresh page of
      records replaces any stale editor state.
    - Notifications raised by the controller are drained into toasts on every rerun.
"""

from __future__ import annotations

from typing import Any

import streamlit as st

from app.demo import build_demo_services
from app.grid import build_column_config, diff_edits, rows_to_frame
from schemagrid.grid import CollectingNotifier, GridController, GridSettings, Phase

from .header import render_header
from .helpers import run, show_notifications

_CTRL_KEY = "grid_controller"
_SCHEMA_KEY = "grid_schema"
_NOTIFIER_KEY = "grid_notifier"
_EDITOR_NONCE = "grid_editor_nonce"


def _session_controller(settings: GridSettings) -> tuple[GridController, Any, CollectingNotifier]:
    if _CTRL_KEY not in st.session_state:
        schema, records = build_demo_services()
        notifier = CollectingNotifier()
        st.session_state[_SCHEMA_KEY] = schema
        st.session_state[_NOTIFIER_KEY] = notifier
        st.session_state[_CTRL_KEY] = GridController(schema, records, notifier, settings)
        st.session_state[_EDITOR_NONCE] = 0
    return (
        st.session_state[_CTRL_KEY],
        st.session_state[_SCHEMA_KEY],
        st.session_state[_NOTIFIER_KEY],
    )


# ----------------------------
# Widget callbacks
# ----------------------------


def _on_search(ctrl: GridController) -> None:
    run(ctrl.search(st.session_state.get("grid_search", "")))


def _on_filter_field(ctrl: GridController) -> None:
    ctrl.change_filter_field(st.session_state.get("grid_filter_field") or None)


def _on_filter_operator(ctrl: GridController) -> None:
    ctrl.set_filter_operator(st.session_state.get("grid_filter_operator") or None)


def _on_apply_filter(ctrl: GridController, value_key: str) -> None:
    ctrl.set_filter_value(st.session_state.get(value_key))
    run(ctrl.apply_filter())


def _on_clear_filters(ctrl: GridController) -> None:
    st.session_state["grid_search"] = ""
    st.session_state["grid_filter_field"] = ""
    st.session_state["grid_filter_operator"] = ""
    st.session_state["grid_sort_by"] = ""
    st.session_state["grid_sort_dir"] = "asc"
    st.session_state[_EDITOR_NONCE] = st.session_state.get(_EDITOR_NONCE, 0) + 1
    run(ctrl.clear_filters())


def _on_sort(ctrl: GridController) -> None:
    run(ctrl.sort(st.session_state.get("grid_sort_by", ""), st.session_state.get("grid_sort_dir", "asc")))


def _on_save_fields(ctrl: GridController, picker_key: str) -> None:
    run(ctrl.save_field_selection(st.session_state.get(picker_key, [])))


def _on_save_edits(ctrl: GridController) -> None:
    run(ctrl.save_edits())


def _on_cancel_edits(ctrl: GridController) -> None:
    ctrl.set_draft_values([])
    st.session_state[_EDITOR_NONCE] = st.session_state.get(_EDITOR_NONCE, 0) + 1


def _on_previous(ctrl: GridController) -> None:
    run(ctrl.previous_page())


def _on_next(ctrl: GridController) -> None:
    run(ctrl.next_page())


# ----------------------------
# Sections
# ----------------------------


def _render_filter_value(ctrl: GridController) -> str:
    """Value input matching the filter field's kind; returns its session key."""
    field_name = ctrl.state.filter_field
    key = f"grid_filter_value_{field_name or 'none'}"
    ui = ctrl.filter_ui
    if ui.is_enum_field:
        labels = {opt.value: opt.label for opt in ui.options}
        st.selectbox("Value", [""] + list(labels), key=key, format_func=lambda v: labels.get(v, "--"))
    elif ui.is_date_field or ui.is_datetime_field:
        st.date_input("Value", value=None, key=key)
    else:
        st.text_input("Value", key=key, disabled=not field_name)
    return key


def _render_toolbar(ctrl: GridController) -> None:
    st.text_input(
        "Search",
        key="grid_search",
        placeholder="Search the displayed text fields",
        on_change=_on_search,
        args=(ctrl,),
    )

    field_labels = {opt.value: opt.label for opt in ctrl.field_options}
    op_labels = {opt.value: opt.label for opt in ctrl.operator_options}
    c1, c2, c3, c4, c5 = st.columns([0.25, 0.2, 0.3, 0.12, 0.13], vertical_alignment="bottom")
    with c1:
        st.selectbox(
            "Filter field",
            [""] + list(field_labels),
            key="grid_filter_field",
            format_func=lambda v: field_labels.get(v, "--"),
            on_change=_on_filter_field,
            args=(ctrl,),
        )
    with c2:
        st.selectbox(
            "Operator",
            [""] + list(op_labels),
            key="grid_filter_operator",
            format_func=lambda v: op_labels.get(v, "--"),
            on_change=_on_filter_operator,
            args=(ctrl,),
        )
    with c3:
        value_key = _render_filter_value(ctrl)
    with c4:
        st.button("Apply", on_click=_on_apply_filter, args=(ctrl, value_key), use_container_width=True)
    with c5:
        st.button("Clear", on_click=_on_clear_filters, args=(ctrl,), use_container_width=True)

    c_fields, c_sort, c_dir = st.columns([0.5, 0.3, 0.2], vertical_alignment="bottom")
    with c_fields, st.popover("Columns", use_container_width=True):
        all_labels = {opt.value: opt.label for opt in ctrl.available_field_options}
        picker_key = f"grid_field_picker_{ctrl.object_type}"
        st.multiselect(
            "Displayed fields",
            list(all_labels),
            default=[f for f in ctrl.state.selected_fields if f in all_labels],
            format_func=lambda v: all_labels.get(v, v),
            key=picker_key,
        )
        st.button("Save", on_click=_on_save_fields, args=(ctrl, picker_key), key="grid_field_save")
    with c_sort:
        st.selectbox(
            "Sort by",
            [""] + list(field_labels),
            key="grid_sort_by",
            format_func=lambda v: field_labels.get(v, "--"),
            on_change=_on_sort,
            args=(ctrl,),
        )
    with c_dir:
        st.radio(
            "Direction",
            ["asc", "desc"],
            key="grid_sort_dir",
            horizontal=True,
            on_change=_on_sort,
            args=(ctrl,),
        )


def _render_grid(ctrl: GridController) -> None:
    pk = ctrl.settings.primary_key_field
    if not ctrl.columns:
        st.info("No displayable fields are selected.")
        return

    frame = rows_to_frame(ctrl.rows, ctrl.columns, pk)
    nonce = st.session_state.get(_EDITOR_NONCE, 0)
    edited = st.data_editor(
        frame,
        column_config=build_column_config(ctrl.columns, ctrl.rows, ctrl.cell_types, pk),
        hide_index=True,
        num_rows="fixed",
        use_container_width=True,
        key=f"grid_editor_{ctrl.fetch_sequence}_{nonce}",
    )
    ctrl.set_draft_values(diff_edits(frame, edited, pk))

    if ctrl.draft_values:
        c1, c2, c3 = st.columns([0.6, 0.2, 0.2])
        with c1:
            st.caption(f"{len(ctrl.draft_values)} edited record(s)")
        with c2:
            st.button("Save", on_click=_on_save_edits, args=(ctrl,), type="primary", key="grid_save_edits")
        with c3:
            st.button("Cancel", on_click=_on_cancel_edits, args=(ctrl,), key="grid_cancel_edits")


def _render_pagination(ctrl: GridController) -> None:
    c1, c2, c3 = st.columns([0.2, 0.6, 0.2])
    with c1:
        st.button(
            "Previous",
            on_click=_on_previous,
            args=(ctrl,),
            disabled=ctrl.is_first_page,
            use_container_width=True,
        )
    with c2:
        st.caption(
            f"Page {ctrl.state.page_number} of {ctrl.total_pages} · {ctrl.total_count} record(s)"
        )
    with c3:
        st.button(
            "Next",
            on_click=_on_next,
            args=(ctrl,),
            disabled=ctrl.is_last_page,
            use_container_width=True,
        )


def streamlit_app(default_object: str | None = None, settings: GridSettings | None = None) -> None:
    """Render the schemagrid Streamlit application.

    Args:
        default_object (str | None): Object type preselected in the header.
        settings (GridSettings | None): Grid settings; loaded from env/TOML when None.

    Returns:
        None
    """
    st.set_page_config(page_title="schemagrid", layout="wide")

    ctrl, schema, notifier = _session_controller(settings or GridSettings.load())

    selected = render_header(ctrl, schema.object_types(), default_object=default_object)
    if selected is None:
        return

    if ctrl.phase is Phase.ERROR:
        st.error(f"Field metadata for {selected} is unavailable.")
        show_notifications(notifier)
        return

    _render_toolbar(ctrl)
    if ctrl.dropped_fields:
        st.caption("Not shown (no field metadata): " + ", ".join(ctrl.dropped_fields))

    _render_grid(ctrl)
    _render_pagination(ctrl)
    show_notifications(notifier)

