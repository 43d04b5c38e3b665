"""
Header for the schemagrid Streamlit application.

Renders the object-type selector and the "<Label> Manager" title. Selecting a
different object type opens a new grid session on the controller.
"""

from __future__ import annotations

import streamlit as st

from schemagrid.grid import GridController

from .helpers import run


def render_header(
    ctrl: GridController,
    object_types: list[str],
    *,
    default_object: str | None = None,
) -> str | None:
    """Render the header and (re)open the controller for the selected object type.

    Args:
        ctrl (GridController): Session controller.
        object_types (list[str]): Object types offered by the schema service.
        default_object (str | None): Preselected object type, if present in the list.

    Returns:
        str | None: The selected object type, or None when none are available.
    """
    if not object_types:
        st.markdown("### schemagrid")
        st.error("The schema service reports no object types.")
        return None

    index = object_types.index(default_object) if default_object in object_types else 0
    c1, c2 = st.columns([0.75, 0.25])
    with c2:
        selected = st.selectbox("Object", object_types, index=index, key="grid_object_type")
    if selected and selected != ctrl.object_type:
        run(ctrl.open(selected))

    with c1:
        st.markdown(f"### {ctrl.header_title or selected}")
        if ctrl.header_icon:
            st.caption(ctrl.header_icon)
    return selected
