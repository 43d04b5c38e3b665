from __future__ import annotations

from app.ui import app as page


class _Controller:
    def __init__(self) -> None:
        self.cleared = 0

    async def clear_filters(self) -> bool:
        self.cleared += 1
        return True


def test_clear_resets_toolbar_and_sort_widgets(monkeypatch) -> None:
    state = {
        "grid_search": "acme",
        "grid_filter_field": "Industry",
        "grid_filter_operator": "equals",
        "grid_sort_by": "Name",
        "grid_sort_dir": "desc",
        "grid_editor_nonce": 2,
    }
    monkeypatch.setattr(page.st, "session_state", state)
    ctrl = _Controller()

    page._on_clear_filters(ctrl)

    assert ctrl.cleared == 1
    assert state["grid_search"] == ""
    assert state["grid_filter_field"] == ""
    assert state["grid_filter_operator"] == ""
    assert state["grid_sort_by"] == ""
    assert state["grid_sort_dir"] == "asc"
    assert state["grid_editor_nonce"] == 3
