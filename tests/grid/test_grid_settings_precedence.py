from __future__ import annotations

from pathlib import Path

import pytest

from schemagrid.grid.config import GridSettings

_ENV_KEYS = [
    "SCHEMAGRID_PAGE_SIZE",
    "SCHEMAGRID_DEFAULT_FIELD_COUNT",
    "SCHEMAGRID_CURRENCY_CODE",
    "SCHEMAGRID_PRIMARY_KEY_FIELD",
    "SCHEMAGRID_NAME_FIELD",
    "SCHEMAGRID_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_toml(tmp: Path, name: str, content: str) -> Path:
    p = tmp / name
    p.write_text(content)
    return p


def test_defaults_without_files_or_env(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    s = GridSettings.load()
    assert s == GridSettings()
    assert (s.page_size, s.default_field_count, s.currency_code) == (10, 4, "USD")


def test_env_overrides_toml(tmp_path: Path, monkeypatch) -> None:
    # Arrange TOML
    _write_toml(
        tmp_path,
        "schemagrid.toml",
        """
        [grid]
        page_size = 25
        currency_code = "eur"
        name_field = "Title"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    # Arrange ENV that should override TOML
    monkeypatch.setenv("SCHEMAGRID_PAGE_SIZE", "50")
    monkeypatch.setenv("SCHEMAGRID_LOG_LEVEL", "debug")

    s = GridSettings.load()

    assert s.page_size == 50  # env override
    assert s.currency_code == "EUR"  # from TOML, normalized
    assert s.name_field == "Title"
    assert s.log_level == "DEBUG"


def test_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    _write_toml(
        tmp_path,
        "pyproject.toml",
        """
        [project]
        name = "host"

        [tool.schemagrid.grid]
        default_field_count = 6
        primary_key_field = "RecordId"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    s = GridSettings.load()
    assert s.default_field_count == 6
    assert s.primary_key_field == "RecordId"


def test_invalid_values_keep_previous(tmp_path: Path, monkeypatch) -> None:
    _write_toml(tmp_path, "schemagrid.toml", 'page_size = 0\nlog_level = "LOUD"\n')
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SCHEMAGRID_DEFAULT_FIELD_COUNT", "many")
    s = GridSettings.load()
    assert s.page_size == 10
    assert s.log_level == "INFO"
    assert s.default_field_count == 4


def test_explicit_path_and_unparseable_file(tmp_path: Path) -> None:
    good = _write_toml(tmp_path, "custom.toml", "[grid]\npage_size = 15\n")
    assert GridSettings.from_toml(good).page_size == 15
    bad = _write_toml(tmp_path, "broken.toml", "[grid\npage_size = ")
    assert GridSettings.from_toml(bad) == GridSettings()
