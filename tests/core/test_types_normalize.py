import pytest

from schemagrid.core.types import RAW_TYPE_MAP, CanonicalType, is_enum_type, normalize_type


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("STRING", CanonicalType.TEXT),
        ("ID", CanonicalType.TEXT),
        ("REFERENCE", CanonicalType.TEXT),
        ("EMAIL", CanonicalType.TEXT),
        ("URL", CanonicalType.URL),
        ("PHONE", CanonicalType.PHONE),
        ("BOOLEAN", CanonicalType.BOOLEAN),
        ("CURRENCY", CanonicalType.CURRENCY),
        ("PERCENT", CanonicalType.PERCENT),
        ("DOUBLE", CanonicalType.NUMBER),
        ("INTEGER", CanonicalType.NUMBER),
        ("LONG", CanonicalType.NUMBER),
        ("DECIMAL", CanonicalType.NUMBER),
        ("DATE", CanonicalType.DATE),
        ("DATETIME", CanonicalType.DATETIME),
        ("GEOLOCATION", CanonicalType.LOCATION),
        ("LOCATION", CanonicalType.LOCATION),
        ("PICKLIST", CanonicalType.ENUM),
        ("MULTIPICKLIST", CanonicalType.ENUM),
    ],
)
def test_normalize_type_maps_known_tags(raw: str, expected: CanonicalType) -> None:
    assert normalize_type(raw) is expected


def test_normalize_type_is_case_insensitive_and_trims() -> None:
    assert normalize_type("picklist") is CanonicalType.ENUM
    assert normalize_type("  Currency ") is CanonicalType.CURRENCY


def test_normalize_type_unknown_or_missing_falls_back_to_text() -> None:
    for raw in (None, "", "TEXTAREA", "BASE64", "ENCRYPTEDSTRING", 42, object()):
        assert normalize_type(raw) is CanonicalType.TEXT


def test_canonical_values_are_lower_snake() -> None:
    for member in CanonicalType:
        assert member.value == member.name.lower()
    assert set(RAW_TYPE_MAP.values()) == set(CanonicalType)


def test_is_enum_type() -> None:
    assert is_enum_type("PICKLIST")
    assert is_enum_type("multipicklist")
    assert not is_enum_type("STRING")
    assert not is_enum_type(None)
