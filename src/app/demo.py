"""
Demo catalog for the schemagrid Streamlit app.

Builds two object types (Account, Contact) as Polars frames with deterministic
contents, derives their field metadata, and wraps them in the in-memory schema and
record services. Used when the app starts without an external backend.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import polars as pl

from schemagrid.grid import CatalogSchemaService, FrameRecordService, ObjectSchema, describe_frame

__all__ = [
    "ACCOUNT_ENUMS",
    "CONTACT_ENUMS",
    "demo_frames",
    "build_demo_catalog",
    "build_demo_services",
]

ACCOUNT_ENUMS: dict[str, tuple[str, ...]] = {
    "Industry": ("Agriculture", "Banking", "Energy", "Healthcare", "Retail", "Technology"),
    "Type": ("Prospect", "Customer - Direct", "Customer - Channel", "Partner"),
    "Rating": ("Hot", "Warm", "Cold"),
}

CONTACT_ENUMS: dict[str, tuple[str, ...]] = {
    "LeadSource": ("Web", "Phone Inquiry", "Partner Referral", "Trade Show"),
}

_ACCOUNT_NAMES = (
    "Acme", "Blue Harbor", "Cedar Labs", "Dunmore Foods", "Evergreen Power", "Fjord Retail",
    "Granite Bank", "Helix Health", "Ironwood", "Juniper Farms", "Kestrel Tech", "Lumen Energy",
    "Meridian Care", "Northwind", "Orchid Stores", "Pioneer Grain", "Quartz Systems",
    "Redwood Capital", "Summit Clinics", "Tidewater", "Umber Analytics", "Vantage Mart",
    "Willow Agro", "Xenon Grid", "Yarrow Health",
)


def _accounts() -> pl.DataFrame:
    n = len(_ACCOUNT_NAMES)
    industries = ACCOUNT_ENUMS["Industry"]
    types = ACCOUNT_ENUMS["Type"]
    ratings = ACCOUNT_ENUMS["Rating"]
    base_day = date(2024, 1, 8)
    return pl.DataFrame(
        {
            "Id": [f"001{i:05d}" for i in range(n)],
            "Name": list(_ACCOUNT_NAMES),
            "AccountNumber": [f"AC-{1000 + i}" for i in range(n)],
            "Industry": [industries[i % len(industries)] for i in range(n)],
            "Type": [types[i % len(types)] for i in range(n)],
            "Rating": [ratings[i % len(ratings)] if i % 5 else None for i in range(n)],
            "Phone": [f"(555) 01{i:02d}-{4000 + i}" for i in range(n)],
            "Website": [f"https://{name.lower().replace(' ', '')}.example.com" for name in _ACCOUNT_NAMES],
            "AnnualRevenue": [round(250_000.0 * (i + 1) * 1.37, 2) for i in range(n)],
            "NumberOfEmployees": [12 * (i + 1) + i % 7 for i in range(n)],
            "Active": [i % 4 != 0 for i in range(n)],
            "LastActivityDate": [base_day + timedelta(days=9 * i) for i in range(n)],
            "CreatedDate": [datetime(2023, 3, 1, 9, 30) + timedelta(days=11 * i, hours=i) for i in range(n)],
            "Description": [f"{name} account notes." for name in _ACCOUNT_NAMES],
        }
    )


def _contacts() -> pl.DataFrame:
    first = ("Ada", "Bo", "Cleo", "Dev", "Eun", "Femi", "Gus", "Hana", "Ivo", "Jia", "Kai", "Lena")
    last = ("Moss", "Ngata", "Ortiz", "Price", "Quinn", "Rao", "Silva", "Tan", "Umar", "Voss", "Wu", "Young")
    sources = CONTACT_ENUMS["LeadSource"]
    n = len(first)
    return pl.DataFrame(
        {
            "Id": [f"003{i:05d}" for i in range(n)],
            "Name": [f"{a} {b}" for a, b in zip(first, last, strict=True)],
            "Email": [f"{a.lower()}.{b.lower()}@example.com" for a, b in zip(first, last, strict=True)],
            "Phone": [f"(555) 02{i:02d}-{5000 + i}" for i in range(n)],
            "LeadSource": [sources[i % len(sources)] for i in range(n)],
            "Birthdate": [date(1980 + i, (i % 12) + 1, (i % 27) + 1) for i in range(n)],
        }
    )


def demo_frames() -> dict[str, pl.DataFrame]:
    return {"Account": _accounts(), "Contact": _contacts()}


def build_demo_catalog(frames: dict[str, pl.DataFrame]) -> dict[str, ObjectSchema]:
    """Field metadata for the demo frames, with service-style type overrides."""
    account_fields = describe_frame(
        frames["Account"],
        name_field="Name",
        overrides={
            "AccountNumber": {"isExternalId": True, "label": "Account Number"},
            "Industry": {"type": "PICKLIST"},
            "Type": {"type": "PICKLIST", "label": "Account Type"},
            "Rating": {"type": "PICKLIST"},
            "Phone": {"type": "PHONE"},
            "Website": {"type": "URL"},
            "AnnualRevenue": {"type": "CURRENCY", "label": "Annual Revenue"},
            "NumberOfEmployees": {"label": "Employees"},
            "LastActivityDate": {"label": "Last Activity", "isUpdateable": False},
            "CreatedDate": {"label": "Created Date", "isUpdateable": False},
            "Description": {"type": "TEXTAREA"},
        },
    )
    contact_fields = describe_frame(
        frames["Contact"],
        name_field="Name",
        overrides={
            "Email": {"type": "EMAIL"},
            "Phone": {"type": "PHONE"},
            "LeadSource": {"type": "PICKLIST", "label": "Lead Source"},
        },
    )
    return {
        "Account": ObjectSchema(label="Account", fields=account_fields, enum_values=ACCOUNT_ENUMS),
        "Contact": ObjectSchema(label="Contact", fields=contact_fields, enum_values=CONTACT_ENUMS),
    }


def build_demo_services() -> tuple[CatalogSchemaService, FrameRecordService]:
    frames = demo_frames()
    return CatalogSchemaService(build_demo_catalog(frames)), FrameRecordService(frames)
