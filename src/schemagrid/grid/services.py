"""
Interfaces of the external collaborators the load orchestrator consumes.

- SchemaService: object label, accessible-field metadata and enum value sets per object type.
- RecordService: paged/filtered/sorted record fetches and partial-record updates.
- Notifier: user-facing notification sink (toasts in the Streamlit host).

Service methods are coroutines; the orchestrator awaits them from a single event
loop, so no two completions ever run at the same time. Timeouts belong to the
service implementations.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from schemagrid.core.models import FetchParams, FieldMetadata, RecordPage

__all__ = [
    "SchemaService",
    "RecordService",
    "Severity",
    "Notification",
    "Notifier",
    "CollectingNotifier",
]


@runtime_checkable
class SchemaService(Protocol):
    async def get_object_label(self, object_type: str) -> str: ...

    async def get_accessible_fields(self, object_type: str) -> Sequence[FieldMetadata | Mapping[str, Any]]: ...

    async def get_enum_values(self, object_type: str) -> Mapping[str, Sequence[Any]]: ...


@runtime_checkable
class RecordService(Protocol):
    async def get_records(self, params: FetchParams) -> RecordPage | Mapping[str, Any]: ...

    async def update_records(self, changed: Sequence[Mapping[str, Any]]) -> None:
        """Persist partial records (each carries the primary key); raise on failure."""
        ...


class Severity(Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    severity: Severity


@runtime_checkable
class Notifier(Protocol):
    def notify(self, title: str, message: str, severity: Severity) -> None: ...


@dataclass
class CollectingNotifier:
    """
    In-memory notification sink.

    Hosts drain it after each interaction (``drain()``); tests inspect ``items``.
    """

    items: list[Notification] = field(default_factory=list)

    def notify(self, title: str, message: str, severity: Severity) -> None:
        self.items.append(Notification(title=title, message=message, severity=severity))

    def drain(self) -> list[Notification]:
        out, self.items = self.items, []
        return out

    def of(self, severity: Severity) -> list[Notification]:
        return [n for n in self.items if n.severity is severity]
