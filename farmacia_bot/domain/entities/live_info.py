from __future__ import annotations

from dataclasses import dataclass
from typing import Union

STATUS_UNAVAILABLE = "Status não disponível"
STATUS_OPEN = "Aberta agora"
STATUS_CLOSED = "Fechada no momento"


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class OpenNow:
    is_open: bool


@dataclass(frozen=True)
class StructuredHours:
    # (day, hours) pairs in the order the upstream returned them
    entries: tuple[tuple[str, str], ...]


StatusInfo = Union[PlainText, OpenNow, StructuredHours]


def render_status(status: StatusInfo | None) -> str:
    """Canonical, user-facing rendering of any upstream status shape."""
    if status is None:
        return STATUS_UNAVAILABLE
    if isinstance(status, OpenNow):
        return STATUS_OPEN if status.is_open else STATUS_CLOSED
    if isinstance(status, StructuredHours):
        lines = [f"{day}: {hours}" for day, hours in status.entries if day and hours]
        return "\n".join(lines) if lines else STATUS_UNAVAILABLE
    text = " ".join((status.text or "").split())
    return text or STATUS_UNAVAILABLE


@dataclass(frozen=True)
class LiveInfo:
    phone: str | None = None
    status: str = STATUS_UNAVAILABLE

    @property
    def has_status(self) -> bool:
        return self.status != STATUS_UNAVAILABLE

    @staticmethod
    def unavailable() -> "LiveInfo":
        return LiveInfo(phone=None, status=STATUS_UNAVAILABLE)
