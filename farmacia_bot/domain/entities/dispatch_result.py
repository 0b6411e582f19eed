from dataclasses import dataclass


@dataclass(frozen=True)
class DispatchResult:
    success: bool
    message: str
    phone: str | None = None  # normalized number the order went to
