from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from farmacia_bot.domain.entities.pharmacy import Pharmacy


class Phase(str, Enum):
    IDLE = "idle"
    AWAITING_DRUG_CONFIRMATION = "awaiting_drug_confirmation"
    AWAITING_ADDRESS = "awaiting_address"
    AWAITING_DRUG_NAME = "awaiting_drug_name"
    SELECTING_PHARMACY = "selecting_pharmacy"
    AWAITING_ORDER_CONFIRMATION = "awaiting_order_confirmation"


@dataclass(frozen=True)
class PendingOrder:
    pharmacy_name: str
    pharmacy_phone: str  # normalized, e.g. 5511987654321
    drug_name: str
    created_at: float | None = None


@dataclass(frozen=True)
class Session:
    user_id: str
    phase: Phase = Phase.IDLE
    drug_name_candidate: str | None = None
    confirmed_drug_name: str | None = None
    address: str | None = None
    candidate_pharmacies: tuple[Pharmacy, ...] = field(default_factory=tuple)
    selected_pharmacy: Pharmacy | None = None
    pending_order: PendingOrder | None = None
    updated_at: float | None = None
