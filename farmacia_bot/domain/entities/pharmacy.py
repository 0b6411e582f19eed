from __future__ import annotations

from dataclasses import dataclass

UNNAMED_PHARMACY = "Farmácia sem nome"
UNKNOWN_ADDRESS = "Endereço não informado"


@dataclass(frozen=True)
class Pharmacy:
    name: str
    address: str
    phone: str | None = None  # hint from the nearby search, replaced by enrichment
    status: str | None = None

    def is_valid(self) -> bool:
        name = (self.name or "").strip()
        address = (self.address or "").strip()
        if not name or not address:
            return False
        if name.lower() == UNNAMED_PHARMACY.lower():
            return False
        if address.lower() == UNKNOWN_ADDRESS.lower():
            return False
        return True

    def dedupe_key(self) -> tuple[str, str]:
        return (self.name.strip().lower(), self.address.strip().lower())
