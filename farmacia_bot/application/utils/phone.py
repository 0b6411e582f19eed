from __future__ import annotations

import re

CHAT_SUFFIX = "@c.us"


def normalize_phone(raw: str | None, country_code: str = "55") -> str | None:
    """
    Normalize a Brazilian phone number to the channel's international form.

    "(11) 98765-4321" -> "5511987654321", "011 3456-7890" -> "551134567890".
    Returns None when the digits cannot form area code + 8/9-digit number.
    """
    if not raw:
        return None
    digits = re.sub(r"\D", "", raw)
    if not digits:
        return None

    local = digits.lstrip("0")
    # only strip the country code when what remains can still be DDD + number;
    # area code 55 exists, so "55 3222-1234" must keep its leading 55
    if local.startswith(country_code) and len(local) - len(country_code) in (10, 11):
        local = local[len(country_code):]

    if len(local) in (10, 11):
        return country_code + local

    if len(digits) >= 12 and digits.startswith(country_code):
        return digits

    return None


def to_chat_id(normalized_phone: str) -> str:
    return normalized_phone + CHAT_SUFFIX


def phone_from_chat_id(chat_id: str | None, country_code: str = "55") -> str | None:
    """Sender address -> normalized phone, e.g. "5511987654321@c.us" -> "5511987654321"."""
    if not chat_id:
        return None
    return normalize_phone(chat_id.split("@", 1)[0], country_code=country_code)
