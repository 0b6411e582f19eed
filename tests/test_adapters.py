from __future__ import annotations

import re

import pytest

from farmacia_bot.infrastructure.business_info.maps_scraper import find_phone, find_status
from farmacia_bot.infrastructure.business_info.serpapi_client import SerpApiBusinessInfo
from farmacia_bot.infrastructure.geo.overpass_client import build_query


def test_overpass_query():
    query = build_query(-23.55, -46.63, 2000, "pharmacy")

    assert query.startswith("[out:json];")
    assert 'node["amenity"="pharmacy"](around:2000, -23.55, -46.63);' in query
    assert query.endswith("out;")


def test_find_status_skips_page_chrome():
    texts = [
        "Rotas",
        "Aberto agora " + "x" * 100,
        "  Fechado ⋅ Abre às 08:00  ",
    ]
    assert find_status(texts) == "Fechado ⋅ Abre às 08:00"
    assert find_status(["Salvar", "Compartilhar"]) is None


def test_find_phone_first_match():
    pattern = re.compile(r"\(?\d{2}\)?\s?\d{4,5}-\d{4}")

    assert find_phone(["Avaliações", "(11) 3456-7890", "(11) 98765-4321"], pattern) == "(11) 3456-7890"
    assert find_phone(["sem telefone"], pattern) is None


def test_serpapi_requires_key():
    with pytest.raises(ValueError):
        SerpApiBusinessInfo(api_key="", url="https://serpapi.com/search.json")
