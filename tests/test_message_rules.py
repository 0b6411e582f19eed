"""
Tests for the keyword rules that drive the dialogue.
"""

from __future__ import annotations

import pytest

from farmacia_bot.application.utils.message_rules import (
    is_affirmative,
    is_bare_negative,
    is_cancellation,
    is_greeting,
    is_negative,
    is_pharmacy_confirmation,
    parse_selection,
    strip_greeting,
)


@pytest.mark.parametrize("text", ["cancelar", "Cancela!", "quero parar", "SAIR", "voltar por favor", "stop"])
def test_cancellation_words(text):
    assert is_cancellation(text)


@pytest.mark.parametrize("text", ["dipirona", "não", "sim", "Rua das Flores, 10"])
def test_not_cancellation(text):
    assert not is_cancellation(text)


@pytest.mark.parametrize("text", ["Oi", "Olá, tudo bem?", "Bom dia", "boa noite!", "ajuda", "menu"])
def test_greetings(text):
    assert is_greeting(text)


@pytest.mark.parametrize("text", ["Oi, preciso de dipirona", "dipirona", "", "bom"])
def test_not_greetings(text):
    assert not is_greeting(text)


def test_strip_greeting_keeps_request():
    assert strip_greeting("Oi, preciso de dipirona") == "preciso de dipirona"
    assert strip_greeting("Bom dia! Losartana") == "Losartana"
    assert strip_greeting("Oiapoque") == "Oiapoque"


@pytest.mark.parametrize("text", ["sim", "Sim!", "s", "ok", "claro", "confirmado", "pode sim"])
def test_affirmative(text):
    assert is_affirmative(text)


@pytest.mark.parametrize("text", ["não", "não confirmo", "talvez", ""])
def test_not_affirmative(text):
    assert not is_affirmative(text)


def test_negatives():
    assert is_negative("Não, obrigado")
    assert is_bare_negative("não")
    assert is_bare_negative("Nao!")
    assert not is_bare_negative("não sei o nome")
    assert not is_bare_negative("")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1", 1),
        ("quero a número 3", 3),
        ("a segunda", 2),
        ("farmácia dois por favor", 2),
        ("nenhuma", None),
        ("", None),
    ],
)
def test_parse_selection(text, expected):
    assert parse_selection(text) == expected


@pytest.mark.parametrize("text", ["Sim, temos", "sim!", "Yes"])
def test_pharmacy_confirmation(text):
    assert is_pharmacy_confirmation(text)


@pytest.mark.parametrize("text", ["Ok, vou verificar", "pode ser", "Não temos", "sim? não", "claro"])
def test_not_pharmacy_confirmation(text):
    assert not is_pharmacy_confirmation(text)
