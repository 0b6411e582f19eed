from __future__ import annotations

import re

CANCEL_WORDS = frozenset(
    {
        "cancelar",
        "cancela",
        "cancele",
        "cancel",
        "parar",
        "pare",
        "stop",
        "sair",
        "voltar",
    }
)

GREETING_WORDS = frozenset({"oi", "olá", "ola", "opa", "oie", "ajuda", "menu", "help", "início", "inicio"})
GREETING_PHRASES = ("bom dia", "boa tarde", "boa noite")
# words that may accompany a greeting without turning it into a request
GREETING_FILLER = frozenset({"tudo", "bem", "como", "vai", "você", "voce", "pessoal", "aí", "ai", "e"})

AFFIRMATIVE_WORDS = frozenset({"sim", "s", "yes", "ok", "claro", "isso", "pode", "confirmar", "confirmo", "confirma"})
NEGATIVE_WORDS = frozenset({"não", "nao", "n", "no", "nop", "negativo"})
# what a pharmacy must answer for the order to count as accepted
PHARMACY_CONFIRM_WORDS = frozenset({"sim", "yes"})

NUMBER_WORDS = {
    "um": 1,
    "uma": 1,
    "primeiro": 1,
    "primeira": 1,
    "dois": 2,
    "duas": 2,
    "segundo": 2,
    "segunda": 2,
    "três": 3,
    "tres": 3,
    "terceiro": 3,
    "terceira": 3,
    "quatro": 4,
    "quarto": 4,
    "quarta": 4,
    "cinco": 5,
    "quinto": 5,
    "quinta": 5,
}


def normalize_text(text: str) -> str:
    return " ".join((text or "").lower().split())


def tokens(text: str) -> list[str]:
    # \w is unicode-aware, so "não" and "três" stay single tokens
    return re.findall(r"\w+", normalize_text(text))


def is_cancellation(text: str) -> bool:
    return any(token in CANCEL_WORDS for token in tokens(text))


def is_greeting(text: str) -> bool:
    """A message made only of greeting words, e.g. "Oi", "Olá, tudo bem?", "Bom dia"."""
    normalized = " ".join(tokens(text))
    if not normalized:
        return False
    for phrase in GREETING_PHRASES:
        normalized = normalized.replace(phrase, " greeting ")
    parts = normalized.split()
    if not any(p == "greeting" or p in GREETING_WORDS for p in parts):
        return False
    return all(p == "greeting" or p in GREETING_WORDS or p in GREETING_FILLER for p in parts)


def strip_greeting(text: str) -> str:
    """Drop a leading greeting so "Oi, preciso de dipirona" keeps only the request."""
    stripped = (text or "").strip()
    lowered = stripped.lower()
    for phrase in GREETING_PHRASES + tuple(GREETING_WORDS):
        if lowered.startswith(phrase) and (len(lowered) == len(phrase) or not lowered[len(phrase)].isalnum()):
            return stripped[len(phrase):].lstrip(" ,.!;:-")
    return stripped


def is_negative(text: str) -> bool:
    return any(token in NEGATIVE_WORDS for token in tokens(text))


def is_affirmative(text: str) -> bool:
    """Negatives win, so "não confirmo" is not an affirmative."""
    parts = tokens(text)
    if any(token in NEGATIVE_WORDS for token in parts):
        return False
    return any(token in AFFIRMATIVE_WORDS or token.startswith("confirm") for token in parts)


def is_bare_negative(text: str) -> bool:
    parts = tokens(text)
    return bool(parts) and all(token in NEGATIVE_WORDS for token in parts)


def parse_selection(text: str) -> int | None:
    """First number in the text, digits or spoken words ("número dois")."""
    match = re.search(r"\d+", text or "")
    if match:
        return int(match.group(0))
    for token in tokens(text):
        if token in NUMBER_WORDS:
            return NUMBER_WORDS[token]
    return None


def is_pharmacy_confirmation(text: str) -> bool:
    """Stricter than is_affirmative: "ok, vou verificar" is not a stock confirmation."""
    parts = tokens(text)
    if any(token in NEGATIVE_WORDS for token in parts):
        return False
    return any(token in PHARMACY_CONFIRM_WORDS for token in parts)
