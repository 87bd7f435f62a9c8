"""
matcher/loader.py — wczytywanie reguł i faktów z plików JSON.

Publiczne API:
  load_text_rules(path, strict, strip_action)   -> list[ParsedRule]
  load_facts_json(path)                         -> FactSet
  parse_fact_arg("klucz=wartość")               -> Fact
"""

from __future__ import annotations

import logging
import pathlib
from typing import Any

from data_model import Fact, FactSet, ParsedRule, RulesLoadError, TextRule
from data_model.schemas import (
    FACTS_SCHEMA,
    MATCH_RULES_SCHEMA,
    read_json,
    validate_document,
)

from .parser import parse_rules

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Reguły
# ---------------------------------------------------------------------------

def _text_rule_from_dict(d: dict) -> TextRule:
    rule_id = d.get("ID", d.get("id"))
    return TextRule(id=rule_id, text=d["TextRule"])


def load_text_records(path: pathlib.Path) -> list[TextRule]:
    """Wczytuje surowe rekordy rules.json (bez dekodowania tekstu)."""
    raw = read_json(path)
    validate_document(raw, MATCH_RULES_SCHEMA, path)
    return [_text_rule_from_dict(d) for d in raw]


def load_text_rules(
    path:         pathlib.Path,
    *,
    strict:       bool = True,
    strip_action: bool = False,
) -> list[ParsedRule]:
    """
    Wczytuje reguły dopasowania z rules.json.

    Oczekiwany format::

        [
            {"ID": 1, "TextRule": "ЕСЛИ класс=воин И раса=дварф ТО топор"},
            {"ID": 2, "TextRule": "..."}
        ]

    Reguły z tekstem niezgodnym ze wzorcem są pomijane.

    Args:
        strict: False → błąd wczytania jest tylko logowany (WARNING),
                a wynikiem jest pusta lista reguł.

    Raises:
        RulesLoadError (tylko gdy strict=True).
    """
    try:
        records = load_text_records(path)
    except RulesLoadError as e:
        if strict:
            raise
        log.warning("%s — kontynuacja z pustym zbiorem reguł.", e)
        return []

    rules = parse_rules(records, strip_action=strip_action)
    log.debug("Wczytano %d/%d reguł z %s", len(rules), len(records), path)
    return rules


# ---------------------------------------------------------------------------
# Fakty
# ---------------------------------------------------------------------------

def load_facts_json(path: pathlib.Path) -> FactSet:
    """
    Wczytuje fakty z pliku JSON.

    Oczekiwany format (oba warianty równoważne)::

        [{"key": "класс", "value": "воин"}, ...]
        {"facts": [{"key": "класс", "value": "воин"}, ...]}

    Powtórzony klucz nadpisuje wcześniejszą wartość.
    """
    raw = read_json(path)
    validate_document(raw, FACTS_SCHEMA, path)
    items = raw["facts"] if isinstance(raw, dict) else raw

    facts = FactSet()
    try:
        for item in items:
            facts.upsert(item["key"], _fact_value(item["value"]))
    except ValueError as e:
        raise RulesLoadError(path, [str(e)]) from e
    return facts


def _fact_value(value: Any) -> str:
    # JSON true/false → "true"/"false", jak w polu formularza
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_fact_arg(raw: str) -> Fact:
    """
    Parsuje fakt podany w wierszu poleceń.

    Przykłady::

        "класс=воин"      → Fact("класс", "воин")
        " level = 3 "     → Fact("level", "3")

    Raises:
        ValueError jeśli brak '=' albo klucz/wartość są puste.
    """
    key, sep, value = raw.partition("=")
    if not sep:
        raise ValueError(f"Nieprawidłowy format faktu (oczekiwano klucz=wartość): '{raw}'")
    return Fact(key, value)
