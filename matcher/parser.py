"""
matcher/parser.py — dekodowanie tekstu reguły "ЕСЛИ … И … ТО …".

Publiczne API:
  parse_rule(text, rule_id, strip_action)   -> ParsedRule
  parse_rules(records, strip_action)        -> list[ParsedRule]

Składnia:
  ЕСЛИ <warunek> (И <warunek>)* ТО <akcja>
  warunek = klucz=wartość (białe znaki wokół klucza i wartości dowolne)

Akcja to tekst po 'ТО' — domyślnie dosłownie, razem z wiodącą spacją.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from data_model import Condition, MalformedRuleError, ParsedRule, RuleId, TextRule

log = logging.getLogger(__name__)

IF_KEYWORD   = "ЕСЛИ"
AND_KEYWORD  = "И"
THEN_KEYWORD = "ТО"

# Najkrótsza klauzula między 'ЕСЛИ ' a ' ТО' (pierwsze wystąpienie w tekście)
_RULE_RE = re.compile(rf"{IF_KEYWORD} (.+?) {THEN_KEYWORD}")
_AND_SEP = f" {AND_KEYWORD} "


def _parse_condition(raw: str, text: str) -> Condition:
    key, sep, value = raw.partition("=")
    if not sep:
        raise MalformedRuleError(text, f"warunek bez '=': {raw.strip()!r}")
    key = key.strip()
    if not key:
        raise MalformedRuleError(text, f"warunek bez klucza: {raw.strip()!r}")
    return Condition(key=key, value=value.strip())


def parse_rule(
    text:         str,
    rule_id:      RuleId | None = None,
    *,
    strip_action: bool = False,
) -> ParsedRule:
    """
    Dekoduje tekst reguły.

    Przykład::

        "ЕСЛИ region=north И level = 3 ТО alert"
          → conditions=(region=north, level=3), action=" alert"

    Raises:
        MalformedRuleError gdy brak wzorca 'ЕСЛИ … ТО' albo warunek
        nie ma postaci klucz=wartość.
    """
    m = _RULE_RE.search(text)
    if not m:
        raise MalformedRuleError(text, f"brak wzorca '{IF_KEYWORD} … {THEN_KEYWORD}'")

    conditions = tuple(
        _parse_condition(raw, text) for raw in m.group(1).split(_AND_SEP)
    )
    action = text[m.end():]
    if strip_action:
        action = action.strip()

    return ParsedRule(id=rule_id, text=text, conditions=conditions, action=action)


def parse_rules(
    records:      Iterable[TextRule],
    *,
    strip_action: bool = False,
) -> list[ParsedRule]:
    """
    Dekoduje listę reguł w kolejności wejścia.

    Reguły niepoprawne są pomijane po cichu (tylko log DEBUG).
    """
    parsed: list[ParsedRule] = []
    for record in records:
        try:
            parsed.append(parse_rule(record.text, record.id, strip_action=strip_action))
        except MalformedRuleError as e:
            log.debug("Pominięto regułę %s: %s", record.id, e.reason)
    return parsed
