"""
matcher — dopasowanie faktów do reguł "ЕСЛИ … И … ТО …".

Publiczne API:
  parse_rule(text, rule_id, strip_action)       → ParsedRule
  parse_rules(records, strip_action)            → list[ParsedRule]
  evaluate(rules, facts)                        → MatchResult
  load_text_records(path)                       → list[TextRule]
  load_text_rules(path, strict, strip_action)   → list[ParsedRule]
  load_facts_json(path)                         → FactSet
  parse_fact_arg(raw)                           → Fact
  NO_MATCH_MESSAGE                              komunikat "brak akcji"
"""

from .engine import NO_MATCH_MESSAGE, MatchResult, evaluate, rule_fires
from .loader import (
    load_facts_json,
    load_text_records,
    load_text_rules,
    parse_fact_arg,
)
from .parser import parse_rule, parse_rules

__all__ = [
    "NO_MATCH_MESSAGE",
    "MatchResult",
    "evaluate",
    "rule_fires",
    "load_facts_json",
    "load_text_records",
    "load_text_rules",
    "parse_fact_arg",
    "parse_rule",
    "parse_rules",
]
