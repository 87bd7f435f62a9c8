"""
matcher/engine.py — dopasowanie faktów do reguł produkcyjnych.

Reguła odpala, gdy KAŻDY jej warunek ma fakt o równym (przyciętym)
kluczu i równej (przyciętej) wartości. Brak negacji, brak alternatywy.

Publiczne API:
  evaluate(rules, facts)  -> MatchResult
  rule_fires(rule, pairs) -> bool
  NO_MATCH_MESSAGE        komunikat zastępczy dla warstwy wyświetlania
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Union

from data_model import Fact, FactSet, ParsedRule

NO_MATCH_MESSAGE = "Нет соответствующих действий"

FactsInput = Union[FactSet, Iterable[Fact], Mapping[str, str]]


@dataclass(frozen=True, slots=True)
class MatchResult:
    """
    Wynik ewaluacji.

    - fired:   reguły, które odpaliły (w kolejności listy reguł)
    - actions: ich akcje, w tej samej kolejności
    - matched: jawny wskaźnik "jest wynik" (zamiast napisu-wartownika)
    """
    fired:   tuple[ParsedRule, ...]
    actions: tuple[str, ...]

    @property
    def matched(self) -> bool:
        return bool(self.fired)

    def display_lines(self) -> list[str]:
        """Akcje do wyświetlenia albo pojedynczy komunikat o braku dopasowań."""
        if not self.matched:
            return [NO_MATCH_MESSAGE]
        return list(self.actions)


def _to_pairs(facts: FactsInput) -> set[tuple[str, str]]:
    if isinstance(facts, FactSet):
        return facts.pairs()
    if isinstance(facts, Mapping):
        return {(str(k).strip(), str(v).strip()) for k, v in facts.items()}
    return {(f.key.strip(), f.value.strip()) for f in facts}


def rule_fires(rule: ParsedRule, pairs: set[tuple[str, str]]) -> bool:
    return all((c.key, c.value) in pairs for c in rule.conditions)


def evaluate(rules: Iterable[ParsedRule], facts: FactsInput) -> MatchResult:
    """
    Zwraca reguły spełnione przez fakty.

    Funkcja czysta — nie modyfikuje ani reguł, ani faktów.
    """
    pairs = _to_pairs(facts)
    fired = tuple(rule for rule in rules if rule_fires(rule, pairs))
    return MatchResult(fired=fired, actions=tuple(r.action for r in fired))
