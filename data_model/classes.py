"""
Klasy wynikowe agregatora i stan wyborów użytkownika.

ClassState   — klasa z prawdopodobieństwem (rekord InitialState.json)
SelectionSet — wybór jednej reguły na grupę pytań (stan sesji)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, TypeAlias

from .rules import QuestGroup, ScoreRule

ClassId: TypeAlias = int


@dataclass(frozen=True, slots=True)
class ClassState:
    """
    Klasa wynikowa i jej prawdopodobieństwo.

    Kolejność listy stanu bazowego wyznacza pozycje w wektorach delt.
    """
    id:          ClassId
    name:        str
    probability: float


class SelectionSet:
    """
    Wybrane odpowiedzi: grupa pytań → reguła.

    Wybór reguły z grupy, która ma już odpowiedź, zastępuje poprzednią.
    """

    def __init__(self) -> None:
        self._by_group: dict[QuestGroup, ScoreRule] = {}

    def select(self, rule: ScoreRule) -> ScoreRule | None:
        """Ustawia wybór dla grupy reguły; zwraca poprzednio wybraną regułę."""
        previous = self._by_group.get(rule.quest_group)
        self._by_group[rule.quest_group] = rule
        return previous

    def unselect(self, group: QuestGroup) -> ScoreRule | None:
        return self._by_group.pop(group, None)

    def clear(self) -> None:
        self._by_group.clear()

    def get(self, group: QuestGroup) -> ScoreRule | None:
        return self._by_group.get(group)

    def as_mapping(self) -> dict[QuestGroup, ScoreRule]:
        return dict(self._by_group)

    def __iter__(self) -> Iterator[ScoreRule]:
        return iter(list(self._by_group.values()))

    def __len__(self) -> int:
        return len(self._by_group)
