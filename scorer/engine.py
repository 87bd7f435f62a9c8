"""
scorer/engine.py — agregacja prawdopodobieństw klas.

Dla każdej wybranej reguły (jedna na grupę pytań) dodaje jej delty do
prawdopodobieństw klas stanu bazowego, po czym sortuje klasy malejąco.

Zasady:
  - stan bazowy nie jest modyfikowany (wynik to nowe obiekty ClassState)
  - dodawane są wyłącznie delty > 0; delta ujemna lub zerowa nie obniża
    prawdopodobieństwa klasy
  - długość wektora delt musi równać się liczbie klas (DeltaLengthError)
  - sortowanie stabilne: remisy zachowują kolejność stanu bazowego

Publiczne API:
  aggregate(base_state, selections)  -> list[ClassState]
  bind_deltas(rule, base_state)      -> dict[ClassId, float]
  format_probability(p)              -> str (6 miejsc po przecinku)
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping, Sequence, Union

from data_model import (
    ClassId,
    ClassState,
    DeltaLengthError,
    ScoreRule,
    SelectionSet,
)

Selections = Union[SelectionSet, Mapping[int, ScoreRule], Iterable[ScoreRule]]

PROBABILITY_DECIMALS = 6


def bind_deltas(rule: ScoreRule, base_state: Sequence[ClassState]) -> dict[ClassId, float]:
    """
    Wiąże pozycyjny wektor delt reguły z identyfikatorami klas.

    Raises:
        DeltaLengthError gdy len(rule.deltas) != len(base_state).
    """
    if len(rule.deltas) != len(base_state):
        raise DeltaLengthError(rule.id, expected=len(base_state), got=len(rule.deltas))
    return {cls.id: float(delta) for cls, delta in zip(base_state, rule.deltas)}


def _selected_rules(selections: Selections) -> list[ScoreRule]:
    if isinstance(selections, SelectionSet):
        return list(selections)
    if isinstance(selections, Mapping):
        return list(selections.values())
    return list(selections)


def aggregate(
    base_state: Sequence[ClassState],
    selections: Selections,
) -> list[ClassState]:
    """
    Sumuje dodatnie delty wybranych reguł i zwraca ranking klas.

    Przykład::

        base  = [A 0.1, B 0.2]
        delty = [0.5, -0.3]          # -0.3 dla B nie jest stosowane
        wynik = [A 0.6, B 0.2]
    """
    totals: dict[ClassId, float] = {cls.id: cls.probability for cls in base_state}
    if len(totals) != len(base_state):
        raise ValueError("Stan bazowy zawiera powtórzone identyfikatory klas.")

    # najpierw walidacja wszystkich reguł, błąd nie zostawia częściowej sumy
    bound = [bind_deltas(rule, base_state) for rule in _selected_rules(selections)]
    for deltas in bound:
        for class_id, delta in deltas.items():
            if delta > 0:
                totals[class_id] += delta

    result = [replace(cls, probability=totals[cls.id]) for cls in base_state]
    return sorted(result, key=lambda c: c.probability, reverse=True)


def format_probability(p: float) -> str:
    return f"{p:.{PROBABILITY_DECIMALS}f}"
