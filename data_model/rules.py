"""
Struktury danych reguł produkcyjnych.

Dwa rodzaje reguł:
  TextRule / ParsedRule — reguły dopasowania faktów
      "ЕСЛИ k1=v1 И k2=v2 ТО akcja"; tekst dekodowany raz, przy wczytaniu.
  ScoreRule             — odpowiedź w grupie pytań z wektorem delt
      prawdopodobieństw (delta[i] dotyczy klasy i stanu bazowego).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

# ---------------------------------------------------------------------------
# Aliasy typów
# ---------------------------------------------------------------------------

# Identyfikator reguły z pliku rules.json (pole "ID" lub "id")
RuleId: TypeAlias = int

# Numer grupy pytań (pole "QuestID")
QuestGroup: TypeAlias = int


# ---------------------------------------------------------------------------
# Reguły dopasowania faktów
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Condition:
    """Warunek 'klucz=wartość' — obie strony przycięte."""
    key:   str
    value: str

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


@dataclass(frozen=True, slots=True)
class TextRule:
    """Surowy rekord z rules.json: {"ID": 1, "TextRule": "ЕСЛИ … ТО …"}."""
    id:   RuleId | None
    text: str


@dataclass(frozen=True, slots=True)
class ParsedRule:
    """
    Reguła po dekodowaniu tekstu.

    - id:         identyfikator z pliku (None gdy brak)
    - text:       oryginalny tekst reguły
    - conditions: koniunkcja warunków (wszystkie muszą być spełnione)
    - action:     tekst po 'ТО' — domyślnie dosłownie, z wiodącą spacją
    """
    id:         RuleId | None
    text:       str
    conditions: tuple[Condition, ...]
    action:     str

    def __str__(self) -> str:
        label = f"[{self.id}] " if self.id is not None else ""
        conds = " И ".join(str(c) for c in self.conditions)
        return f"{label}ЕСЛИ {conds} ТО{self.action}"


# ---------------------------------------------------------------------------
# Reguły agregatora prawdopodobieństw
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ScoreRule:
    """
    Jedna odpowiedź w grupie pytań.

    - id:          identyfikator reguły
    - quest_group: grupa pytań (z grupy wybiera się dokładnie jedną regułę)
    - name:        krótka nazwa (opcjonalna w pliku, domyślnie "")
    - text:        treść odpowiedzi pokazywana użytkownikowi
    - deltas:      wektor delt; deltas[i] dotyczy klasy na pozycji i
    """
    id:          RuleId
    quest_group: QuestGroup
    name:        str
    text:        str
    deltas:      tuple[float, ...]

    @property
    def label(self) -> str:
        return self.name or self.text
