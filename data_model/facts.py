"""
Fakty sesji: para klucz=wartość oraz zbiór faktów z semantyką upsert.

Zbiór faktów żyje tylko w pamięci bieżącej sesji i jest czyszczony
jawnie (clear). Klucze są unikalne — ponowne dodanie klucza nadpisuje
wartość w miejscu, nie zwiększając liczby faktów.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True, slots=True)
class Fact:
    """
    Pojedynczy fakt o bieżącym przypadku.

    - key:   nazwa cechy, np. "класс"
    - value: wartość cechy, np. "воин"

    Obie części są przycinane (strip) przy tworzeniu; pusty klucz lub
    pusta wartość → ValueError.
    """
    key:   str
    value: str

    def __post_init__(self) -> None:
        key   = str(self.key).strip()
        value = str(self.value).strip()
        if not key:
            raise ValueError("Fakt musi mieć niepusty klucz.")
        if not value:
            raise ValueError(f"Fakt '{key}' musi mieć niepustą wartość.")
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return f"{self.key} = {self.value}"


class FactSet:
    """Uporządkowany zbiór faktów z unikalnymi kluczami (upsert)."""

    def __init__(self, facts: Iterable[Fact] = ()) -> None:
        self._facts: dict[str, Fact] = {}
        for fact in facts:
            self.add(fact)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> FactSet:
        return cls(Fact(k, v) for k, v in pairs)

    def add(self, fact: Fact) -> Fact:
        """Dodaje fakt; istniejący klucz zachowuje pozycję, zmienia się wartość."""
        self._facts[fact.key] = fact
        return fact

    def upsert(self, key: str, value: str) -> Fact:
        return self.add(Fact(key, value))

    def get(self, key: str) -> str | None:
        fact = self._facts.get(key.strip())
        return fact.value if fact is not None else None

    def remove(self, key: str) -> bool:
        return self._facts.pop(key.strip(), None) is not None

    def clear(self) -> None:
        self._facts.clear()

    def pairs(self) -> set[tuple[str, str]]:
        """Zbiór par (klucz, wartość) — wygodny do porównań w dopasowaniu."""
        return {(f.key, f.value) for f in self._facts.values()}

    def as_dict(self) -> dict[str, str]:
        return {f.key: f.value for f in self._facts.values()}

    def __iter__(self) -> Iterator[Fact]:
        return iter(list(self._facts.values()))

    def __len__(self) -> int:
        return len(self._facts)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.strip() in self._facts

    def __bool__(self) -> bool:
        return bool(self._facts)

    def __repr__(self) -> str:
        inner = ", ".join(str(f) for f in self._facts.values())
        return f"FactSet({inner})"
