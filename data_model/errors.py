"""
Wyjątki warstwy danych.

Wszystkie dziedziczą po ValueError — CLI łapie je na granicy komendy
i zamienia na komunikat + SystemExit(1).
"""

from __future__ import annotations


class RulesLoadError(ValueError):
    """Plik reguł / stanu nie daje się wczytać albo narusza schemat JSON."""

    def __init__(self, path: object, problems: list[str]) -> None:
        self.path     = path
        self.problems = list(problems)
        joined = "; ".join(self.problems) if self.problems else "nieznany błąd"
        super().__init__(f"Nie można wczytać {path}: {joined}")


class MalformedRuleError(ValueError):
    """Tekst reguły nie pasuje do wzorca 'ЕСЛИ … ТО …'."""

    def __init__(self, text: str, reason: str) -> None:
        self.text   = text
        self.reason = reason
        super().__init__(f"Niepoprawna reguła ({reason}): {text!r}")


class DeltaLengthError(ValueError):
    """Długość wektora delt reguły różni się od liczby klas stanu bazowego."""

    def __init__(self, rule_id: object, expected: int, got: int) -> None:
        self.rule_id  = rule_id
        self.expected = expected
        self.got      = got
        super().__init__(
            f"Reguła {rule_id}: wektor delt ma {got} element(ów), "
            f"a stan bazowy {expected} klas(y)."
        )
