"""
data_model — struktury danych systemu ekspertowego.

Użycie:
  from data_model import Fact, FactSet, ParsedRule, ScoreRule, ClassState, ...

Moduły:
  facts    — Fact, FactSet (upsert po kluczu)
  rules    — Condition, TextRule, ParsedRule, ScoreRule
  classes  — ClassState, SelectionSet
  errors   — RulesLoadError, MalformedRuleError, DeltaLengthError
  schemas  — schematy JSON plików wejściowych + validate_document
"""

from .facts import Fact, FactSet
from .rules import (
    RuleId,
    QuestGroup,
    Condition,
    TextRule,
    ParsedRule,
    ScoreRule,
)
from .classes import ClassId, ClassState, SelectionSet
from .errors import RulesLoadError, MalformedRuleError, DeltaLengthError

__all__ = [
    # facts
    "Fact",
    "FactSet",
    # rules
    "RuleId",
    "QuestGroup",
    "Condition",
    "TextRule",
    "ParsedRule",
    "ScoreRule",
    # classes
    "ClassId",
    "ClassState",
    "SelectionSet",
    # errors
    "RulesLoadError",
    "MalformedRuleError",
    "DeltaLengthError",
]
