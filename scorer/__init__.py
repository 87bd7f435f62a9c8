"""
scorer — agregator prawdopodobieństw klas (jedna odpowiedź na grupę pytań).

Publiczne API:
  aggregate(base_state, selections)         → list[ClassState] (malejąco)
  bind_deltas(rule, base_state)             → dict[ClassId, float]
  format_probability(p)                     → str
  load_initial_state(path)                  → list[ClassState]
  load_score_rules(path, classes, strict)   → list[ScoreRule]
  group_by_question(rules)                  → dict[QuestGroup, list[ScoreRule]]
"""

from .engine import PROBABILITY_DECIMALS, aggregate, bind_deltas, format_probability
from .loader import group_by_question, load_initial_state, load_score_rules

__all__ = [
    "PROBABILITY_DECIMALS",
    "aggregate",
    "bind_deltas",
    "format_probability",
    "group_by_question",
    "load_initial_state",
    "load_score_rules",
]
