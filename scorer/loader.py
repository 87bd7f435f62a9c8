"""
scorer/loader.py — wczytywanie stanu bazowego i reguł agregatora.

Publiczne API:
  load_initial_state(path)                  -> list[ClassState]
  load_score_rules(path, classes, strict)   -> list[ScoreRule]
  group_by_question(rules)                  -> dict[QuestGroup, list[ScoreRule]]
"""

from __future__ import annotations

import logging
import pathlib
from collections import Counter
from typing import Iterable, Sequence

from data_model import (
    ClassState,
    DeltaLengthError,
    QuestGroup,
    RulesLoadError,
    ScoreRule,
)
from data_model.schemas import (
    INITIAL_STATE_SCHEMA,
    SCORE_RULES_SCHEMA,
    read_json,
    validate_document,
)

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Stan bazowy
# ---------------------------------------------------------------------------

def load_initial_state(path: pathlib.Path) -> list[ClassState]:
    """
    Wczytuje InitialState.json.

    Oczekiwany format::

        [
            {"id": 1, "Name": "Воин",   "Probability": 0.1},
            {"id": 2, "Name": "Волшебник", "Probability": 0.2}
        ]

    Kolejność listy wyznacza pozycje w wektorach "Values" reguł.

    Raises:
        RulesLoadError (brak pliku, zły JSON, naruszenie schematu,
        powtórzone id klasy).
    """
    raw = read_json(path)
    validate_document(raw, INITIAL_STATE_SCHEMA, path)

    classes = [
        ClassState(id=d["id"], name=d["Name"], probability=float(d["Probability"]))
        for d in raw
    ]
    counts = Counter(c.id for c in classes)
    dupes  = sorted(cid for cid, n in counts.items() if n > 1)
    if dupes:
        raise RulesLoadError(path, [f"powtórzone id klas: {dupes}"])
    return classes


# ---------------------------------------------------------------------------
# Reguły
# ---------------------------------------------------------------------------

def _score_rule_from_dict(d: dict) -> ScoreRule:
    return ScoreRule(
        id=d["id"],
        quest_group=d["QuestID"],
        name=d.get("Name", ""),
        text=d["TextRule"],
        deltas=tuple(float(v) for v in d["Values"]),
    )


def load_score_rules(
    path:    pathlib.Path,
    classes: Sequence[ClassState] | None = None,
    *,
    strict:  bool = True,
) -> list[ScoreRule]:
    """
    Wczytuje reguły agregatora z rules.json.

    Oczekiwany format::

        [
            {"id": 1, "QuestID": 1, "Name": "Меч",
             "TextRule": "Любимое оружие — меч", "Values": [0.3, 0.0, -0.1]}
        ]

    Args:
        classes: gdy podane, długość każdego "Values" jest sprawdzana
                 względem liczby klas (DeltaLengthError — zawsze, także
                 przy strict=False, bo to błąd danych, nie wczytania).
        strict:  False → błąd wczytania pliku jest logowany (WARNING),
                 a wynikiem jest pusta lista.

    Raises:
        RulesLoadError przy powtórzonym id reguły (niezależnie od strict).
    """
    try:
        raw = read_json(path)
        validate_document(raw, SCORE_RULES_SCHEMA, path)
    except RulesLoadError as e:
        if strict:
            raise
        log.warning("%s — kontynuacja z pustym zbiorem reguł.", e)
        return []

    rules = [_score_rule_from_dict(d) for d in raw]
    counts = Counter(r.id for r in rules)
    dupes  = sorted(rid for rid, n in counts.items() if n > 1)
    if dupes:
        raise RulesLoadError(path, [f"powtórzone id reguł: {dupes}"])

    if classes is not None:
        for rule in rules:
            if len(rule.deltas) != len(classes):
                raise DeltaLengthError(rule.id, expected=len(classes), got=len(rule.deltas))

    log.debug("Wczytano %d reguł agregatora z %s", len(rules), path)
    return rules


def group_by_question(rules: Iterable[ScoreRule]) -> dict[QuestGroup, list[ScoreRule]]:
    """Grupy pytań rosnąco; reguły w grupie w kolejności pliku."""
    groups: dict[QuestGroup, list[ScoreRule]] = {}
    for rule in rules:
        groups.setdefault(rule.quest_group, []).append(rule)
    return {g: groups[g] for g in sorted(groups)}
