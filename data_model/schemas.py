"""
Schematy JSON plików wejściowych i walidacja (jsonschema, Draft 2020-12).

  MATCH_RULES_SCHEMA    — rules.json dopasowania faktów
  FACTS_SCHEMA          — plik faktów (lista lub {"facts": [...]})
  SCORE_RULES_SCHEMA    — rules.json agregatora (QuestID / Values)
  INITIAL_STATE_SCHEMA  — InitialState.json

read_json(path)                          → dokument JSON albo RulesLoadError
validate_document(data, schema, source)  → None albo RulesLoadError
    ze wszystkimi naruszeniami (ścieżka JSON Pointer + komunikat).
"""

from __future__ import annotations

import json
import math
import pathlib
from typing import Any

import jsonschema

from .errors import RulesLoadError

# Maksymalna liczba naruszeń wypisywanych w jednym błędzie
MAX_PROBLEMS = 20


_FACT = {
    "type": "object",
    "properties": {
        "key":   {"type": "string", "minLength": 1},
        "value": {"type": ["string", "number", "boolean"]},
    },
    "required": ["key", "value"],
}

MATCH_RULES_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "ID":       {"type": "integer"},
            "id":       {"type": "integer"},
            "TextRule": {"type": "string"},
        },
        "required": ["TextRule"],
    },
}

FACTS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "oneOf": [
        {"type": "array", "items": _FACT},
        {
            "type": "object",
            "properties": {"facts": {"type": "array", "items": _FACT}},
            "required": ["facts"],
        },
    ],
}

SCORE_RULES_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "id":       {"type": "integer"},
            "QuestID":  {"type": "integer"},
            "Name":     {"type": "string"},
            "TextRule": {"type": "string"},
            "Values":   {"type": "array", "items": {"type": "number"}},
        },
        "required": ["id", "QuestID", "TextRule", "Values"],
    },
}

INITIAL_STATE_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "id":          {"type": "integer"},
            "Name":        {"type": "string"},
            "Probability": {"type": "number"},
        },
        "required": ["id", "Name", "Probability"],
    },
}


def validate_document(data: Any, schema: dict[str, Any], source: object) -> None:
    """Podnosi RulesLoadError gdy dokument narusza schemat."""
    validator = jsonschema.Draft202012Validator(schema)
    problems: list[str] = []
    for e in validator.iter_errors(data):
        path = (
            "/" + "/".join(str(p) for p in e.absolute_path)
            if e.absolute_path
            else "/"
        )
        problems.append(f"{path}: {e.message}")
        if len(problems) >= MAX_PROBLEMS:
            break
    if problems:
        raise RulesLoadError(source, problems)


def _reject_constant(name: str) -> float:
    raise ValueError(f"niedozwolona wartość liczbowa {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"liczba poza zakresem: {text}")
    return value


def read_json(path: pathlib.Path) -> Any:
    """
    Czyta plik JSON; błędy I/O i składni zamienia na RulesLoadError.

    Literały NaN/Infinity oraz liczby przepełniające float są odrzucane:
    prawdopodobieństwa i delty muszą być skończone.
    """
    try:
        return json.loads(
            path.read_text(encoding="utf-8"),
            parse_constant=_reject_constant,
            parse_float=_finite_float,
        )
    except OSError as e:
        raise RulesLoadError(path, [e.strerror or str(e)]) from e
    except ValueError as e:  # także JSONDecodeError
        raise RulesLoadError(path, [f"niepoprawny JSON: {e}"]) from e
