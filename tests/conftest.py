from __future__ import annotations

import json
import pathlib

import pytest

from data_model import ClassState, ScoreRule


@pytest.fixture
def write_json(tmp_path: pathlib.Path):
    """Zapisuje dokument JSON do tmp_path i zwraca ścieżkę."""
    def _write(name: str, data) -> pathlib.Path:
        path = tmp_path / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def match_rules_file(write_json) -> pathlib.Path:
    return write_json("rules.json", [
        {"ID": 1, "TextRule": "ЕСЛИ класс=воин И раса=дварф ТО топор"},
        {"ID": 2, "TextRule": "ЕСЛИ класс=плут ТО инструменты"},
        {"ID": 3, "TextRule": "без условий и без действия"},
        {"ID": 4, "TextRule": "ЕСЛИ раса=дварф ТО борода"},
    ])


@pytest.fixture
def base_state() -> list[ClassState]:
    return [
        ClassState(id=1, name="A", probability=0.1),
        ClassState(id=2, name="B", probability=0.2),
    ]


@pytest.fixture
def score_files(write_json) -> tuple[pathlib.Path, pathlib.Path]:
    state = write_json("InitialState.json", [
        {"id": 1, "Name": "Воин", "Probability": 0.1},
        {"id": 2, "Name": "Маг", "Probability": 0.2},
        {"id": 3, "Name": "Плут", "Probability": 0.3},
    ])
    rules = write_json("score-rules.json", [
        {"id": 1, "QuestID": 1, "Name": "Меч", "TextRule": "меч", "Values": [0.5, -0.3, 0.0]},
        {"id": 2, "QuestID": 1, "Name": "Посох", "TextRule": "посох", "Values": [0.0, 0.4, 0.0]},
        {"id": 3, "QuestID": 2, "TextRule": "сила", "Values": [0.1, 0.0, 0.0]},
    ])
    return state, rules


@pytest.fixture
def score_rule():
    def _make(rule_id: int, group: int, deltas) -> ScoreRule:
        return ScoreRule(
            id=rule_id, quest_group=group, name="", text=f"r{rule_id}", deltas=tuple(deltas)
        )
    return _make


ENV_VARS = (
    "ESYS_MATCH_RULES",
    "ESYS_SCORE_RULES",
    "ESYS_INITIAL_STATE",
    "ESYS_STRIP_ACTIONS",
    "ESYS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Usuwa zmienne ESYS_* na czas testu (także te ustawione później przez .env)."""
    for name in ENV_VARS:
        # setenv zapamiętuje stan sprzed testu, więc po teście zmienna wraca do niego
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
