import logging

import pytest

from data_model import ClassState, DeltaLengthError, RulesLoadError
from scorer import group_by_question, load_initial_state, load_score_rules


def test_load_initial_state(score_files):
    state_path, _ = score_files
    classes = load_initial_state(state_path)
    assert [(c.id, c.name, c.probability) for c in classes] == [
        (1, "Воин", 0.1), (2, "Маг", 0.2), (3, "Плут", 0.3),
    ]


def test_initial_state_duplicate_ids_rejected(write_json):
    path = write_json("s.json", [
        {"id": 1, "Name": "A", "Probability": 0.1},
        {"id": 1, "Name": "B", "Probability": 0.2},
    ])
    with pytest.raises(RulesLoadError, match="powtórzone"):
        load_initial_state(path)


def test_initial_state_schema_violation(write_json):
    path = write_json("s.json", [{"id": 1, "Name": "A"}])
    with pytest.raises(RulesLoadError):
        load_initial_state(path)


def test_load_score_rules_maps_fields(score_files):
    state_path, rules_path = score_files
    rules = load_score_rules(rules_path, classes=load_initial_state(state_path))

    first = rules[0]
    assert (first.id, first.quest_group, first.name, first.text) == (1, 1, "Меч", "меч")
    assert first.deltas == (0.5, -0.3, 0.0)
    # Name jest opcjonalne
    assert rules[2].name == ""
    assert rules[2].label == "сила"


def test_load_score_rules_validates_delta_length(score_files):
    _, rules_path = score_files
    two_classes = [ClassState(1, "A", 0.0), ClassState(2, "B", 0.0)]
    with pytest.raises(DeltaLengthError):
        load_score_rules(rules_path, classes=two_classes)


def test_load_score_rules_tolerant_missing_file(tmp_path, caplog):
    caplog.set_level(logging.WARNING, logger="scorer.loader")
    assert load_score_rules(tmp_path / "brak.json", strict=False) == []
    assert "pustym zbiorem" in caplog.text


def test_group_by_question_orders_groups(score_files):
    _, rules_path = score_files
    rules = load_score_rules(rules_path)
    groups = group_by_question(list(reversed(rules)))

    assert list(groups) == [1, 2]
    assert [r.id for r in groups[1]] == [2, 1]
    assert [r.id for r in groups[2]] == [3]


def test_initial_state_rejects_nan_probability(write_json):
    # json.dumps zapisuje float("nan") jako literał NaN
    path = write_json("s.json", [
        {"id": 1, "Name": "A", "Probability": 0.1},
        {"id": 2, "Name": "B", "Probability": float("nan")},
        {"id": 3, "Name": "C", "Probability": 0.5},
    ])
    with pytest.raises(RulesLoadError, match="NaN"):
        load_initial_state(path)


def test_initial_state_rejects_overflowing_number(tmp_path):
    path = tmp_path / "s.json"
    path.write_text('[{"id": 1, "Name": "A", "Probability": 1e999}]', encoding="utf-8")
    with pytest.raises(RulesLoadError, match="poza zakresem"):
        load_initial_state(path)


def test_score_rules_reject_infinite_delta(write_json):
    path = write_json("r.json", [
        {"id": 1, "QuestID": 1, "TextRule": "x", "Values": [float("inf"), 0.0]},
    ])
    with pytest.raises(RulesLoadError, match="Infinity"):
        load_score_rules(path)


def test_score_rules_duplicate_ids_rejected(write_json):
    path = write_json("r.json", [
        {"id": 1, "QuestID": 1, "TextRule": "a", "Values": [0.1]},
        {"id": 1, "QuestID": 2, "TextRule": "b", "Values": [0.2]},
    ])
    with pytest.raises(RulesLoadError, match="powtórzone id reguł"):
        load_score_rules(path)
    with pytest.raises(RulesLoadError, match="powtórzone id reguł"):
        load_score_rules(path, strict=False)
