import pytest

from data_model import ClassState, DeltaLengthError, SelectionSet
from scorer import aggregate, bind_deltas, format_probability


def test_negative_delta_is_not_applied(base_state, score_rule):
    ranking = aggregate(base_state, {1: score_rule(1, 1, [0.5, -0.3])})

    assert [c.name for c in ranking] == ["A", "B"]
    assert ranking[0].probability == pytest.approx(0.6)
    assert ranking[1].probability == pytest.approx(0.2)


def test_base_state_is_not_mutated(base_state, score_rule):
    before = list(base_state)
    aggregate(base_state, {1: score_rule(1, 1, [1.0, 1.0])})
    assert base_state == before
    assert base_state[0].probability == 0.1


def test_no_selections_returns_sorted_base(base_state):
    ranking = aggregate(base_state, {})
    assert [(c.name, c.probability) for c in ranking] == [("B", 0.2), ("A", 0.1)]


def test_deltas_from_several_groups_are_summed(base_state, score_rule):
    selections = SelectionSet()
    selections.select(score_rule(1, 1, [0.1, 0.0]))
    selections.select(score_rule(2, 2, [0.2, 0.05]))

    ranking = aggregate(base_state, selections)
    by_name = {c.name: c.probability for c in ranking}
    assert by_name["A"] == pytest.approx(0.4)
    assert by_name["B"] == pytest.approx(0.25)


def test_later_choice_in_group_replaces_earlier(base_state, score_rule):
    selections = SelectionSet()
    first = score_rule(1, 1, [0.9, 0.0])
    assert selections.select(first) is None
    assert selections.select(score_rule(2, 1, [0.0, 0.1])) is first

    ranking = aggregate(base_state, selections)
    assert ranking[0].name == "B"
    assert ranking[0].probability == pytest.approx(0.3)


def test_ties_keep_base_order(score_rule):
    base = [
        ClassState(id=1, name="A", probability=0.0),
        ClassState(id=2, name="B", probability=0.0),
        ClassState(id=3, name="C", probability=0.1),
    ]
    ranking = aggregate(base, [score_rule(1, 1, [0.1, 0.1, 0.0])])
    assert [c.name for c in ranking] == ["A", "B", "C"]


def test_result_sorted_and_never_below_base(score_rule):
    base = [ClassState(id=i, name=str(i), probability=p) for i, p in enumerate([0.3, 0.1, 0.5, 0.0])]
    rules = [
        score_rule(1, 1, [-1.0, 0.4, 0.0, 0.2]),
        score_rule(2, 2, [0.05, -0.2, -0.5, 0.3]),
    ]
    ranking = aggregate(base, rules)

    probs = [c.probability for c in ranking]
    assert probs == sorted(probs, reverse=True)
    base_by_id = {c.id: c.probability for c in base}
    assert all(c.probability >= base_by_id[c.id] for c in ranking)


def test_delta_length_mismatch_raises(base_state, score_rule):
    with pytest.raises(DeltaLengthError) as exc:
        aggregate(base_state, {1: score_rule(7, 1, [0.1])})
    assert exc.value.rule_id == 7
    assert (exc.value.expected, exc.value.got) == (2, 1)


def test_duplicate_class_ids_rejected(score_rule):
    base = [ClassState(id=1, name="A", probability=0.1), ClassState(id=1, name="B", probability=0.2)]
    with pytest.raises(ValueError):
        aggregate(base, {})


def test_bind_deltas_keys_by_class_id(score_rule):
    base = [ClassState(id=10, name="A", probability=0.0), ClassState(id=20, name="B", probability=0.0)]
    assert bind_deltas(score_rule(1, 1, [0.5, -0.3]), base) == {10: 0.5, 20: -0.3}


def test_format_probability_has_six_decimals():
    assert format_probability(0.6) == "0.600000"
    assert format_probability(1 / 3) == "0.333333"
