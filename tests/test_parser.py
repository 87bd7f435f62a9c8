import pytest

from data_model import Condition, MalformedRuleError, TextRule
from matcher import parse_rule, parse_rules


def test_parses_conditions_and_keeps_action_verbatim():
    rule = parse_rule("ЕСЛИ region=north И level = 3 ТО alert", rule_id=7)

    assert rule.id == 7
    assert rule.conditions == (Condition("region", "north"), Condition("level", "3"))
    assert rule.action == " alert"


def test_strip_action():
    rule = parse_rule("ЕСЛИ a=1 ТО   alert  ", strip_action=True)
    assert rule.action == "alert"


def test_single_condition_with_free_whitespace():
    rule = parse_rule("ЕСЛИ   класс   =   воин  ТО топор")
    assert rule.conditions == (Condition("класс", "воин"),)


def test_value_may_contain_equals_sign():
    rule = parse_rule("ЕСЛИ формула=a=b ТО x")
    assert rule.conditions == (Condition("формула", "a=b"),)


def test_action_is_text_after_first_then_keyword():
    rule = parse_rule("ЕСЛИ СТОЛ=да ТО сесть ТО есть")
    assert rule.conditions == (Condition("СТОЛ", "да"),)
    assert rule.action == " сесть ТО есть"


def test_text_before_if_keyword_is_ignored():
    rule = parse_rule("Правило: ЕСЛИ a=1 ТО b")
    assert rule.conditions == (Condition("a", "1"),)


@pytest.mark.parametrize("text", [
    "Каждый персонаж начинает с 10 золотых",
    "ЕСЛИ a=1",
    "a=1 ТО b",
    "ЕСЛИ  ТО b",
    "ЕСЛИ условие ТО b",
    "ЕСЛИ =1 ТО b",
    "ЕСЛИ a=1 И b ТО c",
])
def test_malformed_rules_raise(text):
    with pytest.raises(MalformedRuleError):
        parse_rule(text)


def test_parse_rules_skips_malformed_and_keeps_order():
    records = [
        TextRule(id=1, text="ЕСЛИ a=1 ТО x"),
        TextRule(id=2, text="bez wzorca"),
        TextRule(id=3, text="ЕСЛИ b=2 ТО y"),
    ]
    rules = parse_rules(records)
    assert [r.id for r in rules] == [1, 3]


def test_parsed_rule_str_round_trips_syntax():
    rule = parse_rule("ЕСЛИ a = 1 И b=2 ТО x", rule_id=5)
    assert str(rule) == "[5] ЕСЛИ a=1 И b=2 ТО x"
