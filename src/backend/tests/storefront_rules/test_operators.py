from decimal import Decimal

import pytest

from common.storefront_rules.errors import ConfigurationError
from common.storefront_rules.models import RuleExpression
from common.storefront_rules.operators import (
    LogicalRuleOperator,
    RuleOperator,
    match,
    parse_logical_operator,
    parse_operator,
)


def test_parse_operator_by_name_and_member():
    assert parse_operator("NotAllIn") is RuleOperator.NOT_ALL_IN
    assert parse_operator(" = ") is RuleOperator.IS_EQUAL_TO
    assert parse_operator(RuleOperator.IN) is RuleOperator.IN


def test_parse_operator_unknown_raises_configuration_error():
    with pytest.raises(ConfigurationError, match="Unknown rule operator"):
        parse_operator("Between")


def test_parse_logical_operator_is_case_insensitive():
    assert parse_logical_operator("and") is LogicalRuleOperator.AND
    assert parse_logical_operator("OR") is LogicalRuleOperator.OR
    with pytest.raises(ConfigurationError):
        parse_logical_operator("Xor")


def test_is_null_and_is_not_null():
    assert match("IsNull", None, None)
    assert not match("IsNull", "no", None)
    assert not match("IsNotNull", None, None)
    assert match("IsNotNull", "no", None)


def test_is_empty_and_is_not_empty():
    assert match("IsEmpty", None, None)
    assert match("IsEmpty", "", None)
    assert match("IsEmpty", "   ", None)
    assert not match("IsEmpty", " ab", None)
    assert not match("IsNotEmpty", None, None)
    assert not match("IsNotEmpty", "", None)
    assert match("IsNotEmpty", " ab", None)


def test_equal_and_not_equal():
    assert match("=", None, None)
    assert match("=", "", "")
    assert match("=", "abc", "abc")
    assert not match("=", None, "abc")
    assert not match("!=", "abc", "abc")
    assert match("!=", None, 1)
    assert match("=", Decimal("10.00"), Decimal("10"))


def test_ordered_comparisons():
    assert match(">", 10, 5)
    assert not match(">", 5, 10)
    assert match(">=", 5, 5)
    assert not match(">=", 4, 5)
    assert match("<", 5, 10)
    assert not match("<", 10, 5)
    assert match("<=", 5, 5)
    assert not match("<=", 5, 4)
    assert not match(">", None, 5)
    assert not match("<", 5, None)


def test_string_operators():
    assert match("StartsWith", "hello", "he")
    assert match("EndsWith", "hello", "lo")
    assert match("Contains", "hello", "el")
    assert match("NotContains", "hello", "al")
    assert not match("StartsWith", None, "he")


def test_in_and_not_in():
    order_ids = [1, 2, 5, 8]
    assert match("In", 2, order_ids)
    assert not match("In", 3, order_ids)
    assert match("NotIn", 4, [1, 2, 3, 5])
    assert not match("NotIn", 2, [1, 2, 3, 5])


def test_list_only_operators_rejected_for_scalars():
    with pytest.raises(ConfigurationError):
        match("AllIn", 1, [1])


def test_rule_expression_parses_operator_and_freezes_lists():
    expression = RuleExpression(operator="In", value=[1, 2])
    assert expression.operator is RuleOperator.IN
    assert expression.value == (1, 2)
    with pytest.raises(AttributeError):
        expression.value = (3,)


def test_rule_expression_rejects_unknown_operator():
    with pytest.raises(ConfigurationError):
        RuleExpression(operator="Like", value=["a"])
