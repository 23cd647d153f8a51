import pytest

from common.storefront_rules.errors import ConfigurationError
from common.storefront_rules.matching import has_list_match, has_lists_match
from common.storefront_rules.models import RuleExpression


LEFT = [3, 2, 1]


@pytest.mark.parametrize(
    "right, operator, expected",
    [
        ([1, 2, 3], "=", True),
        ([1, 2, 3, 4], "=", False),
        ([3, 2], "!=", True),
        ([1, 2, 3], "!=", False),
        ([1, 2], "Contains", True),
        ([0, 1, 2, 3], "Contains", False),
        ([4, 5, 6], "NotContains", True),
        ([1, 2, 3], "NotContains", False),
        ([3, 4], "In", True),
        ([0, 4], "In", False),
        ([3, 2], "NotIn", True),
        ([1, 2, 3, 4], "NotIn", False),
        ([1, 2, 3, 4], "AllIn", True),
        ([1, 2], "AllIn", False),
        ([0, 4], "NotAllIn", True),
        ([0, 1, 4], "NotAllIn", False),
    ],
)
def test_lists_match_table(right, operator, expected):
    expression = RuleExpression(operator=operator, value=right)
    assert has_lists_match(LEFT, expression) is expected


def test_lists_match_ignores_left_order():
    expression = RuleExpression(operator="=", value=[1, 2, 3])
    assert has_lists_match([1, 2, 3], expression)
    assert has_lists_match([2, 3, 1], expression)
    assert has_lists_match((3, 1, 2), expression)


def test_lists_match_is_deterministic_and_does_not_mutate_inputs():
    left = [3, 2, 1]
    right = [0, 1, 4]
    expression = {"operator": "NotAllIn", "value": right}
    first = has_lists_match(left, expression)
    second = has_lists_match(left, expression)
    assert first is second is False
    assert left == [3, 2, 1]
    assert right == [0, 1, 4]


def test_lists_match_accepts_mapping_and_plain_objects():
    class _Expr:
        operator = "In"
        value = [2]

    assert has_lists_match(LEFT, {"operator": "In", "value": [2]})
    assert has_lists_match(LEFT, _Expr())


def test_lists_match_treats_none_as_empty():
    assert has_lists_match(None, {"operator": "=", "value": None})
    assert not has_lists_match(None, {"operator": "In", "value": [1]})
    assert has_lists_match(LEFT, {"operator": "NotContains", "value": None})


def test_lists_match_empty_right_does_not_raise():
    results = {
        op: has_lists_match(LEFT, {"operator": op, "value": []})
        for op in ("=", "!=", "Contains", "NotContains", "In", "NotIn", "AllIn", "NotAllIn")
    }
    assert results == {
        "=": False,
        "!=": True,
        "Contains": True,
        "NotContains": True,
        "In": False,
        "NotIn": True,
        "AllIn": False,
        "NotAllIn": True,
    }


def test_lists_match_unknown_operator_is_configuration_error():
    with pytest.raises(ConfigurationError):
        has_lists_match(LEFT, {"operator": "Overlaps", "value": [1]})


def test_lists_match_scalar_operator_is_configuration_error():
    with pytest.raises(ConfigurationError):
        has_lists_match(LEFT, {"operator": ">", "value": [1]})


def test_lists_match_missing_operator_is_configuration_error():
    with pytest.raises(ConfigurationError):
        has_lists_match(LEFT, {"value": [1]})


def test_lists_match_string_identifiers():
    expression = RuleExpression(operator="Contains", value=["PayPal"])
    assert has_lists_match(["PayPal", "Stripe"], expression)
    assert not has_lists_match(["Stripe"], expression)


def test_lists_match_object_without_operator_is_configuration_error():
    class Bare:
        value = [1]

    with pytest.raises(ConfigurationError, match="missing an operator"):
        has_lists_match(LEFT, Bare())
    with pytest.raises(ConfigurationError, match="missing an operator"):
        has_list_match(1, Bare())


def test_list_match_single_value():
    countries = [49, 81]
    assert has_list_match(49, {"operator": "In", "value": countries})
    assert has_list_match(49, {"operator": "=", "value": countries})
    assert has_list_match(1, {"operator": "NotIn", "value": countries})
    assert has_list_match(1, {"operator": "!=", "value": countries})
    assert not has_list_match(None, {"operator": "In", "value": countries})
    assert has_list_match(None, {"operator": "NotIn", "value": countries})


def test_list_match_rejects_sequence_operators():
    with pytest.raises(ConfigurationError):
        has_list_match(1, {"operator": "AllIn", "value": [1]})
