"""List matching for rule expressions.

Left is the runtime value (e.g. a customer's role ids), right is the configured
expression value. Both are compared as sets; ``None`` counts as empty.

    =            set(left) == set(right)
    !=           set(left) != set(right)
    Contains     every right element is in left
    NotContains  no right element is in left
    In           some left element is in right
    NotIn        some left element is not in right
    AllIn        every left element is in right
    NotAllIn     no left element is in right
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from .errors import ConfigurationError
from .operators import RuleOperator, parse_operator


def _as_set(values: Optional[Iterable[Any]]) -> frozenset:
    if values is None:
        return frozenset()
    if isinstance(values, (str, bytes)):
        return frozenset([values])
    return frozenset(values)


_LIST_MATCHERS: Dict[RuleOperator, Callable[[frozenset, frozenset], bool]] = {
    RuleOperator.IS_EQUAL_TO: lambda left, right: left == right,
    RuleOperator.IS_NOT_EQUAL_TO: lambda left, right: left != right,
    RuleOperator.CONTAINS: lambda left, right: right <= left,
    RuleOperator.NOT_CONTAINS: lambda left, right: left.isdisjoint(right),
    RuleOperator.IN: lambda left, right: not left.isdisjoint(right),
    RuleOperator.NOT_IN: lambda left, right: bool(left - right),
    RuleOperator.ALL_IN: lambda left, right: left <= right,
    RuleOperator.NOT_ALL_IN: lambda left, right: left.isdisjoint(right),
}


def _operator_and_value(expression: Any) -> tuple[RuleOperator, Any]:
    if isinstance(expression, Mapping):
        if "operator" not in expression:
            raise ConfigurationError("Rule expression is missing an operator.")
        return parse_operator(expression["operator"]), expression.get("value")
    operator = getattr(expression, "operator", None)
    if operator is None:
        raise ConfigurationError("Rule expression is missing an operator.")
    return parse_operator(operator), getattr(expression, "value", None)


def has_lists_match(left: Optional[Iterable[Any]], expression: Any) -> bool:
    """Match a runtime list against the expression's list value."""
    op, value = _operator_and_value(expression)
    matcher = _LIST_MATCHERS.get(op)
    if matcher is None:
        raise ConfigurationError(f"Operator '{op.value}' is not supported for list comparison.")
    return matcher(_as_set(left), _as_set(value))


def has_list_match(value: Any, expression: Any) -> bool:
    """Match a single runtime value against the expression's list value."""
    op, right = _operator_and_value(expression)
    if op in (RuleOperator.IS_EQUAL_TO, RuleOperator.IN):
        return value in _as_set(right)
    if op in (RuleOperator.IS_NOT_EQUAL_TO, RuleOperator.NOT_IN):
        return value not in _as_set(right)
    raise ConfigurationError(f"Operator '{op.value}' is not supported for single value list comparison.")
