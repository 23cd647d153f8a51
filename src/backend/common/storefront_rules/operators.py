from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict

from .errors import ConfigurationError


class RuleOperator(str, Enum):
    IS_EQUAL_TO = "="
    IS_NOT_EQUAL_TO = "!="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL_TO = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL_TO = "<="
    IS_NULL = "IsNull"
    IS_NOT_NULL = "IsNotNull"
    IS_EMPTY = "IsEmpty"
    IS_NOT_EMPTY = "IsNotEmpty"
    STARTS_WITH = "StartsWith"
    ENDS_WITH = "EndsWith"
    CONTAINS = "Contains"
    NOT_CONTAINS = "NotContains"
    IN = "In"
    NOT_IN = "NotIn"
    ALL_IN = "AllIn"
    NOT_ALL_IN = "NotAllIn"


class LogicalRuleOperator(str, Enum):
    AND = "And"
    OR = "Or"


LIST_OPERATORS = (
    RuleOperator.IS_EQUAL_TO,
    RuleOperator.IS_NOT_EQUAL_TO,
    RuleOperator.CONTAINS,
    RuleOperator.NOT_CONTAINS,
    RuleOperator.IN,
    RuleOperator.NOT_IN,
    RuleOperator.ALL_IN,
    RuleOperator.NOT_ALL_IN,
)


def parse_operator(name: Any) -> RuleOperator:
    if isinstance(name, RuleOperator):
        return name
    try:
        return RuleOperator(str(name).strip())
    except ValueError:
        raise ConfigurationError(f"Unknown rule operator: {name!r}") from None


def parse_logical_operator(name: Any) -> LogicalRuleOperator:
    if isinstance(name, LogicalRuleOperator):
        return name
    # Case-insensitive: stored rule sets use both "And" and "and".
    normalized = str(name or "").strip().lower()
    for op in LogicalRuleOperator:
        if op.value.lower() == normalized:
            return op
    raise ConfigurationError(f"Unknown logical operator: {name!r}")


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _ordered(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def _match(left: Any, right: Any) -> bool:
        if left is None or right is None:
            return False
        return compare(left, right)

    return _match


def _members(right: Any) -> list:
    if right is None:
        return []
    if isinstance(right, (str, bytes)):
        return [right]
    return list(right)


_SCALAR_MATCHERS: Dict[RuleOperator, Callable[[Any, Any], bool]] = {
    RuleOperator.IS_NULL: lambda left, right: left is None,
    RuleOperator.IS_NOT_NULL: lambda left, right: left is not None,
    RuleOperator.IS_EMPTY: lambda left, right: _is_empty(left),
    RuleOperator.IS_NOT_EMPTY: lambda left, right: not _is_empty(left),
    RuleOperator.IS_EQUAL_TO: lambda left, right: left == right,
    RuleOperator.IS_NOT_EQUAL_TO: lambda left, right: left != right,
    RuleOperator.GREATER_THAN: _ordered(lambda left, right: left > right),
    RuleOperator.GREATER_THAN_OR_EQUAL_TO: _ordered(lambda left, right: left >= right),
    RuleOperator.LESS_THAN: _ordered(lambda left, right: left < right),
    RuleOperator.LESS_THAN_OR_EQUAL_TO: _ordered(lambda left, right: left <= right),
    RuleOperator.STARTS_WITH: lambda left, right: (left or "").startswith(right or ""),
    RuleOperator.ENDS_WITH: lambda left, right: (left or "").endswith(right or ""),
    RuleOperator.CONTAINS: lambda left, right: (right or "") in (left or ""),
    RuleOperator.NOT_CONTAINS: lambda left, right: (right or "") not in (left or ""),
    RuleOperator.IN: lambda left, right: left in _members(right),
    RuleOperator.NOT_IN: lambda left, right: left not in _members(right),
}


def match(operator: Any, left: Any, right: Any) -> bool:
    """Compare a single runtime value against an expression value."""
    op = parse_operator(operator)
    matcher = _SCALAR_MATCHERS.get(op)
    if matcher is None:
        raise ConfigurationError(f"Operator '{op.value}' can only be used to compare lists.")
    return matcher(left, right)
