from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from .operators import LIST_OPERATORS, LogicalRuleOperator, RuleOperator, parse_logical_operator, parse_operator


class RuleType(str, Enum):
    BOOLEAN = "Boolean"
    INT = "Int"
    FLOAT = "Float"
    MONEY = "Money"
    STRING = "String"
    DATE_TIME = "DateTime"
    INT_ARRAY = "IntArray"
    STRING_ARRAY = "StringArray"

    @property
    def is_array(self) -> bool:
        return self in (RuleType.INT_ARRAY, RuleType.STRING_ARRAY)


_COMPARISON_OPERATORS = (
    RuleOperator.IS_EQUAL_TO,
    RuleOperator.IS_NOT_EQUAL_TO,
    RuleOperator.GREATER_THAN,
    RuleOperator.GREATER_THAN_OR_EQUAL_TO,
    RuleOperator.LESS_THAN,
    RuleOperator.LESS_THAN_OR_EQUAL_TO,
)


def default_operators(rule_type: RuleType, *, is_comparing_sequences: bool = False) -> tuple[RuleOperator, ...]:
    if rule_type.is_array:
        if is_comparing_sequences:
            return LIST_OPERATORS
        return (RuleOperator.IN, RuleOperator.NOT_IN)
    if rule_type == RuleType.BOOLEAN:
        return (RuleOperator.IS_EQUAL_TO, RuleOperator.IS_NOT_EQUAL_TO)
    if rule_type == RuleType.STRING:
        return (
            RuleOperator.IS_EQUAL_TO,
            RuleOperator.IS_NOT_EQUAL_TO,
            RuleOperator.STARTS_WITH,
            RuleOperator.ENDS_WITH,
            RuleOperator.CONTAINS,
            RuleOperator.NOT_CONTAINS,
            RuleOperator.IS_EMPTY,
            RuleOperator.IS_NOT_EMPTY,
        )
    return _COMPARISON_OPERATORS


@dataclass(frozen=True)
class RuleExpression:
    operator: RuleOperator
    value: Any = None
    rule: str = ""
    id: Optional[int] = None
    raw_value: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", parse_operator(self.operator))
        # Lists are frozen so one expression can be shared across concurrent evaluations.
        if isinstance(self.value, (list, set, frozenset)):
            object.__setattr__(self, "value", tuple(self.value))


@dataclass(frozen=True)
class RuleExpressionGroup:
    logical_operator: LogicalRuleOperator = LogicalRuleOperator.AND
    expressions: tuple[Union[RuleExpression, "RuleExpressionGroup"], ...] = ()
    id: Optional[int] = None
    name: str = ""
    is_sub_group: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "logical_operator", parse_logical_operator(self.logical_operator))
        object.__setattr__(self, "expressions", tuple(self.expressions))


class ExpressionResult(BaseModel):
    rule: str
    operator: str
    value: Any = None
    matched: bool


class RuleSetResult(BaseModel):
    rule_set_id: int
    name: str = ""
    logical_operator: LogicalRuleOperator
    matched: bool
    expressions: List[ExpressionResult] = Field(default_factory=list)


class RuleRunReport(BaseModel):
    run_id: str
    generated_at: datetime

    results: List[RuleSetResult] = Field(default_factory=list)
    totals: Dict[str, int] = Field(default_factory=dict)

    def matched_ids(self) -> list[int]:
        return [r.rule_set_id for r in self.results if r.matched]

