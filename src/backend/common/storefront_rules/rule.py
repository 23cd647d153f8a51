from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from .context import CartRuleContext
from .matching import has_list_match, has_lists_match
from .models import RuleExpression, RuleType, default_operators
from .operators import RuleOperator, match


class Rule(ABC):
    name: str
    display_name: str = ""
    group_key: str = ""
    rule_type: RuleType
    is_comparing_sequences: bool = False
    # None means the defaults for `rule_type`.
    operators: Optional[tuple[RuleOperator, ...]] = None

    def __init__(self):
        if not getattr(self, "name", None):
            raise ValueError("Rule must define name")

    @classmethod
    def accepted_operators(cls) -> tuple[RuleOperator, ...]:
        if cls.operators is not None:
            return tuple(cls.operators)
        return default_operators(cls.rule_type, is_comparing_sequences=cls.is_comparing_sequences)

    @abstractmethod
    def match(self, ctx: CartRuleContext, expression: RuleExpression) -> bool:  # pragma: no cover
        raise NotImplementedError


class ValueRule(Rule):
    """Compares one scalar from the context with the expression value."""

    @abstractmethod
    def get_value(self, ctx: CartRuleContext) -> Any:  # pragma: no cover
        raise NotImplementedError

    def match(self, ctx: CartRuleContext, expression: RuleExpression) -> bool:
        return match(expression.operator, self.get_value(ctx), expression.value)


class ListRule(Rule):
    """Compares a context value (or list of values) with the expression's list."""

    rule_type = RuleType.INT_ARRAY

    @abstractmethod
    def get_value(self, ctx: CartRuleContext) -> Any:  # pragma: no cover
        raise NotImplementedError

    def match(self, ctx: CartRuleContext, expression: RuleExpression) -> bool:
        value = self.get_value(ctx)
        if self.is_comparing_sequences:
            return has_lists_match(value, expression)
        return has_list_match(value, expression)
