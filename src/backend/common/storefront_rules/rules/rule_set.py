from __future__ import annotations

from ..context import CartRuleContext
from ..errors import ConfigurationError
from ..evaluation import evaluate_group
from ..models import RuleExpression, RuleType
from ..operators import RuleOperator
from ..registry import register_rule
from ..rule import Rule


@register_rule
class RULE_SET(Rule):
    """Matches when another configured rule set matches (``=``) or does not (``!=``)."""

    name = "RuleSet"
    display_name = "Rule set"
    rule_type = RuleType.INT
    operators = (RuleOperator.IS_EQUAL_TO, RuleOperator.IS_NOT_EQUAL_TO)

    def match(self, ctx: CartRuleContext, expression: RuleExpression) -> bool:
        group = ctx.get_rule_set(expression.value)
        if group is None:
            raise ConfigurationError(f"Referenced rule set {expression.value!r} does not exist.")
        matched = evaluate_group(ctx, group, ctx.registry)
        if expression.operator == RuleOperator.IS_NOT_EQUAL_TO:
            return not matched
        return matched
