from __future__ import annotations

import logging
from typing import Optional, Union

from .context import CartRuleContext
from .errors import ConfigurationError
from .models import RuleExpression, RuleExpressionGroup
from .operators import LogicalRuleOperator
from .registry import RuleRegistry, registry as default_registry

logger = logging.getLogger(__name__)


def evaluate_expression(
    ctx: CartRuleContext,
    expression: RuleExpression,
    registry: Optional[RuleRegistry] = None,
) -> bool:
    reg = active_registry(ctx, registry)
    rule = reg.processor(expression.rule)
    if expression.operator not in rule.accepted_operators():
        raise ConfigurationError(
            f"Operator '{expression.operator.value}' is not valid for rule '{expression.rule}'."
        )
    return rule.match(ctx.with_registry(reg), expression)


def active_registry(ctx: CartRuleContext, registry: Optional[RuleRegistry] = None) -> RuleRegistry:
    if registry is not None:
        return registry
    if ctx.registry is not None:
        return ctx.registry
    return default_registry


def evaluate(
    ctx: CartRuleContext,
    item: Union[RuleExpression, RuleExpressionGroup],
    registry: Optional[RuleRegistry] = None,
) -> bool:
    if isinstance(item, RuleExpressionGroup):
        return evaluate_group(ctx, item, registry)
    return evaluate_expression(ctx, item, registry)


def evaluate_group(
    ctx: CartRuleContext,
    group: RuleExpressionGroup,
    registry: Optional[RuleRegistry] = None,
) -> bool:
    if not group.expressions:
        return True

    if group.logical_operator == LogicalRuleOperator.AND:
        matched = all(evaluate(ctx, item, registry) for item in group.expressions)
    else:
        matched = any(evaluate(ctx, item, registry) for item in group.expressions)

    logger.debug(
        "Rule group %s (%s, %d expressions) matched=%s",
        group.id if group.id is not None else group.name or "<anonymous>",
        group.logical_operator.value,
        len(group.expressions),
        matched,
    )
    return matched
