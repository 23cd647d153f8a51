from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional

from .context import CartRuleContext
from .errors import ConfigurationError
from .evaluation import evaluate, evaluate_group
from .models import (
    ExpressionResult,
    RuleExpression,
    RuleExpressionGroup,
    RuleRunReport,
    RuleSetResult,
)
from .operators import LogicalRuleOperator, parse_logical_operator
from .registry import RuleRegistry, registry as default_registry

logger = logging.getLogger(__name__)


class RulesRunner:
    def __init__(
        self,
        rule_sets: Mapping[int, RuleExpressionGroup],
        *,
        registry: Optional[RuleRegistry] = None,
    ):
        self._rule_sets = dict(rule_sets)
        self._registry = registry or default_registry

    def _context(self, ctx: CartRuleContext) -> CartRuleContext:
        return ctx.with_rule_sets(self._rule_sets).with_registry(self._registry)

    def _get(self, rule_set_id: int) -> RuleExpressionGroup:
        group = self._rule_sets.get(rule_set_id)
        if group is None:
            raise ConfigurationError(f"Unknown rule set id: {rule_set_id}")
        return group

    def rule_matches(
        self,
        ctx: CartRuleContext,
        rule_set_ids: Iterable[int],
        logical_operator: LogicalRuleOperator = LogicalRuleOperator.OR,
    ) -> bool:
        """Whether the given rule sets match. No rule sets means no restriction."""
        ids = list(rule_set_ids)
        if not ids:
            return True
        group = RuleExpressionGroup(
            logical_operator=parse_logical_operator(logical_operator),
            expressions=tuple(self._get(i) for i in ids),
        )
        return evaluate_group(self._context(ctx), group, self._registry)

    def run(self, ctx: CartRuleContext, *, rule_set_ids: Optional[Iterable[int]] = None) -> RuleRunReport:
        eval_ctx = self._context(ctx)
        ids = list(rule_set_ids) if rule_set_ids is not None else sorted(self._rule_sets)

        results = []
        for rs_id in ids:
            group = self._get(rs_id)
            expressions = [
                ExpressionResult(
                    rule=_label(item),
                    operator=_operator_label(item),
                    value=_value(item),
                    matched=evaluate(eval_ctx, item, self._registry),
                )
                for item in group.expressions
            ]
            flags = [e.matched for e in expressions]
            if not flags:
                matched = True
            elif group.logical_operator == LogicalRuleOperator.AND:
                matched = all(flags)
            else:
                matched = any(flags)
            results.append(
                RuleSetResult(
                    rule_set_id=rs_id,
                    name=group.name,
                    logical_operator=group.logical_operator,
                    matched=matched,
                    expressions=expressions,
                )
            )

        totals = {"matched": 0, "unmatched": 0}
        for res in results:
            totals["matched" if res.matched else "unmatched"] += 1

        logger.info("Evaluated %d rule set(s): %d matched", len(results), totals["matched"])
        return RuleRunReport(
            run_id=str(uuid.uuid4()),
            generated_at=datetime.now(timezone.utc),
            results=results,
            totals=totals,
        )


def _label(item) -> str:
    if isinstance(item, RuleExpression):
        return item.rule
    return "group"


def _operator_label(item) -> str:
    if isinstance(item, RuleExpression):
        return item.operator.value
    return item.logical_operator.value


def _value(item):
    if isinstance(item, RuleExpression):
        if isinstance(item.value, tuple):
            return list(item.value)
        if is_dataclass(item.value):
            return asdict(item.value)
        return item.value
    return None
