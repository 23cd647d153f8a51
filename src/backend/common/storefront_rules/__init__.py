"""Storefront rule engine for cart rules, shipping/payment eligibility and customer segments.

This package intentionally contains only domain logic:
- Rule inputs are plain snapshots (customer, cart, store) and configured rule sets.
- No database, web framework or network calls live here.
"""

from .config import RuleSetsConfig, load_rule_sets
from .context import CartItem, CartRuleContext, CartSnapshot, CustomerSnapshot
from .errors import ConfigurationError
from .evaluation import evaluate_expression, evaluate_group
from .matching import has_list_match, has_lists_match
from .models import (
    RuleExpression,
    RuleExpressionGroup,
    RuleRunReport,
    RuleSetResult,
    RuleType,
)
from .operators import LogicalRuleOperator, RuleOperator, match, parse_operator
from .runner import RulesRunner

# Import built-in rules so they self-register with the global registry.
from . import rules as _builtin_rules  # noqa: F401
