import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from common.storefront_rules.context import CartItem, CartRuleContext, CartSnapshot, CustomerSnapshot
from common.storefront_rules.models import RuleExpression


@pytest.fixture
def now() -> datetime:
    # A Wednesday.
    return datetime(2025, 12, 31, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def make_customer():
    def _make(**kwargs) -> CustomerSnapshot:
        data = {"id": 1, "role_ids": [3, 2, 1]}
        data.update(kwargs)
        return CustomerSnapshot(**data)

    return _make


@pytest.fixture
def make_cart():
    def _make(*, items=(), subtotal="0", total="0", **kwargs) -> CartSnapshot:
        return CartSnapshot(
            items=[CartItem(**item) for item in items],
            subtotal=Decimal(subtotal),
            total=Decimal(total),
            **kwargs,
        )

    return _make


@pytest.fixture
def make_ctx(now, make_customer, make_cart):
    def _make(
        *,
        customer: CustomerSnapshot | None = None,
        cart: CartSnapshot | None = None,
        store_id: int = 1,
        currency_id: int = 1,
        language_id: int = 1,
        ip_country_iso: str | None = None,
        rule_sets=None,
    ) -> CartRuleContext:
        return CartRuleContext(
            customer=customer or make_customer(),
            cart=cart or make_cart(),
            store_id=store_id,
            currency_id=currency_id,
            language_id=language_id,
            ip_country_iso=ip_country_iso,
            now=now,
            rule_sets=rule_sets or {},
        )

    return _make


@pytest.fixture
def make_expression():
    def _make(rule: str, operator: str, value=None) -> RuleExpression:
        return RuleExpression(rule=rule, operator=operator, value=value)

    return _make
