from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, List, Mapping, Optional

from pydantic import BaseModel, Field

from .models import RuleExpressionGroup

if TYPE_CHECKING:
    from .registry import RuleRegistry


class CustomerSnapshot(BaseModel):
    id: int = 0
    role_ids: List[int] = Field(default_factory=list)
    billing_country_id: Optional[int] = None
    shipping_country_id: Optional[int] = None
    is_tax_exempt: bool = False
    reward_points_balance: int = 0
    product_review_count: int = 0
    order_count: int = 0
    spent_amount: Decimal = Decimal("0")
    purchased_product_ids: List[int] = Field(default_factory=list)
    purchased_manufacturer_ids: List[int] = Field(default_factory=list)
    paid_by: List[str] = Field(default_factory=list)


class CartItem(BaseModel):
    product_id: int
    quantity: int = 1
    category_ids: List[int] = Field(default_factory=list)
    manufacturer_ids: List[int] = Field(default_factory=list)


class CartSnapshot(BaseModel):
    items: List[CartItem] = Field(default_factory=list)
    subtotal: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    wishlist_product_ids: List[int] = Field(default_factory=list)
    shipping_method_id: Optional[int] = None
    payment_method: Optional[str] = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CartRuleContext:
    customer: CustomerSnapshot = field(default_factory=CustomerSnapshot)
    cart: CartSnapshot = field(default_factory=CartSnapshot)
    store_id: int = 0
    currency_id: int = 0
    language_id: int = 0
    ip_country_iso: Optional[str] = None
    now: datetime = field(default_factory=_utcnow)
    rule_sets: Mapping[int, RuleExpressionGroup] = field(default_factory=dict)
    # Registry nested rule sets are evaluated with; None means the default registry.
    registry: Optional["RuleRegistry"] = None

    def cart_product_ids(self) -> list[int]:
        return [item.product_id for item in self.cart.items]

    def cart_category_ids(self) -> list[int]:
        return [cid for item in self.cart.items for cid in item.category_ids]

    def cart_manufacturer_ids(self) -> list[int]:
        return [mid for item in self.cart.items for mid in item.manufacturer_ids]

    def cart_product_count(self) -> int:
        return sum(item.quantity for item in self.cart.items)

    def get_rule_set(self, rule_set_id: int) -> Optional[RuleExpressionGroup]:
        return self.rule_sets.get(rule_set_id)

    def with_rule_sets(self, rule_sets: Mapping[int, RuleExpressionGroup]) -> "CartRuleContext":
        return replace(self, rule_sets={**self.rule_sets, **rule_sets})

    def with_registry(self, registry: Optional["RuleRegistry"]) -> "CartRuleContext":
        if registry is None or registry is self.registry:
            return self
        return replace(self, registry=registry)
