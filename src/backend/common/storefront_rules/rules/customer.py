from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..context import CartRuleContext
from ..models import RuleType
from ..registry import register_rule
from ..rule import ListRule, ValueRule

_ORDERS_GROUP = "Admin.Orders"


@register_rule
class CUSTOMER_ROLE(ListRule):
    name = "CustomerRole"
    display_name = "Is in customer role"
    is_comparing_sequences = True

    def get_value(self, ctx: CartRuleContext) -> list[int]:
        return ctx.customer.role_ids


@register_rule
class CART_BILLING_COUNTRY(ListRule):
    name = "CartBillingCountry"
    display_name = "Billing country"

    def get_value(self, ctx: CartRuleContext) -> Optional[int]:
        return ctx.customer.billing_country_id


@register_rule
class CART_SHIPPING_COUNTRY(ListRule):
    name = "CartShippingCountry"
    display_name = "Shipping country"

    def get_value(self, ctx: CartRuleContext) -> Optional[int]:
        return ctx.customer.shipping_country_id


@register_rule
class IS_TAX_EXEMPT(ValueRule):
    name = "IsTaxExempt"
    display_name = "Is tax exempt"
    rule_type = RuleType.BOOLEAN

    def get_value(self, ctx: CartRuleContext) -> bool:
        return ctx.customer.is_tax_exempt


@register_rule
class REWARD_POINTS_BALANCE(ValueRule):
    name = "RewardPointsBalance"
    display_name = "Reward points balance"
    rule_type = RuleType.INT

    def get_value(self, ctx: CartRuleContext) -> int:
        return ctx.customer.reward_points_balance


@register_rule
class PRODUCT_REVIEW_COUNT(ValueRule):
    name = "ProductReviewCount"
    display_name = "Number of product reviews written"
    rule_type = RuleType.INT

    def get_value(self, ctx: CartRuleContext) -> int:
        return ctx.customer.product_review_count


@register_rule
class CART_ORDER_COUNT(ValueRule):
    name = "CartOrderCount"
    display_name = "Order count"
    group_key = _ORDERS_GROUP
    rule_type = RuleType.INT

    def get_value(self, ctx: CartRuleContext) -> int:
        return ctx.customer.order_count


@register_rule
class CART_SPENT_AMOUNT(ValueRule):
    name = "CartSpentAmount"
    display_name = "Spent amount"
    group_key = _ORDERS_GROUP
    rule_type = RuleType.MONEY

    def get_value(self, ctx: CartRuleContext) -> Decimal:
        return ctx.customer.spent_amount


@register_rule
class CART_PAID_BY(ListRule):
    name = "CartPaidBy"
    display_name = "Paid by"
    group_key = _ORDERS_GROUP
    rule_type = RuleType.STRING_ARRAY
    is_comparing_sequences = True

    def get_value(self, ctx: CartRuleContext) -> list[str]:
        return ctx.customer.paid_by


@register_rule
class CART_PURCHASED_PRODUCT(ListRule):
    name = "CartPurchasedProduct"
    display_name = "Purchased product"
    group_key = _ORDERS_GROUP
    is_comparing_sequences = True

    def get_value(self, ctx: CartRuleContext) -> list[int]:
        return ctx.customer.purchased_product_ids


@register_rule
class CART_PURCHASED_FROM_MANUFACTURER(ListRule):
    name = "CartPurchasedFromManufacturer"
    display_name = "Purchased from manufacturer"
    group_key = _ORDERS_GROUP
    is_comparing_sequences = True

    def get_value(self, ctx: CartRuleContext) -> list[int]:
        return ctx.customer.purchased_manufacturer_ids
