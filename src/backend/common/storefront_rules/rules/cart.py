from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..context import CartRuleContext
from ..errors import ConfigurationError
from ..models import RuleExpression, RuleType
from ..operators import RuleOperator
from ..registry import register_rule
from ..rule import ListRule, Rule, ValueRule


@register_rule
class CART_TOTAL(ValueRule):
    name = "CartTotal"
    display_name = "Cart total"
    rule_type = RuleType.MONEY

    def get_value(self, ctx: CartRuleContext) -> Decimal:
        return ctx.cart.total


@register_rule
class CART_SUBTOTAL(ValueRule):
    name = "CartSubtotal"
    display_name = "Cart subtotal"
    rule_type = RuleType.MONEY

    def get_value(self, ctx: CartRuleContext) -> Decimal:
        return ctx.cart.subtotal


@register_rule
class CART_PRODUCT_COUNT(ValueRule):
    name = "CartProductCount"
    display_name = "Product count in cart"
    rule_type = RuleType.INT

    def get_value(self, ctx: CartRuleContext) -> int:
        return ctx.cart_product_count()


@register_rule
class PRODUCT_IN_CART(ListRule):
    name = "ProductInCart"
    display_name = "Product in cart"
    is_comparing_sequences = True

    def get_value(self, ctx: CartRuleContext) -> list[int]:
        return ctx.cart_product_ids()


@register_rule
class PRODUCT_FROM_CATEGORY_IN_CART(ListRule):
    name = "ProductFromCategoryInCart"
    display_name = "Product from category in cart"
    is_comparing_sequences = True

    def get_value(self, ctx: CartRuleContext) -> list[int]:
        return ctx.cart_category_ids()


@register_rule
class PRODUCT_FROM_MANUFACTURER_IN_CART(ListRule):
    name = "ProductFromManufacturerInCart"
    display_name = "Product from manufacturer in cart"
    is_comparing_sequences = True

    def get_value(self, ctx: CartRuleContext) -> list[int]:
        return ctx.cart_manufacturer_ids()


@register_rule
class PRODUCT_IN_WISHLIST(ListRule):
    name = "ProductInWishlist"
    display_name = "Product on wishlist"
    is_comparing_sequences = True

    def get_value(self, ctx: CartRuleContext) -> list[int]:
        return ctx.cart.wishlist_product_ids


@register_rule
class CART_SHIPPING_METHOD(ListRule):
    name = "CartShippingMethod"
    display_name = "Shipping method"

    def get_value(self, ctx: CartRuleContext) -> Optional[int]:
        return ctx.cart.shipping_method_id


@register_rule
class CART_PAYMENT_METHOD(ListRule):
    name = "CartPaymentMethod"
    display_name = "Payment method"
    rule_type = RuleType.STRING_ARRAY

    def get_value(self, ctx: CartRuleContext) -> Optional[str]:
        return ctx.cart.payment_method


@dataclass(frozen=True)
class QuantityRange:
    """Target id plus inclusive quantity bounds; a bound of 0 is open."""

    target_id: int
    min_quantity: int = 0
    max_quantity: int = 0

    def contains(self, quantity: int) -> bool:
        if quantity <= 0:
            return False
        if self.min_quantity > 0 and quantity < self.min_quantity:
            return False
        if self.max_quantity > 0 and quantity > self.max_quantity:
            return False
        return True


def parse_quantity_range(value: Any) -> QuantityRange:
    """Read ``{"id", "min", "max"}`` or the stored ``"id|min|max"`` form."""
    if isinstance(value, QuantityRange):
        return value
    if isinstance(value, Mapping):
        parts = [value.get("id"), value.get("min", 0), value.get("max", 0)]
    elif isinstance(value, str):
        parts = [p.strip() for p in value.replace(",", "|").split("|")]
    elif isinstance(value, (list, tuple)):
        parts = list(value)
    else:
        raise ConfigurationError(f"Invalid quantity value {value!r}.")
    parts += [0] * (3 - len(parts))
    try:
        target_id, min_qty, max_qty = (int(p or 0) for p in parts[:3])
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid quantity value {value!r}.") from exc
    if target_id <= 0:
        raise ConfigurationError(f"Quantity value {value!r} requires a positive id.")
    if min_qty > 0 and max_qty > 0 and min_qty > max_qty:
        raise ConfigurationError(f"Quantity value {value!r} has min greater than max.")
    return QuantityRange(target_id, min_qty, max_qty)


class _CartItemQuantityRule(Rule):
    rule_type = RuleType.STRING
    operators = (RuleOperator.IS_EQUAL_TO,)

    @classmethod
    def parse_value(cls, value: Any) -> QuantityRange:
        return parse_quantity_range(value)

    @abstractmethod
    def quantity(self, ctx: CartRuleContext, target_id: int) -> int:  # pragma: no cover
        raise NotImplementedError

    def match(self, ctx: CartRuleContext, expression: RuleExpression) -> bool:
        wanted = parse_quantity_range(expression.value)
        return wanted.contains(self.quantity(ctx, wanted.target_id))


@register_rule
class CART_ITEM_QUANTITY(_CartItemQuantityRule):
    name = "CartItemQuantity"
    display_name = "Product quantity in cart"

    def quantity(self, ctx: CartRuleContext, target_id: int) -> int:
        return sum(item.quantity for item in ctx.cart.items if item.product_id == target_id)


@register_rule
class CART_ITEM_FROM_CATEGORY_QUANTITY(_CartItemQuantityRule):
    name = "CartItemFromCategoryQuantity"
    display_name = "Quantity of products from category in cart"

    def quantity(self, ctx: CartRuleContext, target_id: int) -> int:
        return sum(item.quantity for item in ctx.cart.items if target_id in item.category_ids)
