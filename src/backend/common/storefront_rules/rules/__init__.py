from .cart import (
    CART_ITEM_FROM_CATEGORY_QUANTITY,
    CART_ITEM_QUANTITY,
    CART_PAYMENT_METHOD,
    CART_PRODUCT_COUNT,
    CART_SHIPPING_METHOD,
    CART_SUBTOTAL,
    CART_TOTAL,
    PRODUCT_FROM_CATEGORY_IN_CART,
    PRODUCT_FROM_MANUFACTURER_IN_CART,
    PRODUCT_IN_CART,
    PRODUCT_IN_WISHLIST,
)
from .common import CURRENCY, IP_COUNTRY, LANGUAGE, STORE, WEEKDAY
from .customer import (
    CART_BILLING_COUNTRY,
    CART_ORDER_COUNT,
    CART_PAID_BY,
    CART_PURCHASED_FROM_MANUFACTURER,
    CART_PURCHASED_PRODUCT,
    CART_SHIPPING_COUNTRY,
    CART_SPENT_AMOUNT,
    CUSTOMER_ROLE,
    IS_TAX_EXEMPT,
    PRODUCT_REVIEW_COUNT,
    REWARD_POINTS_BALANCE,
)
from .rule_set import RULE_SET

__all__ = [
    "STORE",
    "CURRENCY",
    "LANGUAGE",
    "IP_COUNTRY",
    "WEEKDAY",
    "CUSTOMER_ROLE",
    "CART_BILLING_COUNTRY",
    "CART_SHIPPING_COUNTRY",
    "IS_TAX_EXEMPT",
    "REWARD_POINTS_BALANCE",
    "PRODUCT_REVIEW_COUNT",
    "CART_ORDER_COUNT",
    "CART_SPENT_AMOUNT",
    "CART_PAID_BY",
    "CART_PURCHASED_PRODUCT",
    "CART_PURCHASED_FROM_MANUFACTURER",
    "CART_TOTAL",
    "CART_SUBTOTAL",
    "CART_PRODUCT_COUNT",
    "PRODUCT_IN_CART",
    "PRODUCT_FROM_CATEGORY_IN_CART",
    "PRODUCT_FROM_MANUFACTURER_IN_CART",
    "PRODUCT_IN_WISHLIST",
    "CART_SHIPPING_METHOD",
    "CART_PAYMENT_METHOD",
    "CART_ITEM_QUANTITY",
    "CART_ITEM_FROM_CATEGORY_QUANTITY",
    "RULE_SET",
]
