from __future__ import annotations

from ..context import CartRuleContext
from ..matching import has_list_match
from ..models import RuleExpression, RuleType
from ..registry import register_rule
from ..rule import ListRule


@register_rule
class STORE(ListRule):
    name = "Store"
    display_name = "Store"

    def get_value(self, ctx: CartRuleContext) -> int:
        return ctx.store_id


@register_rule
class CURRENCY(ListRule):
    name = "Currency"
    display_name = "Currency"

    def get_value(self, ctx: CartRuleContext) -> int:
        return ctx.currency_id


@register_rule
class LANGUAGE(ListRule):
    name = "Language"
    display_name = "Language"

    def get_value(self, ctx: CartRuleContext) -> int:
        return ctx.language_id


@register_rule
class IP_COUNTRY(ListRule):
    name = "IPCountry"
    display_name = "Country by IP address"
    rule_type = RuleType.STRING_ARRAY

    def get_value(self, ctx: CartRuleContext):
        return (ctx.ip_country_iso or "").upper() or None

    def match(self, ctx: CartRuleContext, expression: RuleExpression) -> bool:
        # ISO codes compare case-insensitively; configured values may be lower case.
        countries = [str(v).upper() for v in expression.value or ()]
        return has_list_match(self.get_value(ctx), {"operator": expression.operator, "value": countries})


@register_rule
class WEEKDAY(ListRule):
    name = "Weekday"
    display_name = "Weekday"

    def get_value(self, ctx: CartRuleContext) -> int:
        # Sunday = 0 ... Saturday = 6
        return ctx.now.isoweekday() % 7
