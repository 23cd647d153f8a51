from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from common.storefront_rules.catalog import RuleCatalogEntry, build_catalog
from common.storefront_rules.config import RuleSetsConfig, load_rule_sets
from common.storefront_rules.context import CartRuleContext, CartSnapshot, CustomerSnapshot
from common.storefront_rules.errors import ConfigurationError
from common.storefront_rules.matching import has_lists_match
from common.storefront_rules.models import RuleRunReport
from common.storefront_rules.runner import RulesRunner
from common.storefront_rules.settings import get_rules_settings


router = APIRouter(prefix="/rules", tags=["rules"])


class ListsMatchRequest(BaseModel):
    left: Optional[List[Any]] = None
    operator: str
    value: Optional[List[Any]] = None


class ListsMatchResponse(BaseModel):
    matched: bool


class ContextPayload(BaseModel):
    customer: CustomerSnapshot = Field(default_factory=CustomerSnapshot)
    cart: CartSnapshot = Field(default_factory=CartSnapshot)
    store_id: int = 0
    currency_id: int = 0
    language_id: int = 0
    ip_country_iso: Optional[str] = None
    now: Optional[datetime] = None

    def to_context(self) -> CartRuleContext:
        kwargs = {}
        if self.now is not None:
            kwargs["now"] = self.now
        return CartRuleContext(
            customer=self.customer,
            cart=self.cart,
            store_id=self.store_id,
            currency_id=self.currency_id,
            language_id=self.language_id,
            ip_country_iso=self.ip_country_iso,
            **kwargs,
        )


class EvaluateRequest(BaseModel):
    context: ContextPayload = Field(default_factory=ContextPayload)
    # Falls back to STOREFRONT_RULES_PATH when omitted.
    rule_sets: Optional[List[Any]] = None
    rule_set_ids: Optional[List[int]] = None


def _load_config(rule_sets: Optional[List[Any]]) -> RuleSetsConfig:
    if rule_sets is not None:
        return RuleSetsConfig.from_mapping(rule_sets)
    path = get_rules_settings().rules_path
    if path is None:
        raise ConfigurationError("No rule sets supplied and STOREFRONT_RULES_PATH is not set.")
    return load_rule_sets(path)


@router.get("/catalog", response_model=List[RuleCatalogEntry])
def rules_catalog():
    return build_catalog()


@router.post("/lists-match", response_model=ListsMatchResponse)
def rules_lists_match(req: ListsMatchRequest):
    try:
        matched = has_lists_match(req.left, {"operator": req.operator, "value": req.value})
    except ConfigurationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ListsMatchResponse(matched=matched)


@router.post("/evaluate", response_model=RuleRunReport)
def rules_evaluate(req: EvaluateRequest):
    try:
        groups = _load_config(req.rule_sets).build()
        runner = RulesRunner(groups)
        return runner.run(req.context.to_context(), rule_set_ids=req.rule_set_ids)
    except ConfigurationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
