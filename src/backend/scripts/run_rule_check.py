from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path


def _ensure_backend_on_path() -> None:
    backend_dir = Path(__file__).resolve().parents[1]
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))


def _load_json(path: Path):
    with path.open() as handle:
        return json.load(handle)


def build_context(raw: dict | None):
    _ensure_backend_on_path()
    from datetime import datetime

    from pydantic import TypeAdapter

    from common.storefront_rules.context import CartRuleContext, CartSnapshot, CustomerSnapshot

    raw = raw or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Context must be a JSON object, got {type(raw).__name__}.")
    kwargs = {}
    if raw.get("now"):
        kwargs["now"] = TypeAdapter(datetime).validate_python(raw["now"])
    return CartRuleContext(
        customer=CustomerSnapshot.model_validate(raw.get("customer") or {}),
        cart=CartSnapshot.model_validate(raw.get("cart") or {}),
        store_id=int(raw.get("store_id") or 0),
        currency_id=int(raw.get("currency_id") or 0),
        language_id=int(raw.get("language_id") or 0),
        ip_country_iso=raw.get("ip_country_iso"),
        **kwargs,
    )


def run_rule_check(rules_path: Path, context: dict | None, rule_set_ids: list[int] | None = None):
    _ensure_backend_on_path()
    from common.storefront_rules.config import load_rule_sets
    from common.storefront_rules.runner import RulesRunner

    runner = RulesRunner(load_rule_sets(rules_path).build())
    return runner.run(build_context(context), rule_set_ids=rule_set_ids)


def main(argv: list[str] | None = None) -> int:
    _ensure_backend_on_path()
    import yaml

    from common.storefront_rules.errors import ConfigurationError
    from common.storefront_rules.settings import get_rules_settings

    settings = get_rules_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    parser = argparse.ArgumentParser(
        description="Evaluate configured storefront rule sets against a cart/customer context."
    )
    parser.add_argument(
        "--rules",
        default=str(settings.rules_path) if settings.rules_path else None,
        help="Path to a YAML/JSON rule sets file (defaults to STOREFRONT_RULES_PATH).",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Path to a JSON file describing the customer, cart and store.",
    )
    parser.add_argument(
        "--rule-set",
        dest="rule_set_ids",
        type=int,
        action="append",
        default=None,
        help="Rule set id to evaluate (repeatable; defaults to all).",
    )
    parser.add_argument(
        "--format",
        choices=("json", "yaml"),
        default="json",
        help="Output format (default: json).",
    )
    args = parser.parse_args(argv)

    if not args.rules:
        raise SystemExit("A rules file is required (--rules or STOREFRONT_RULES_PATH).")

    try:
        context = _load_json(Path(args.context)) if args.context else None
    except (OSError, ValueError) as exc:
        print(f"Context error: {exc}", file=sys.stderr)
        return 2

    try:
        report = run_rule_check(Path(args.rules), context, args.rule_set_ids)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except ValueError as exc:
        # Rules loaded fine, so the context failed validation.
        print(f"Context error: {exc}", file=sys.stderr)
        return 2

    payload = report.model_dump(mode="json")
    if args.format == "yaml":
        print(yaml.safe_dump(payload, sort_keys=False))
    else:
        print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
