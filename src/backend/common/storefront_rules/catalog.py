from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

from .registry import RuleRegistry, registry as default_registry

# Ensure built-in rules are imported/registered when generating a catalog.
from . import rules as _builtin_rules  # noqa: F401


class RuleCatalogEntry(BaseModel):
    name: str
    display_name: str = ""
    group_key: str = ""
    rule_type: str
    operators: List[str] = Field(default_factory=list)
    is_comparing_sequences: bool = False

    module: str
    class_name: str


def build_catalog(registry: Optional[RuleRegistry] = None) -> List[RuleCatalogEntry]:
    reg = registry or default_registry
    entries: List[RuleCatalogEntry] = []
    for name in reg.names():
        rule_cls = reg.get(name)
        entries.append(
            RuleCatalogEntry(
                name=name,
                display_name=getattr(rule_cls, "display_name", "") or name,
                group_key=getattr(rule_cls, "group_key", ""),
                rule_type=rule_cls.rule_type.value,
                operators=[op.value for op in rule_cls.accepted_operators()],
                is_comparing_sequences=bool(getattr(rule_cls, "is_comparing_sequences", False)),
                module=getattr(rule_cls, "__module__", ""),
                class_name=getattr(rule_cls, "__name__", ""),
            )
        )

    entries.sort(key=lambda e: e.name)
    return entries


def _dump_json(catalog: list[dict[str, Any]]) -> str:
    return json.dumps(catalog, indent=2, sort_keys=True)


def _dump_yaml(catalog: list[dict[str, Any]]) -> str:
    return yaml.safe_dump(catalog, sort_keys=True)


def dump_catalog(fmt: str = "yaml") -> str:
    catalog: list[Dict[str, Any]] = [e.model_dump() for e in build_catalog()]
    if fmt == "json":
        return _dump_json(catalog)
    return _dump_yaml(catalog)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Generate a rule descriptor catalog from the registry.")
    parser.add_argument(
        "--format",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml).",
    )
    args = parser.parse_args(argv)
    print(dump_catalog(args.format))


if __name__ == "__main__":
    main()
