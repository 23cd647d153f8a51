from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .errors import ConfigurationError
from .models import RuleExpression, RuleExpressionGroup, RuleType
from .operators import LogicalRuleOperator, parse_logical_operator, parse_operator
from .registry import RuleRegistry, registry as default_registry

RULE_SET_RULE = "RuleSet"

_VALUE_ADAPTERS: Dict[RuleType, TypeAdapter] = {
    RuleType.BOOLEAN: TypeAdapter(bool),
    RuleType.INT: TypeAdapter(int),
    RuleType.FLOAT: TypeAdapter(float),
    RuleType.MONEY: TypeAdapter(Decimal),
    RuleType.STRING: TypeAdapter(str),
    RuleType.DATE_TIME: TypeAdapter(datetime),
    RuleType.INT_ARRAY: TypeAdapter(List[int]),
    RuleType.STRING_ARRAY: TypeAdapter(List[str]),
}


class RuleExpressionConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    rule: str
    operator: str = "="
    value: Any = None
    id: Optional[int] = None


class RuleGroupConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    logical_operator: str = LogicalRuleOperator.AND.value
    rules: List[Union[RuleExpressionConfig, "RuleGroupConfig"]]


class RuleSetConfig(RuleGroupConfig):
    id: int
    name: str = ""
    rules: List[Union[RuleExpressionConfig, RuleGroupConfig]] = Field(default_factory=list)


RuleGroupConfig.model_rebuild()
RuleSetConfig.model_rebuild()


def coerce_value(rule_type: RuleType, value: Any) -> Any:
    """Convert a configured value to the Python type the rule compares against."""
    if value is None:
        return None
    if rule_type.is_array:
        if isinstance(value, str):
            # Stored rule values are comma separated ("1,2,3").
            value = [part.strip() for part in value.split(",") if part.strip()]
        elif not isinstance(value, (list, tuple, set)):
            value = [value]
    try:
        return _VALUE_ADAPTERS[rule_type].validate_python(value)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid {rule_type.value} value {value!r}: {exc.errors()[0]['msg']}") from exc


def _raw_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    # Quantity values ({id, min, max}) are stored as "id|min|max".
    if isinstance(value, dict):
        return "|".join(str(value.get(key, 0)) for key in ("id", "min", "max"))
    if isinstance(value, (list, tuple, set)):
        return ",".join(str(v) for v in value)
    return str(value)


class RuleSetsConfig(BaseModel):
    """Rule sets as declared in a rules file.

    ``build`` validates rule names, operators and values against the registry and
    returns immutable expression groups keyed by rule set id.
    """

    rule_sets: List[RuleSetConfig] = Field(default_factory=list)

    @classmethod
    def from_mapping(cls, raw: Any) -> "RuleSetsConfig":
        if raw is None:
            return cls()
        if isinstance(raw, list):
            raw = {"rule_sets": raw}
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid rule set configuration: {exc}") from exc

    def build(self, registry: Optional[RuleRegistry] = None) -> Dict[int, RuleExpressionGroup]:
        reg = registry or default_registry
        groups: Dict[int, RuleExpressionGroup] = {}
        references: Dict[int, set[int]] = {}

        for rs in self.rule_sets:
            if rs.id in groups:
                raise ConfigurationError(f"Duplicate rule set id: {rs.id}")
            refs: set[int] = set()
            groups[rs.id] = RuleExpressionGroup(
                id=rs.id,
                name=rs.name,
                logical_operator=parse_logical_operator(rs.logical_operator),
                expressions=tuple(self._build_item(item, reg, refs) for item in rs.rules),
            )
            references[rs.id] = refs

        for rs_id, refs in references.items():
            missing = sorted(r for r in refs if r not in groups)
            if missing:
                raise ConfigurationError(f"Rule set {rs_id} references unknown rule set(s): {missing}")
        _check_cycles(references)
        return groups

    def _build_item(
        self,
        item: Union[RuleExpressionConfig, RuleGroupConfig],
        reg: RuleRegistry,
        refs: set[int],
    ) -> Union[RuleExpression, RuleExpressionGroup]:
        if isinstance(item, RuleGroupConfig):
            return RuleExpressionGroup(
                logical_operator=parse_logical_operator(item.logical_operator),
                expressions=tuple(self._build_item(child, reg, refs) for child in item.rules),
                is_sub_group=True,
            )

        rule_cls = reg.get(item.rule)
        op = parse_operator(item.operator)
        if op not in rule_cls.accepted_operators():
            raise ConfigurationError(f"Operator '{op.value}' is not valid for rule '{item.rule}'.")

        parse_value = getattr(rule_cls, "parse_value", None)
        if parse_value is not None:
            value = parse_value(item.value)
        else:
            value = coerce_value(rule_cls.rule_type, item.value)
        if item.rule == RULE_SET_RULE:
            if value is None:
                raise ConfigurationError("RuleSet expression requires a rule set id value.")
            refs.add(value)

        return RuleExpression(
            id=item.id,
            rule=item.rule,
            operator=op,
            value=value,
            raw_value=_raw_value(item.value),
        )


def _check_cycles(references: Dict[int, set[int]]) -> None:
    visiting: set[int] = set()
    done: set[int] = set()

    def _visit(node: int, path: list[int]) -> None:
        if node in done:
            return
        if node in visiting:
            cycle = path[path.index(node):] + [node]
            raise ConfigurationError(f"Cyclic rule set reference: {' -> '.join(str(n) for n in cycle)}")
        visiting.add(node)
        for ref in sorted(references.get(node, ())):
            _visit(ref, path + [node])
        visiting.discard(node)
        done.add(node)

    for node in sorted(references):
        _visit(node, [])


def load_rule_sets(path: Union[str, Path]) -> RuleSetsConfig:
    """Read rule sets from a YAML (or JSON) file."""
    p = Path(path)
    try:
        raw = yaml.safe_load(p.read_text())
    except OSError as exc:
        raise ConfigurationError(f"Cannot read rules file {p}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid rules file {p}: {exc}") from exc
    return RuleSetsConfig.from_mapping(raw)
