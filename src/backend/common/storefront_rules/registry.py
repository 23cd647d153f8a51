from __future__ import annotations

from typing import Dict, Iterable, Type

from .errors import ConfigurationError
from .rule import Rule


class RuleRegistry:
    def __init__(self):
        self._rules: Dict[str, Type[Rule]] = {}
        self._instances: Dict[str, Rule] = {}

    def register(self, rule_cls: Type[Rule]) -> None:
        name = getattr(rule_cls, "name", None)
        if not name:
            raise ValueError("Rule class missing name")
        if name in self._rules:
            raise ValueError(f"Duplicate rule name registered: {name}")
        self._rules[name] = rule_cls

    def get(self, name: str) -> Type[Rule]:
        try:
            return self._rules[name]
        except KeyError:
            raise ConfigurationError(f"Unknown rule: {name!r}") from None

    def processor(self, name: str) -> Rule:
        # Rules are stateless, one shared instance per name is enough.
        instance = self._instances.get(name)
        if instance is None:
            instance = self.get(name)()
            self._instances[name] = instance
        return instance

    def names(self) -> Iterable[str]:
        return self._rules.keys()

    def __contains__(self, name: object) -> bool:
        return name in self._rules


registry = RuleRegistry()


def register_rule(rule_cls: Type[Rule]) -> Type[Rule]:
    registry.register(rule_cls)
    return rule_cls
