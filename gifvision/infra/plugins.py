# -*- coding: utf-8 -*-
"""
Sistema de plugins para regras de compatibilidade entre modos de blend e filtros
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Literal, Sequence

Stage = Literal["layer", "master"]


@dataclass(frozen=True)
class CompatibilityRule:
    """Par (predicado, mensagem) avaliado contra o sujeito de um estágio"""

    name: str
    stage: Stage
    applies: Callable[[Any], bool]
    message: Callable[[Any], str]
    description: str = ""

    def check(self, subject: Any) -> str | None:
        """Retorna a mensagem quando a combinação é inválida"""
        return self.message(subject) if self.applies(subject) else None


class RuleRegistry:
    """Registry para regras de compatibilidade"""

    def __init__(self):
        self._rules: Dict[str, CompatibilityRule] = {}

    def register(self, rule: CompatibilityRule):
        """Registra uma nova regra"""
        if rule.name in self._rules:
            raise ValueError(f"Regra já registrada: {rule.name}")
        self._rules[rule.name] = rule

    def unregister(self, name: str) -> CompatibilityRule | None:
        """Remove uma regra pelo nome"""
        return self._rules.pop(name, None)

    def get(self, name: str) -> CompatibilityRule | None:
        """Obtém uma regra pelo nome"""
        return self._rules.get(name)

    def rules_for(self, stage: Stage) -> List[CompatibilityRule]:
        """Regras de um estágio, na ordem de registro"""
        return [rule for rule in self._rules.values() if rule.stage == stage]

    def list_rules(self) -> List[CompatibilityRule]:
        """Lista todas as regras registradas"""
        return list(self._rules.values())


# Instância global do registry
rule_registry = RuleRegistry()


def compatibility_rule(
    name: str,
    stage: Stage,
    message: Callable[[Any], str],
    description: str = "",
    registry: RuleRegistry | None = None,
):
    """Decorator para registrar o predicado de uma regra"""

    def decorator(predicate: Callable[[Any], bool]):
        rule = CompatibilityRule(
            name=name,
            stage=stage,
            applies=predicate,
            message=message,
            description=description,
        )
        (registry or rule_registry).register(rule)
        return predicate

    return decorator


def evaluate_rules(rules: Sequence[CompatibilityRule], subject: Any) -> List[str]:
    """Avalia todas as regras e devolve as mensagens das que dispararam"""
    messages = []
    for rule in rules:
        reason = rule.check(subject)
        if reason is not None:
            messages.append(reason)
    return messages
