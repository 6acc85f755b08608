from ....infra.plugins import rule_registry

# Importar os módulos registra as regras built-in
from . import layer  # noqa: F401
from . import master  # noqa: F401


def layer_rules():
    return rule_registry.rules_for("layer")


def master_rules():
    return rule_registry.rules_for("master")
