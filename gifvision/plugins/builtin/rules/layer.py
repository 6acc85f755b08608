# -*- coding: utf-8 -*-
"""
Regras de compatibilidade do blend de camada
"""

from ....domain.models.pipeline import Layer
from ....infra.plugins import compatibility_rule


def _negate_message(layer: Layer) -> str:
    return (
        f"{layer.title}: {layer.blend_state.mode.display_name} "
        "is incompatible with the Negate Colors filter"
    )


@compatibility_rule(
    name="color_sensitive_negate",
    stage="layer",
    message=_negate_message,
    description="Modos de cor não aceitam streams com cores negadas",
)
def color_sensitive_mode_with_negate(layer: Layer) -> bool:
    negate_enabled = (
        layer.stream_a.adjustments.negate_colors
        or layer.stream_b.adjustments.negate_colors
    )
    return layer.blend_state.mode.is_color_sensitive and negate_enabled
