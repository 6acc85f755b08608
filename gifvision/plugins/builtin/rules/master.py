# -*- coding: utf-8 -*-
"""
Regras de compatibilidade do blend master
"""

from ....domain.models.pipeline import BlendMode, PipelineState
from ....infra.plugins import compatibility_rule


@compatibility_rule(
    name="color_dodge_over_difference",
    stage="master",
    message=lambda state: "Master blend Color Dodge cannot combine with Difference layer blends",
    description="Color Dodge no master sobre camadas Difference gera saída instável",
)
def color_dodge_over_difference(state: PipelineState) -> bool:
    layer_uses_difference = any(
        layer.blend_state.mode is BlendMode.DIFFERENCE for layer in state.layers
    )
    return layer_uses_difference and state.master_blend.mode is BlendMode.COLOR_DODGE
