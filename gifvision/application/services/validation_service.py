# -*- coding: utf-8 -*-
"""
gifvision/application/services/validation_service.py
Validação dos três estágios: render de stream, blend de camada e blend master

Funções puras: leem um snapshot imutável e devolvem um veredicto, nunca
lançam exceção para configurações inválidas.
"""

from typing import Optional, Sequence

from ...domain.models.pipeline import Layer, PipelineState, Stream
from ...domain.models.validation import (
    LayerBlendValidation,
    MasterBlendValidation,
    StreamValidation,
    blend_verdict,
    stream_verdict,
)
from ...infra.plugins import CompatibilityRule, evaluate_rules
from ...plugins.builtin.rules.registry import layer_rules, master_rules

MIN_COLORS = 2
MAX_COLORS = 256


def _in_unit_range(value: float) -> bool:
    return 0.0 <= value <= 1.0


def validate_stream(layer: Layer, stream: Stream) -> StreamValidation:
    """Aplica as regras de render de um stream, acumulando todas as violações"""
    errors = []
    adjustments = stream.adjustments

    if layer.source_clip is None or not layer.source_clip.uri:
        errors.append(f"{layer.title}: select a source clip before rendering")
    if adjustments.resolution_percent <= 0:
        errors.append("Resolution must be greater than 0%")
    if adjustments.frame_rate <= 0:
        errors.append("Frame rate must be positive")
    if not MIN_COLORS <= adjustments.max_colors <= MAX_COLORS:
        errors.append(
            f"Color palette must be between {MIN_COLORS} and {MAX_COLORS} colors"
        )
    if adjustments.clip_duration_seconds <= 0:
        errors.append("Clip duration must be positive")

    return stream_verdict(errors)


def validate_layer_blend(
    layer: Layer, rules: Optional[Sequence[CompatibilityRule]] = None
) -> LayerBlendValidation:
    """Aplica as regras do blend de camada"""
    errors = []

    if not layer.stream_a.is_rendered and not layer.stream_b.is_rendered:
        errors.append("Render Stream A or Stream B before blending")
    if not _in_unit_range(layer.blend_state.opacity):
        errors.append("Layer opacity must remain between 0 and 1")

    errors.extend(evaluate_rules(layer_rules() if rules is None else rules, layer))
    return blend_verdict(errors)


def validate_master_blend(
    state: PipelineState, rules: Optional[Sequence[CompatibilityRule]] = None
) -> MasterBlendValidation:
    """Aplica as regras do blend master sobre todas as camadas"""
    reasons = []

    if any(not layer.blend_state.is_blended for layer in state.layers):
        reasons.append("Blend each layer before attempting the master mix")
    if not _in_unit_range(state.master_blend.opacity):
        reasons.append("Master blend opacity must remain between 0 and 1")

    reasons.extend(evaluate_rules(master_rules() if rules is None else rules, state))
    return blend_verdict(reasons)
