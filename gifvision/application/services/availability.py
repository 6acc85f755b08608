# -*- coding: utf-8 -*-
"""
Projeção de habilitação dos controles a partir do estado e dos veredictos
"""

from dataclasses import dataclass

from ...domain.models.pipeline import Layer, MasterBlendConfig, StreamSelection, is_blank
from ...domain.models.validation import is_ok
from .validation_service import validate_stream


@dataclass(frozen=True)
class StreamRenderAvailability:
    """Estado do botão de render de um stream"""

    generate_enabled: bool
    is_generating: bool
    generate_label: str


@dataclass(frozen=True)
class BlendControlsAvailability:
    """Habilitação do card de blend (modo, opacidade e botão de gerar)"""

    controls_enabled: bool
    generate_enabled: bool
    is_generating: bool


@dataclass(frozen=True)
class MasterBlendAvailability:
    """Habilitação do card master, incluindo salvar e compartilhar"""

    controls: BlendControlsAvailability
    save_enabled: bool
    share_enabled: bool
    generate_label: str


def stream_render_availability(layer: Layer, selection: StreamSelection) -> StreamRenderAvailability:
    stream = layer.stream(selection)
    verb = "Regenerate" if stream.is_rendered else "Generate"
    return StreamRenderAvailability(
        generate_enabled=is_ok(validate_stream(layer, stream)) and not stream.is_generating,
        is_generating=stream.is_generating,
        generate_label=f"{verb} Stream {selection.value}",
    )


def layer_blend_controls_availability(layer: Layer) -> BlendControlsAvailability:
    """Controles só liberam com os dois streams prontos; gerar basta um"""
    is_generating = layer.blend_state.is_generating
    stream_a_ready = layer.stream_a.is_rendered
    stream_b_ready = layer.stream_b.is_rendered
    return BlendControlsAvailability(
        controls_enabled=stream_a_ready and stream_b_ready and not is_generating,
        generate_enabled=(stream_a_ready or stream_b_ready) and not is_generating,
        is_generating=is_generating,
    )


def master_blend_availability(master: MasterBlendConfig) -> MasterBlendAvailability:
    is_generating = master.is_generating
    has_output = not is_blank(master.master_gif_path)
    controls_enabled = master.is_enabled and not is_generating
    save_enabled = has_output and not is_generating
    return MasterBlendAvailability(
        controls=BlendControlsAvailability(
            controls_enabled=controls_enabled,
            generate_enabled=controls_enabled,
            is_generating=is_generating,
        ),
        save_enabled=save_enabled,
        share_enabled=save_enabled and not master.share_setup.is_preparing_share,
        generate_label="Regenerate Master Blend" if has_output else "Generate Master Blend",
    )
