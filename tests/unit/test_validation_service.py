# -*- coding: utf-8 -*-
"""
Testes para os validadores dos três estágios
"""

import pytest
from dataclasses import replace

from gifvision.application.services.validation_service import (
    validate_layer_blend,
    validate_master_blend,
    validate_stream,
)
from gifvision.domain.models.pipeline import (
    AdjustmentSettings,
    BlendConfig,
    BlendMode,
    Layer,
    MasterBlendConfig,
    PipelineState,
    SourceClip,
    Stream,
    StreamSelection,
)
from gifvision.domain.models.validation import Blocked, Error, Ready, Valid


def make_layer(title="Layer 1", clip=True, a_path=None, b_path=None, **blend):
    return Layer(
        id=1,
        title=title,
        source_clip=SourceClip(uri="content://clip.mp4") if clip else None,
        stream_a=Stream(StreamSelection.A, generated_gif_path=a_path),
        stream_b=Stream(StreamSelection.B, generated_gif_path=b_path),
        blend_state=BlendConfig(**blend),
    )


def with_negate(layer, selection=StreamSelection.A):
    stream = layer.stream(selection)
    return layer.with_stream(
        replace(stream, adjustments=replace(stream.adjustments, negate_colors=True))
    )


class TestStreamValidation:
    def test_valid_stream(self):
        layer = make_layer()

        assert validate_stream(layer, layer.stream_a) == Valid()

    def test_missing_clip_uses_layer_title(self):
        layer = make_layer(title="Layer 2", clip=False)

        verdict = validate_stream(layer, layer.stream_a)

        assert verdict == Error(("Layer 2: select a source clip before rendering",))

    def test_all_five_violations_in_order(self):
        layer = make_layer(clip=False)
        stream = Stream(
            StreamSelection.A,
            adjustments=AdjustmentSettings(
                resolution_percent=0,
                frame_rate=-1,
                max_colors=1,
                clip_duration_seconds=0,
            ),
        )

        verdict = validate_stream(layer, stream)

        assert isinstance(verdict, Error)
        assert verdict.reasons == (
            "Layer 1: select a source clip before rendering",
            "Resolution must be greater than 0%",
            "Frame rate must be positive",
            "Color palette must be between 2 and 256 colors",
            "Clip duration must be positive",
        )

    def test_clip_present_reports_four_parameter_errors(self):
        layer = make_layer()
        stream = Stream(
            StreamSelection.B,
            adjustments=AdjustmentSettings(
                resolution_percent=0,
                frame_rate=0,
                max_colors=999,
                clip_duration_seconds=0,
            ),
        )

        verdict = validate_stream(layer, stream)

        assert isinstance(verdict, Error)
        assert len(verdict.reasons) == 4
        assert not any("source clip" in reason for reason in verdict.reasons)

    @pytest.mark.parametrize("colors", [2, 128, 256])
    def test_color_bounds_inclusive(self, colors):
        layer = make_layer()
        stream = Stream(StreamSelection.A, adjustments=AdjustmentSettings(max_colors=colors))

        assert validate_stream(layer, stream) == Valid()

    @pytest.mark.parametrize("colors", [0, 1, 257])
    def test_color_out_of_range(self, colors):
        layer = make_layer()
        stream = Stream(StreamSelection.A, adjustments=AdjustmentSettings(max_colors=colors))

        verdict = validate_stream(layer, stream)

        assert verdict == Error(("Color palette must be between 2 and 256 colors",))

    def test_idempotent(self):
        layer = make_layer(clip=False)

        assert validate_stream(layer, layer.stream_a) == validate_stream(layer, layer.stream_a)


class TestLayerBlendValidation:
    def test_ready_with_one_stream(self):
        layer = make_layer(a_path="a.gif")

        assert validate_layer_blend(layer) == Ready()

    def test_requires_a_rendered_stream(self):
        layer = make_layer(b_path="  ", opacity=3.0, mode=BlendMode.HUE)
        layer = with_negate(layer)

        verdict = validate_layer_blend(layer)

        assert isinstance(verdict, Blocked)
        assert verdict.reasons[0] == "Render Stream A or Stream B before blending"
        assert len(verdict.reasons) == 3

    @pytest.mark.parametrize("opacity", [-0.01, 1.01, float("nan")])
    def test_opacity_out_of_range(self, opacity):
        layer = make_layer(a_path="a.gif", opacity=opacity)

        verdict = validate_layer_blend(layer)

        assert verdict == Blocked(("Layer opacity must remain between 0 and 1",))

    @pytest.mark.parametrize("opacity", [0.0, 1.0])
    def test_opacity_bounds_inclusive(self, opacity):
        layer = make_layer(a_path="a.gif", opacity=opacity)

        assert validate_layer_blend(layer) == Ready()

    def test_color_mode_with_negate_is_incompatible(self):
        layer = with_negate(make_layer(a_path="a.gif", mode=BlendMode.COLOR))

        verdict = validate_layer_blend(layer)

        assert isinstance(verdict, Blocked)
        assert len(verdict.reasons) == 1
        assert "incompatible" in verdict.reasons[0]
        assert verdict.reasons[0] == (
            "Layer 1: Color is incompatible with the Negate Colors filter"
        )

    def test_negate_on_stream_b_also_triggers(self):
        layer = with_negate(
            make_layer(a_path="a.gif", mode=BlendMode.LUMINOSITY), StreamSelection.B
        )

        verdict = validate_layer_blend(layer)

        assert verdict == Blocked(
            ("Layer 1: Luminosity is incompatible with the Negate Colors filter",)
        )

    def test_negate_with_non_color_mode_is_fine(self):
        layer = with_negate(make_layer(a_path="a.gif", mode=BlendMode.MULTIPLY))

        assert validate_layer_blend(layer) == Ready()

    def test_explicit_empty_rule_set_skips_compatibility(self):
        layer = with_negate(make_layer(a_path="a.gif", mode=BlendMode.HUE))

        assert validate_layer_blend(layer, rules=[]) == Ready()


def blended_state(master_mode=BlendMode.NORMAL, master_opacity=1.0, layer_mode=BlendMode.NORMAL):
    layers = tuple(
        Layer(
            id=i,
            title=f"Layer {i}",
            blend_state=BlendConfig(mode=layer_mode, blended_gif_path=f"layer{i}.gif"),
        )
        for i in (1, 2)
    )
    return PipelineState(
        layers=layers,
        master_blend=MasterBlendConfig(mode=master_mode, opacity=master_opacity),
    )


class TestMasterBlendValidation:
    def test_ready(self):
        assert validate_master_blend(blended_state()) == Ready()

    def test_requires_every_layer_blended(self):
        state = blended_state()
        layer = state.layers[1]
        state = state.with_layer(
            replace(layer, blend_state=replace(layer.blend_state, blended_gif_path=""))
        )

        verdict = validate_master_blend(state)

        assert verdict == Blocked(("Blend each layer before attempting the master mix",))

    def test_default_state_is_blocked(self):
        verdict = validate_master_blend(PipelineState())

        assert isinstance(verdict, Blocked)
        assert "Blend each layer" in verdict.reasons[0]

    def test_opacity_out_of_range(self):
        verdict = validate_master_blend(blended_state(master_opacity=1.5))

        assert verdict == Blocked(("Master blend opacity must remain between 0 and 1",))

    def test_color_dodge_over_difference(self):
        state = blended_state(master_mode=BlendMode.COLOR_DODGE, layer_mode=BlendMode.DIFFERENCE)

        verdict = validate_master_blend(state)

        assert verdict == Blocked(
            ("Master blend Color Dodge cannot combine with Difference layer blends",)
        )

    def test_color_dodge_without_difference_is_fine(self):
        state = blended_state(master_mode=BlendMode.COLOR_DODGE, layer_mode=BlendMode.SCREEN)

        assert validate_master_blend(state) == Ready()

    def test_all_reasons_accumulate(self):
        state = PipelineState(
            layers=(Layer(id=1, title="Layer 1", blend_state=BlendConfig(mode=BlendMode.DIFFERENCE)),),
            master_blend=MasterBlendConfig(mode=BlendMode.COLOR_DODGE, opacity=-1),
        )

        verdict = validate_master_blend(state)

        assert isinstance(verdict, Blocked)
        assert len(verdict.reasons) == 3

    def test_idempotent(self):
        state = blended_state(master_opacity=2.0)

        assert validate_master_blend(state) == validate_master_blend(state)
