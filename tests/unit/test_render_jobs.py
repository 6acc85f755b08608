# -*- coding: utf-8 -*-
"""
Testes para os identificadores de job
"""

import uuid

from gifvision.application.services.render_jobs import (
    layer_blend_id,
    master_blend_id,
    stream_render_id,
)
from gifvision.domain.models.pipeline import BlendMode, StreamSelection


def test_stream_render_id():
    assert stream_render_id(1, StreamSelection.B) == "layer-1-stream-b-render"


def test_layer_blend_id():
    assert layer_blend_id(2, BlendMode.SOFT_LIGHT) == "layer-2-blend-softlight"


def test_master_blend_id_with_token():
    token = uuid.UUID("12345678-1234-5678-1234-567812345678")

    assert master_blend_id(BlendMode.COLOR_DODGE, token) == (
        "master-blend-colordodge-12345678-1234-5678-1234-567812345678"
    )


def test_master_blend_id_is_unique_per_dispatch():
    assert master_blend_id(BlendMode.NORMAL) != master_blend_id(BlendMode.NORMAL)
