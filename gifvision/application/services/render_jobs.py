# -*- coding: utf-8 -*-
"""
Identificadores dos jobs de renderização enviados ao encoder
"""

import uuid
from typing import Optional

from ...domain.models.pipeline import BlendMode, StreamSelection


def stream_render_id(layer_id: int, stream: StreamSelection) -> str:
    """Job de render de um stream dentro de uma camada"""
    return f"layer-{layer_id}-stream-{stream.value.lower()}-render"


def layer_blend_id(layer_id: int, mode: BlendMode) -> str:
    """Job de blend entre Stream A e B de uma camada"""
    return f"layer-{layer_id}-blend-{mode.slug}"


def master_blend_id(mode: BlendMode, token: Optional[uuid.UUID] = None) -> str:
    """Job do blend master; o token torna cada despacho único"""
    return f"master-blend-{mode.slug}-{token or uuid.uuid4()}"
