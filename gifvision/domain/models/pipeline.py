# -*- coding: utf-8 -*-
"""
Modelos de domínio para streams, camadas e o blend master

Todos os modelos são imutáveis: alterações são feitas com dataclasses.replace
e o estado completo é trocado por uma nova cópia.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from .messages import LogEntry
from .share import ShareSetupState


class StreamSelection(Enum):
    """Identifica o slot de stream (A ou B) dentro de uma camada"""

    A = "A"
    B = "B"


class BlendMode(Enum):
    """Modos de blend suportados por camada e pelo master"""

    NORMAL = "Normal"
    MULTIPLY = "Multiply"
    SCREEN = "Screen"
    OVERLAY = "Overlay"
    DARKEN = "Darken"
    LIGHTEN = "Lighten"
    COLOR_DODGE = "Color Dodge"
    COLOR_BURN = "Color Burn"
    HARD_LIGHT = "Hard Light"
    SOFT_LIGHT = "Soft Light"
    DIFFERENCE = "Difference"
    EXCLUSION = "Exclusion"
    HUE = "Hue"
    SATURATION = "Saturation"
    COLOR = "Color"
    LUMINOSITY = "Luminosity"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def slug(self) -> str:
        """Nome compacto usado em identificadores de job (ex: colordodge)"""
        return self.name.replace("_", "").lower()

    @property
    def is_color_sensitive(self) -> bool:
        """Modos que dependem da decomposição em matiz/luminosidade"""
        return self in COLOR_SENSITIVE_MODES


COLOR_SENSITIVE_MODES = frozenset(
    {BlendMode.COLOR, BlendMode.HUE, BlendMode.SATURATION, BlendMode.LUMINOSITY}
)


def is_blank(value: Optional[str]) -> bool:
    """True quando o caminho está ausente ou só tem espaços"""
    return value is None or not value.strip()


@dataclass(frozen=True)
class AdjustmentSettings:
    """Todos os ajustes configuráveis de um stream"""

    resolution_percent: float = 1.0
    max_colors: int = 256
    frame_rate: float = 15.0
    clip_duration_seconds: float = 3.0
    text_overlay: str = ""
    font_size_sp: int = 54
    font_color: str = "white"  # "white" ou "black"
    brightness: float = 0.0
    contrast: float = 1.0
    saturation: float = 1.0
    hue: float = 0.0
    sepia: float = 0.0
    color_balance_red: float = 1.0
    color_balance_green: float = 1.0
    color_balance_blue: float = 1.0
    spectrum_pulse_intensity: float = 0.0
    color_cycle_speed: float = 0.0
    motion_trails: float = 0.0
    sharpen: float = 0.0
    pixellate: float = 0.0
    edge_detect_enabled: bool = False
    edge_detect_threshold: float = 0.1
    edge_detect_boost: float = 0.0
    negate_colors: bool = False
    flip_horizontal: bool = False
    flip_vertical: bool = False


@dataclass(frozen=True)
class Stream:
    """Estado de renderização de um stream (A ou B) de uma camada"""

    stream: StreamSelection
    adjustments: AdjustmentSettings = field(default_factory=AdjustmentSettings)
    generated_gif_path: Optional[str] = None  # preenchido pelo encoder externo
    is_generating: bool = False

    @property
    def is_rendered(self) -> bool:
        return not is_blank(self.generated_gif_path)


@dataclass(frozen=True)
class SourceClip:
    """Metadados do clipe de origem importado"""

    uri: str
    display_name: str = ""
    mime_type: Optional[str] = None
    size_bytes: Optional[int] = None
    duration_ms: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    last_modified: Optional[int] = None


@dataclass(frozen=True)
class BlendConfig:
    """Configuração do blend entre Stream A e Stream B de uma camada"""

    mode: BlendMode = BlendMode.NORMAL
    opacity: float = 1.0
    blended_gif_path: Optional[str] = None
    is_generating: bool = False

    @property
    def is_blended(self) -> bool:
        return not is_blank(self.blended_gif_path)


@dataclass(frozen=True)
class Layer:
    """Uma camada: dois streams, o blend entre eles e o log de renderização"""

    id: int
    title: str
    source_clip: Optional[SourceClip] = None
    stream_a: Stream = field(default_factory=lambda: Stream(StreamSelection.A))
    stream_b: Stream = field(default_factory=lambda: Stream(StreamSelection.B))
    active_stream: StreamSelection = StreamSelection.A
    blend_state: BlendConfig = field(default_factory=BlendConfig)
    logs: Tuple[LogEntry, ...] = ()

    def stream(self, selection: StreamSelection) -> Stream:
        """Retorna o stream correspondente ao slot"""
        return self.stream_a if selection is StreamSelection.A else self.stream_b

    def with_stream(self, stream: Stream) -> Layer:
        """Cópia da camada com o stream substituído no seu slot"""
        if stream.stream is StreamSelection.A:
            return replace(self, stream_a=stream)
        return replace(self, stream_b=stream)


@dataclass(frozen=True)
class MasterBlendConfig:
    """Estado do blend master que combina a saída de todas as camadas"""

    mode: BlendMode = BlendMode.NORMAL
    opacity: float = 1.0
    master_gif_path: Optional[str] = None
    is_enabled: bool = False
    is_generating: bool = False
    logs: Tuple[LogEntry, ...] = ()
    share_setup: ShareSetupState = field(default_factory=ShareSetupState)


def _default_layers() -> Tuple[Layer, ...]:
    return (Layer(id=1, title="Layer 1"), Layer(id=2, title="Layer 2"))


@dataclass(frozen=True)
class PipelineState:
    """Snapshot completo da sessão: camadas e blend master"""

    layers: Tuple[Layer, ...] = field(default_factory=_default_layers)
    master_blend: MasterBlendConfig = field(default_factory=MasterBlendConfig)
    active_layer_index: int = 0

    @property
    def active_layer(self) -> Layer:
        index = min(max(self.active_layer_index, 0), len(self.layers) - 1)
        return self.layers[index]

    def find_layer(self, layer_id: int) -> Optional[Layer]:
        return next((layer for layer in self.layers if layer.id == layer_id), None)

    def with_layer(self, layer: Layer) -> PipelineState:
        """Cópia do estado com a camada de mesmo id substituída"""
        layers = tuple(layer if item.id == layer.id else item for item in self.layers)
        return replace(self, layers=layers)
