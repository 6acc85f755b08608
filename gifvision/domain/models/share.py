# -*- coding: utf-8 -*-
"""
Modelos do painel de compartilhamento do blend master
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class GifLoopMetadata(Enum):
    """Metadado de loop gravado no GIF exportado"""

    AUTO = ("Auto", "Let receiving apps pick the default loop behaviour.")
    LOOP_FOREVER = ("Loop forever", "Flag the GIF as infinitely looping.")
    PLAY_ONCE = ("Play once", "Signal that the animation should stop after a single iteration.")
    BOUNCE = ("Bounce", "Request palindromic playback when the destination supports it.")

    def __init__(self, display_name: str, description: str):
        self.display_name = display_name
        self.description = description


class SharePlatform(Enum):
    """Destinos de compartilhamento com limites de legenda e hashtags"""

    INSTAGRAM = ("Instagram", 2200, 30, "Loops forever on feed; Stories respect Auto/Bounce.")
    TIKTOK = ("TikTok", 2200, 30, "Auto honours TikTok's intelligent looping recommendations.")
    X = ("X", 280, 25, "Short loops perform best; Play Once disables the animated preview.")

    def __init__(self, display_name: str, caption_limit: int, hashtag_limit: int, loop_guidance: str):
        self.display_name = display_name
        self.caption_limit = caption_limit
        self.hashtag_limit = hashtag_limit
        self.loop_guidance = loop_guidance


@dataclass(frozen=True)
class PlatformPreview:
    """Como o payload aparece em uma plataforma específica"""

    platform: SharePlatform
    rendered_caption: str
    remaining_characters: int
    hashtag_count: int
    overflow_hashtags: int
    loop_message: str
    is_caption_truncated: bool


def _empty_previews() -> Tuple[PlatformPreview, ...]:
    return tuple(
        PlatformPreview(
            platform=platform,
            rendered_caption="",
            remaining_characters=platform.caption_limit,
            hashtag_count=0,
            overflow_hashtags=0,
            loop_message=f"{GifLoopMetadata.AUTO.display_name} • {platform.loop_guidance}",
            is_caption_truncated=False,
        )
        for platform in SharePlatform
    )


@dataclass(frozen=True)
class ShareSetupState:
    """Legenda, hashtags e metadado de loop escolhidos pelo usuário"""

    caption: str = ""
    hashtags_input: str = ""
    hashtags: Tuple[str, ...] = ()
    loop_metadata: GifLoopMetadata = GifLoopMetadata.AUTO
    platform_previews: Tuple[PlatformPreview, ...] = field(default_factory=_empty_previews)
    is_preparing_share: bool = False
