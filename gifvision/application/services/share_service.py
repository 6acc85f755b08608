# -*- coding: utf-8 -*-
"""
gifvision/application/services/share_service.py
Compartilhamento e exportação dos GIFs gerados, e prévias de legenda por plataforma
"""

import re
from dataclasses import dataclass, replace
from pathlib import PurePath
from typing import Iterable, List, Sequence

from ...domain.models.messages import LogSeverity
from ...domain.models.pipeline import Layer, MasterBlendConfig, StreamSelection, is_blank
from ...domain.models.ports import MediaExporter, ShareDispatcher, ShareFailure
from ...domain.models.share import (
    GifLoopMetadata,
    PlatformPreview,
    SharePlatform,
    ShareSetupState,
)
from ...infra.logging import get_logger

_HASHTAG_SEPARATORS = re.compile(r"[,\s]+")
_HASHTAG_INVALID = re.compile(r"[^A-Za-z0-9_]")


@dataclass(frozen=True)
class ShareActionResult:
    """Resultado de uma ação de salvar/compartilhar"""

    log_message: str
    user_message: str
    severity: LogSeverity
    is_error: bool


def parse_hashtags(text: str) -> List[str]:
    """Normaliza a entrada do usuário em hashtags únicas, na ordem digitada"""
    if not text.strip():
        return []

    result = []
    for raw in _HASHTAG_SEPARATORS.split(text):
        sanitized = _HASHTAG_INVALID.sub("", raw.strip().lstrip("#"))
        tag = f"#{sanitized}"
        if sanitized and tag not in result:
            result.append(tag)
    return result


def _normalize_tags(hashtags: Iterable[str]) -> List[str]:
    tags = []
    for tag in hashtags:
        trimmed = tag.strip()
        if trimmed:
            tags.append(trimmed if trimmed.startswith("#") else f"#{trimmed}")
    return tags


def build_platform_preview(
    platform: SharePlatform,
    caption: str,
    hashtags: Sequence[str],
    loop_metadata: GifLoopMetadata,
) -> PlatformPreview:
    """Calcula como legenda + hashtags aparecem em uma plataforma"""
    tags = _normalize_tags(hashtags)
    parts = [caption.strip(), " ".join(tags)]
    combined = "\n\n".join(part for part in parts if part.strip())

    limit = platform.caption_limit
    is_truncated = len(combined) > limit
    if is_truncated and limit > 1:
        rendered = combined[: limit - 1].rstrip() + "…"
    else:
        rendered = combined

    return PlatformPreview(
        platform=platform,
        rendered_caption=rendered,
        remaining_characters=limit - len(combined),
        hashtag_count=len(tags),
        overflow_hashtags=max(len(tags) - platform.hashtag_limit, 0),
        loop_message=f"{loop_metadata.display_name} • {platform.loop_guidance}",
        is_caption_truncated=is_truncated,
    )


def refresh_share_previews(share: ShareSetupState) -> ShareSetupState:
    """Recalcula as prévias de todas as plataformas"""
    previews = tuple(
        build_platform_preview(platform, share.caption, share.hashtags, share.loop_metadata)
        for platform in SharePlatform
    )
    return replace(share, platform_previews=previews)


def compose_share_text(share: ShareSetupState) -> str:
    """Texto enviado junto com o GIF: legenda, hashtags e metadado de loop"""
    sections = [
        share.caption.strip(),
        " ".join(_normalize_tags(share.hashtags)),
        f"Loop: {share.loop_metadata.display_name}",
    ]
    return "\n\n".join(section for section in sections if section)


def derive_display_name(path: str) -> str:
    stem = PurePath(path).stem
    return stem if stem.strip() else "gifvision_master"


class ShareCoordinator:
    """Fluxos de exportação/compartilhamento dos GIFs renderizados"""

    def __init__(self, share_dispatcher: ShareDispatcher, exporter: MediaExporter):
        self.logger = get_logger("ShareCoordinator")
        self.share_dispatcher = share_dispatcher
        self.exporter = exporter

    def share_master_blend(self, master: MasterBlendConfig) -> ShareActionResult:
        if is_blank(master.master_gif_path):
            return ShareActionResult(
                log_message="Master blend path missing",
                user_message="Render the master blend before sharing.",
                severity=LogSeverity.WARNING,
                is_error=True,
            )

        display_name = derive_display_name(master.master_gif_path)
        result = self.share_dispatcher.share(
            compose_share_text(master.share_setup),
            title=f"Share {display_name}",
            subject=master.master_gif_path,
        )
        if isinstance(result, ShareFailure):
            self.logger.error("Falha ao compartilhar %s: %s", display_name, result.error_message)
            return ShareActionResult(
                log_message=result.error_message,
                user_message=result.error_message,
                severity=LogSeverity.ERROR,
                is_error=True,
            )
        return ShareActionResult(
            log_message=result.description,
            user_message=result.description,
            severity=LogSeverity.INFO,
            is_error=False,
        )

    def save_master_blend(self, master: MasterBlendConfig) -> ShareActionResult:
        path = master.master_gif_path
        if is_blank(path):
            return ShareActionResult(
                log_message="Master blend path missing",
                user_message="Render the master blend before saving.",
                severity=LogSeverity.WARNING,
                is_error=True,
            )

        try:
            destination = self.exporter.export(path, derive_display_name(path))
        except Exception as e:
            self.logger.error("Falha ao exportar blend master: %s", e)
            message = str(e) or "Unable to save GIF"
            return ShareActionResult(message, message, LogSeverity.ERROR, True)

        return ShareActionResult(
            log_message=f"Master blend saved to {destination}",
            user_message="Saved GIF to Downloads",
            severity=LogSeverity.INFO,
            is_error=False,
        )

    def save_stream(self, layer: Layer, selection: StreamSelection) -> ShareActionResult:
        name = selection.value
        output_path = layer.stream(selection).generated_gif_path
        if is_blank(output_path):
            return ShareActionResult(
                log_message=f"Stream {name} output missing",
                user_message=f"Generate Stream {name} before saving.",
                severity=LogSeverity.WARNING,
                is_error=True,
            )

        display_name = f"{layer.title.replace(' ', '_')}_Stream_{name}"
        try:
            destination = self.exporter.export(output_path, display_name)
        except Exception as e:
            self.logger.error("Falha ao exportar stream %s: %s", name, e)
            message = str(e) or f"Unable to save Stream {name}"
            return ShareActionResult(message, message, LogSeverity.ERROR, True)

        return ShareActionResult(
            log_message=f"Stream {name} saved to {destination}",
            user_message=f"Saved Stream {name} GIF to Downloads",
            severity=LogSeverity.INFO,
            is_error=False,
        )
