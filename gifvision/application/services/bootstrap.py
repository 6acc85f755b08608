# -*- coding: utf-8 -*-
"""
gifvision/application/services/bootstrap.py
Monta a sessão com logging, central de mensagens, relay e portas de plataforma
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ...domain.models.ports import Clipboard, MediaExporter, RenderBackend, ShareDispatcher, Toast
from ...infra.logging import get_logger, setup_logging
from ...infra.platform import (
    DirectoryExporter,
    LoggingClipboard,
    LoggingShareDispatcher,
    LoggingToast,
)
from ...infra.settings import AppSettings, settings as default_settings
from .message_center import MessageCenter
from .notification_relay import NotificationRelay
from .pipeline_session import PipelineSession
from .share_service import ShareCoordinator


@dataclass
class GifVisionApp:
    session: PipelineSession
    message_center: MessageCenter
    relay: NotificationRelay

    def close(self):
        self.relay.stop()
        self.message_center.close()


def create_app(
    backend: RenderBackend,
    toast: Optional[Toast] = None,
    share_dispatcher: Optional[ShareDispatcher] = None,
    exporter: Optional[MediaExporter] = None,
    clipboard: Optional[Clipboard] = None,
    app_settings: Optional[AppSettings] = None,
    log_level: int = logging.INFO,
) -> GifVisionApp:
    """Ponto de entrada do núcleo; portas omitidas usam os adaptadores de log"""
    config = app_settings or default_settings
    setup_logging(config.log_file, log_level)
    logger = get_logger("bootstrap")

    center = MessageCenter(
        dedupe_window=config.dedupe_window_seconds,
        buffer_capacity=config.message_buffer_capacity,
    )
    coordinator = ShareCoordinator(
        share_dispatcher or LoggingShareDispatcher(),
        exporter or DirectoryExporter(Path("exports")),
    )
    session = PipelineSession(
        backend,
        message_center=center,
        share_coordinator=coordinator,
        log_history_limit=config.log_history_limit,
        clipboard=clipboard or LoggingClipboard(),
    )

    relay = NotificationRelay(center, toast or LoggingToast())
    relay.start()
    logger.info("GifVision iniciado (log em %s)", config.log_file)
    return GifVisionApp(session=session, message_center=center, relay=relay)
