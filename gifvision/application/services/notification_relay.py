# -*- coding: utf-8 -*-
"""
Encaminha o feed da central de mensagens para o toast da plataforma
"""

import threading
from typing import Optional

from ...domain.models.ports import Toast
from ...infra.logging import get_logger
from .message_center import MessageCenter, MessageFeed


class NotificationRelay:
    """Consome o feed em uma thread própria e exibe cada mensagem"""

    def __init__(self, center: MessageCenter, toast: Toast):
        self.logger = get_logger("NotificationRelay")
        self._center = center
        self._toast = toast
        self._feed: Optional[MessageFeed] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.is_running:
            return
        self._feed = self._center.subscribe()
        self._thread = threading.Thread(
            target=self._run, args=(self._feed,), name="NotificationRelay", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float = 1.0):
        if self._feed is not None:
            self._feed.close()
        if self._thread is not None:
            self._thread.join(timeout)
        self._feed = None
        self._thread = None

    def _run(self, feed: MessageFeed):
        for message in feed:
            try:
                self._toast.show(message.text)
            except Exception as e:
                # Falha no toast não pode derrubar o relay
                self.logger.error("Falha ao exibir notificação: %s", e)
