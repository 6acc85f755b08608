# -*- coding: utf-8 -*-
"""
gifvision/application/services/message_center.py
Central de mensagens para o usuário com deduplicação e entrega não bloqueante
"""

import queue
import threading
import time
from collections import deque
from typing import Callable, Deque, Iterator, List, Optional, Tuple

from ...domain.models.messages import UiMessage
from ...infra.logging import get_logger
from ...infra.settings import settings


class MessageFeed:
    """Feed ao vivo de mensagens de um assinante"""

    def __init__(self, center: "MessageCenter", capacity: int, poll_interval: float):
        self._center = center
        self._queue: "queue.Queue[UiMessage]" = queue.Queue(maxsize=capacity)
        self._closed = threading.Event()
        self._poll_interval = poll_interval

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def get(self, timeout: Optional[float] = None) -> UiMessage:
        """Aguarda a próxima mensagem (queue.Empty em caso de timeout)"""
        return self._queue.get(timeout=timeout)

    def get_nowait(self) -> UiMessage:
        return self._queue.get_nowait()

    def __iter__(self) -> Iterator[UiMessage]:
        while not self.closed:
            try:
                yield self._queue.get(timeout=self._poll_interval)
            except queue.Empty:
                continue

    def close(self):
        """Cancela a assinatura; mensagens pendentes para este feed são descartadas"""
        if not self.closed:
            self._closed.set()
            self._center._unsubscribe(self)

    def __enter__(self) -> "MessageFeed":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # Usados apenas pela MessageCenter

    def _has_room(self) -> bool:
        return self.closed or not self._queue.full()

    def _offer(self, message: UiMessage):
        """Entrega imediata; só é chamado quando _has_room() garantiu espaço"""
        if not self.closed:
            self._queue.put_nowait(message)

    def _put(self, message: UiMessage):
        """Entrega bloqueante feita pela thread de despacho da central"""
        while not self.closed:
            try:
                self._queue.put(message, timeout=self._poll_interval)
                return
            except queue.Full:
                continue


class MessageCenter:
    """
    Centraliza o envio de mensagens para a UI.

    Mensagens idênticas dentro da janela de deduplicação são descartadas, para
    que erros de validação repetidos (ex: toques rápidos) não inundem a tela.
    A entrega é síncrona quando todos os assinantes têm espaço livre; caso
    contrário a mensagem entra numa fila drenada pela thread da própria central,
    e o produtor nunca bloqueia.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        dedupe_window: Optional[float] = None,
        buffer_capacity: Optional[int] = None,
        poll_interval: float = 0.05,
    ):
        self.logger = get_logger("MessageCenter")
        self._clock = clock
        self._dedupe_window = (
            settings.dedupe_window_seconds if dedupe_window is None else dedupe_window
        )
        self._buffer_capacity = (
            settings.message_buffer_capacity if buffer_capacity is None else buffer_capacity
        )
        self._poll_interval = poll_interval

        # Protege dedupe, assinantes e backlog: a ordem de aceitação é a ordem de entrega
        self._lock = threading.Lock()
        self._last_message: Optional[UiMessage] = None
        self._last_emission_timestamp = 0.0
        self._feeds: List[MessageFeed] = []
        self._backlog: Deque[Tuple[UiMessage, Tuple[MessageFeed, ...]]] = deque()
        self._worker: Optional[threading.Thread] = None

    @property
    def dedupe_window(self) -> float:
        return self._dedupe_window

    def subscribe(self) -> MessageFeed:
        """Cria um feed que recebe as mensagens aceitas a partir de agora"""
        feed = MessageFeed(self, self._buffer_capacity, self._poll_interval)
        with self._lock:
            self._feeds.append(feed)
        return feed

    def post(self, message: str, is_error: bool = False) -> bool:
        """Publica uma mensagem; retorna False quando ela é descartada"""
        trimmed = message.strip()
        if not trimmed:
            return False
        payload = UiMessage(trimmed, is_error)

        with self._lock:
            now = self._clock()
            recent_duplicate = (
                self._last_message == payload
                and (now - self._last_emission_timestamp) < self._dedupe_window
            )
            if recent_duplicate:
                self.logger.debug("Mensagem duplicada descartada: %s", trimmed)
                return False

            self._last_message = payload
            self._last_emission_timestamp = now
            self._dispatch(payload)
        return True

    def close(self):
        """Encerra todos os feeds e descarta entregas pendentes"""
        with self._lock:
            feeds = list(self._feeds)
            self._backlog.clear()
        for feed in feeds:
            feed.close()

    def _dispatch(self, payload: UiMessage):
        """Chamado com o lock adquirido"""
        feeds = tuple(self._feeds)
        if not self._backlog and all(feed._has_room() for feed in feeds):
            for feed in feeds:
                feed._offer(payload)
            return

        self._backlog.append((payload, feeds))
        if self._worker is None:
            self._worker = threading.Thread(
                target=self._drain, name="MessageCenterDispatch", daemon=True
            )
            self._worker.start()

    def _drain(self):
        while True:
            with self._lock:
                if not self._backlog:
                    self._worker = None
                    return
                payload, feeds = self._backlog[0]

            for feed in feeds:
                feed._put(payload)

            with self._lock:
                # close() pode ter limpado o backlog enquanto entregávamos
                if self._backlog and self._backlog[0][0] is payload:
                    self._backlog.popleft()

    def _unsubscribe(self, feed: MessageFeed):
        with self._lock:
            if feed in self._feeds:
                self._feeds.remove(feed)
