# -*- coding: utf-8 -*-
"""
Mensagens para o usuário e entradas de log da pipeline
"""

from __future__ import annotations
import time
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class UiMessage:
    """Mensagem curta (toast/snackbar) destinada à camada de UI"""

    text: str
    is_error: bool = False


class LogSeverity(Enum):
    """Severidade de uma linha de log do encoder"""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class LogEntry:
    """Linha de log estruturada com timestamp de origem"""

    message: str
    severity: LogSeverity = LogSeverity.INFO
    timestamp_ms: int = field(default_factory=_now_ms)

    def display_string(self) -> str:
        """Formato usado ao copiar o log: [HH:MM:SS] Severity: mensagem (hora local)"""
        clock = time.strftime("%H:%M:%S", time.localtime(self.timestamp_ms / 1000))
        return f"[{clock}] {self.severity.name.capitalize()}: {self.message}"


def format_log_payload(logs) -> str:
    return "\n".join(entry.display_string() for entry in logs)
