# -*- coding: utf-8 -*-
"""
Implementações das portas de plataforma que apenas registram em log

Úteis em testes, prévias e execuções sem interface gráfica.
"""

import shutil
from pathlib import Path
from typing import List

from ..domain.models.ports import ShareResult, ShareSuccess
from .logging import get_logger


class LoggingClipboard:
    """Clipboard que guarda o último texto copiado"""

    def __init__(self):
        self.logger = get_logger("LoggingClipboard")
        self.contents = ""

    def copy(self, text: str) -> None:
        self.contents = text
        self.logger.info("Texto copiado (%d caracteres)", len(text))


class LoggingShareDispatcher:
    """Em vez de abrir o seletor de compartilhamento, apenas reporta o caminho"""

    def __init__(self):
        self.logger = get_logger("LoggingShareDispatcher")

    def share(self, text: str, title: str, subject: str) -> ShareResult:
        self.logger.info("Compartilhamento preparado: %s (%s)", title, subject)
        return ShareSuccess(f"Share intent prepared for {subject}")


class LoggingToast:
    """Toast que registra as mensagens exibidas"""

    def __init__(self):
        self.logger = get_logger("LoggingToast")
        self.shown: List[str] = []

    def show(self, text: str) -> None:
        self.shown.append(text)
        self.logger.info("Toast: %s", text)


class DirectoryExporter:
    """Copia os GIFs gerados para um diretório de destino"""

    def __init__(self, destination_dir: Path):
        self.logger = get_logger("DirectoryExporter")
        self.destination_dir = Path(destination_dir)

    def export(self, path: str, display_name: str) -> str:
        source = Path(path)
        if not source.exists():
            raise FileNotFoundError(f"Missing file at {path}")

        self.destination_dir.mkdir(parents=True, exist_ok=True)
        destination = self.destination_dir / f"{display_name}{source.suffix or '.gif'}"
        shutil.copy2(source, destination)
        self.logger.info("GIF exportado: %s -> %s", source, destination)
        return str(destination)
