# -*- coding: utf-8 -*-
"""
Configuração de logging do núcleo GifVision

Os handlers ficam no logger "gifvision", não no raiz: a aplicação hospedeira
continua dona da própria configuração.
"""

import logging
import sys
from typing import Optional

from .settings import settings

PACKAGE_LOGGER = "gifvision"
_HANDLER_TAG = "_gifvision_handler"


def setup_logging(
    log_file: Optional[str] = None,
    level: int = logging.INFO,
    console_level: int = logging.WARNING,
) -> logging.Logger:
    """
    Instala os handlers de arquivo e console no logger do pacote.

    Pode ser chamada mais de uma vez: os handlers de uma chamada anterior são
    fechados e substituídos.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in [h for h in logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    file_handler = logging.FileHandler(log_file or settings.log_file, encoding="utf-8")
    file_handler.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)

    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_TAG, True)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Obtém um logger com o nome especificado"""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
