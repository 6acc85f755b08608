# -*- coding: utf-8 -*-
"""
Gerenciamento de configurações usando pydantic-settings
"""

import json
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Configurações do núcleo de validação e notificações"""

    model_config = SettingsConfigDict(
        env_prefix="GIFVISION_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Janela de deduplicação da central de mensagens
    dedupe_window_ms: int = 1500
    # Slots de entrega imediata por assinante
    message_buffer_capacity: int = 1
    # Máximo de entradas mantidas no log de cada camada
    log_history_limit: int = Field(default=200, ge=0)
    log_file: str = "gifvision.log"

    @property
    def dedupe_window_seconds(self) -> float:
        return self.dedupe_window_ms / 1000.0


def load_settings(config_path: Path = Path("config.json")) -> AppSettings:
    """Carrega as configurações da aplicação"""
    # Primeiro tenta carregar do config.json
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = json.load(f)
        return AppSettings(**config_data.get("gifvision", config_data))

    # Senão carrega das variáveis de ambiente ou padrões
    return AppSettings()


# Instância global das configurações
settings = load_settings()
