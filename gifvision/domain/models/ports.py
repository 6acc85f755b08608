# -*- coding: utf-8 -*-
"""
Interfaces dos colaboradores externos (plataforma e encoder)

O núcleo não implementa nenhum destes serviços: eles são injetados.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Union

from .messages import LogSeverity
from .pipeline import Layer, PipelineState, Stream


@dataclass(frozen=True)
class ShareSuccess:
    """Compartilhamento iniciado com sucesso"""

    description: str


@dataclass(frozen=True)
class ShareFailure:
    """Falha ao compartilhar"""

    error_message: str
    cause: Optional[BaseException] = None


ShareResult = Union[ShareSuccess, ShareFailure]


class Clipboard(Protocol):
    """Escrita na área de transferência"""

    def copy(self, text: str) -> None:
        ...


class ShareDispatcher(Protocol):
    """Dispara o seletor de compartilhamento da plataforma"""

    def share(self, text: str, title: str, subject: str) -> ShareResult:
        ...


class Toast(Protocol):
    """Exibe uma notificação transitória"""

    def show(self, text: str) -> None:
        ...


class MediaExporter(Protocol):
    """Copia um GIF gerado para o armazenamento do usuário"""

    def export(self, path: str, display_name: str) -> str:
        """Retorna o destino final do arquivo exportado"""
        ...


# Callbacks usados pelo backend para reportar progresso e conclusão
GeneratingCallback = Callable[[bool], None]
CompletedCallback = Callable[[str], None]
LogCallback = Callable[[str, LogSeverity], None]


class RenderBackend(Protocol):
    """Encoder externo que produz os GIFs de cada estágio"""

    def render_stream(
        self,
        job_id: str,
        layer: Layer,
        stream: Stream,
        on_generating: GeneratingCallback,
        on_completed: CompletedCallback,
        on_log: LogCallback,
    ) -> None:
        ...

    def blend_layer(
        self,
        job_id: str,
        layer: Layer,
        on_generating: GeneratingCallback,
        on_completed: CompletedCallback,
        on_log: LogCallback,
    ) -> None:
        ...

    def blend_master(
        self,
        job_id: str,
        state: PipelineState,
        on_generating: GeneratingCallback,
        on_completed: CompletedCallback,
        on_log: LogCallback,
    ) -> None:
        ...
