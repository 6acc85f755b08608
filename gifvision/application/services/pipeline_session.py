# -*- coding: utf-8 -*-
"""
gifvision/application/services/pipeline_session.py
Sessão da pipeline: dona única do estado, valida antes de despachar para o encoder
"""

import threading
from dataclasses import replace
from typing import Callable, Optional

from ...domain.models.messages import LogEntry, LogSeverity, format_log_payload
from ...domain.models.pipeline import (
    AdjustmentSettings,
    BlendMode,
    Layer,
    PipelineState,
    SourceClip,
    Stream,
    StreamSelection,
)
from ...domain.models.ports import Clipboard, RenderBackend
from ...domain.models.share import GifLoopMetadata, ShareSetupState
from ...domain.models.validation import (
    Blocked,
    Error,
    LayerBlendValidation,
    MasterBlendValidation,
    StreamValidation,
)
from ...infra.logging import get_logger
from ...infra.settings import settings
from .message_center import MessageCenter
from .render_jobs import layer_blend_id, master_blend_id, stream_render_id
from .share_service import (
    ShareActionResult,
    ShareCoordinator,
    parse_hashtags,
    refresh_share_previews,
)
from .validation_service import (
    validate_layer_blend,
    validate_master_blend,
    validate_stream,
)


def _clamp_unit(value: float) -> float:
    return min(max(value, 0.0), 1.0)


class PipelineSession:
    """
    Mantém o PipelineState e aplica cada alteração como uma nova cópia.

    Escritas são serializadas por um lock; leituras e validações trabalham
    sobre snapshots imutáveis. Callbacks do encoder podem chegar de qualquer
    thread.
    """

    def __init__(
        self,
        backend: RenderBackend,
        message_center: Optional[MessageCenter] = None,
        share_coordinator: Optional[ShareCoordinator] = None,
        initial_state: Optional[PipelineState] = None,
        log_history_limit: Optional[int] = None,
        clipboard: Optional[Clipboard] = None,
    ):
        self.logger = get_logger("PipelineSession")
        self.backend = backend
        self.message_center = message_center or MessageCenter()
        self.share_coordinator = share_coordinator
        self.clipboard = clipboard
        self.log_history_limit = (
            settings.log_history_limit if log_history_limit is None else log_history_limit
        )
        self._lock = threading.RLock()
        self._state = initial_state or PipelineState()

    @property
    def state(self) -> PipelineState:
        """Snapshot atual (imutável)"""
        return self._state

    # Veredictos

    def stream_validation(self, layer_id: int, selection: StreamSelection) -> StreamValidation:
        layer = self._state.find_layer(layer_id)
        if layer is None:
            return Error((f"Layer {layer_id} not available",))
        return validate_stream(layer, layer.stream(selection))

    def layer_blend_validation(self, layer_id: int) -> LayerBlendValidation:
        layer = self._state.find_layer(layer_id)
        if layer is None:
            return Blocked((f"Layer {layer_id} not available",))
        return validate_layer_blend(layer)

    def master_blend_validation(self) -> MasterBlendValidation:
        return validate_master_blend(self._state)

    # Edição

    def select_layer(self, index: int):
        with self._lock:
            bounded = min(max(index, 0), len(self._state.layers) - 1)
            self._state = replace(self._state, active_layer_index=bounded)

    def select_stream(self, layer_id: int, selection: StreamSelection):
        self._update_layer(layer_id, lambda layer: replace(layer, active_stream=selection))

    def import_source_clip(self, layer_id: int, clip: SourceClip):
        """Troca o clipe de origem e descarta tudo que foi gerado a partir do anterior"""
        updated = self._update_layer(
            layer_id, lambda layer: replace(self._reset_outputs(layer), source_clip=clip)
        )
        if updated is not None:
            self.append_log(layer_id, f"Imported {clip.display_name or clip.uri}")

    def reset_layer(self, layer_id: int):
        self._update_layer(
            layer_id, lambda layer: replace(self._reset_outputs(layer), source_clip=None)
        )

    def update_adjustments(
        self,
        layer_id: int,
        selection: StreamSelection,
        transformer: Callable[[AdjustmentSettings], AdjustmentSettings],
    ):
        def apply(layer: Layer) -> Layer:
            stream = layer.stream(selection)
            return layer.with_stream(replace(stream, adjustments=transformer(stream.adjustments)))

        self._update_layer(layer_id, apply)

    def update_layer_blend_mode(self, layer_id: int, mode: BlendMode):
        self._update_layer(
            layer_id, lambda layer: replace(layer, blend_state=replace(layer.blend_state, mode=mode))
        )

    def update_layer_blend_opacity(self, layer_id: int, opacity: float):
        self._update_layer(
            layer_id,
            lambda layer: replace(
                layer, blend_state=replace(layer.blend_state, opacity=_clamp_unit(opacity))
            ),
        )

    def update_master_blend_mode(self, mode: BlendMode):
        self._update_master(lambda master: replace(master, mode=mode))

    def update_master_blend_opacity(self, opacity: float):
        self._update_master(lambda master: replace(master, opacity=_clamp_unit(opacity)))

    def update_share_caption(self, value: str):
        self._update_share(lambda share: replace(share, caption=value))

    def update_share_hashtags(self, value: str):
        self._update_share(
            lambda share: replace(
                share, hashtags_input=value, hashtags=tuple(parse_hashtags(value))
            )
        )

    def update_share_loop_metadata(self, metadata: GifLoopMetadata):
        self._update_share(lambda share: replace(share, loop_metadata=metadata))

    def append_log(
        self, layer_id: Optional[int], message: str, severity: LogSeverity = LogSeverity.INFO
    ):
        """Adiciona uma linha ao log da camada (ou do master quando layer_id é None)"""
        entry = LogEntry(message=message, severity=severity)

        if layer_id is None:
            self._update_master(lambda master: replace(master, logs=self._capped(master.logs, entry)))
        else:
            self._update_layer(layer_id, lambda layer: replace(layer, logs=self._capped(layer.logs, entry)))

        if severity is not LogSeverity.INFO:
            self.message_center.post(message, is_error=severity is LogSeverity.ERROR)

    def _capped(self, logs, entry: LogEntry):
        # limite 0 desliga o histórico; logs[-0:] manteria tudo
        limit = self.log_history_limit
        return (logs + (entry,))[-limit:] if limit > 0 else ()

    def copy_logs(self, layer_id: Optional[int]) -> bool:
        """Copia o log da camada (ou do master) para o clipboard e avisa o usuário"""
        if self.clipboard is None:
            raise RuntimeError("Nenhum Clipboard configurado na sessão")

        if layer_id is None:
            logs = self._state.master_blend.logs
        else:
            layer = self._state.find_layer(layer_id)
            logs = layer.logs if layer is not None else ()

        if not logs:
            self.message_center.post("No logs to copy yet")
            return False
        self.clipboard.copy(format_log_payload(logs))
        self.message_center.post("Logs copied")
        return True

    # Despacho para o encoder
    #
    # Leitura, validação e reserva (is_generating=True) acontecem sob o mesmo
    # lock; o job só vai ao encoder quando a reserva foi feita por esta chamada.

    def request_stream_render(self, layer_id: int, selection: StreamSelection) -> bool:
        def set_generating(generating: bool):
            self._update_stream(
                layer_id, selection, lambda current: replace(current, is_generating=generating)
            )

        with self._lock:
            layer = self._state.find_layer(layer_id)
            if layer is None:
                self.logger.debug("Camada %s inexistente, render ignorado", layer_id)
                return False
            stream = layer.stream(selection)
            validation = validate_stream(layer, stream)
            claimed = not isinstance(validation, Error) and not stream.is_generating
            if claimed:
                set_generating(True)

        if isinstance(validation, Error):
            self._log_validation_failure(layer_id, validation.reasons)
            return False
        if not claimed:
            self.logger.debug("Render da camada %s já em andamento", layer_id)
            return False

        job_id = stream_render_id(layer_id, selection)
        self.logger.info("Despachando render %s", job_id)

        def on_completed(path: str):
            self._update_stream(
                layer_id,
                selection,
                lambda current: replace(current, generated_gif_path=path, is_generating=False),
            )
            self.append_log(layer_id, f"{job_id} complete -> {path}")

        return self._dispatch(
            job_id,
            layer_id,
            set_generating,
            lambda on_generating, on_log: self.backend.render_stream(
                job_id, layer, stream, on_generating, on_completed, on_log
            ),
        )

    def request_layer_blend(self, layer_id: int) -> bool:
        def set_generating(generating: bool):
            self._update_layer(
                layer_id,
                lambda current: replace(
                    current, blend_state=replace(current.blend_state, is_generating=generating)
                ),
            )

        with self._lock:
            layer = self._state.find_layer(layer_id)
            if layer is None:
                self.logger.debug("Camada %s inexistente, blend ignorado", layer_id)
                return False
            validation = validate_layer_blend(layer)
            claimed = not isinstance(validation, Blocked) and not layer.blend_state.is_generating
            if claimed:
                set_generating(True)

        if isinstance(validation, Blocked):
            self._log_validation_failure(layer_id, validation.reasons)
            return False
        if not claimed:
            self.logger.debug("Blend da camada %s já em andamento", layer_id)
            return False

        job_id = layer_blend_id(layer_id, layer.blend_state.mode)
        self.logger.info("Despachando blend %s", job_id)

        def on_completed(path: str):
            self._update_layer(
                layer_id,
                lambda current: replace(
                    current,
                    blend_state=replace(
                        current.blend_state, blended_gif_path=path, is_generating=False
                    ),
                ),
            )
            self.append_log(layer_id, f"{job_id} complete -> {path}")

        return self._dispatch(
            job_id,
            layer_id,
            set_generating,
            lambda on_generating, on_log: self.backend.blend_layer(
                job_id, layer, on_generating, on_completed, on_log
            ),
        )

    def request_master_blend(self) -> bool:
        def set_generating(generating: bool):
            self._update_master(lambda master: replace(master, is_generating=generating))

        with self._lock:
            state = self._state
            validation = validate_master_blend(state)
            claimed = not isinstance(validation, Blocked) and not state.master_blend.is_generating
            if claimed:
                set_generating(True)

        if isinstance(validation, Blocked):
            self._log_validation_failure(None, validation.reasons)
            return False
        if not claimed:
            self.logger.debug("Blend master já em andamento")
            return False

        job_id = master_blend_id(state.master_blend.mode)
        self.logger.info("Despachando blend master %s", job_id)

        def on_completed(path: str):
            self._update_master(
                lambda master: replace(master, master_gif_path=path, is_generating=False)
            )
            self.append_log(None, f"{job_id} complete -> {path}")

        return self._dispatch(
            job_id,
            None,
            set_generating,
            lambda on_generating, on_log: self.backend.blend_master(
                job_id, state, on_generating, on_completed, on_log
            ),
        )

    # Salvar / compartilhar

    def share_master_output(self) -> Optional[ShareActionResult]:
        master = self._state.master_blend
        if master.share_setup.is_preparing_share:
            return None

        self._update_share(lambda share: replace(share, is_preparing_share=True))
        try:
            result = self._require_share_coordinator().share_master_blend(master)
        finally:
            self._update_share(lambda share: replace(share, is_preparing_share=False))
        self._report_share_result(None, result)
        return result

    def save_master_output(self) -> ShareActionResult:
        result = self._require_share_coordinator().save_master_blend(self._state.master_blend)
        self._report_share_result(None, result)
        return result

    def save_stream_output(
        self, layer_id: int, selection: StreamSelection
    ) -> Optional[ShareActionResult]:
        layer = self._state.find_layer(layer_id)
        if layer is None:
            return None
        result = self._require_share_coordinator().save_stream(layer, selection)
        self._report_share_result(layer_id, result)
        return result

    # Auxiliares

    def _dispatch(self, job_id, layer_id, set_generating, submit) -> bool:
        """Entrega ao encoder um job já reservado; desfaz a reserva se o envio falhar"""
        try:
            submit(set_generating, lambda message, severity: self.append_log(layer_id, message, severity))
        except Exception as e:
            self.logger.error("Falha ao despachar %s: %s", job_id, e)
            set_generating(False)
            self.append_log(layer_id, f"{job_id} failed: {e}", LogSeverity.ERROR)
            return False
        return True

    def _report_share_result(self, layer_id: Optional[int], result: ShareActionResult):
        # O log já publica warnings/erros; evita duplicar a mesma mensagem
        self.append_log(layer_id, result.log_message, result.severity)
        if result.severity is LogSeverity.INFO or result.user_message != result.log_message:
            self.message_center.post(result.user_message, is_error=result.is_error)

    def _require_share_coordinator(self) -> ShareCoordinator:
        if self.share_coordinator is None:
            raise RuntimeError("Nenhum ShareCoordinator configurado na sessão")
        return self.share_coordinator

    def _log_validation_failure(self, layer_id: Optional[int], reasons):
        for reason in reasons:
            self.append_log(layer_id, f"Validation: {reason}")
        self.message_center.post("\n".join(reasons), is_error=True)

    @staticmethod
    def _reset_outputs(layer: Layer) -> Layer:
        def reset_stream(stream: Stream) -> Stream:
            return replace(stream, generated_gif_path=None, is_generating=False)

        return replace(
            layer,
            stream_a=reset_stream(layer.stream_a),
            stream_b=reset_stream(layer.stream_b),
            blend_state=replace(layer.blend_state, blended_gif_path=None, is_generating=False),
        )

    def _update_layer(self, layer_id: int, transformer: Callable[[Layer], Layer]) -> Optional[Layer]:
        with self._lock:
            layer = self._state.find_layer(layer_id)
            if layer is None:
                self.logger.debug("Camada %s inexistente, alteração ignorada", layer_id)
                return None
            updated = transformer(layer)
            self._state = self._state.with_layer(updated)
            self._refresh_master_availability()
            return updated

    def _update_stream(
        self, layer_id: int, selection: StreamSelection, transformer: Callable[[Stream], Stream]
    ):
        self._update_layer(
            layer_id, lambda layer: layer.with_stream(transformer(layer.stream(selection)))
        )

    def _update_master(self, transformer):
        with self._lock:
            master = transformer(self._state.master_blend)
            self._state = replace(self._state, master_blend=master)

    def _update_share(self, transformer: Callable[[ShareSetupState], ShareSetupState]):
        self._update_master(
            lambda master: replace(
                master, share_setup=refresh_share_previews(transformer(master.share_setup))
            )
        )

    def _refresh_master_availability(self):
        """O master só é habilitado quando todas as camadas têm blend; chamado com o lock"""
        should_enable = all(layer.blend_state.is_blended for layer in self._state.layers)
        if self._state.master_blend.is_enabled != should_enable:
            self._state = replace(
                self._state,
                master_blend=replace(self._state.master_blend, is_enabled=should_enable),
            )
