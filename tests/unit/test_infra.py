# -*- coding: utf-8 -*-
"""
Testes para configurações, adaptadores de plataforma e o relay de notificações
"""

import json
import logging
import threading
from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from gifvision.application.services.bootstrap import create_app
from gifvision.application.services.message_center import MessageCenter
from gifvision.application.services.notification_relay import NotificationRelay
from gifvision.domain.models.ports import ShareSuccess
from gifvision.infra.platform import (
    DirectoryExporter,
    LoggingClipboard,
    LoggingShareDispatcher,
    LoggingToast,
)
from gifvision.infra.logging import get_logger, setup_logging
from gifvision.infra.settings import AppSettings, load_settings


class TestSettings:
    def test_defaults(self):
        settings = AppSettings()

        assert settings.dedupe_window_ms == 1500
        assert settings.dedupe_window_seconds == 1.5
        assert settings.message_buffer_capacity == 1
        assert settings.log_history_limit == 200

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("GIFVISION_DEDUPE_WINDOW_MS", "250")

        assert AppSettings().dedupe_window_ms == 250

    def test_load_from_config_json(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(
            json.dumps({"gifvision": {"log_history_limit": 50}}), encoding="utf-8"
        )

        assert load_settings(config_path).log_history_limit == 50

    def test_missing_config_json(self, tmp_path):
        assert load_settings(tmp_path / "absent.json").log_history_limit == 200


class TestPlatformAdapters:
    def test_clipboard(self):
        clipboard = LoggingClipboard()
        clipboard.copy("#gif")

        assert clipboard.contents == "#gif"

    def test_share_dispatcher(self):
        result = LoggingShareDispatcher().share("text", "Share master", "/out/master.gif")

        assert result == ShareSuccess("Share intent prepared for /out/master.gif")

    def test_directory_exporter(self, tmp_path):
        source = tmp_path / "render.gif"
        source.write_bytes(b"GIF89a")

        destination = DirectoryExporter(tmp_path / "downloads").export(str(source), "Layer_1_Stream_A")

        assert destination.endswith("Layer_1_Stream_A.gif")
        assert (tmp_path / "downloads" / "Layer_1_Stream_A.gif").read_bytes() == b"GIF89a"

    def test_directory_exporter_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DirectoryExporter(tmp_path).export(str(tmp_path / "nope.gif"), "x")


class RecordingToast(LoggingToast):
    def __init__(self, expected: int):
        super().__init__()
        self._expected = expected
        self.done = threading.Event()

    def show(self, text: str) -> None:
        super().show(text)
        if len(self.shown) >= self._expected:
            self.done.set()


def test_relay_forwards_feed_to_toast():
    center = MessageCenter(dedupe_window=1.5, buffer_capacity=1)
    toast = RecordingToast(expected=3)
    relay = NotificationRelay(center, toast)
    relay.start()

    try:
        center.post("first")
        center.post("first")
        center.post("second", is_error=True)
        center.post("third")

        assert toast.done.wait(timeout=2.0)
        assert toast.shown == ["first", "second", "third"]
    finally:
        relay.stop()
        center.close()

    assert relay.is_running is False


def _close_package_handlers():
    logger = logging.getLogger("gifvision")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class TestLogging:
    def test_setup_logging_writes_file(self, tmp_path):
        log_file = tmp_path / "gifvision.log"
        logger = setup_logging(str(log_file), logging.DEBUG)

        try:
            get_logger("Teste").info("mensagem de teste")
            for handler in logger.handlers:
                handler.flush()

            assert "gifvision.Teste - INFO - mensagem de teste" in log_file.read_text(encoding="utf-8")
        finally:
            _close_package_handlers()

    def test_setup_logging_is_idempotent(self, tmp_path):
        """Chamadas repetidas substituem os handlers em vez de acumular"""
        setup_logging(str(tmp_path / "first.log"))
        logger = setup_logging(str(tmp_path / "second.log"))

        try:
            assert len(logger.handlers) == 2
            assert logging.getLogger() is not logger
        finally:
            _close_package_handlers()

    def test_default_log_file_comes_from_settings(self, tmp_path, monkeypatch):
        monkeypatch.setattr(
            "gifvision.infra.logging.settings", AppSettings(log_file=str(tmp_path / "from_settings.log"))
        )
        try:
            setup_logging()
            assert (tmp_path / "from_settings.log").exists()
        finally:
            _close_package_handlers()


def test_log_history_limit_rejects_negative():
    with pytest.raises(ValidationError):
        AppSettings(log_history_limit=-1)

    assert AppSettings(log_history_limit=0).log_history_limit == 0


def test_create_app_wires_logging_and_relay(tmp_path):
    toast = RecordingToast(expected=1)
    clipboard = LoggingClipboard()
    app = create_app(
        Mock(),
        toast=toast,
        exporter=Mock(),
        clipboard=clipboard,
        app_settings=AppSettings(log_file=str(tmp_path / "app.log"), log_history_limit=5),
    )

    try:
        assert app.relay.is_running is True
        assert app.session.log_history_limit == 5

        app.session.append_log(1, "render queued")
        assert app.session.copy_logs(1) is True
        assert clipboard.contents.endswith("Info: render queued")
        assert toast.done.wait(timeout=2.0)
        assert toast.shown == ["Logs copied"]
    finally:
        app.close()
        _close_package_handlers()

    assert "GifVision iniciado" in (tmp_path / "app.log").read_text(encoding="utf-8")
