"""Tests for settings and logging configuration."""

import io
import logging
from pathlib import Path

import pytest

from tilawa._logging import configure_logging, disable_logging
from tilawa.config import DEFAULT_QURAN_JSON, configure, get_settings
from tilawa.exceptions import ConfigurationError


def test_defaults():
    settings = get_settings()
    assert settings.quran_json_path == DEFAULT_QURAN_JSON
    assert settings.strict is False
    assert settings.log_level == "INFO"
    assert settings.audio_base_url.endswith("/")


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TILAWA_QURAN_JSON_PATH", str(tmp_path / "q.json"))
    monkeypatch.setenv("TILAWA_STRICT", "1")
    monkeypatch.setenv("TILAWA_LOG_LEVEL", "debug")
    settings = get_settings()
    assert settings.quran_json_path == Path(tmp_path / "q.json")
    assert settings.strict is True
    assert settings.log_level == "DEBUG"


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_invalid_environment(monkeypatch):
    monkeypatch.setenv("TILAWA_LOG_LEVEL", "chatty")
    with pytest.raises(ConfigurationError):
        get_settings()


def test_configure_updates_in_place():
    settings = get_settings()
    updated = configure(strict=True, audio_base_url="https://mirror.example")
    assert updated is settings
    assert get_settings().strict is True
    assert get_settings().audio_base_url == "https://mirror.example/"


def test_configure_rejects_unknown_setting():
    with pytest.raises(ConfigurationError) as exc:
        configure(colour="green")
    assert exc.value.setting_name == "colour"


def test_configure_rejects_invalid_value():
    with pytest.raises(ConfigurationError):
        configure(audio_timeout=-1)
    assert get_settings().audio_timeout == 30.0


def test_configure_logging_writes_to_stream():
    stream = io.StringIO()
    logger = configure_logging(level=logging.DEBUG, stream=stream)
    try:
        logging.getLogger("tilawa.core.stream").debug("hello")
        assert "hello" in stream.getvalue()
        assert "tilawa.core.stream" in stream.getvalue()
    finally:
        disable_logging()
        logger.setLevel(logging.NOTSET)


def test_configure_logging_uses_settings_level(monkeypatch):
    monkeypatch.setenv("TILAWA_LOG_LEVEL", "WARNING")
    logger = configure_logging(stream=io.StringIO())
    try:
        assert logger.level == logging.WARNING
    finally:
        disable_logging()
        logger.setLevel(logging.NOTSET)


def test_configure_reapplies_log_level():
    logger = configure_logging(level=logging.INFO, stream=io.StringIO())
    try:
        configure(log_level="debug")
        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)
        assert get_settings().log_level == "DEBUG"
    finally:
        disable_logging()
        logger.setLevel(logging.NOTSET)
