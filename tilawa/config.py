"""
Configuration for the tilawa library.

Settings are read from environment variables prefixed with ``TILAWA_``
(or a local ``.env`` file) and can be overridden at runtime with
``configure()``.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tilawa.exceptions import ConfigurationError


DEFAULT_QURAN_JSON = Path(__file__).parent / "data" / "quran.json"
DEFAULT_AUDIO_BASE_URL = "https://everyayah.com/data/Alafasy_128kbps/"


class TilawaSettings(BaseSettings):
    """
    Runtime settings for the tilawa library.

    Attributes:
        quran_json_path: Path to the chapter + verse text table
        strict: Raise on corpus inconsistencies instead of degrading to empty results
        log_level: Level for the "tilawa" logger
        audio_base_url: Base URL recitation files are fetched from
        audio_cache_dir: Directory downloaded recitation files are kept in
        audio_timeout: HTTP timeout for audio downloads (seconds)
    """

    quran_json_path: Path = Field(
        default=DEFAULT_QURAN_JSON,
        description="Path to the chapter + verse text table (quran.json)",
    )
    strict: bool = Field(
        default=False,
        description="Raise CorpusInconsistencyError instead of logging and degrading",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level for the tilawa logger",
    )
    audio_base_url: str = Field(
        default=DEFAULT_AUDIO_BASE_URL,
        description="Base URL for per-verse recitation files",
    )
    audio_cache_dir: Path = Field(
        default=Path.home() / ".cache" / "tilawa" / "audio",
        description="Local directory for downloaded recitation files",
    )
    audio_timeout: float = Field(
        default=30.0,
        description="HTTP timeout for audio downloads (seconds)",
        gt=0.0,
    )

    model_config = SettingsConfigDict(
        env_prefix="TILAWA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("audio_base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else value + "/"


@lru_cache(maxsize=1)
def get_settings() -> TilawaSettings:
    """Get the process-wide settings, loading them on first use."""
    try:
        return TilawaSettings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid tilawa settings: {e}")


def configure(**overrides: Any) -> TilawaSettings:
    """
    Override settings at runtime.

    Args:
        **overrides: Setting names and their new values

    Changing log_level also re-applies it to the "tilawa" logger and its
    handlers.

    Returns:
        The updated settings instance

    Raises:
        ConfigurationError: If a setting is unknown or a value is invalid
    """
    current = get_settings()
    for name in overrides:
        if name not in TilawaSettings.model_fields:
            raise ConfigurationError("Unknown setting", setting_name=name)

    try:
        updated = TilawaSettings(**{**current.model_dump(), **overrides})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid tilawa settings: {e}")

    for name, value in updated.model_dump().items():
        setattr(current, name, value)

    if "log_level" in overrides:
        logger = logging.getLogger("tilawa")
        logger.setLevel(current.log_level)
        for handler in logger.handlers:
            handler.setLevel(current.log_level)
    return current
