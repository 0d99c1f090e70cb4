"""
Настройки типа вопроса "запись аудио/видео".

Приоритет источников:
   - переменные окружения RECORDRTC_* (наивысший)
   - файл .env
   - значения по умолчанию

Форма редактирования не читает настройки из глобального состояния сама:
объект конфигурации передаётся в контроллер формы явно (см. recordrtc_form.py),
get_config() нужен только там, где форма собирается (views, services).
"""

from functools import lru_cache
from typing import Optional
import logging

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class RecordRTCConfig(BaseSettings):
    """
    Лимиты записи и значения полей по умолчанию для новых вопросов.
    """

    model_config = SettingsConfigDict(
        env_prefix="RECORDRTC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Максимальная длительность записи (секунды)
    audiotimelimit: int = Field(default=600, ge=1)
    videotimelimit: int = Field(default=300, ge=1)

    # Значения по умолчанию для полей формы на уровне сайта
    default_mediatype: Optional[str] = Field(default=None)
    default_timelimitinseconds: Optional[int] = Field(default=None, ge=1)

    @field_validator('default_mediatype')
    @classmethod
    def validate_default_mediatype(cls, v):
        if v is not None and v not in ('audio', 'video', 'customav'):
            raise ValueError(f"Unknown media type: {v}")
        return v

    def field_default(self, name: str):
        """Значение по умолчанию для поля формы, заданное на уровне сайта, или None"""
        return getattr(self, f"default_{name}", None)


@lru_cache(maxsize=1)
def get_config() -> RecordRTCConfig:
    """
    Возвращает (закешированную) конфигурацию.

    Raises:
        ConfigurationError: если значения из окружения не прошли валидацию
    """
    try:
        config = RecordRTCConfig()
    except ValidationError as e:
        logger.error(f"RecordRTC configuration validation error: {e}")
        raise ConfigurationError("Invalid record audio/video configuration", errors=e.errors()) from e
    logger.debug(f"RecordRTC configuration loaded: {config.model_dump()}")
    return config
