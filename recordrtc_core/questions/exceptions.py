"""
Исключения приложения questions.

Ошибки валидации формы сюда НЕ относятся: они собираются в словарь
{поле: сообщение} и показываются рядом с полем (см. recordrtc_form.py).
Здесь описаны сбои внешних зависимостей (конфигурация, файловое хранилище),
которые не обрабатываются локально и пробрасываются наверх.
"""

from typing import Any, Dict, Optional
import json


class RecordRTCBaseError(Exception):
    """
    Базовое исключение типа вопроса "запись аудио/видео".
    Добавляет контекст для логирования и сериализацию в JSON.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}

    def to_dict(self) -> dict:
        """Сериализует исключение в словарь для логирования"""
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "context": self.context,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


class ConfigurationError(RecordRTCBaseError):
    """
    Некорректная конфигурация типа вопроса.

    Примеры:
    - RECORDRTC_AUDIOTIMELIMIT не число
    - лимит записи меньше 1 секунды
    """

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message, {"errors": errors or []})


class DraftAreaError(RecordRTCBaseError):
    """
    Сбой при работе с черновой областью файлов (draft area).
    Оборачивает ошибки хранилища (OSError и т.п.).
    """

    def __init__(self, message: str, draftitemid: Optional[int] = None, filearea: Optional[str] = None,
                 itemid: Optional[int] = None):
        context = {
            "draftitemid": draftitemid,
            "filearea": filearea,
            "itemid": itemid,
        }
        super().__init__(message, context)
