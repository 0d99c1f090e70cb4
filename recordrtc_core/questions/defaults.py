from typing import Any, Mapping, Optional

from .config import RecordRTCConfig

SESSION_PREFIX = "recordrtc_"
REMEMBERED_FIELDS = ("mediatype", "timelimitinseconds")


class SessionFieldDefaults:
    """
    Значения по умолчанию для полей новой формы.

    Порядок: последнее значение, сохранённое пользователем (сессия) ->
    значение сайта из конфигурации -> значение, переданное вызывающим кодом.
    """

    def __init__(self, session: Optional[Mapping] = None, config: Optional[RecordRTCConfig] = None):
        self.session = session if session is not None else {}
        self.config = config

    def get(self, name: str, default: Any = None) -> Any:
        value = self.session.get(SESSION_PREFIX + name)
        if value not in (None, ''):
            return value
        if self.config is not None:
            site_default = self.config.field_default(name)
            if site_default is not None:
                return site_default
        return default

    def save(self, values: Mapping[str, Any]) -> None:
        """Запоминает выбранные значения для следующего нового вопроса"""
        for name in REMEMBERED_FIELDS:
            if values.get(name) is not None:
                self.session[SESSION_PREFIX + name] = values[name]
