"""
Описание виджета записи, встроенного в текст вопроса.

Плейсхолдер в тексте вопроса:  [[имя:тип]]  или  [[имя:тип:длительность]]
    [[recorder1:audio:2m]]
    [[recorder2:video:1m30s]]
    [[answer-3:audio]]        (длительность берётся из лимита вопроса)
"""

from dataclasses import dataclass
from typing import Optional
import re

from django.utils.translation import ngettext

# Длительность в плейсхолдере: 2m, 1m30s, 45s
DURATION_PATTERN = r'\d+m(?:\d+s)?|\d+s'
DURATION_REGEX = re.compile(r'(?:(?P<minutes>\d+)m)?(?:(?P<seconds>\d+)s)?')


@dataclass(frozen=True)
class WidgetInfo:
    """Виджет записи: имя, тип (audio/video) и своя максимальная длительность (или None)"""

    name: str
    type: str
    maxduration: Optional[int] = None

    @property
    def placeholder(self) -> str:
        if self.maxduration is None:
            return f"[[{self.name}:{self.type}]]"
        return make_placeholder(self.name, self.type, self.maxduration)


def duration_to_string(seconds: int) -> str:
    """120 -> '2m', 90 -> '1m30s', 45 -> '45s'"""
    minutes, secs = divmod(int(seconds), 60)
    if minutes and secs:
        return f"{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m"
    return f"{secs}s"


def parse_duration(value: str) -> Optional[int]:
    """
    Разбирает длительность из плейсхолдера в секунды.

    Возвращает None, если строка не в формате XmYs / Xm / Ys.
    """
    if not value:
        return None
    match = DURATION_REGEX.fullmatch(value)
    if not match:
        return None
    minutes = int(match.group('minutes') or 0)
    seconds = int(match.group('seconds') or 0)
    return minutes * 60 + seconds


def make_placeholder(name: str, widget_type: str, duration: int) -> str:
    """Плейсхолдер для вставки в текст вопроса"""
    return f"[[{name}:{widget_type}:{duration_to_string(duration)}]]"


def format_time(seconds: int) -> str:
    """Человекочитаемая длительность для сообщений об ошибках: '10 mins', '1 min 30 secs'"""
    minutes, secs = divmod(int(seconds), 60)
    parts = []
    if minutes:
        parts.append(ngettext("%(count)d min", "%(count)d mins", minutes) % {"count": minutes})
    if secs or not minutes:
        parts.append(ngettext("%(count)d sec", "%(count)d secs", secs) % {"count": secs})
    return " ".join(parts)
