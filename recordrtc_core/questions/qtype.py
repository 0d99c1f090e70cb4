"""
Тип вопроса "запись аудио/видео": разбор и проверка плейсхолдеров виджетов
в тексте вопроса.
"""

from typing import List, Optional
import re

from django.utils.translation import gettext as _

from .config import RecordRTCConfig
from .models import MediaType, WidgetType
from .widget_info import DURATION_PATTERN, WidgetInfo, format_time, make_placeholder, parse_duration

WIDGET_NAME_PATTERN = r'[a-z0-9_-]+'
# Корректный плейсхолдер: [[name:type]] или [[name:type:duration]]
WIDGET_PLACEHOLDER_REGEX = re.compile(
    r'\[\[(?P<name>' + WIDGET_NAME_PATTERN + r'):(?P<type>' + '|'.join(WidgetType.values)
    + r')(?::(?P<duration>' + DURATION_PATTERN + r'))?\]\]'
)
# Любая конструкция [[...]], используется при валидации
ANY_PLACEHOLDER_REGEX = re.compile(r'\[\[([^\]]*)\]\]')
WIDGET_NAME_REGEX = re.compile(WIDGET_NAME_PATTERN)


class RecordRTCQuestionType:
    """Плейсхолдеры виджетов записи: поиск в тексте и валидация"""

    DEFAULT_TIMELIMIT = 30
    MAX_WIDGET_NAME_LENGTH = 32

    def get_widget_placeholders(self, questiontext: str) -> List[WidgetInfo]:
        """
        Виджеты, найденные в тексте вопроса, в порядке появления.
        При повторе имени учитывается первое вхождение.
        """
        widgets = {}
        for match in WIDGET_PLACEHOLDER_REGEX.finditer(questiontext or ''):
            name = match.group('name')
            if name in widgets:
                continue
            duration = match.group('duration')
            widgets[name] = WidgetInfo(
                name=name,
                type=match.group('type'),
                maxduration=parse_duration(duration) if duration else None,
            )
        return list(widgets.values())

    def validate_widget_placeholders(self, questiontext: str, mediatype: str,
                                     config: RecordRTCConfig) -> Optional[str]:
        """
        Проверяет плейсхолдеры в тексте вопроса.

        Returns:
            текст первой найденной ошибки или None
        """
        placeholders = ANY_PLACEHOLDER_REGEX.findall(questiontext or '')

        if mediatype != MediaType.CUSTOM_AV:
            if placeholders:
                return _('Placeholders like [[name:type]] can only be used when the type of recording '
                         'is "Customised A/V". Found: %(placeholder)s') % {
                    'placeholder': f"[[{placeholders[0]}]]"}
            return None

        if not placeholders:
            return _('The question text must include at least one placeholder for a recording widget, '
                     'for example %(example)s') % {'example': self.example_placeholders()}

        seen = set()
        for content in placeholders:
            placeholder = f"[[{content}]]"
            error = self._validate_placeholder(placeholder, content.split(':'), seen, config)
            if error:
                return error
        return None

    def _validate_placeholder(self, placeholder: str, parts: List[str], seen: set,
                              config: RecordRTCConfig) -> Optional[str]:
        if len(parts) not in (2, 3):
            return _('The placeholder %(placeholder)s is not in the right format. '
                     'Use [[name:type]] or [[name:type:duration]].') % {'placeholder': placeholder}

        name, widget_type = parts[0], parts[1]

        if name != name.lower():
            return _('Widget names must be lower case. Check %(placeholder)s') % {'placeholder': placeholder}
        if not WIDGET_NAME_REGEX.fullmatch(name):
            return _('Widget names may only contain lower case letters, digits, "-" and "_". '
                     'Check %(placeholder)s') % {'placeholder': placeholder}
        if len(name) > self.MAX_WIDGET_NAME_LENGTH:
            return _('Widget names must be at most %(max)d characters long. Check %(placeholder)s') % {
                'max': self.MAX_WIDGET_NAME_LENGTH, 'placeholder': placeholder}
        if name in seen:
            return _('Each widget must have a unique name. "%(name)s" is used more than once.') % {'name': name}
        seen.add(name)

        if widget_type not in WidgetType.values:
            return _('The type of widget in %(placeholder)s must be "audio" or "video".') % {
                'placeholder': placeholder}

        if len(parts) == 3:
            duration = parse_duration(parts[2])
            if duration is None:
                return _('The duration in %(placeholder)s is not valid. Use a format like 2m, 1m30s or 45s.') % {
                    'placeholder': placeholder}
            if duration <= 0:
                return _('The duration in %(placeholder)s must be greater than 0.') % {'placeholder': placeholder}
            maxduration = config.audiotimelimit if widget_type == WidgetType.AUDIO else config.videotimelimit
            if duration > maxduration:
                return _('The duration in %(placeholder)s cannot be greater than %(max)s.') % {
                    'placeholder': placeholder, 'max': format_time(maxduration)}

        # Принятый плейсхолдер обязан находиться get_widget_placeholders
        if not WIDGET_PLACEHOLDER_REGEX.fullmatch(placeholder):
            return _('The placeholder %(placeholder)s is not in the right format. '
                     'Use [[name:type]] or [[name:type:duration]].') % {'placeholder': placeholder}
        return None

    @staticmethod
    def example_placeholders(separator: str = ' ') -> str:
        return separator.join([
            make_placeholder('recorder1', WidgetType.AUDIO.value, 120),
            make_placeholder('recorder2', WidgetType.VIDEO.value, 90),
        ])
