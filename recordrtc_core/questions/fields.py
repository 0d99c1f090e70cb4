"""
Поля формы редактирования вопроса, которых нет в django.forms:

- EditorField: форматированный текст -> {'text', 'format', 'itemid'}
- DurationField: число + единица измерения -> секунды
- StaticField / HeaderField / SubmitButtonField: элементы только для отображения
"""

from django import forms
from django.utils.html import format_html
from django.utils.safestring import mark_safe
from django.utils.translation import gettext_lazy as _

from .models import TextFormat


class EditorWidget(forms.MultiWidget):
    """Редактор: textarea + выбор формата + скрытый item id черновика"""

    def __init__(self, rows=10, attrs=None):
        widgets = {
            'text': forms.Textarea(attrs={'rows': rows, 'class': 'editor-text'}),
            'format': forms.Select(choices=TextFormat.choices, attrs={'class': 'editor-format'}),
            'itemid': forms.HiddenInput(),
        }
        super().__init__(widgets, attrs)

    def decompress(self, value):
        if isinstance(value, dict):
            return [value.get('text', ''), value.get('format', TextFormat.HTML), value.get('itemid', 0)]
        return ['', TextFormat.HTML, 0]


class EditorField(forms.MultiValueField):
    widget = EditorWidget

    def __init__(self, *, rows=10, required=True, **kwargs):
        fields = (
            forms.CharField(required=required, strip=False),
            forms.TypedChoiceField(choices=TextFormat.choices, coerce=int, required=False),
            forms.IntegerField(min_value=0, required=False),
        )
        kwargs.setdefault('error_messages', {'incomplete': _('Required')})
        super().__init__(fields, require_all_fields=False, required=required,
                         widget=EditorWidget(rows=rows), **kwargs)

    def compress(self, data_list):
        if not data_list:
            return {'text': '', 'format': TextFormat.HTML.value, 'itemid': 0}
        text, text_format, itemid = (list(data_list) + [None, None, None])[:3]
        return {
            'text': text or '',
            'format': text_format if text_format not in (None, '') else TextFormat.HTML.value,
            'itemid': itemid or 0,
        }


class DurationWidget(forms.MultiWidget):

    def __init__(self, units, attrs=None):
        widgets = {
            'number': forms.NumberInput(attrs={'step': 'any', 'class': 'duration-number'}),
            'timeunit': forms.Select(choices=units, attrs={'class': 'duration-unit'}),
        }
        super().__init__(widgets, attrs)
        self.units = units

    def decompress(self, value):
        if value in (None, ''):
            return [None, self.units[0][0]]
        return list(DurationField.split_seconds(int(value), [unit for unit, _label in self.units]))


class DurationField(forms.MultiValueField):
    """Длительность в секундах, вводимая как число + единица (минуты/секунды)"""

    UNIT_LABELS = {
        86400: _('days'),
        3600: _('hours'),
        60: _('minutes'),
        1: _('seconds'),
    }

    def __init__(self, *, units=(60, 1), **kwargs):
        choices = [(unit, self.UNIT_LABELS[unit]) for unit in units]
        fields = (
            forms.FloatField(),
            forms.TypedChoiceField(choices=choices, coerce=int),
        )
        super().__init__(fields, require_all_fields=True, widget=DurationWidget(choices), **kwargs)

    @staticmethod
    def split_seconds(seconds, units):
        """Самая крупная единица, на которую длительность делится без остатка"""
        for unit in sorted(units, reverse=True):
            if seconds and seconds % unit == 0:
                return seconds // unit, unit
        smallest = min(units)
        return seconds / smallest, smallest

    def compress(self, data_list):
        if not data_list or data_list[0] in self.empty_values:
            return None
        number, unit = data_list
        return int(round(number * unit))


class DisplayOnlyWidget(forms.Widget):
    """Виджет, который просто выводит заранее заданный HTML"""

    def __init__(self, content='', attrs=None):
        super().__init__(attrs)
        self.content = content

    def render(self, name, value, attrs=None, renderer=None):
        return mark_safe(self.content)

    def value_from_datadict(self, data, files, name):
        return None


class StaticField(forms.Field):
    """Статический текст в форме (например, шаблоны плейсхолдеров)"""

    display_only = True

    def __init__(self, content='', **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('disabled', True)
        super().__init__(widget=DisplayOnlyWidget(content), **kwargs)


class HeaderField(StaticField):
    """Заголовок раздела формы"""

    def __init__(self, label='', **kwargs):
        super().__init__(content=format_html('<h3 class="form-section-header">{}</h3>', label), label='', **kwargs)


class SubmitButton(forms.Widget):
    """Кнопка submit, которая не считается отправкой формы (см. FormBuilder.register_no_submit_button)"""

    def __init__(self, text='', attrs=None):
        super().__init__(attrs)
        self.text = text

    def render(self, name, value, attrs=None, renderer=None):
        final_attrs = self.build_attrs(self.attrs, attrs)
        extra = format_html(' class="{}"', final_attrs['class']) if final_attrs.get('class') else ''
        return format_html('<input type="submit" name="{}" value="{}" formnovalidate{}>', name, self.text, extra)

    def value_from_datadict(self, data, files, name):
        return name in data


class SubmitButtonField(forms.Field):
    display_only = True

    def __init__(self, text='', **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('label', '')
        super().__init__(widget=SubmitButton(text, attrs={'class': 'btn btn-secondary'}), **kwargs)
