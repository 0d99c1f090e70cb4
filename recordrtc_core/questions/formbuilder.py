from typing import Any, List, Optional, Tuple

from django import forms

from .fields import HeaderField, StaticField, SubmitButtonField

HIDE_IF_CONDITIONS = ('eq', 'noteq', 'checked', 'notchecked')


class FormBuilder:
    """
    Пошаговая сборка полей поверх django.forms.Form.

    Даёт типу вопроса операции, которых нет у Django-формы напрямую:
    вставку перед другим полем, значения по умолчанию, условное скрытие
    (hide_if) и кнопки, не отправляющие форму.
    """

    def __init__(self, form: forms.BaseForm):
        self.form = form
        if not hasattr(form, 'hide_rules'):
            form.hide_rules = {}
        if not hasattr(form, 'no_submit_buttons'):
            form.no_submit_buttons = set()

    @property
    def fields(self):
        return self.form.fields

    def add(self, name: str, field: forms.Field) -> forms.Field:
        self.form.fields[name] = field
        return field

    def insert_before(self, name: str, field: forms.Field, before: Optional[str]) -> forms.Field:
        """Вставляет поле перед полем before; если его нет, в конец"""
        if not before or before not in self.form.fields:
            return self.add(name, field)

        reordered = {}
        for existing_name, existing_field in self.form.fields.items():
            if existing_name == before:
                reordered[name] = field
            if existing_name != name:
                reordered[existing_name] = existing_field
        self.form.fields = reordered
        return field

    def add_static(self, name: str, label: str, content: str, before: Optional[str] = None,
                   help_text: str = '') -> forms.Field:
        return self.insert_before(name, StaticField(content=content, label=label, help_text=help_text), before)

    def add_header(self, name: str, label: str) -> forms.Field:
        return self.add(name, HeaderField(label=label))

    def add_submit_button(self, name: str, text: str, before: Optional[str] = None) -> forms.Field:
        return self.insert_before(name, SubmitButtonField(text=text), before)

    def set_default(self, name: str, value: Any) -> None:
        """Начальное значение, если форма не получила другое через initial"""
        self.form.fields[name].initial = value

    def add_help_button(self, name: str, help_text: str) -> None:
        self.form.fields[name].help_text = help_text

    def hide_if(self, name: str, dependency: str, condition: str, value: Any = None) -> None:
        """
        Скрывает поле name, когда поле dependency удовлетворяет условию.
        Правило отдаётся в шаблон как data-атрибуты (см. templatetags/form_extras.py).
        """
        if condition not in HIDE_IF_CONDITIONS:
            raise ValueError(f"Unknown hide_if condition: {condition}")
        self.form.hide_rules.setdefault(name, []).append((dependency, condition, value))

    def hide_rules_for(self, name: str) -> List[Tuple[str, str, Any]]:
        return self.form.hide_rules.get(name, [])

    def register_no_submit_button(self, name: str) -> None:
        self.form.no_submit_buttons.add(name)

    def field_names(self) -> List[str]:
        return list(self.form.fields)
