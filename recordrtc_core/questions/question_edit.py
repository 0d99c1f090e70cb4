"""
Общая форма редактирования вопроса.

Содержит поля, которые есть у любого типа вопроса (название, текст вопроса,
балл по умолчанию, общий отзыв), базовую валидацию и предобработку.
Всё, что зависит от типа вопроса, делает контроллер (controller_class),
которому форма передаёт FormBuilder, данные запроса и конфигурацию.
"""

from functools import partial
from typing import Any, Dict, Iterable, Mapping, Optional

from django import forms
from django.forms.utils import ErrorDict
from django.utils.translation import gettext as _, gettext_lazy

from .config import get_config
from .drafts import DraftAreaService
from .fields import EditorField
from .formbuilder import FormBuilder

FILE_COMPONENT = 'question'
EDITOR_FILE_OPTIONS = {"subdirs": False, "maxfiles": -1, "maxbytes": 0}


def base_validation(fromform: Mapping[str, Any]) -> Dict[str, str]:
    """Проверки, общие для всех типов вопросов"""
    errors = {}
    name = fromform.get('name')
    if name is not None and not str(name).strip():
        errors['name'] = _('The question name cannot be blank.')
    defaultmark = fromform.get('defaultmark')
    if defaultmark is not None and defaultmark < 0:
        errors['defaultmark'] = _('The default mark must be a positive number or zero.')
    return errors


def base_data_preprocessing(question, *, draft_service: DraftAreaService,
                            submitted: Optional[Mapping[str, Any]] = None,
                            option_fields: Iterable[str] = (),
                            file_options: Optional[dict] = None) -> Dict[str, Any]:
    """
    Начальные значения общей формы для сохранённого вопроса.
    Для нового вопроса возвращается пустой словарь (работают значения полей по умолчанию).
    """
    if question is None or question.pk is None:
        return {}

    initial = {
        'name': question.name,
        'defaultmark': question.defaultmark,
    }
    for fieldname, filearea in (('questiontext', 'questiontext'), ('generalfeedback', 'generalfeedback')):
        draftitemid = draft_service.get_submitted_draft_itemid(submitted, fieldname)
        draftitemid, text = draft_service.prepare_draft_area(
            draftitemid, question.contextid, FILE_COMPONENT, filearea, question.pk,
            file_options or EDITOR_FILE_OPTIONS, getattr(question, fieldname),
        )
        initial[fieldname] = {
            'text': text,
            'format': getattr(question, f'{fieldname}format'),
            'itemid': draftitemid,
        }

    for fieldname in option_fields:
        initial[fieldname] = getattr(question, fieldname)
    return initial


class QuestionEditForm(forms.Form):
    """
    Базовая форма вопроса; конкретный тип задаёт controller_class.

    Кнопки, зарегистрированные как no-submit (например «Обновить форму»),
    перерисовывают форму с отправленными данными без валидации.
    """

    controller_class = None

    name = forms.CharField(label=gettext_lazy('Question name'), max_length=255)
    questiontext = EditorField(label=gettext_lazy('Question text'), rows=15)
    defaultmark = forms.DecimalField(label=gettext_lazy('Default mark'), initial=1, max_digits=12, decimal_places=7)
    generalfeedback = EditorField(label=gettext_lazy('General feedback'), rows=10, required=False)

    def __init__(self, data=None, files=None, *, question=None, config=None, defaults=None,
                 draft_service: Optional[DraftAreaService] = None, **kwargs):
        self.question = question
        self.config = config or get_config()
        self.defaults = defaults
        self.draft_service = draft_service or DraftAreaService()
        self.hide_rules = {}
        self.no_submit_buttons = set()

        self.controller = self.controller_class(
            config=self.config,
            question=question,
            submitted=data,
            defaults=defaults,
            draft_service=self.draft_service,
            base_validator=base_validation,
            base_preprocessor=partial(
                base_data_preprocessing,
                draft_service=self.draft_service,
                submitted=data,
                option_fields=self.controller_class.option_fields,
            ),
            file_options=EDITOR_FILE_OPTIONS,
        )

        if question is not None and 'initial' not in kwargs:
            kwargs['initial'] = self.controller.data_preprocessing(question)

        super().__init__(data, files, **kwargs)
        self.controller.definition_inner(FormBuilder(self))

    def no_submit_button_pressed(self) -> bool:
        return self.is_bound and any(name in self.data for name in self.no_submit_buttons)

    def full_clean(self):
        if self.no_submit_button_pressed():
            # Форма только перерисовывается: ошибок не показываем
            self._errors = ErrorDict()
            self.cleaned_data = {}
            return
        super().full_clean()

    def clean(self):
        cleaned_data = super().clean()
        errors = self.controller.validation(cleaned_data)
        for field, message in errors.items():
            self.add_error(field if field in self.fields else None, message)
        return cleaned_data

    def display_only_fields(self):
        return {name for name, field in self.fields.items() if getattr(field, 'display_only', False)}
