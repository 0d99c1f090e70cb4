"""
Логика формы редактирования вопроса "запись аудио/видео".

Контроллер не наследуется от Django-формы, а получает всё нужное явно:
- FormBuilder для добавления полей (definition_inner)
- конфигурацию с лимитами записи (validation)
- базовую валидацию и базовую предобработку общей формы вопроса
- сервис черновых областей для файлов в отзывах
"""

from typing import Any, Callable, Dict, Mapping, Optional
import re

from django import forms
from django.utils.html import format_html
from django.utils.translation import gettext as _

from recordrtc_core.setup_logger import setup_logger
from .config import RecordRTCConfig
from .defaults import SessionFieldDefaults
from .drafts import DraftAreaService
from .fields import DurationField, EditorField
from .formbuilder import FormBuilder
from .models import MediaType
from .qtype import RecordRTCQuestionType
from .widget_info import format_time, make_placeholder

form_logger = setup_logger(name=__file__, log_dir="logs/questions", log_file="forms.log")

FILE_COMPONENT = 'question'
FEEDBACK_FILEAREA = 'answerfeedback'


class RecordRTCEditFormController:
    """Поля, предобработка и валидация, специфичные для типа вопроса recordrtc"""

    option_fields = ('mediatype', 'timelimitinseconds')

    def __init__(
        self,
        *,
        config: RecordRTCConfig,
        question=None,
        submitted: Optional[Mapping[str, Any]] = None,
        defaults: Optional[SessionFieldDefaults] = None,
        draft_service: Optional[DraftAreaService] = None,
        base_validator: Optional[Callable[[Mapping], Dict[str, str]]] = None,
        base_preprocessor: Optional[Callable[[Any], Dict[str, Any]]] = None,
        file_options: Optional[dict] = None,
        context_id: int = 1,
    ):
        self.config = config
        self.question = question
        self.submitted = submitted or {}
        self.defaults = defaults if defaults is not None else SessionFieldDefaults(config=config)
        self.draft_service = draft_service or DraftAreaService()
        self.base_validator = base_validator
        self.base_preprocessor = base_preprocessor
        self.file_options = file_options or {}
        self.context_id = getattr(question, 'contextid', None) or context_id
        self.qtype = RecordRTCQuestionType()

    # Текущее состояние формы

    def _is_existing_question(self) -> bool:
        return self.question is not None and getattr(self.question, 'pk', None) is not None

    def get_current_question_text(self) -> str:
        """
        Текст вопроса, который будет показан в форме: отправленный (форма
        перерисовывается) -> сохранённый (редактирование) -> '' (новый вопрос).
        """
        if 'questiontext_text' in self.submitted:
            return self.submitted.get('questiontext_text') or ''
        if self._is_existing_question():
            return self.question.questiontext
        return ''

    def get_current_mediatype(self) -> str:
        """Один из MediaType: отправленный -> сохранённый -> значение по умолчанию"""
        mediatype = re.sub(r'[^A-Za-z]', '', str(self.submitted.get('mediatype') or ''))
        if mediatype:
            return mediatype
        if self._is_existing_question():
            return self.question.mediatype
        # Должно совпадать со значением по умолчанию поля mediatype ниже
        return self.get_default_value('mediatype', MediaType.AUDIO.value)

    def get_default_value(self, name: str, default: Any) -> Any:
        return self.defaults.get(name, default)

    # Описание формы

    def definition_inner(self, builder: FormBuilder) -> None:
        currentmediatype = self.get_current_mediatype()

        builder.insert_before('mediatype', forms.ChoiceField(choices=MediaType.choices, label=_('Type of recording')),
                              'questiontext')
        builder.add_help_button('mediatype', _(
            'Audio and Video give one recorder below the question text. '
            'With Customised A/V you place one or more recorders in the question text using placeholders.'))
        builder.set_default('mediatype', self.get_default_value('mediatype', MediaType.AUDIO.value))

        # Шаблоны плейсхолдеров, которые автор копирует в текст вопроса
        placeholders = format_html(
            '{} &nbsp; {}',
            make_placeholder('recorder1', 'audio', 120),
            make_placeholder('recorder2', 'video', 90),
        )
        builder.add_static('avplaceholdergroup', _('Recording widget placeholders'), placeholders,
                           before='defaultmark',
                           help_text=_('Copy these placeholders into the question text to add recorders. '
                                       'Change the name, type (audio or video) and maximum duration as needed.'))
        builder.hide_if('avplaceholdergroup', 'mediatype', 'noteq', MediaType.CUSTOM_AV.value)

        builder.add_submit_button('updateform', _('Update the form'), before='defaultmark')
        if currentmediatype != MediaType.CUSTOM_AV:
            # Если вопрос уже customav, кнопка видна всегда: иначе при смене
            # типа записи форму нельзя будет обновить.
            builder.hide_if('updateform', 'mediatype', 'noteq', MediaType.CUSTOM_AV.value)
        builder.register_no_submit_button('updateform')

        builder.add('timelimitinseconds', DurationField(units=(60, 1), label=_('Maximum recording duration')))
        builder.add_help_button('timelimitinseconds', _(
            'The longest recording a student can make. For Customised A/V this is the default for '
            'placeholders that do not give their own duration.'))
        builder.set_default('timelimitinseconds',
                            self.get_default_value('timelimitinseconds', self.qtype.DEFAULT_TIMELIMIT))

        if currentmediatype == MediaType.CUSTOM_AV:
            self.add_per_input_feedback_fields(builder)

    def add_per_input_feedback_fields(self, builder: FormBuilder) -> None:
        """
        Редактор отзыва для каждого виджета из текста вопроса.
        Вызывается только для MediaType.CUSTOM_AV.
        """
        widgets = self.qtype.get_widget_placeholders(self.get_current_question_text())
        if not widgets:
            return

        builder.add_header('feedbackheader', _('Feedback for each recording'))
        for widget in widgets:
            builder.add(self.feedback_field(widget.name), EditorField(
                label=_('Feedback for %(name)s') % {'name': widget.name},
                rows=3,
                required=False,
            ))

    @staticmethod
    def feedback_field(widgetname: str) -> str:
        return 'feedbackfor' + widgetname

    # Предобработка сохранённых данных

    def data_preprocessing(self, question) -> Dict[str, Any]:
        initial = self.base_preprocessor(question) if self.base_preprocessor else {}
        return self.data_preprocessing_per_input_feedbacks(question, initial)

    def data_preprocessing_per_input_feedbacks(self, question, initial: Dict[str, Any]) -> Dict[str, Any]:
        """Начальные значения полей, добавленных add_per_input_feedback_fields()"""
        if question is None or getattr(question, 'pk', None) is None:
            return initial

        answers = list(question.answers.all())
        if not answers:
            return initial

        for answer in answers:
            fieldname = self.feedback_field(answer.answer)

            # Файлы отзыва показываются в редакторе из черновой области
            draftitemid = self.draft_service.get_submitted_draft_itemid(self.submitted, fieldname)
            draftitemid, text = self.draft_service.prepare_draft_area(
                draftitemid,
                self.context_id,
                FILE_COMPONENT,
                FEEDBACK_FILEAREA,
                int(answer.pk) if answer.pk else None,
                self.file_options,
                answer.feedback,
            )
            initial[fieldname] = {
                'text': text,
                'itemid': draftitemid,
                'format': answer.feedbackformat,
            }
        return initial

    # Валидация

    def get_max_timelimit(self, mediatype: Optional[str], config: RecordRTCConfig) -> int:
        if mediatype == MediaType.AUDIO:
            return config.audiotimelimit
        if mediatype in (MediaType.VIDEO, MediaType.CUSTOM_AV):
            # Для customav берётся лимит видео: он короче лимита аудио, а
            # timelimitinseconds служит длительностью по умолчанию для виджетов
            # без своей длительности.
            return config.videotimelimit
        return self.qtype.DEFAULT_TIMELIMIT

    def validation(self, fromform: Mapping[str, Any], config: Optional[RecordRTCConfig] = None) -> Dict[str, str]:
        """
        Проверяет отправленную форму.

        Returns:
            {имя поля: сообщение}; пустой словарь, если ошибок нет
        """
        config = config or self.config
        errors = dict(self.base_validator(fromform)) if self.base_validator else {}

        questiontext = fromform.get('questiontext') or {}
        text = questiontext.get('text', '') if isinstance(questiontext, Mapping) else str(questiontext)
        mediatype = fromform.get('mediatype')

        placeholdererror = self.qtype.validate_widget_placeholders(text, mediatype, config)
        if placeholdererror:
            errors['questiontext'] = placeholdererror

        maxtimelimit = self.get_max_timelimit(mediatype, config)
        timelimit = fromform.get('timelimitinseconds')
        if timelimit is not None:
            if timelimit > maxtimelimit:
                errors['timelimitinseconds'] = _(
                    'Maximum recording duration cannot be greater than %(max)s.') % {
                    'max': format_time(maxtimelimit)}
            if timelimit <= 0:
                errors['timelimitinseconds'] = _('Maximum recording duration must be greater than 0.')

        if errors:
            form_logger.debug(f"Question form rejected: {errors}")
        return errors
