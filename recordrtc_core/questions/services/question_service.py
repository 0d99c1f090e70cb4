from typing import Optional

from django.db import transaction

from recordrtc_core.setup_logger import setup_logger
from ..defaults import SessionFieldDefaults
from ..drafts import DraftAreaService
from ..models import Answer, MediaType, Question, TextFormat
from ..qtype import RecordRTCQuestionType
from ..question_edit import EDITOR_FILE_OPTIONS, FILE_COMPONENT
from ..recordrtc_form import FEEDBACK_FILEAREA, RecordRTCEditFormController

questions_logger = setup_logger(name=__file__, log_dir="logs/questions", log_file="questions.log")

EMPTY_EDITOR = {'text': '', 'format': TextFormat.HTML.value, 'itemid': 0}


@transaction.atomic
def save_question(form, question: Optional[Question] = None,
                  draft_service: Optional[DraftAreaService] = None,
                  defaults: Optional[SessionFieldDefaults] = None) -> Question:
    """
    Сохраняет проверенную форму в Question и его Answer.

    Файлы редакторов переносятся из черновых областей в постоянные.
    Для customav набор Answer пересобирается по плейсхолдерам в тексте вопроса.
    """
    data = form.cleaned_data
    draft_service = draft_service or form.draft_service
    question = question or Question()
    is_new = question.pk is None

    questiontext = data['questiontext']
    generalfeedback = data.get('generalfeedback') or EMPTY_EDITOR

    question.name = data['name']
    question.questiontext = questiontext['text']
    question.questiontextformat = questiontext['format']
    question.generalfeedback = generalfeedback['text']
    question.generalfeedbackformat = generalfeedback['format']
    question.defaultmark = data['defaultmark']
    question.mediatype = data['mediatype']
    question.timelimitinseconds = data['timelimitinseconds']
    question.save()

    # Для файлов нужен id вопроса, поэтому ссылки переписываются после первого save()
    question.questiontext = draft_service.save_draft_area_files(
        questiontext['itemid'], question.contextid, FILE_COMPONENT, 'questiontext', question.pk,
        EDITOR_FILE_OPTIONS, question.questiontext)
    question.generalfeedback = draft_service.save_draft_area_files(
        generalfeedback['itemid'], question.contextid, FILE_COMPONENT, 'generalfeedback', question.pk,
        EDITOR_FILE_OPTIONS, question.generalfeedback)
    question.save(update_fields=['questiontext', 'generalfeedback'])

    save_answers(question, data, draft_service)

    if defaults is not None:
        defaults.save(data)

    questions_logger.info(
        f"Question {question.pk} {'created' if is_new else 'updated'}: "
        f"mediatype={question.mediatype}, timelimit={question.timelimitinseconds}s"
    )
    return question


def save_answers(question: Question, data: dict, draft_service: DraftAreaService) -> None:
    """Один Answer на каждый виджет (только customav); лишние удаляются"""
    existing = {answer.answer: answer for answer in question.answers.all()}

    widgets = []
    if question.mediatype == MediaType.CUSTOM_AV:
        widgets = RecordRTCQuestionType().get_widget_placeholders(question.questiontext)

    for widget in widgets:
        feedback = data.get(RecordRTCEditFormController.feedback_field(widget.name)) or EMPTY_EDITOR
        answer = existing.pop(widget.name, None) or Answer(question=question, answer=widget.name)
        answer.feedback = feedback['text']
        answer.feedbackformat = feedback['format']
        answer.save()

        answer.feedback = draft_service.save_draft_area_files(
            feedback['itemid'], question.contextid, FILE_COMPONENT, FEEDBACK_FILEAREA, answer.pk,
            EDITOR_FILE_OPTIONS, answer.feedback)
        answer.save(update_fields=['feedback'])

    for orphan in existing.values():
        draft_service.delete_area_files(question.contextid, FILE_COMPONENT, FEEDBACK_FILEAREA, orphan.pk)
        questions_logger.debug(f"Removing feedback for widget '{orphan.answer}' of question {question.pk}")
        orphan.delete()
