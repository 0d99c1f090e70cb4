from .question_edit import QuestionEditForm
from .recordrtc_form import RecordRTCEditFormController


class RecordRTCQuestionForm(QuestionEditForm):
    """
    Форма редактирования вопроса "запись аудио/видео".

    Поля типа вопроса (тип записи, лимит, отзывы по виджетам) добавляет
    RecordRTCEditFormController, см. recordrtc_form.py.
    """

    controller_class = RecordRTCEditFormController

    def qtype(self) -> str:
        return 'recordrtc'
