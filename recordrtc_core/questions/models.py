from django.db import models
from django.utils.translation import gettext_lazy as _


class MediaType(models.TextChoices):
    """Режим записи для вопроса"""

    AUDIO = ('audio', _('Audio'))
    VIDEO = ('video', _('Video'))
    CUSTOM_AV = ('customav', _('Customised A/V'))


class WidgetType(models.TextChoices):
    """Тип отдельного виджета записи внутри текста вопроса (для customav)"""

    AUDIO = ('audio', _('Audio'))
    VIDEO = ('video', _('Video'))


class TextFormat(models.IntegerChoices):
    """Форматы форматированного текста в редакторе"""

    AUTO = (0, _('Auto-format'))
    HTML = (1, _('HTML'))
    PLAIN = (2, _('Plain text'))
    MARKDOWN = (4, _('Markdown'))


class Question(models.Model):
    """
    Вопрос с записью аудио/видео.

    Ключевые поля:
    - questiontext: форматированный текст; для customav содержит плейсхолдеры
      виджетов вида [[recorder1:audio:2m]]
    - mediatype: audio | video | customav
    - timelimitinseconds: максимальная длительность записи
    - contextid: контекст, к которому привязаны файлы текста и отзывов
    """
    objects = models.Manager()

    name = models.CharField(max_length=255, verbose_name=_("Question name"))
    questiontext = models.TextField(blank=True, default="", verbose_name=_("Question text"))
    questiontextformat = models.PositiveSmallIntegerField(choices=TextFormat, default=TextFormat.HTML)
    generalfeedback = models.TextField(blank=True, default="", verbose_name=_("General feedback"))
    generalfeedbackformat = models.PositiveSmallIntegerField(choices=TextFormat, default=TextFormat.HTML)
    defaultmark = models.DecimalField(max_digits=12, decimal_places=7, default=1, verbose_name=_("Default mark"))
    mediatype = models.CharField(max_length=8, choices=MediaType, default=MediaType.AUDIO,
                                 verbose_name=_("Type of recording"))
    timelimitinseconds = models.PositiveIntegerField(default=30, verbose_name=_("Maximum recording duration"))
    contextid = models.PositiveIntegerField(default=1, verbose_name=_("Context"))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Record audio/video question")
        verbose_name_plural = _("Record audio/video questions")
        ordering = ['-updated_at']

    def __str__(self):
        return f"{self.name} ({self.get_mediatype_display()})"


class Answer(models.Model):
    """
    Отзыв для одного виджета записи.

    answer хранит имя виджета и должен совпадать с плейсхолдером в тексте вопроса
    (проверяется при валидации формы, не на уровне БД).
    """
    objects = models.Manager()

    question = models.ForeignKey(Question, on_delete=models.CASCADE, related_name="answers",
                                 verbose_name=_("Question"))
    answer = models.CharField(max_length=32, verbose_name=_("Widget name"))
    feedback = models.TextField(blank=True, default="", verbose_name=_("Feedback"))
    feedbackformat = models.PositiveSmallIntegerField(choices=TextFormat, default=TextFormat.HTML)

    class Meta:
        verbose_name = _("Widget feedback")
        verbose_name_plural = _("Widget feedback")
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['question', 'answer'], name='unique_widget_per_question'),
        ]

    def __str__(self):
        return f"{self.answer} → {self.question_id}"
