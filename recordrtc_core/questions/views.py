from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils.translation import gettext as _
from django.views import View

from recordrtc_core.setup_logger import setup_logger
from .config import get_config
from .defaults import SessionFieldDefaults
from .drafts import DraftAreaService
from .forms import RecordRTCQuestionForm
from .models import Question
from .services.question_service import save_question

views_logger = setup_logger(name=__file__, log_dir="logs/questions", log_file="views.log")


class QuestionEditView(LoginRequiredMixin, View):
    """Создание (pk=None) и редактирование вопроса с записью аудио/видео"""

    template_name = "questions/edit_question.html"

    def get_question(self, pk):
        if pk is None:
            return None
        return get_object_or_404(Question.objects.prefetch_related('answers'), pk=pk)

    def get_form(self, request, question, data=None):
        config = get_config()
        return RecordRTCQuestionForm(
            data,
            question=question,
            config=config,
            defaults=SessionFieldDefaults(request.session, config),
            draft_service=DraftAreaService(user=request.user),
        )

    def render_form(self, request, form, question):
        return render(request, self.template_name, {"form": form, "question": question})

    def get(self, request, pk=None):
        question = self.get_question(pk)
        return self.render_form(request, self.get_form(request, question), question)

    def post(self, request, pk=None):
        question = self.get_question(pk)
        form = self.get_form(request, question, request.POST)

        if form.no_submit_button_pressed():
            # «Обновить форму»: набор полей зависит от типа записи и текста вопроса
            return self.render_form(request, form, question)

        if not form.is_valid():
            views_logger.info(f"Question form invalid (question={pk}): {list(form.errors)}")
            return self.render_form(request, form, question)

        question = save_question(form, question, defaults=form.defaults)
        messages.success(request, _("Changes saved"))
        return redirect(reverse("questions:edit", kwargs={"pk": question.pk}))
