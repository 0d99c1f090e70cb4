import shutil
import tempfile

from django.contrib.auth import get_user_model
from django.core.files.storage import default_storage
from django.test import TestCase, override_settings
from django.urls import reverse

from questions.config import get_config
from questions.drafts import DraftAreaService
from questions.models import Answer, Question

from .test_forms import TWO_RECORDERS, form_data

MEDIA_ROOT = tempfile.mkdtemp()


@override_settings(MEDIA_ROOT=MEDIA_ROOT)
class QuestionEditViewTests(TestCase):

    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)

    def setUp(self):
        get_config.cache_clear()
        self.addCleanup(get_config.cache_clear)
        self.user = get_user_model().objects.create_user(username="author", password="secret-pass-123")
        self.client.force_login(self.user)

    def test_login_required(self):
        self.client.logout()
        response = self.client.get(reverse("questions:create"))
        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse("login"), response["Location"])

    def test_create_form_renders(self):
        response = self.client.get(reverse("questions:create"))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'name="mediatype"')
        self.assertContains(response, "[[recorder1:audio:2m]]")
        self.assertContains(response, 'data-hide-if-field="mediatype"')
        self.assertNotContains(response, 'feedbackheader')

    def test_create_audio_question(self):
        response = self.client.post(reverse("questions:create"), form_data(mediatype="video"))

        question = Question.objects.get()
        self.assertRedirects(response, reverse("questions:edit", kwargs={"pk": question.pk}))
        self.assertEqual(question.mediatype, "video")
        self.assertEqual(question.timelimitinseconds, 30)
        self.assertFalse(question.answers.exists())
        self.assertEqual(self.client.session["recordrtc_mediatype"], "video")

    def test_last_used_media_type_is_default_for_next_question(self):
        self.client.post(reverse("questions:create"), form_data(mediatype="video"))
        response = self.client.get(reverse("questions:create"))
        self.assertEqual(response.context["form"]["mediatype"].value(), "video")

    def test_create_custom_av_question(self):
        response = self.client.post(reverse("questions:create"), form_data(
            mediatype="customav",
            questiontext_text=TWO_RECORDERS,
            timelimitinseconds_number="1",
            timelimitinseconds_timeunit="60",
            feedbackforrecorder1_text="<p>Good pronunciation</p>",
            feedbackforrecorder1_format="1",
            feedbackforrecorder1_itemid="0",
        ))
        self.assertEqual(response.status_code, 302)

        question = Question.objects.get()
        answers = {answer.answer: answer for answer in question.answers.all()}
        self.assertEqual(set(answers), {"recorder1", "recorder2"})
        self.assertEqual(answers["recorder1"].feedback, "<p>Good pronunciation</p>")
        self.assertEqual(answers["recorder2"].feedback, "")

    def test_edit_removes_feedback_for_deleted_widgets(self):
        question = Question.objects.create(name="Q", questiontext=TWO_RECORDERS, mediatype="customav",
                                           timelimitinseconds=60)
        Answer.objects.create(question=question, answer="recorder1", feedback="One")
        Answer.objects.create(question=question, answer="recorder2", feedback="Two")

        response = self.client.post(reverse("questions:edit", kwargs={"pk": question.pk}), form_data(
            mediatype="customav",
            questiontext_text="<p>[[recorder1:audio:2m]]</p>",
            feedbackforrecorder1_text="One, updated",
            feedbackforrecorder1_format="1",
            feedbackforrecorder1_itemid="0",
        ))
        self.assertEqual(response.status_code, 302)
        self.assertEqual(list(question.answers.values_list("answer", "feedback")), [("recorder1", "One, updated")])

    def test_edit_form_shows_existing_feedback(self):
        question = Question.objects.create(name="Q", questiontext=TWO_RECORDERS, mediatype="customav",
                                           timelimitinseconds=60)
        Answer.objects.create(question=question, answer="recorder1", feedback="Lovely accent")

        response = self.client.get(reverse("questions:edit", kwargs={"pk": question.pk}))
        self.assertContains(response, 'name="feedbackforrecorder1_text"')
        self.assertContains(response, 'name="feedbackforrecorder2_text"')
        self.assertContains(response, "Lovely accent")

    def test_invalid_submission_is_redisplayed(self):
        response = self.client.post(reverse("questions:create"), form_data(timelimitinseconds_number="0"))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, "Maximum recording duration must be greater than 0.")
        self.assertFalse(Question.objects.exists())

    def test_update_form_button(self):
        response = self.client.post(reverse("questions:create"), form_data(
            mediatype="customav",
            questiontext_text=TWO_RECORDERS,
            updateform="Update the form",
        ))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'name="feedbackforrecorder1_text"')
        self.assertNotContains(response, "errorlist")
        self.assertFalse(Question.objects.exists())

    def test_missing_question(self):
        response = self.client.get(reverse("questions:edit", kwargs={"pk": 999}))
        self.assertEqual(response.status_code, 404)

    def post_with_feedback_draft(self, draftitemid):
        return self.client.post(reverse("questions:create"), form_data(
            mediatype="customav",
            questiontext_text=TWO_RECORDERS,
            feedbackforrecorder1_text="<p>See attached</p>",
            feedbackforrecorder1_format="1",
            feedbackforrecorder1_itemid=str(draftitemid),
        ))

    def test_own_draft_files_are_saved(self):
        DraftAreaService(user=self.user).add_draft_file(556, "hint.png", b"hint")

        self.assertEqual(self.post_with_feedback_draft(556).status_code, 302)

        answer = Answer.objects.get(answer="recorder1")
        self.assertTrue(default_storage.exists(f"files/1/question/answerfeedback/{answer.pk}/hint.png"))

    def test_other_users_draft_is_not_copied(self):
        other = get_user_model().objects.create_user(username="other", password="secret-pass-456")
        DraftAreaService(user=other).add_draft_file(555, "private.png", b"private")

        self.assertEqual(self.post_with_feedback_draft(555).status_code, 302)

        answer = Answer.objects.get(answer="recorder1")
        self.assertFalse(default_storage.exists(f"files/1/question/answerfeedback/{answer.pk}/private.png"))
        self.assertTrue(default_storage.exists(f"draft/{other.pk}/555/private.png"))
