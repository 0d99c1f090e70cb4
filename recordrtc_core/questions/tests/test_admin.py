from django.contrib import admin
from django.test import SimpleTestCase

from questions.admin import AnswerInline, QuestionAdmin
from questions.models import Question


class QuestionAdminTests(SimpleTestCase):

    def test_registered(self):
        self.assertIsInstance(admin.site._registry[Question], QuestionAdmin)
        self.assertEqual(QuestionAdmin.inlines, (AnswerInline,))

    def test_fieldset_titles(self):
        titles = [str(title) for title, _options in QuestionAdmin.fieldsets]
        self.assertEqual(titles, ['Main information', 'Recording', 'Feedback', 'System information'])
