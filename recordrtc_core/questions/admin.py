from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Answer, Question


class AnswerInline(admin.TabularInline):
    model = Answer
    extra = 0
    fields = ('answer', 'feedback', 'feedbackformat')


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ('name', 'mediatype', 'timelimitinseconds', 'updated_at')
    list_filter = ('mediatype',)
    search_fields = ('name', 'questiontext')
    readonly_fields = ('created_at', 'updated_at')
    inlines = (AnswerInline,)

    fieldsets = (
        (_('Main information'), {
            'fields': ('name', 'questiontext', 'questiontextformat', 'defaultmark')
        }),
        (_('Recording'), {
            'fields': ('mediatype', 'timelimitinseconds')
        }),
        (_('Feedback'), {
            'fields': ('generalfeedback', 'generalfeedbackformat')
        }),
        (_('System information'), {
            'fields': ('contextid', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
