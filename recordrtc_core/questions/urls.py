from django.urls import path

from .views import QuestionEditView

app_name = "questions"


urlpatterns = [
    path('new/', QuestionEditView.as_view(), name='create'),
    path('<int:pk>/edit/', QuestionEditView.as_view(), name='edit'),
]
