from django.urls import path
from .views import ValidateIdentifierView

urlpatterns = [
    path('validate/', ValidateIdentifierView.as_view(), name='validate-exam-id'),
]
