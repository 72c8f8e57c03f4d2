from django.urls import path
from .views import PhaseListView, PhaseProgressView, PhaseDeadlineView, SubmitPhaseView

urlpatterns = [
    # --- Phase Router ---
    path('phases/', PhaseListView.as_view(), name='phase-list'),
    path('<str:examination_id>/progress/', PhaseProgressView.as_view(), name='phase-progress'),

    # --- Candidate Exam Flow ---
    path('<str:examination_id>/phases/<int:phase>/deadline/', PhaseDeadlineView.as_view(), name='phase-deadline'),
    path('<str:examination_id>/phases/<int:phase>/submit/', SubmitPhaseView.as_view(), name='phase-submit'),
]
