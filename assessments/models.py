# assessments/models.py
from django.db import models


class AnswerPhaseResult(models.Model):
    """A candidate's single scored attempt at a multiple-choice phase (1 or 2)."""
    # Plain reference to ExaminationRecord.examination_id, not a foreign key
    examination_id = models.CharField(max_length=50, db_index=True)
    phase = models.PositiveSmallIntegerField()

    user_answers = models.JSONField(default=dict, blank=True)
    score = models.PositiveIntegerField()
    total_questions = models.PositiveIntegerField()
    percentage = models.DecimalField(max_digits=5, decimal_places=2)
    is_passed = models.BooleanField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['examination_id', 'phase'], name='unique_answer_result_per_phase'),
        ]

    def __str__(self):
        return f"{self.examination_id} - phase {self.phase} ({self.score}/{self.total_questions})"


class UploadPhaseResult(models.Model):
    """A candidate's single uploaded artifact for a file phase (3 or 4)."""
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"  # Row reserved, blob not yet written
        STORED = "stored", "Stored"

    examination_id = models.CharField(max_length=50, db_index=True)
    phase = models.PositiveSmallIntegerField()

    file_name = models.CharField(max_length=255)
    file_url = models.CharField(max_length=500, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['examination_id', 'phase'], name='unique_upload_result_per_phase'),
        ]

    def __str__(self):
        return f"{self.examination_id} - phase {self.phase} - {self.file_name}"
