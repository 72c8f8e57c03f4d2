# examphase_platform/exams/models.py
from django.db import models


class ExaminationRecord(models.Model):
    """A registered exam instance, provisioned by an administrator."""

    # Externally issued, case-sensitive identifier the candidate types in
    examination_id = models.CharField(max_length=50, unique=True)
    description = models.TextField(blank=True)
    status = models.CharField(max_length=20, default="pending")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.examination_id
