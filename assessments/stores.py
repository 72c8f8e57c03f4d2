# assessments/stores.py
import logging
import posixpath

from django.core.files.storage import default_storage
from django.db import DatabaseError, IntegrityError, transaction

from exams.models import ExaminationRecord
from .errors import AlreadySubmitted, BlobStoreError, StoreUnavailable
from .models import AnswerPhaseResult, UploadPhaseResult

logger = logging.getLogger(__name__)


class ExamStore:
    """Persistence store: examination lookup and phase result writes."""

    def lookup(self, examination_id):
        try:
            candidates = list(ExaminationRecord.objects.filter(examination_id=examination_id)[:2])
        except DatabaseError as exc:
            raise StoreUnavailable(str(exc)) from exc

        # Some database collations compare case-insensitively; identifiers don't
        for record in candidates:
            if record.examination_id == examination_id:
                return record
        return None

    def insert_answers(self, examination_id, phase, answers, summary):
        try:
            with transaction.atomic():
                return AnswerPhaseResult.objects.create(
                    examination_id=examination_id,
                    phase=phase,
                    user_answers=answers,
                    score=summary.score,
                    total_questions=summary.total_questions,
                    percentage=summary.percentage,
                    is_passed=summary.passed,
                )
        except IntegrityError as exc:
            raise AlreadySubmitted(f"{examination_id} already submitted phase {phase}") from exc

    def reserve_upload(self, examination_id, phase, file_name):
        try:
            with transaction.atomic():
                return UploadPhaseResult.objects.create(
                    examination_id=examination_id,
                    phase=phase,
                    file_name=file_name,
                )
        except IntegrityError as exc:
            raise AlreadySubmitted(f"{examination_id} already submitted phase {phase}") from exc

    def submitted_phases(self, examination_id):
        """Maps phase number -> submission time for every accepted result."""
        try:
            submitted = dict(
                AnswerPhaseResult.objects.filter(examination_id=examination_id).values_list('phase', 'created_at')
            )
            submitted.update(
                UploadPhaseResult.objects.filter(
                    examination_id=examination_id, status=UploadPhaseResult.Status.STORED,
                ).values_list('phase', 'created_at')
            )
        except DatabaseError as exc:
            raise StoreUnavailable(str(exc)) from exc
        return submitted

    def finalize_upload(self, result, file_name, file_url):
        result.file_name = file_name
        result.file_url = file_url
        result.status = UploadPhaseResult.Status.STORED
        result.save(update_fields=['file_name', 'file_url', 'status'])
        return result


class BlobStore:
    """
    Blob store over any Django storage backend (filesystem, S3, ...).
    Retrieval addresses come from the backend's url() without a round trip.
    """

    def __init__(self, storage=None):
        self.storage = storage if storage is not None else default_storage

    def put(self, namespace, name, file, content_type=None):
        key = posixpath.join(namespace, name)
        if content_type and not getattr(file, 'content_type', None):
            file.content_type = content_type
        try:
            return self.storage.save(key, file)
        except Exception as exc:
            raise BlobStoreError(f"Could not write {key}: {exc}") from exc

    def address(self, key):
        return self.storage.url(key)

    def discard(self, key):
        try:
            self.storage.delete(key)
        except Exception:
            logger.exception("Could not remove orphaned blob %s", key)
