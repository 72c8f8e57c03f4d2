# assessments/controller.py
import logging
import posixpath
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from django.conf import settings
from django.db import DatabaseError, transaction

from .deadlines import DeadlineTracker
from .errors import AlreadySubmitted, BlobStoreError, Rejection, StoreUnavailable
from .phases import PHASES, PHASE_DURATION_SECONDS, PhaseKind, PhaseState, get_phase
from .scoring import score_answers
from .stores import BlobStore, ExamStore
from .uploads import MAX_UPLOAD_BYTES, artifact_name, sniff_content, validate_upload

logger = logging.getLogger(__name__)


@dataclass
class Outcome:
    """Success/failure envelope returned by every controller operation."""
    ok: bool
    reason: Optional[str] = None
    message: str = ""
    record_id: Optional[int] = None
    record: Any = None
    data: dict = field(default_factory=dict)

    @classmethod
    def success(cls, record=None, **data):
        return cls(ok=True, record_id=getattr(record, 'pk', None), record=record, data=data)

    @classmethod
    def reject(cls, reason, phase=None):
        reason = Rejection(reason)
        message = reason.label
        if reason == Rejection.INVALID_TYPE and phase is not None and phase.type_hint:
            message = f"{message}. {phase.type_hint}"
        return cls(ok=False, reason=reason.value, message=message)


class ExamSessionController:
    """
    Drives one phase submission: identifier check, validation, scoring or
    artifact storage, persistence. Every submission failure comes back as a
    rejected Outcome. Asking for an unknown phase (UnknownPhase) or for the
    wrong kind of submission (ValueError) is a caller bug and raises.
    """

    def __init__(self, exam_store, blob_store, tracker=None, enforce_deadline=False,
                 max_upload_bytes=MAX_UPLOAD_BYTES):
        self.exam_store = exam_store
        self.blob_store = blob_store
        self.tracker = tracker
        self.enforce_deadline = enforce_deadline
        self.max_upload_bytes = max_upload_bytes

    @classmethod
    def for_request(cls, request):
        """Controller wired to the configured stores and the caller's session clock."""
        tracker = DeadlineTracker(
            request.session,
            duration=getattr(settings, 'EXAM_PHASE_DURATION_SECONDS', PHASE_DURATION_SECONDS),
        )
        return cls(
            ExamStore(),
            BlobStore(),
            tracker=tracker,
            enforce_deadline=getattr(settings, 'EXAM_ENFORCE_DEADLINE', False),
            max_upload_bytes=getattr(settings, 'EXAM_MAX_UPLOAD_BYTES', MAX_UPLOAD_BYTES),
        )

    # --- Identifier ---

    def validate_identifier(self, examination_id):
        if not examination_id:
            return Outcome.reject(Rejection.INVALID_EXAM_ID)
        try:
            record = self.exam_store.lookup(examination_id)
        except StoreUnavailable:
            logger.exception("Exam store unavailable while validating %s", examination_id)
            return Outcome.reject(Rejection.STORE_UNAVAILABLE)

        if record is None:
            logger.info("Examination ID %s not found", examination_id)
            return Outcome.reject(Rejection.INVALID_EXAM_ID)

        logger.info("Examination ID %s found", examination_id)
        return Outcome.success(record=record)

    # --- Multiple choice phases ---

    def submit_answers(self, examination_id, phase_number, answers):
        phase = get_phase(phase_number)
        if phase.kind != PhaseKind.ANSWERS:
            raise ValueError(f"Phase {phase.number} does not take answers")

        try:
            return self._submit_answers(examination_id, phase, answers)
        except Exception:
            logger.exception("Unexpected error submitting phase %s for %s", phase.number, examination_id)
            return Outcome.reject(Rejection.UNEXPECTED_ERROR)

    def _submit_answers(self, examination_id, phase, answers):
        logger.info("Submitting phase %s answers for %s", phase.number, examination_id)

        if phase.requires_identifier:
            found = self.validate_identifier(examination_id)
            if not found.ok:
                return found

        if self._deadline_passed(examination_id, phase):
            logger.warning("Late phase %s submission rejected for %s", phase.number, examination_id)
            return Outcome.reject(Rejection.DEADLINE_EXPIRED)

        answers = dict(answers) if isinstance(answers, Mapping) else {}
        summary = score_answers(phase.answer_key, answers, phase.pass_threshold)

        try:
            result = self.exam_store.insert_answers(examination_id, phase.number, answers, summary)
        except AlreadySubmitted:
            logger.warning("Duplicate phase %s submission for %s", phase.number, examination_id)
            return Outcome.reject(Rejection.ALREADY_SUBMITTED)
        except DatabaseError:
            logger.exception("Could not save phase %s result for %s", phase.number, examination_id)
            return Outcome.reject(Rejection.PERSIST_FAILED)

        logger.info(
            "Phase %s saved for %s: %s/%s (result %s)",
            phase.number, examination_id, summary.score, summary.total_questions, result.pk,
        )
        self._clear_deadline(examination_id, phase)

        if not phase.reveals_answers:
            return Outcome.success(record=result)

        return Outcome.success(
            record=result,
            score=summary.score,
            total_questions=summary.total_questions,
            percentage=summary.percentage,
            is_passed=summary.passed,
            correct_answers=dict(phase.answer_key),
            user_answers=answers,
        )

    # --- File phases ---

    def submit_upload(self, examination_id, phase_number, file):
        phase = get_phase(phase_number)
        if phase.kind != PhaseKind.UPLOAD:
            raise ValueError(f"Phase {phase.number} does not take uploads")

        try:
            return self._submit_upload(examination_id, phase, file)
        except Exception:
            logger.exception("Unexpected error submitting phase %s for %s", phase.number, examination_id)
            return Outcome.reject(Rejection.UNEXPECTED_ERROR)

    def _submit_upload(self, examination_id, phase, file):
        logger.info("Submitting phase %s upload for %s", phase.number, examination_id)

        # 1. Identifier
        found = self.validate_identifier(examination_id)
        if not found.ok:
            return found

        if self._deadline_passed(examination_id, phase):
            logger.warning("Late phase %s upload rejected for %s", phase.number, examination_id)
            return Outcome.reject(Rejection.DEADLINE_EXPIRED)

        # 2. Declared metadata, then the actual bytes
        rejection = validate_upload(file, phase.allowed_types, self.max_upload_bytes)
        if rejection is None:
            rejection = sniff_content(file)
        if rejection is not None:
            logger.warning(
                "Phase %s upload for %s rejected (%s): type=%s size=%s",
                phase.number, examination_id, rejection.value,
                getattr(file, 'content_type', None), getattr(file, 'size', None),
            )
            return Outcome.reject(rejection, phase)

        # 3. Stable, path-safe name
        name = artifact_name(examination_id, file.name)

        # 4-5. The reserved row is the one-submission arbiter; it rolls back
        # with the transaction if the blob write or finalize fails.
        stored_key = None
        try:
            with transaction.atomic():
                result = self.exam_store.reserve_upload(examination_id, phase.number, name)
                stored_key = self.blob_store.put(phase.namespace, name, file, file.content_type)
                file_url = self.blob_store.address(stored_key)
                self.exam_store.finalize_upload(result, posixpath.basename(stored_key), file_url)
        except AlreadySubmitted:
            logger.warning("Duplicate phase %s upload for %s", phase.number, examination_id)
            return Outcome.reject(Rejection.ALREADY_SUBMITTED)
        except BlobStoreError:
            logger.exception("Blob store write failed for %s phase %s", examination_id, phase.number)
            return Outcome.reject(Rejection.UPLOAD_FAILED)
        except DatabaseError:
            logger.exception("Could not save phase %s upload for %s", phase.number, examination_id)
            if stored_key is not None:
                self.blob_store.discard(stored_key)
            return Outcome.reject(Rejection.PERSIST_FAILED)
        except Exception:
            # Row is already rolled back; the blob must not outlive it
            if stored_key is not None:
                self.blob_store.discard(stored_key)
            raise

        logger.info("Phase %s upload saved for %s at %s (result %s)", phase.number, examination_id, file_url, result.pk)
        self._clear_deadline(examination_id, phase)
        return Outcome.success(record=result, file_name=result.file_name, file_url=file_url)

    # --- Deadline ---

    def _deadline_passed(self, examination_id, phase):
        return bool(self.enforce_deadline and self.tracker and self.tracker.expired(examination_id, phase.number))

    def _clear_deadline(self, examination_id, phase):
        if self.tracker is not None:
            self.tracker.clear(examination_id, phase.number)

    # --- Progress ---

    def progress(self, examination_id):
        """Where the candidate stands in each phase, for the phase router."""
        found = self.validate_identifier(examination_id)
        if not found.ok:
            return found

        try:
            submitted = self.exam_store.submitted_phases(examination_id)
        except StoreUnavailable:
            logger.exception("Exam store unavailable while loading progress for %s", examination_id)
            return Outcome.reject(Rejection.STORE_UNAVAILABLE)

        phases = []
        for number in sorted(PHASES):
            if number in submitted:
                state = PhaseState.SUBMITTED
            elif self.tracker is not None and self.tracker.anchor(examination_id, number) is not None:
                state = PhaseState.IN_PROGRESS
            else:
                state = PhaseState.NOT_STARTED
            phases.append({'phase': number, 'state': state.value, 'submitted_at': submitted.get(number)})

        return Outcome.success(record=found.record, phases=phases)
