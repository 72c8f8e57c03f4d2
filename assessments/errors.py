# assessments/errors.py
from django.db import models
from rest_framework import status


class Rejection(models.TextChoices):
    """Tagged failure reasons. Labels are the messages shown to candidates."""
    INVALID_EXAM_ID = "InvalidExamId", "Invalid examination ID"
    STORE_UNAVAILABLE = "StoreUnavailable", "The exam service is temporarily unavailable. Please try again shortly."
    MISSING_FILE = "MissingFile", "No file uploaded"
    TOO_LARGE = "TooLarge", "File size exceeds 10 MB"
    INVALID_TYPE = "InvalidType", "Invalid file type"
    UPLOAD_FAILED = "UploadFailed", "Failed to store the uploaded file. Please try again."
    PERSIST_FAILED = "PersistFailed", "Failed to submit exam"
    ALREADY_SUBMITTED = "AlreadySubmitted", "This phase has already been submitted"
    DEADLINE_EXPIRED = "DeadlineExpired", "Time is up for this phase"
    UNEXPECTED_ERROR = "UnexpectedError", "An unexpected error occurred. Please contact the exam administrator."


HTTP_STATUS = {
    Rejection.INVALID_EXAM_ID: status.HTTP_404_NOT_FOUND,
    Rejection.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    Rejection.MISSING_FILE: status.HTTP_400_BAD_REQUEST,
    Rejection.TOO_LARGE: status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    Rejection.INVALID_TYPE: status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    Rejection.UPLOAD_FAILED: status.HTTP_502_BAD_GATEWAY,
    Rejection.PERSIST_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    Rejection.ALREADY_SUBMITTED: status.HTTP_409_CONFLICT,
    Rejection.DEADLINE_EXPIRED: status.HTTP_400_BAD_REQUEST,
    Rejection.UNEXPECTED_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


# --- Collaborator faults (raised by stores, caught by the controller) ---

class StoreUnavailable(Exception):
    """The persistence store could not be reached."""


class AlreadySubmitted(Exception):
    """A result already exists for this examination ID and phase."""


class BlobStoreError(Exception):
    """The blob store rejected or failed a write."""
