# assessments/phases.py
from dataclasses import dataclass, field

from django.db import models


PHASE_DURATION_SECONDS = 300

IMAGE_TYPES = ('image/png', 'image/jpeg', 'image/jpg')
XLSX_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
XLS_TYPE = 'application/vnd.ms-excel'
SPREADSHEET_TYPES = (XLSX_TYPE, XLS_TYPE)


class PhaseKind(models.TextChoices):
    ANSWERS = "answers", "Multiple Choice"
    UPLOAD = "upload", "File Upload"


class PhaseState(models.TextChoices):
    NOT_STARTED = "not_started", "Not Started"
    IN_PROGRESS = "in_progress", "In Progress"
    SUBMITTED = "submitted", "Submitted"


class UnknownPhase(LookupError):
    pass


@dataclass(frozen=True)
class PhaseSpec:
    number: int
    title: str
    kind: str
    answer_key: dict = field(default_factory=dict)
    pass_threshold: int = 0
    allowed_types: tuple = ()
    type_hint: str = ""
    namespace: str = ""
    # Phase one is entered straight from the identifier check on the landing page
    requires_identifier: bool = True
    reveals_answers: bool = False

    @property
    def total_questions(self):
        return len(self.answer_key)


PHASES = {
    1: PhaseSpec(
        number=1,
        title="Attention to Detail Test",
        kind=PhaseKind.ANSWERS,
        answer_key={
            'acquisitionAccount': '11456789',
            'acquisitionSecurity': 'Nv8',
            'landecStatus': 'Inactive',
            'heliosName': 'Helios Incorporated',
            'heliosSecurity': 'tRR',
        },
        pass_threshold=3,
        requires_identifier=False,
        reveals_answers=True,
    ),
    2: PhaseSpec(
        number=2,
        title="Grammar and Reading Comprehension Exam",
        kind=PhaseKind.ANSWERS,
        answer_key={
            'q1': 'on',
            'q2': 'gone',
            'q3': 'been',
            'q4': 'been',
            'q5': 'gone',
            'q6': 'in',
            'q7': 'of',
            'q8': 'to',
            'q9': 'weren’t',
            'q10': 'were',
        },
        pass_threshold=6,
    ),
    3: PhaseSpec(
        number=3,
        title="Typing Test",
        kind=PhaseKind.UPLOAD,
        allowed_types=IMAGE_TYPES,
        type_hint="Only PNG, JPEG, or JPG allowed",
        namespace="uploads/phase3",
    ),
    4: PhaseSpec(
        number=4,
        title="Google Sheets Test",
        kind=PhaseKind.UPLOAD,
        allowed_types=SPREADSHEET_TYPES,
        type_hint="Only XLSX or XLS allowed",
        namespace="uploads/phase4",
    ),
}


def get_phase(number):
    try:
        return PHASES[int(number)]
    except (KeyError, TypeError, ValueError):
        raise UnknownPhase(f"No such phase: {number!r}")


def next_phase(number):
    """The phase a candidate moves on to after confirming `number`, or None after the last."""
    return PHASES.get(get_phase(number).number + 1)
