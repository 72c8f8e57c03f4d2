# assessments/scoring.py
from collections.abc import Mapping
from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple


TWO_PLACES = Decimal('0.01')


class ScoreSummary(NamedTuple):
    score: int
    total_questions: int
    percentage: Decimal
    passed: bool


def score_answers(answer_key, answers, pass_threshold):
    """
    Grades a candidate's answers against a fixed key.

    Only exact, case-sensitive matches count. Missing, extra or malformed
    entries simply score nothing, so this never raises on client input.
    """
    if not isinstance(answers, Mapping):
        answers = {}

    total = len(answer_key)
    score = sum(
        1 for key, correct in answer_key.items()
        if isinstance(answers.get(key), str) and answers.get(key) == correct
    )

    if total:
        percentage = (Decimal(score) * 100 / Decimal(total)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    else:
        percentage = Decimal('0.00')

    return ScoreSummary(
        score=score,
        total_questions=total,
        percentage=percentage,
        passed=score >= pass_threshold,
    )
