from decimal import Decimal

from django.test import SimpleTestCase

from assessments.phases import PHASES
from assessments.scoring import score_answers
from .factories import PHASE_ONE_CORRECT


class ScoreAnswersTests(SimpleTestCase):
    def setUp(self):
        self.phase_one = PHASES[1]
        self.phase_two = PHASES[2]

    def score(self, phase, answers):
        return score_answers(phase.answer_key, answers, phase.pass_threshold)

    def test_full_marks_when_answers_equal_key(self):
        for phase in (self.phase_one, self.phase_two):
            summary = self.score(phase, dict(phase.answer_key))
            self.assertEqual(summary.score, phase.total_questions)
            self.assertEqual(summary.percentage, Decimal('100.00'))
            self.assertTrue(summary.passed)

    def test_phase_one_reference_answers(self):
        summary = self.score(self.phase_one, PHASE_ONE_CORRECT)
        self.assertEqual((summary.score, summary.total_questions), (5, 5))
        self.assertEqual(summary.percentage, Decimal('100.00'))
        self.assertTrue(summary.passed)

    def test_total_questions_per_phase(self):
        self.assertEqual(self.score(self.phase_one, {}).total_questions, 5)
        self.assertEqual(self.score(self.phase_two, {}).total_questions, 10)

    def test_three_of_five_is_sixty_percent_and_passes(self):
        answers = dict(PHASE_ONE_CORRECT, heliosName='wrong', heliosSecurity='wrong')
        summary = self.score(self.phase_one, answers)
        self.assertEqual(summary.score, 3)
        self.assertEqual(summary.percentage, Decimal('60.00'))
        self.assertEqual(str(summary.percentage), '60.00')
        self.assertTrue(summary.passed)

    def test_two_of_five_fails(self):
        answers = {'acquisitionAccount': '11456789', 'acquisitionSecurity': 'Nv8'}
        summary = self.score(self.phase_one, answers)
        self.assertEqual(summary.score, 2)
        self.assertFalse(summary.passed)

    def test_phase_two_pass_boundary(self):
        keys = list(self.phase_two.answer_key)
        six = {key: self.phase_two.answer_key[key] for key in keys[:6]}
        five = {key: self.phase_two.answer_key[key] for key in keys[:5]}
        self.assertTrue(self.score(self.phase_two, six).passed)
        self.assertFalse(self.score(self.phase_two, five).passed)
        self.assertEqual(self.score(self.phase_two, five).percentage, Decimal('50.00'))

    def test_match_is_exact_and_case_sensitive(self):
        answers = {
            'acquisitionAccount': ' 11456789',
            'acquisitionSecurity': 'nv8',
            'landecStatus': 'inactive',
            'heliosName': 'Helios  Incorporated',
            'heliosSecurity': 'TRR',
        }
        self.assertEqual(self.score(self.phase_one, answers).score, 0)

    def test_missing_extra_and_malformed_values_do_not_raise(self):
        answers = {'q1': 'on', 'q2': None, 'q3': ['been'], 'q4': 7, 'bogus': 'x'}
        summary = self.score(self.phase_two, answers)
        self.assertEqual(summary.score, 1)
        self.assertEqual(summary.percentage, Decimal('10.00'))

    def test_non_mapping_payload_scores_zero(self):
        for payload in (None, 'answers', ['on', 'gone'], 42):
            summary = self.score(self.phase_two, payload)
            self.assertEqual(summary.score, 0)
            self.assertFalse(summary.passed)

    def test_percentage_rounds_half_up_to_two_places(self):
        key = {'a': '1', 'b': '2', 'c': '3'}
        summary = score_answers(key, {'a': '1'}, 2)
        self.assertEqual(summary.percentage, Decimal('33.33'))
        summary = score_answers(key, {'a': '1', 'b': '2'}, 2)
        self.assertEqual(summary.percentage, Decimal('66.67'))

    def test_score_always_within_bounds(self):
        for answers in ({}, dict(self.phase_two.answer_key), {'q1': 'on', 'q10': 'were', 'q11': 'extra'}):
            summary = self.score(self.phase_two, answers)
            self.assertGreaterEqual(summary.score, 0)
            self.assertLessEqual(summary.score, summary.total_questions)
