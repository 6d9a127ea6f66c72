"""
Scoring and gap rules, no database
"""
from django.test import SimpleTestCase

from capacity.exceptions import BadRequest
from competencies.models import AssessmentQuestion, CompetencyLevel
from .services import scoring


def _question(question_type, correct=None, points=1):
    return AssessmentQuestion(question_type=question_type, correct_answer=correct, points=points)


class ResponseScoringTests(SimpleTestCase):

    def test_self_rating_scores_its_value(self):
        question = _question(AssessmentQuestion.SELF_RATING, points=5)
        self.assertEqual(scoring.score_response(question, 4), 4)
        self.assertEqual(scoring.score_response(question, '3'), 3)

    def test_self_rating_string_and_float_forms_agree(self):
        question = _question(AssessmentQuestion.SELF_RATING, points=5)
        self.assertEqual(scoring.score_response(question, '3.0'), 3)
        self.assertEqual(scoring.score_response(question, 3.0), 3)
        for value in ('2.5', 'nan', 'inf'):
            with self.assertRaises(BadRequest):
                scoring.score_response(question, value)

    def test_self_rating_out_of_range(self):
        question = _question(AssessmentQuestion.SELF_RATING)
        for value in (0, 6, 'high', 2.5, True, None):
            with self.assertRaises(BadRequest):
                scoring.score_response(question, value)

    def test_multiple_choice_is_case_insensitive(self):
        question = _question(AssessmentQuestion.MULTIPLE_CHOICE, correct='B', points=3)
        self.assertEqual(scoring.score_response(question, ' b '), 3)
        self.assertEqual(scoring.score_response(question, 'C'), 0)

    def test_multi_valued_correct_answer(self):
        question = _question(AssessmentQuestion.SCENARIO, correct=['A', 'C'], points=2)
        self.assertEqual(scoring.score_response(question, 'c'), 2)
        self.assertEqual(scoring.score_response(question, 'B'), 0)

    def test_true_false(self):
        question = _question(AssessmentQuestion.TRUE_FALSE, correct='true', points=1)
        self.assertEqual(scoring.score_response(question, True), 1)
        self.assertEqual(scoring.score_response(question, 'False'), 0)

    def test_missing_answer_scores_zero(self):
        question = _question(AssessmentQuestion.MULTIPLE_CHOICE, correct='A')
        self.assertEqual(scoring.score_response(question, None), 0)


class AreaAggregationTests(SimpleTestCase):

    def test_mean_rating_and_knowledge_percentage(self):
        self_rating, knowledge = scoring.aggregate_area_scores([
            ('SELF_RATING', 4, 5),
            ('SELF_RATING', 2, 5),
            ('MULTIPLE_CHOICE', 2, 2),
            ('TRUE_FALSE', 0, 2),
        ])
        self.assertEqual(self_rating, 3)
        self.assertEqual(knowledge, 50)

    def test_no_knowledge_answers_is_none(self):
        self_rating, knowledge = scoring.aggregate_area_scores([('SELF_RATING', 5, 5)])
        self.assertEqual(self_rating, 5)
        self.assertIsNone(knowledge)

    def test_no_answers(self):
        self.assertEqual(scoring.aggregate_area_scores([]), (None, None))


class GapRuleTests(SimpleTestCase):

    def test_gap_never_negative(self):
        self.assertEqual(scoring.compute_gap(70, 95), 0)
        self.assertEqual(scoring.compute_gap(70, 40), 30)

    def test_missing_score_counts_as_zero(self):
        self.assertEqual(scoring.compute_gap(85, None), 85)

    def test_priority_thresholds(self):
        cases = [
            (40.1, 'CRITICAL'), (40, 'HIGH'), (30.5, 'HIGH'), (30, 'MEDIUM'),
            (15.1, 'MEDIUM'), (15, 'LOW'), (0, 'LOW'),
        ]
        for gap, priority in cases:
            self.assertEqual(scoring.priority_for_gap(gap), priority, gap)

    def test_current_level_is_highest_reached(self):
        levels = [
            CompetencyLevel(level_number=1, benchmark_score=50),
            CompetencyLevel(level_number=2, benchmark_score=70),
            CompetencyLevel(level_number=3, benchmark_score=85),
        ]
        self.assertIsNone(scoring.select_current_level(levels, 49.9))
        self.assertIsNone(scoring.select_current_level(levels, None))
        self.assertEqual(scoring.select_current_level(levels, 70).level_number, 2)
        self.assertEqual(scoring.select_current_level(levels, 100).level_number, 3)
