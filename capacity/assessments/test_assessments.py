"""
Assessment lifecycle endpoint tests
"""
from rest_framework import status

from accounts.models import UserProfile
from accounts.testing import CapacityAPITestCase
from .models import Assessment, AssessmentResponse, GapAnalysis


class AssessmentFlowTests(CapacityAPITestCase):

    def setUp(self):
        self.build_framework()
        self.organization = self.create_organization()
        self.participant = self.create_user(organization=self.organization, role_type='INSPECTOR')
        self.other_participant = self.create_user(organization=self.organization, role_type='DIRECTOR')
        self.facilitator = self.create_user(UserProfile.ROLE_FACILITATOR)
        self.project = self.create_project(
            self.organization, participants=[self.participant, self.other_participant]
        )

    def start(self, assessment_type=Assessment.TYPE_BASELINE):
        return self.client.post('/api/assessments/start/', {
            'project_id': str(self.project.id),
            'assessment_type': assessment_type,
        }, format='json')

    def answer(self, assessment_id, answers):
        return self.client.post(f'/api/assessments/{assessment_id}/responses/', {
            'responses': [
                {'question_id': str(question.id), 'response_value': value}
                for question, value in answers
            ],
        }, format='json')

    def baseline_answers(self):
        return [
            (self.q_qs_rating, 4),
            (self.q_qs_choice, 'b'),
            (self.q_qs_true_false, 'False'),
            (self.q_lt_rating, 2),
            (self.q_lt_choice, 'D'),
        ]

    def test_start_hides_answers_from_participant(self):
        self.authenticate(self.participant)
        response = self.start()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], Assessment.STATUS_IN_PROGRESS)
        self.assertEqual(len(response.data['questions']), 5)
        self.assertNotIn('correct_answer', response.data['questions'][1])

    def test_start_resumes_in_progress_assessment(self):
        self.authenticate(self.participant)
        first = self.start()
        second = self.start()
        self.assertEqual(second.status_code, status.HTTP_200_OK)
        self.assertEqual(first.data['id'], second.data['id'])

    def test_start_requires_enrolment(self):
        outsider = self.create_user(organization=self.organization)
        self.authenticate(outsider)
        response = self.start()
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_start_unknown_project(self):
        self.authenticate(self.participant)
        response = self.client.post('/api/assessments/start/', {
            'project_id': '00000000-0000-0000-0000-000000000000',
            'assessment_type': Assessment.TYPE_BASELINE,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_start_without_active_instrument(self):
        self.instrument.is_active = False
        self.instrument.save()
        self.authenticate(self.participant)
        response = self.start()
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_submit_responses_scores_each_answer(self):
        self.authenticate(self.participant)
        assessment_id = self.start().data['id']
        response = self.answer(assessment_id, self.baseline_answers())
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 5)

        scores = {
            r.question_id: r.score for r in AssessmentResponse.objects.filter(assessment_id=assessment_id)
        }
        self.assertEqual(scores[self.q_qs_rating.id], 4)
        self.assertEqual(scores[self.q_qs_choice.id], 2)
        self.assertEqual(scores[self.q_qs_true_false.id], 0)
        self.assertEqual(scores[self.q_lt_choice.id], 0)

    def test_resubmitting_replaces_answer(self):
        self.authenticate(self.participant)
        assessment_id = self.start().data['id']
        self.answer(assessment_id, [(self.q_lt_choice, 'D')])
        self.answer(assessment_id, [(self.q_lt_choice, 'c')])

        responses = AssessmentResponse.objects.filter(assessment_id=assessment_id)
        self.assertEqual(responses.count(), 1)
        self.assertEqual(responses.get().score, 4)

    def test_invalid_self_rating_rejects_the_batch(self):
        self.authenticate(self.participant)
        assessment_id = self.start().data['id']
        response = self.answer(assessment_id, [(self.q_qs_choice, 'B'), (self.q_qs_rating, 7)])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(AssessmentResponse.objects.filter(assessment_id=assessment_id).exists())

    def test_only_owner_submits_responses(self):
        self.authenticate(self.participant)
        assessment_id = self.start().data['id']

        self.authenticate(self.facilitator)
        response = self.answer(assessment_id, [(self.q_qs_rating, 3)])
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_complete_writes_gap_analysis(self):
        self.authenticate(self.participant)
        assessment_id = self.start().data['id']
        self.answer(assessment_id, self.baseline_answers())

        response = self.client.post(f'/api/assessments/{assessment_id}/complete/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['assessment']['status'], Assessment.STATUS_COMPLETED)

        qs_gap = GapAnalysis.objects.get(assessment_id=assessment_id, competency_area=self.area_qs)
        self.assertEqual(qs_gap.self_rating_score, 4)
        self.assertEqual(qs_gap.knowledge_score, 50)
        self.assertEqual(qs_gap.gap_score, 20)
        self.assertEqual(qs_gap.priority, GapAnalysis.PRIORITY_MEDIUM)
        self.assertEqual(qs_gap.current_level, self.levels[1])
        self.assertEqual(qs_gap.target_level, self.levels[2])

        lt_gap = GapAnalysis.objects.get(assessment_id=assessment_id, competency_area=self.area_lt)
        self.assertEqual(lt_gap.knowledge_score, 0)
        self.assertEqual(lt_gap.gap_score, 85)
        self.assertEqual(lt_gap.priority, GapAnalysis.PRIORITY_CRITICAL)
        self.assertIsNone(lt_gap.current_level)

    def test_area_without_knowledge_answers(self):
        self.authenticate(self.participant)
        assessment_id = self.start().data['id']
        self.answer(assessment_id, [(self.q_qs_rating, 5)])
        self.client.post(f'/api/assessments/{assessment_id}/complete/')

        gap = GapAnalysis.objects.get(assessment_id=assessment_id, competency_area=self.area_qs)
        self.assertIsNone(gap.knowledge_score)
        self.assertEqual(gap.gap_score, 70)
        self.assertEqual(gap.priority, GapAnalysis.PRIORITY_CRITICAL)

    def test_default_benchmark_without_role_target(self):
        """Participants without a matching role target are measured against 70"""
        self.authenticate(self.other_participant)
        assessment_id = self.start().data['id']
        self.answer(assessment_id, [(self.q_lt_choice, 'B')])
        self.client.post(f'/api/assessments/{assessment_id}/complete/')

        gap = GapAnalysis.objects.get(assessment_id=assessment_id, competency_area=self.area_lt)
        self.assertEqual(gap.knowledge_score, 0)
        self.assertEqual(gap.gap_score, 70)
        self.assertIsNone(gap.target_level)

    def test_completed_assessment_is_closed(self):
        self.authenticate(self.participant)
        assessment_id = self.start().data['id']
        self.client.post(f'/api/assessments/{assessment_id}/complete/')

        response = self.answer(assessment_id, [(self.q_qs_rating, 3)])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.post(f'/api/assessments/{assessment_id}/complete/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.start()
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_results_summary(self):
        self.authenticate(self.participant)
        assessment_id = self.start().data['id']
        self.answer(assessment_id, self.baseline_answers())
        self.client.post(f'/api/assessments/{assessment_id}/complete/')

        response = self.client.get(f'/api/assessments/{assessment_id}/results/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        summary = response.data['summary']
        self.assertEqual(summary['total_questions'], 5)
        self.assertEqual(summary['total_score'], 8)
        self.assertEqual(summary['max_possible_score'], 18)
        self.assertEqual(summary['percentage_score'], 44)
        self.assertEqual(
            [gap['area']['code'] for gap in response.data['gap_analysis']], ['QS-01', 'LT-01']
        )

    def test_participant_cannot_see_someone_elses_assessment(self):
        self.authenticate(self.participant)
        assessment_id = self.start().data['id']

        self.authenticate(self.other_participant)
        response = self.client.get(f'/api/assessments/{assessment_id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_only_shows_own_assessments_to_participants(self):
        self.authenticate(self.participant)
        self.start()
        self.authenticate(self.other_participant)
        self.start()

        response = self.client.get('/api/assessments/')
        self.assertEqual(len(response.data), 1)

        self.authenticate(self.facilitator)
        response = self.client.get('/api/assessments/', {'project_id': str(self.project.id)})
        self.assertEqual(len(response.data), 2)
