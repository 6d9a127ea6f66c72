"""
Learning unit, recommendation and curriculum endpoint tests
"""
from datetime import timedelta

from django.utils import timezone
from rest_framework import status

from accounts.models import UserProfile
from accounts.testing import CapacityAPITestCase
from assessments.models import Assessment, GapAnalysis
from .models import Curriculum, CurriculumRecommendation


class CurriculumTests(CapacityAPITestCase):

    def setUp(self):
        self.build_framework()
        self.organization = self.create_organization()
        self.facilitator = self.create_user(UserProfile.ROLE_FACILITATOR)
        self.participant = self.create_user(organization=self.organization, role_type='INSPECTOR')
        self.outsider = self.create_user(organization=self.create_organization('Other NRA'))
        self.project = self.create_project(self.organization, participants=[self.participant])

    def complete_baseline(self, participant):
        assessment = Assessment.objects.create(
            participant=participant, project=self.project, instrument=self.instrument,
            assessment_type=Assessment.TYPE_BASELINE, status=Assessment.STATUS_COMPLETED,
        )
        GapAnalysis.objects.create(
            assessment=assessment, competency_area=self.area_qs, knowledge_score=50,
            gap_score=20, priority=GapAnalysis.PRIORITY_MEDIUM, current_level=self.levels[1],
        )
        GapAnalysis.objects.create(
            assessment=assessment, competency_area=self.area_lt, knowledge_score=0,
            gap_score=85, priority=GapAnalysis.PRIORITY_CRITICAL,
        )
        return assessment

    def generate(self, **payload):
        return self.client.post(
            f'/api/curriculum/generate-recommendations/{self.project.id}/', payload, format='json'
        )

    def test_learning_units_filtered_by_level(self):
        self.authenticate(self.participant)
        response = self.client.get('/api/curriculum/learning-units/', {'level_id': str(self.levels[2].id)})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([u['code'] for u in response.data], ['U1', 'U5'])

    def test_learning_unit_detail(self):
        self.units['U4'].prerequisites.add(self.units['U5'])
        self.authenticate(self.participant)
        response = self.client.get(f"/api/curriculum/learning-units/{self.units['U5'].id}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([u['code'] for u in response.data['prerequisite_for']], ['U4'])

    def test_generate_requires_completed_baseline(self):
        self.authenticate(self.facilitator)
        response = self.generate()
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_participant_cannot_generate(self):
        self.complete_baseline(self.participant)
        self.authenticate(self.participant)
        response = self.generate()
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_generate_ranks_critical_areas_first(self):
        self.complete_baseline(self.participant)
        self.authenticate(self.facilitator)
        response = self.generate()
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 4)

        response = self.client.get(f'/api/curriculum/recommendations/{self.project.id}/')
        self.assertEqual(
            [(r['learning_unit']['code'], r['priority_rank']) for r in response.data],
            [('U3', 1), ('U5', 2), ('U1', 3), ('U2', 4)],
        )
        self.assertIn('Lot Testing gap (CRITICAL priority, avg gap: 85%)', response.data[0]['rationale'])
        self.assertEqual(response.data[0]['gap_analyses'][0]['area_code'], 'LT-01')
    def test_tied_areas_follow_area_order(self):
        assessment = Assessment.objects.create(
            participant=self.participant, project=self.project, instrument=self.instrument,
            assessment_type=Assessment.TYPE_BASELINE, status=Assessment.STATUS_COMPLETED,
        )
        now = timezone.now()
        for area, created_at in ((self.area_lt, now - timedelta(minutes=5)), (self.area_qs, now)):
            GapAnalysis.objects.create(
                assessment=assessment, competency_area=area, knowledge_score=50, gap_score=20,
                priority=GapAnalysis.PRIORITY_MEDIUM, current_level=self.levels[1], created_at=created_at,
            )

        self.authenticate(self.facilitator)
        self.generate()
        response = self.client.get(f'/api/curriculum/recommendations/{self.project.id}/')
        self.assertEqual(
            [r['learning_unit']['code'] for r in response.data],
            ['U1', 'U2', 'U5', 'U3'],
        )

    def test_regenerate_replaces_previous_recommendations(self):
        self.complete_baseline(self.participant)
        self.authenticate(self.facilitator)
        self.generate()
        self.generate()
        self.assertEqual(CurriculumRecommendation.objects.filter(project=self.project).count(), 4)

    def test_generate_for_one_participant(self):
        self.complete_baseline(self.participant)
        self.authenticate(self.facilitator)
        self.generate()
        response = self.generate(for_participant_id=str(self.participant.id))
        self.assertEqual(response.data['count'], 4)

        self.assertEqual(CurriculumRecommendation.objects.filter(participant__isnull=True).count(), 4)
        self.assertEqual(CurriculumRecommendation.objects.filter(participant=self.participant).count(), 4)

    def test_update_recommendation_status(self):
        self.complete_baseline(self.participant)
        self.authenticate(self.facilitator)
        self.generate()
        recommendation = CurriculumRecommendation.objects.order_by('priority_rank').first()

        response = self.client.put(
            f'/api/curriculum/recommendations/{recommendation.id}/', {'status': 'REJECTED'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        recommendation.refresh_from_db()
        self.assertEqual(recommendation.status, 'REJECTED')

        self.authenticate(self.participant)
        response = self.client.put(
            f'/api/curriculum/recommendations/{recommendation.id}/', {'status': 'ACCEPTED'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_other_organization_cannot_list_recommendations(self):
        self.authenticate(self.outsider)
        response = self.client.get(f'/api/curriculum/recommendations/{self.project.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_create_curriculum(self):
        self.complete_baseline(self.participant)
        self.authenticate(self.facilitator)
        self.generate()

        unit_ids = [str(self.units['U5'].id), str(self.units['U3'].id)]
        response = self.client.post('/api/curriculum/', {
            'project_id': str(self.project.id),
            'name': 'Cohort 1 programme',
            'learning_unit_ids': unit_ids,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['total_hours'], 16)
        self.assertEqual(response.data['status'], Curriculum.STATUS_DRAFT)
        self.assertEqual(
            [entry['learning_unit']['code'] for entry in response.data['learning_units']], ['U5', 'U3']
        )

        accepted = CurriculumRecommendation.objects.filter(status=CurriculumRecommendation.STATUS_ACCEPTED)
        self.assertEqual({r.learning_unit.code for r in accepted}, {'U3', 'U5'})

    def test_create_curriculum_with_unknown_unit(self):
        self.authenticate(self.facilitator)
        response = self.client.post('/api/curriculum/', {
            'project_id': str(self.project.id),
            'name': 'Broken',
            'learning_unit_ids': ['00000000-0000-0000-0000-000000000000'],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Curriculum.objects.exists())

    def test_approve_curriculum_records_approver(self):
        self.authenticate(self.facilitator)
        created = self.client.post('/api/curriculum/', {
            'project_id': str(self.project.id),
            'name': 'Cohort 1 programme',
            'learning_unit_ids': [str(self.units['U1'].id)],
        }, format='json')
        curriculum_id = created.data['id']

        response = self.client.put(f'/api/curriculum/{curriculum_id}/', {'status': 'APPROVED'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['approved_by']['id'], str(self.facilitator.id))

        self.authenticate(self.participant)
        response = self.client.get(f'/api/curriculum/project/{self.project.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

        self.authenticate(self.outsider)
        response = self.client.get(f'/api/curriculum/{curriculum_id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
