"""
Report endpoint tests
"""
from rest_framework import status

from accounts.models import UserProfile
from accounts.testing import CapacityAPITestCase
from assessments.models import Assessment, GapAnalysis
from .models import ImpactReport
from .services.reports import percentile


class ReportTests(CapacityAPITestCase):

    def setUp(self):
        self.build_framework()
        self.organization = self.create_organization()
        self.other_organization = self.create_organization('Other NRA')
        self.facilitator = self.create_user(UserProfile.ROLE_FACILITATOR)
        self.client_admin = self.create_user(UserProfile.ROLE_CLIENT_ADMIN, organization=self.organization)
        self.other_admin = self.create_user(UserProfile.ROLE_CLIENT_ADMIN, organization=self.other_organization)
        self.participant = self.create_user(organization=self.organization, role_type='INSPECTOR')
        self.other_participant = self.create_user(organization=self.organization)
        self.project = self.create_project(
            self.organization, participants=[self.participant, self.other_participant]
        )

        self.baseline = self.completed(Assessment.TYPE_BASELINE, [
            (self.area_qs, 50, 20, GapAnalysis.PRIORITY_MEDIUM, 1),
            (self.area_lt, 0, 85, GapAnalysis.PRIORITY_CRITICAL, None),
        ])
        self.post = self.completed(Assessment.TYPE_POST_TRAINING, [
            (self.area_qs, 80, 0, GapAnalysis.PRIORITY_LOW, 2),
            (self.area_lt, 50, 35, GapAnalysis.PRIORITY_HIGH, 1),
        ])

    def completed(self, assessment_type, rows):
        assessment = Assessment.objects.create(
            participant=self.participant, project=self.project, instrument=self.instrument,
            assessment_type=assessment_type, status=Assessment.STATUS_COMPLETED,
        )
        for area, score, gap, priority, level_number in rows:
            GapAnalysis.objects.create(
                assessment=assessment, competency_area=area, knowledge_score=score, gap_score=gap,
                priority=priority, current_level=self.levels.get(level_number),
            )
        return assessment

    def individual_url(self, participant):
        return f'/api/reports/individual/{participant.id}/{self.project.id}/'

    def test_individual_report(self):
        self.authenticate(self.participant)
        response = self.client.get(self.individual_url(self.participant))
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        improvements = {row['area']['code']: row for row in response.data['improvements']}
        self.assertEqual(improvements['QS-01']['improvement'], 30)
        self.assertEqual(improvements['LT-01']['improvement'], 50)
        self.assertTrue(improvements['QS-01']['level_change'])
        self.assertEqual(improvements['LT-01']['baseline']['level'], 'N/A')
        self.assertEqual(response.data['overall_improvement'], 40)
        self.assertEqual([s['area'] for s in response.data['strengths']], ['Quality Systems'])
        self.assertEqual([d['area'] for d in response.data['development_areas']], ['Lot Testing'])

    def test_individual_report_before_post_training(self):
        self.post.delete()
        self.authenticate(self.facilitator)
        response = self.client.get(self.individual_url(self.participant))
        self.assertIsNone(response.data['improvements'])
        self.assertIsNone(response.data['overall_improvement'])
        self.assertEqual(len(response.data['competency_analysis']), 2)

    def test_participant_only_sees_own_report(self):
        self.authenticate(self.other_participant)
        response = self.client.get(self.individual_url(self.participant))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_institutional_report(self):
        self.authenticate(self.client_admin)
        response = self.client.get(f'/api/reports/institutional/{self.project.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        summary = response.data['summary']
        self.assertEqual(summary['total_participants'], 2)
        self.assertEqual(summary['completion_rate'], {'baseline': 50, 'post': 50})
        self.assertEqual(summary['overall_scores'], {'baseline': 25, 'post': 65})
        self.assertEqual(summary['overall_improvement'], 40)
        self.assertEqual(response.data['priority_distribution']['CRITICAL'], 1)
        self.assertEqual(response.data['priority_distribution']['MEDIUM'], 1)

        qs_stats = response.data['area_stats'][0]
        self.assertEqual(qs_stats['improvement'], 30)
        self.assertEqual(qs_stats['level_distribution']['baseline']['level1'], 1)
        self.assertEqual(qs_stats['level_distribution']['post']['level2'], 1)
        self.assertEqual(
            [a['area']['code'] for a in response.data['top_improvements']], ['LT-01', 'QS-01']
        )
        self.assertEqual(
            [a['area']['code'] for a in response.data['areas_needing_attention']], ['LT-01']
        )

    def test_institutional_report_other_organization(self):
        self.authenticate(self.other_admin)
        response = self.client.get(f'/api/reports/institutional/{self.project.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_participant_cannot_read_institutional_report(self):
        self.authenticate(self.participant)
        response = self.client.get(f'/api/reports/institutional/{self.project.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_benchmarks(self):
        self.authenticate(self.participant)
        response = self.client.get(f'/api/reports/benchmarks/{self.domain.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_assessments'], 1)
        qs_row = response.data['benchmarks'][0]
        self.assertEqual(qs_row['sample_size'], 1)
        self.assertEqual(qs_row['average'], 50)
        self.assertEqual(qs_row['percentiles'], {'p25': 50, 'p50': 50, 'p75': 50})

    def save(self):
        return self.client.post('/api/reports/save/', {
            'project_id': str(self.project.id),
            'participant_id': str(self.participant.id),
            'report_data': {
                'overall_improvement': 40,
                'improvements': [
                    {
                        'area': {'code': 'QS-01', 'name': 'Quality Systems'},
                        'baseline': {'score': 50}, 'post': {'score': 80}, 'improvement': 30,
                    },
                ],
                'strengths': [{'area': 'Quality Systems', 'score': 80}],
            },
        }, format='json')

    def test_save_report_links_assessments(self):
        self.authenticate(self.facilitator)
        response = self.save()
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        report = ImpactReport.objects.get()
        self.assertEqual(report.baseline_assessment, self.baseline)
        self.assertEqual(report.post_assessment, self.post)
        self.assertEqual(report.overall_improvement_percent, 40)

    def test_save_report_rejects_non_numeric_improvement(self):
        self.authenticate(self.facilitator)
        response = self.client.post('/api/reports/save/', {
            'project_id': str(self.project.id),
            'report_data': {'overall_improvement': 'n/a'},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('report_data', response.data['errors'])
        self.assertFalse(ImpactReport.objects.exists())

    def test_save_report_unknown_participant(self):
        self.authenticate(self.facilitator)
        response = self.client.post('/api/reports/save/', {
            'project_id': str(self.project.id),
            'participant_id': '00000000-0000-0000-0000-000000000000',
            'report_data': {'overall_improvement': None},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(ImpactReport.objects.exists())

    def test_client_admin_cannot_save_report(self):
        self.authenticate(self.client_admin)
        response = self.save()
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_download_json_and_pdf(self):
        self.authenticate(self.facilitator)
        report_id = self.save().data['id']

        self.authenticate(self.participant)
        response = self.client.get(f'/api/reports/download/{report_id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['participant']['id'], str(self.participant.id))

        response = self.client.get(f'/api/reports/download/{report_id}/', {'format': 'pdf'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertTrue(response.content.startswith(b'%PDF'))

    def test_download_someone_elses_report(self):
        self.authenticate(self.facilitator)
        report_id = self.save().data['id']

        self.authenticate(self.other_participant)
        response = self.client.get(f'/api/reports/download/{report_id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_percentile(self):
        self.assertEqual(percentile([], 0.5), 0)
        self.assertEqual(percentile([10, 20, 30, 40], 0.25), 20)
        self.assertEqual(percentile([10, 20, 30, 40], 0.75), 40)
