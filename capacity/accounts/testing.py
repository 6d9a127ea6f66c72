"""
Shared fixtures for the API test suites
"""
from django.test import override_settings
from rest_framework.test import APITestCase

from competencies.models import (
    AssessmentInstrument, AssessmentQuestion, CompetencyArea, CompetencyDomain,
    CompetencyItem, CompetencyLevel, RoleTargetLevel,
)
from curriculum.models import LearningUnit
from projects.models import Project, ProjectParticipant
from .models import Organization, ParticipantProfile, UserProfile
from .tokens import generate_token

TEST_PASSWORD = 'password123'


@override_settings(PASSWORD_HASHERS=['django.contrib.auth.hashers.MD5PasswordHasher'])
class CapacityAPITestCase(APITestCase):
    """APITestCase with helpers for users, tokens and a small competency framework"""

    def create_organization(self, name='Test NRA', **kwargs):
        kwargs.setdefault('type', 'NRA')
        kwargs.setdefault('country', 'Ethiopia')
        return Organization.objects.create(name=name, **kwargs)

    def create_user(self, role=UserProfile.ROLE_PARTICIPANT, organization=None, email=None,
                    role_type=None, **kwargs):
        email = email or f'{role.lower()}{UserProfile.objects.count()}@test.com'
        user = UserProfile(
            email=email,
            first_name=kwargs.pop('first_name', 'Test'),
            last_name=kwargs.pop('last_name', role.title()),
            role=role,
            organization=organization,
            **kwargs
        )
        user.set_password(TEST_PASSWORD)
        user.save()
        if role == UserProfile.ROLE_PARTICIPANT:
            ParticipantProfile.objects.create(user=user, current_role_type=role_type)
        return user

    def authenticate(self, user):
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {generate_token(user)}')

    def build_framework(self):
        """
        Two areas over three levels:

        QS-01  self rating + multiple choice (2 pts, answer B) + true/false (2 pts)
        LT-01  self rating + multiple choice (4 pts, answers A or C)

        Inspectors target Advanced (70) in QS-01 and Expert (85) in LT-01.
        Five learning units: U1 (QS, L2), U2 (QS, L1), U3 (LT, L1), U4 (LT, L3), U5 (LT, L2).
        """
        self.levels = {
            number: CompetencyLevel.objects.create(level_number=number, name=name, benchmark_score=score)
            for number, name, score in [(1, 'Foundation', 50), (2, 'Advanced', 70), (3, 'Expert', 85)]
        }
        self.domain = CompetencyDomain.objects.create(code='VLR', name='Vaccine Lot Release')
        self.area_qs = CompetencyArea.objects.create(
            domain=self.domain, code='QS-01', name='Quality Systems', sort_order=1
        )
        self.area_lt = CompetencyArea.objects.create(
            domain=self.domain, code='LT-01', name='Lot Testing', sort_order=2
        )
        item_qs = CompetencyItem.objects.create(
            area=self.area_qs, level=self.levels[1], code='QS-01-1', description='Describe a QMS'
        )
        item_lt = CompetencyItem.objects.create(
            area=self.area_lt, level=self.levels[2], code='LT-01-1', description='Review potency results'
        )

        self.instrument = AssessmentInstrument.objects.create(domain=self.domain, name='VLR Baseline')

        def question(item, question_type, sort_order, correct=None, points=1):
            return AssessmentQuestion.objects.create(
                instrument=self.instrument,
                competency_item=item,
                question_type=question_type,
                question_text=f'Question {sort_order}',
                options=['A', 'B', 'C', 'D'],
                correct_answer=correct,
                points=points,
                sort_order=sort_order,
            )

        self.q_qs_rating = question(item_qs, AssessmentQuestion.SELF_RATING, 1, points=5)
        self.q_qs_choice = question(item_qs, AssessmentQuestion.MULTIPLE_CHOICE, 2, correct='B', points=2)
        self.q_qs_true_false = question(item_qs, AssessmentQuestion.TRUE_FALSE, 3, correct='true', points=2)
        self.q_lt_rating = question(item_lt, AssessmentQuestion.SELF_RATING, 4, points=5)
        self.q_lt_choice = question(item_lt, AssessmentQuestion.MULTIPLE_CHOICE, 5, correct=['A', 'C'], points=4)

        RoleTargetLevel.objects.create(role_type='INSPECTOR', area_code='QS-01', level=self.levels[2])
        RoleTargetLevel.objects.create(role_type='INSPECTOR', area_code='LT-01', level=self.levels[3])

        self.units = {}
        for code, area, level_number, hours in [
            ('U1', self.area_qs, 2, 8),
            ('U2', self.area_qs, 1, 4),
            ('U3', self.area_lt, 1, 6),
            ('U4', self.area_lt, 3, 12),
            ('U5', self.area_lt, 2, 10),
        ]:
            unit = LearningUnit.objects.create(
                domain=self.domain,
                code=code,
                name=f'Unit {code}',
                duration_hours=hours,
                level_appropriate=self.levels[level_number],
            )
            unit.competency_areas.set([area])
            self.units[code] = unit

    def create_project(self, organization, participants=(), **kwargs):
        project = Project.objects.create(
            organization=organization,
            domain=self.domain,
            name=kwargs.pop('name', 'Lot release cohort 1'),
            **kwargs
        )
        for user in participants:
            ProjectParticipant.objects.create(project=project, user=user)
        return project
