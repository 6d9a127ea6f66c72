"""
Assessment lifecycle - start, answer, complete
"""
import logging

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied

from accounts.models import DEFAULT_ROLE_TYPE, ParticipantProfile, UserProfile
from capacity.exceptions import BadRequest
from capacity.utils import round_half_up
from competencies.models import AssessmentQuestion, CompetencyLevel, RoleTargetLevel
from projects.models import Project, ProjectParticipant
from ..models import Assessment, AssessmentResponse, GapAnalysis
from . import scoring

logger = logging.getLogger(__name__)


class AssessmentService:

    @staticmethod
    def start(user, project_id, assessment_type):
        """
        Start (or resume) the caller's assessment of the given type.

        Returns (assessment, created). A completed assessment of the same type
        cannot be restarted.
        """
        project = Project.objects.select_related('domain').filter(id=project_id).first()
        if project is None:
            raise NotFound('Project not found')

        enrolled = ProjectParticipant.objects.filter(project=project, user=user).exists()
        if not enrolled and user.role == UserProfile.ROLE_PARTICIPANT:
            raise PermissionDenied('Not enrolled in this project')

        instrument = (
            project.domain.instruments.filter(is_active=True).order_by('-created_at').first()
        )
        if instrument is None:
            raise BadRequest('No active assessment instrument found')

        existing = Assessment.objects.filter(
            participant=user, project=project, assessment_type=assessment_type
        ).first()
        if existing is not None:
            if existing.is_completed:
                raise BadRequest('Assessment already completed')
            return existing, False

        assessment = Assessment.objects.create(
            participant=user,
            project=project,
            instrument=instrument,
            assessment_type=assessment_type,
            status=Assessment.STATUS_IN_PROGRESS,
            started_at=timezone.now(),
        )
        logger.info("Assessment %s (%s) started by %s", assessment.id, assessment_type, user.email)
        return assessment, True

    @staticmethod
    @transaction.atomic
    def save_responses(assessment, responses):
        """
        Score and upsert answers for an in-progress assessment.

        Every question must belong to the assessment's instrument; nothing is
        written when any answer is rejected.
        """
        if assessment.is_completed:
            raise BadRequest('Assessment already completed')

        questions = {
            q.id: q for q in AssessmentQuestion.objects.filter(
                instrument_id=assessment.instrument_id,
                id__in=[r['question_id'] for r in responses],
            )
        }

        now = timezone.now()
        saved = 0
        for entry in responses:
            question = questions.get(entry['question_id'])
            if question is None:
                raise BadRequest(f"Question {entry['question_id']} is not part of this assessment")

            score = scoring.score_response(question, entry['response_value'])
            AssessmentResponse.objects.update_or_create(
                assessment=assessment,
                question=question,
                defaults={
                    'response_value': entry['response_value'],
                    'score': score,
                    'time_spent_seconds': entry.get('time_spent_seconds'),
                    'answered_at': now,
                },
            )
            saved += 1

        if assessment.status == Assessment.STATUS_NOT_STARTED:
            assessment.status = Assessment.STATUS_IN_PROGRESS
            assessment.started_at = assessment.started_at or now
            assessment.save(update_fields=['status', 'started_at', 'updated_at'])

        return saved

    @staticmethod
    def participant_role_type(user):
        try:
            role_type = user.participant_profile.current_role_type
        except ParticipantProfile.DoesNotExist:
            role_type = None
        return role_type or DEFAULT_ROLE_TYPE

    @staticmethod
    @transaction.atomic
    def complete(assessment):
        """
        Close the assessment and write one GapAnalysis per area of the
        project's domain.
        """
        if assessment.is_completed:
            raise BadRequest('Assessment already completed')

        now = timezone.now()
        assessment.status = Assessment.STATUS_COMPLETED
        assessment.completed_at = now
        if assessment.started_at:
            elapsed = (now - assessment.started_at).total_seconds() / 60
            assessment.time_taken_minutes = round_half_up(elapsed)
        assessment.save(update_fields=['status', 'completed_at', 'time_taken_minutes', 'updated_at'])

        responses_by_area = {}
        for response in assessment.responses.select_related('question__competency_item'):
            question = response.question
            responses_by_area.setdefault(question.competency_item.area_id, []).append(
                (question.question_type, response.score, question.points)
            )

        role_type = AssessmentService.participant_role_type(assessment.participant)
        targets = {
            target.area_code: target.level
            for target in RoleTargetLevel.objects.filter(role_type=role_type).select_related('level')
        }
        levels = list(CompetencyLevel.objects.all())

        gaps = []
        for area in assessment.project.domain.areas.all():
            self_rating_score, knowledge_score = scoring.aggregate_area_scores(
                responses_by_area.get(area.id, [])
            )
            target_level = targets.get(area.code)
            benchmark = target_level.benchmark_score if target_level else scoring.DEFAULT_TARGET_BENCHMARK
            gap_score = scoring.compute_gap(benchmark, knowledge_score)

            gaps.append(GapAnalysis(
                assessment=assessment,
                competency_area=area,
                self_rating_score=self_rating_score,
                knowledge_score=knowledge_score,
                gap_score=gap_score,
                priority=scoring.priority_for_gap(gap_score),
                current_level=scoring.select_current_level(levels, knowledge_score),
                target_level=target_level,
            ))
        GapAnalysis.objects.bulk_create(gaps)

        logger.info(
            "Assessment %s completed: %d areas analysed, %d critical",
            assessment.id, len(gaps), sum(1 for g in gaps if g.priority == GapAnalysis.PRIORITY_CRITICAL),
        )
        return assessment

    @staticmethod
    def results(assessment):
        responses = list(assessment.responses.select_related('question'))
        total_score = sum(r.score or 0 for r in responses)
        max_possible = sum(
            scoring.SELF_RATING_MAX if r.question.question_type == scoring.SELF_RATING else r.question.points
            for r in responses
        )
        percentage = round_half_up(total_score / max_possible * 100) if max_possible > 0 else 0
        return {
            'total_questions': len(responses),
            'total_score': total_score,
            'max_possible_score': max_possible,
            'percentage_score': percentage,
        }

    @staticmethod
    def get_for_user(assessment_id, user, owner_only=False):
        """
        Load an assessment the user may see. Participants only reach their
        own; with owner_only nobody else does either.
        """
        assessment = (
            Assessment.objects.select_related('project__domain', 'participant', 'instrument')
            .filter(id=assessment_id).first()
        )
        if assessment is None:
            raise NotFound('Assessment not found')
        is_owner = assessment.participant_id == user.id
        if (owner_only or user.role == UserProfile.ROLE_PARTICIPANT) and not is_owner:
            raise PermissionDenied('Access denied')
        return assessment
