"""
Project level aggregation - enrolment status and the cohort gap summary
"""
import logging

from accounts.models import UserProfile
from assessments.models import Assessment
from capacity.utils import round_half_up
from .models import ProjectParticipant

logger = logging.getLogger(__name__)

PRIORITIES = ('CRITICAL', 'HIGH', 'MEDIUM', 'LOW')


class ProjectService:

    @staticmethod
    def invite(project, user_ids):
        """Enrol users in a project, skipping unknown users and existing members. Returns the count added."""
        existing = set(
            ProjectParticipant.objects.filter(project=project, user_id__in=user_ids)
            .values_list('user_id', flat=True)
        )
        known = set(UserProfile.objects.filter(id__in=user_ids).values_list('id', flat=True))
        new_ids = [uid for uid in dict.fromkeys(user_ids) if uid in known and uid not in existing]

        ProjectParticipant.objects.bulk_create(
            [ProjectParticipant(project=project, user_id=uid) for uid in new_ids]
        )
        logger.info("Invited %d participant(s) to project %s", len(new_ids), project.id)
        return len(new_ids)

    @staticmethod
    def participants_with_status(project):
        memberships = list(
            ProjectParticipant.objects.filter(project=project)
            .select_related('user', 'user__participant_profile')
        )
        user_ids = [m.user_id for m in memberships]
        by_user = {}
        for assessment in Assessment.objects.filter(project=project, participant_id__in=user_ids):
            by_user.setdefault(assessment.participant_id, {})[assessment.assessment_type] = {
                'id': str(assessment.id),
                'status': assessment.status,
                'completed_at': assessment.completed_at,
            }

        result = []
        for membership in memberships:
            user = membership.user
            statuses = by_user.get(user.id, {})
            profile = getattr(user, 'participant_profile', None)
            result.append({
                'id': str(membership.id),
                'invited_at': membership.invited_at,
                'user': {
                    'id': str(user.id),
                    'email': user.email,
                    'first_name': user.first_name,
                    'last_name': user.last_name,
                    'role': user.role,
                    'job_title': profile.job_title if profile else None,
                    'current_role_type': profile.current_role_type if profile else None,
                },
                'assessments': {
                    'baseline': statuses.get(Assessment.TYPE_BASELINE),
                    'post_training': statuses.get(Assessment.TYPE_POST_TRAINING),
                },
            })
        return result

    @staticmethod
    def gap_summary(project):
        """
        Cohort view over completed baseline assessments.

        Per area: participant count, average knowledge score (missing scores
        count as 0), priority counts and average gap. Plus a participant x
        area heatmap of knowledge scores.
        """
        areas = list(project.domain.areas.order_by('sort_order'))
        assessments = list(
            Assessment.objects.filter(
                project=project,
                assessment_type=Assessment.TYPE_BASELINE,
                status=Assessment.STATUS_COMPLETED,
            )
            .select_related('participant')
            .prefetch_related('gap_analyses')
        )
        gaps_by_assessment = {
            a.id: {g.competency_area_id: g for g in a.gap_analyses.all()} for a in assessments
        }

        area_stats = []
        for area in areas:
            area_gaps = [
                gaps[area.id] for gaps in gaps_by_assessment.values() if area.id in gaps
            ]
            count = len(area_gaps)
            scores = [g.knowledge_score or 0 for g in area_gaps]
            area_stats.append({
                'area': {'id': str(area.id), 'code': area.code, 'name': area.name},
                'participant_count': count,
                'average_score': round_half_up(sum(scores) / count, 2) if count else 0,
                'priority_counts': {
                    priority: sum(1 for g in area_gaps if g.priority == priority)
                    for priority in PRIORITIES
                },
                'avg_gap_score': round_half_up(sum(g.gap_score for g in area_gaps) / count, 2) if count else 0,
            })

        heatmap = []
        for assessment in assessments:
            gaps = gaps_by_assessment[assessment.id]
            heatmap.append({
                'participant': {
                    'id': str(assessment.participant_id),
                    'first_name': assessment.participant.first_name,
                    'last_name': assessment.participant.last_name,
                },
                'scores': [
                    {
                        'area_code': area.code,
                        'score': gaps[area.id].knowledge_score if area.id in gaps else None,
                        'priority': gaps[area.id].priority if area.id in gaps else None,
                    }
                    for area in areas
                ],
            })

        return {
            'project': {'id': str(project.id), 'name': project.name},
            'summary': {
                'total_participants': project.participants.count(),
                'completed_assessments': len(assessments),
                'area_stats': area_stats,
            },
            'heatmap': heatmap,
        }
