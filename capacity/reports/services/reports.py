"""
Report computations - individual progress, cohort impact and domain benchmarks
"""
import logging
import math

from django.utils import timezone

from accounts.models import ParticipantProfile
from assessments.models import Assessment, GapAnalysis
from capacity.utils import mean, round_half_up
from projects.models import ProjectParticipant

logger = logging.getLogger(__name__)

PRIORITIES = ('CRITICAL', 'HIGH', 'MEDIUM', 'LOW')
STRENGTH_SCORE = 70
ATTENTION_SCORE = 70
TOP_N = 5


def _area(area):
    return {'id': str(area.id), 'code': area.code, 'name': area.name}


def _level(level):
    if level is None:
        return None
    return {
        'id': str(level.id),
        'level_number': level.level_number,
        'name': level.name,
        'benchmark_score': level.benchmark_score,
    }


def _level_number(gap):
    if gap is None or gap.current_level is None:
        return None
    return gap.current_level.level_number


def _completed_gaps(assessment):
    if assessment is None:
        return []
    return list(
        assessment.gap_analyses.select_related('competency_area', 'current_level', 'target_level')
        .order_by('competency_area__sort_order')
    )


def percentile(sorted_scores, fraction):
    """Nearest-rank style pick: sorted_scores[floor(n * fraction)], 0 when empty."""
    if not sorted_scores:
        return 0
    index = min(int(math.floor(len(sorted_scores) * fraction)), len(sorted_scores) - 1)
    return sorted_scores[index]


def area_improvements(areas, baseline_gaps, post_gaps):
    """Per-area baseline vs post-training comparison of knowledge scores."""
    baseline_by_area = {g.competency_area_id: g for g in baseline_gaps}
    post_by_area = {g.competency_area_id: g for g in post_gaps}

    rows = []
    for area in areas:
        base = baseline_by_area.get(area.id)
        post = post_by_area.get(area.id)
        improvement = None
        if base is not None and post is not None:
            improvement = round_half_up((post.knowledge_score or 0) - (base.knowledge_score or 0))
        rows.append({
            'area': _area(area),
            'baseline': {
                'score': (base.knowledge_score or 0) if base else 0,
                'level': base.current_level.name if base and base.current_level else 'N/A',
            },
            'post': {
                'score': (post.knowledge_score or 0) if post else 0,
                'level': post.current_level.name if post and post.current_level else 'N/A',
            },
            'improvement': improvement,
            'level_change': _level_number(post) != _level_number(base),
        })
    return rows


def strengths_and_development(gaps):
    strengths = [
        {
            'area': g.competency_area.name,
            'score': g.knowledge_score,
            'level': g.current_level.name if g.current_level else None,
        }
        for g in gaps
        if g.priority == GapAnalysis.PRIORITY_LOW or (g.knowledge_score or 0) >= STRENGTH_SCORE
    ]
    development = [
        {
            'area': g.competency_area.name,
            'score': g.knowledge_score,
            'gap_score': g.gap_score,
            'priority': g.priority,
        }
        for g in gaps
        if g.priority in (GapAnalysis.PRIORITY_CRITICAL, GapAnalysis.PRIORITY_HIGH)
    ]
    return strengths, development


def _assessment_summary(assessment):
    if assessment is None:
        return None
    return {'completed_at': assessment.completed_at, 'time_taken': assessment.time_taken_minutes}


def _completed_assessment(participant, project, assessment_type):
    return Assessment.objects.filter(
        participant=participant,
        project=project,
        assessment_type=assessment_type,
        status=Assessment.STATUS_COMPLETED,
    ).first()


class ReportService:

    @staticmethod
    def individual(participant, project):
        """
        Progress report for one participant in one project.

        Improvements are only reported once both baseline and post-training
        assessments are complete; strengths and development areas come from
        the most recent completed assessment.
        """
        areas = list(project.domain.areas.order_by('sort_order'))
        baseline = _completed_assessment(participant, project, Assessment.TYPE_BASELINE)
        post = _completed_assessment(participant, project, Assessment.TYPE_POST_TRAINING)
        baseline_gaps = _completed_gaps(baseline)
        post_gaps = _completed_gaps(post)

        improvements = None
        overall_improvement = None
        if baseline is not None and post is not None:
            improvements = area_improvements(areas, baseline_gaps, post_gaps)
            valid = [row['improvement'] for row in improvements if row['improvement'] is not None]
            if valid:
                overall_improvement = round_half_up(mean(valid))

        latest = post_gaps if post is not None else baseline_gaps
        strengths, development = strengths_and_development(latest)

        try:
            profile = participant.participant_profile
        except ParticipantProfile.DoesNotExist:
            profile = None

        return {
            'participant': {
                'id': str(participant.id),
                'name': participant.full_name,
                'email': participant.email,
                'organization': participant.organization.name if participant.organization else None,
                'role': profile.current_role_type if profile else None,
                'job_title': profile.job_title if profile else None,
            },
            'project': {
                'id': str(project.id),
                'name': project.name,
                'organization': project.organization.name,
                'domain': project.domain.name,
            },
            'assessments': {
                'baseline': _assessment_summary(baseline),
                'post': _assessment_summary(post),
            },
            'competency_analysis': [
                {
                    'area': _area(g.competency_area),
                    'self_rating': g.self_rating_score,
                    'knowledge_score': g.knowledge_score,
                    'gap_score': g.gap_score,
                    'priority': g.priority,
                    'current_level': _level(g.current_level),
                    'target_level': _level(g.target_level),
                }
                for g in latest
            ],
            'improvements': improvements,
            'overall_improvement': overall_improvement,
            'strengths': strengths,
            'development_areas': development,
            'generated_at': timezone.now().isoformat(),
        }

    @staticmethod
    def institutional(project):
        """Cohort impact: completion, per-area averages and level distributions."""
        areas = list(project.domain.areas.order_by('sort_order'))
        assessments = list(
            Assessment.objects.filter(project=project, status=Assessment.STATUS_COMPLETED)
            .prefetch_related('gap_analyses__current_level')
        )
        baseline = [a for a in assessments if a.assessment_type == Assessment.TYPE_BASELINE]
        post = [a for a in assessments if a.assessment_type == Assessment.TYPE_POST_TRAINING]
        baseline_gaps = [g for a in baseline for g in a.gap_analyses.all()]
        post_gaps = [g for a in post for g in a.gap_analyses.all()]

        participant_count = ProjectParticipant.objects.filter(project=project).count()

        area_stats = []
        for area in areas:
            area_base = [g for g in baseline_gaps if g.competency_area_id == area.id]
            area_post = [g for g in post_gaps if g.competency_area_id == area.id]
            base_avg = mean(g.knowledge_score or 0 for g in area_base) or 0
            post_avg = mean(g.knowledge_score or 0 for g in area_post) or 0
            improvement = round_half_up(post_avg - base_avg, 1) if area_post else None

            area_stats.append({
                'area': _area(area),
                'baseline': {'avg_score': round_half_up(base_avg, 1), 'participant_count': len(area_base)},
                'post': {'avg_score': round_half_up(post_avg, 1), 'participant_count': len(area_post)},
                'improvement': improvement,
                'level_distribution': {
                    'baseline': _level_distribution(area_base),
                    'post': _level_distribution(area_post),
                },
            })

        overall_baseline = sum(a['baseline']['avg_score'] for a in area_stats) / max(len(area_stats), 1)
        overall_post = sum(a['post']['avg_score'] for a in area_stats) / max(len(area_stats), 1)
        overall_improvement = round_half_up(overall_post - overall_baseline, 1) if post else None

        top_improvements = sorted(
            (a for a in area_stats if a['improvement'] is not None and a['improvement'] > 0),
            key=lambda a: a['improvement'], reverse=True,
        )[:TOP_N]
        needing_attention = sorted(
            (
                a for a in area_stats
                if a['post']['avg_score'] < ATTENTION_SCORE
                or (a['improvement'] is not None and a['improvement'] < 0)
            ),
            key=lambda a: a['post']['avg_score'],
        )[:TOP_N]

        def completion_rate(completed):
            return round_half_up(completed / participant_count * 100) if participant_count else 0

        organization = project.organization
        return {
            'project': {
                'id': str(project.id),
                'name': project.name,
                'status': project.status,
                'start_date': project.start_date,
                'end_date': project.end_date,
            },
            'organization': {
                'id': str(organization.id),
                'name': organization.name,
                'type': organization.type,
                'country': organization.country,
            },
            'domain': {'id': str(project.domain_id), 'code': project.domain.code, 'name': project.domain.name},
            'summary': {
                'total_participants': participant_count,
                'baseline_completed': len(baseline),
                'post_completed': len(post),
                'completion_rate': {
                    'baseline': completion_rate(len(baseline)),
                    'post': completion_rate(len(post)),
                },
                'overall_scores': {
                    'baseline': round_half_up(overall_baseline, 1),
                    'post': round_half_up(overall_post, 1),
                },
                'overall_improvement': overall_improvement,
            },
            'priority_distribution': {
                priority: sum(1 for g in baseline_gaps if g.priority == priority) for priority in PRIORITIES
            },
            'area_stats': area_stats,
            'top_improvements': top_improvements,
            'areas_needing_attention': needing_attention,
            'generated_at': timezone.now().isoformat(),
        }

    @staticmethod
    def benchmarks(domain):
        """Baseline knowledge score distribution per area across every project of the domain."""
        assessments = list(
            Assessment.objects.filter(
                project__domain=domain,
                assessment_type=Assessment.TYPE_BASELINE,
                status=Assessment.STATUS_COMPLETED,
            ).prefetch_related('gap_analyses')
        )
        gaps = [g for a in assessments for g in a.gap_analyses.all()]

        benchmarks = []
        for area in domain.areas.order_by('sort_order'):
            scores = sorted(g.knowledge_score or 0 for g in gaps if g.competency_area_id == area.id)
            benchmarks.append({
                'area': _area(area),
                'sample_size': len(scores),
                'average': round_half_up(mean(scores) or 0, 1),
                'percentiles': {
                    'p25': round_half_up(percentile(scores, 0.25), 1),
                    'p50': round_half_up(percentile(scores, 0.5), 1),
                    'p75': round_half_up(percentile(scores, 0.75), 1),
                },
            })

        return {
            'domain': {'id': str(domain.id), 'code': domain.code, 'name': domain.name},
            'total_assessments': len(assessments),
            'benchmarks': benchmarks,
            'generated_at': timezone.now().isoformat(),
        }


def _level_distribution(gaps):
    return {
        f'level{number}': sum(1 for g in gaps if _level_number(g) == number)
        for number in (1, 2, 3)
    }
