"""
Gap-driven curriculum recommendations.

Baseline gaps are grouped by competency area, the areas ranked by their
worst priority and average gap, and each area gets up to two learning units
whose level sits closest to one step above the cohort's current level.
"""
import logging
import math

from django.db import transaction
from rest_framework.exceptions import NotFound

from assessments.models import Assessment, GapAnalysis
from assessments.services.scoring import priority_index
from capacity.exceptions import BadRequest
from capacity.utils import round_half_up
from projects.models import Project
from ..models import CurriculumRecommendation, LearningUnit

logger = logging.getLogger(__name__)

UNITS_PER_AREA = 2


class AreaGap:
    """Gaps of one competency area across the cohort"""

    def __init__(self, area):
        self.area = area
        self.gaps = []
        self.max_priority = None

    def add(self, gap):
        self.gaps.append(gap)
        if self.max_priority is None or priority_index(gap.priority) < priority_index(self.max_priority):
            self.max_priority = gap.priority

    @property
    def participant_count(self):
        return len(self.gaps)

    @property
    def avg_gap_score(self):
        return sum(g.gap_score for g in self.gaps) / len(self.gaps)

    @property
    def avg_current_level(self):
        """Mean current level, where participants with no level count as 0."""
        total = sum(g.current_level.level_number for g in self.gaps if g.current_level is not None)
        return total / max(self.participant_count, 1)

    @property
    def target_level_number(self):
        return math.ceil(self.avg_current_level) + 1

    def rationale(self):
        return (
            f"Addresses {self.area.name} gap ({self.max_priority} priority, "
            f"avg gap: {round_half_up(self.avg_gap_score)}%). "
            f"{self.participant_count} participant(s) have gaps in this area."
        )


def aggregate_gaps(gaps):
    """Group gaps by area, keeping first-seen area order."""
    by_area = {}
    for gap in gaps:
        area_gap = by_area.get(gap.competency_area_id)
        if area_gap is None:
            area_gap = by_area[gap.competency_area_id] = AreaGap(gap.competency_area)
        area_gap.add(gap)
    return list(by_area.values())


def rank_areas(area_gaps):
    """Most severe priority first, then the larger average gap."""
    return sorted(area_gaps, key=lambda a: (priority_index(a.max_priority), -a.avg_gap_score))


def select_units(units, target_level_number, limit=UNITS_PER_AREA):
    """Units closest to the target level; ties keep the given order."""
    ranked = sorted(units, key=lambda unit: abs(unit.level_number - target_level_number))
    return ranked[:limit]


def build_recommendations(ranked_areas, units_for_area):
    """
    Plan recommendations for ranked areas.

    units_for_area(area) returns the candidate units for an area. Returns
    (unit, area_gap, rank) triples; a unit picked for an earlier area is not
    repeated and ranks stay sequential.
    """
    planned = []
    seen = set()
    rank = 1
    for area_gap in ranked_areas:
        for unit in select_units(units_for_area(area_gap.area), area_gap.target_level_number):
            if unit.id in seen:
                continue
            seen.add(unit.id)
            planned.append((unit, area_gap, rank))
            rank += 1
    return planned


class RecommendationService:

    @staticmethod
    @transaction.atomic
    def generate(project_id, participant_id=None):
        """
        Replace the recommendations of a project scope (one participant, or
        the whole cohort when participant_id is None). Returns the new count.
        """
        project = Project.objects.select_related('domain').filter(id=project_id).first()
        if project is None:
            raise NotFound('Project not found')

        gaps = GapAnalysis.objects.filter(
            assessment__project=project,
            assessment__assessment_type=Assessment.TYPE_BASELINE,
            assessment__status=Assessment.STATUS_COMPLETED,
        ).select_related('competency_area', 'current_level').order_by(
            'competency_area__sort_order', 'created_at'
        )
        if participant_id:
            gaps = gaps.filter(assessment__participant_id=participant_id)
        gaps = list(gaps)

        if not gaps:
            raise BadRequest('No gap analyses found. Complete baseline assessments first.')

        CurriculumRecommendation.objects.filter(project=project, participant_id=participant_id).delete()

        units = list(
            LearningUnit.objects.filter(domain=project.domain)
            .select_related('level_appropriate')
            .prefetch_related('competency_areas')
            .order_by('code')
        )
        units_by_area = {}
        for unit in units:
            for area in unit.competency_areas.all():
                units_by_area.setdefault(area.id, []).append(unit)

        planned = build_recommendations(
            rank_areas(aggregate_gaps(gaps)),
            lambda area: units_by_area.get(area.id, []),
        )

        for unit, area_gap, rank in planned:
            recommendation = CurriculumRecommendation.objects.create(
                project=project,
                participant_id=participant_id,
                learning_unit=unit,
                priority_rank=rank,
                rationale=area_gap.rationale(),
                status=CurriculumRecommendation.STATUS_RECOMMENDED,
            )
            recommendation.gap_analyses.set(area_gap.gaps)

        logger.info(
            "Generated %d recommendations for project %s (participant %s)",
            len(planned), project.id, participant_id or 'cohort',
        )
        return len(planned)
