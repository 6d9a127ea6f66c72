"""
Recommendation ranking rules, no database
"""
from django.test import SimpleTestCase

from assessments.models import GapAnalysis
from competencies.models import CompetencyArea, CompetencyLevel
from .models import LearningUnit
from .services.recommendations import (
    AreaGap, aggregate_gaps, build_recommendations, rank_areas, select_units,
)

LEVELS = {n: CompetencyLevel(level_number=n, benchmark_score=s) for n, s in [(1, 50), (2, 70), (3, 85)]}


def _gap(area, gap_score, priority, level_number=None):
    return GapAnalysis(
        competency_area=area,
        gap_score=gap_score,
        priority=priority,
        current_level=LEVELS.get(level_number),
    )


def _unit(code, level_number=None):
    return LearningUnit(code=code, level_appropriate=LEVELS.get(level_number))


class AreaGapTests(SimpleTestCase):

    def setUp(self):
        self.area = CompetencyArea(code='QS-01', name='Quality Systems')

    def test_max_priority_is_most_severe(self):
        area_gap = AreaGap(self.area)
        area_gap.add(_gap(self.area, 20, 'MEDIUM'))
        area_gap.add(_gap(self.area, 45, 'CRITICAL'))
        area_gap.add(_gap(self.area, 5, 'LOW'))
        self.assertEqual(area_gap.max_priority, 'CRITICAL')
        self.assertAlmostEqual(area_gap.avg_gap_score, 70 / 3)

    def test_missing_levels_count_as_zero(self):
        area_gap = AreaGap(self.area)
        area_gap.add(_gap(self.area, 10, 'LOW', level_number=2))
        area_gap.add(_gap(self.area, 60, 'CRITICAL'))
        self.assertEqual(area_gap.avg_current_level, 1)
        self.assertEqual(area_gap.target_level_number, 2)

    def test_fractional_level_rounds_up(self):
        area_gap = AreaGap(self.area)
        area_gap.add(_gap(self.area, 10, 'LOW', level_number=2))
        area_gap.add(_gap(self.area, 20, 'MEDIUM', level_number=1))
        self.assertEqual(area_gap.target_level_number, 3)

    def test_rationale(self):
        area_gap = AreaGap(self.area)
        area_gap.add(_gap(self.area, 32.5, 'HIGH'))
        self.assertEqual(
            area_gap.rationale(),
            'Addresses Quality Systems gap (HIGH priority, avg gap: 33%). '
            '1 participant(s) have gaps in this area.',
        )


class RankingTests(SimpleTestCase):

    def setUp(self):
        self.areas = [CompetencyArea(code=f'A{i}', name=f'Area {i}') for i in range(3)]

    def test_aggregate_keeps_first_seen_order(self):
        a0, a1, _ = self.areas
        grouped = aggregate_gaps([
            _gap(a1, 10, 'LOW'), _gap(a0, 20, 'MEDIUM'), _gap(a1, 50, 'CRITICAL'),
        ])
        self.assertEqual([g.area for g in grouped], [a1, a0])
        self.assertEqual(grouped[0].participant_count, 2)

    def test_severity_then_average_gap(self):
        a0, a1, a2 = self.areas
        ranked = rank_areas(aggregate_gaps([
            _gap(a0, 20, 'MEDIUM'),
            _gap(a1, 35, 'HIGH'),
            _gap(a2, 38, 'HIGH'),
        ]))
        self.assertEqual([g.area for g in ranked], [a2, a1, a0])

    def test_select_units_closest_to_target(self):
        units = [_unit('U1', 3), _unit('U2', 1), _unit('U3', 2), _unit('U4', 2)]
        selected = select_units(units, target_level_number=2)
        self.assertEqual([u.code for u in selected], ['U3', 'U4'])

    def test_unit_without_level_is_foundation(self):
        selected = select_units([_unit('U1', 3), _unit('U2')], target_level_number=1, limit=1)
        self.assertEqual([u.code for u in selected], ['U2'])

    def test_no_duplicates_and_sequential_ranks(self):
        a0, a1, _ = self.areas
        shared = _unit('SHARED', 1)
        only_a0 = _unit('A0-ONLY', 1)
        only_a1 = _unit('A1-ONLY', 2)
        candidates = {a0.id: [shared, only_a0], a1.id: [shared, only_a1]}

        ranked = rank_areas(aggregate_gaps([_gap(a0, 45, 'CRITICAL'), _gap(a1, 20, 'MEDIUM')]))
        planned = build_recommendations(ranked, lambda area: candidates[area.id])

        self.assertEqual([(u.code, rank) for u, _, rank in planned], [
            ('SHARED', 1), ('A0-ONLY', 2), ('A1-ONLY', 3),
        ])
        self.assertEqual(planned[2][1].area, a1)
