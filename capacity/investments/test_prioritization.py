"""
Investment dashboard computations, no files or database
"""
from django.test import SimpleTestCase

from capacity.exceptions import BadRequest
from . import prioritization

EQUIPMENT = [
    {'id': 1, 'name': 'Filling', 'investment': 10, 'impact_score': 90, 'priority': 'Critical',
     'gmp_compliance': 60, 'roi_timeline': 4, 'strategic_importance': 'High'},
    {'id': 2, 'name': 'Freeze dryer', 'investment': 5.5, 'impact_score': 70, 'priority': 'High',
     'gmp_compliance': 80, 'roi_timeline': 3, 'strategic_importance': 'Medium'},
    {'id': 3, 'name': 'QC lab', 'investment': 2, 'impact_score': 80, 'priority': 'Medium',
     'gmp_compliance': 74, 'roi_timeline': 2.5, 'strategic_importance': 'High'},
]


class EquipmentTests(SimpleTestCase):

    def test_filters(self):
        names = lambda items: [item['name'] for item in items]
        self.assertEqual(len(prioritization.filter_equipment(EQUIPMENT)), 3)
        self.assertEqual(names(prioritization.filter_equipment(EQUIPMENT, 'critical')), ['Filling'])
        self.assertEqual(names(prioritization.filter_equipment(EQUIPMENT, 'high-revenue')), ['Filling', 'QC lab'])
        self.assertEqual(names(prioritization.filter_equipment(EQUIPMENT, 'strategic')), ['Filling', 'QC lab'])

    def test_unknown_filter(self):
        with self.assertRaises(BadRequest):
            prioritization.filter_equipment(EQUIPMENT, 'cheap')

    def test_statistics(self):
        stats = prioritization.equipment_statistics(EQUIPMENT)
        self.assertEqual(stats['count'], 3)
        self.assertEqual(stats['total_capex'], 17.5)
        self.assertEqual(stats['critical_count'], 1)
        self.assertEqual(stats['avg_roi'], 3.2)
        self.assertEqual(stats['gmp_gap'], 66.7)

    def test_statistics_of_empty_selection(self):
        stats = prioritization.equipment_statistics([])
        self.assertEqual(stats, {'count': 0, 'total_capex': 0, 'critical_count': 0, 'avg_roi': 0, 'gmp_gap': 0})


class ProductRankingTests(SimpleTestCase):

    def product(self, name, value, regulatory=50):
        return {
            'name': name,
            'market_demand': value,
            'profit_margin': value,
            'technical_feasibility': value,
            'competitive_position': value,
            'regulatory_complexity': regulatory,
        }

    def test_lower_regulatory_complexity_scores_higher(self):
        easy = self.product('easy', 50, regulatory=10)
        hard = self.product('hard', 50, regulatory=90)
        weights = prioritization.default_weights()
        self.assertEqual(prioritization.weighted_score(easy, weights), 58)
        self.assertEqual(prioritization.weighted_score(hard, weights), 42)

    def test_rank_and_badges(self):
        products = [self.product(f'p{value}', value) for value in range(10, 100, 10)]
        ranked = prioritization.rank_products(products)

        self.assertEqual(ranked[0]['name'], 'p90')
        self.assertEqual([p['rank'] for p in ranked], list(range(1, 10)))
        self.assertEqual(ranked[3]['priority_badge'], 'High Priority')
        self.assertEqual(ranked[4]['priority_badge'], 'Medium Priority')
        self.assertEqual(ranked[8]['priority_badge'], 'Low Priority')
        self.assertNotIn('rank', products[0])

    def test_ties_keep_file_order(self):
        ranked = prioritization.rank_products([self.product('first', 50), self.product('second', 50)])
        self.assertEqual([p['name'] for p in ranked], ['first', 'second'])


class WeightNormalizationTests(SimpleTestCase):

    def test_excess_spread_over_other_weights(self):
        weights = dict(prioritization.default_weights(), market_demand=40)
        normalized = prioritization.normalize_weights(weights, 'market_demand')
        self.assertEqual(normalized['market_demand'], 40)
        self.assertEqual(normalized['profit_margin'], 15)
        self.assertEqual(sum(normalized.values()), 100)

    def test_shortfall_raises_other_weights(self):
        weights = dict(prioritization.default_weights(), profit_margin=0)
        normalized = prioritization.normalize_weights(weights, 'profit_margin')
        self.assertEqual(normalized['market_demand'], 25)
        self.assertEqual(sum(normalized.values()), 100)

    def test_other_weights_clamped_at_zero(self):
        weights = dict(prioritization.default_weights(), market_demand=100, profit_margin=5)
        normalized = prioritization.normalize_weights(weights, 'market_demand')
        self.assertTrue(all(value >= 0 for value in normalized.values()))
        self.assertEqual(normalized['market_demand'], 100)

    def test_balanced_weights_unchanged(self):
        weights = prioritization.default_weights()
        self.assertEqual(prioritization.normalize_weights(weights, 'market_demand'), weights)
