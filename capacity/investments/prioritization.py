"""
Investment dashboard computations: equipment statistics and filters,
weighted product ranking and scenario breakdowns
"""
from capacity.exceptions import BadRequest
from capacity.utils import round_half_up

GMP_STANDARD = 75
HIGH_IMPACT_SCORE = 80

EQUIPMENT_FILTERS = {
    'all': lambda item: True,
    'critical': lambda item: item.get('priority') == 'Critical',
    'high-revenue': lambda item: (item.get('impact_score') or 0) >= HIGH_IMPACT_SCORE,
    'strategic': lambda item: item.get('strategic_importance') == 'High',
}

WEIGHT_KEYS = [
    'market_demand',
    'profit_margin',
    'technical_feasibility',
    'competitive_position',
    'regulatory_complexity',
]
DEFAULT_WEIGHT = 20

# criteria where a lower product value is better
INVERTED_CRITERIA = {'regulatory_complexity'}

SCENARIO_KEYS = ['conservative', 'moderate', 'aggressive']


def filter_equipment(items, filter_name='all'):
    try:
        predicate = EQUIPMENT_FILTERS[filter_name]
    except KeyError:
        raise BadRequest(f"Unknown filter '{filter_name}'. Use one of: {', '.join(EQUIPMENT_FILTERS)}")
    return [item for item in items if predicate(item)]


def equipment_statistics(items):
    """Headline numbers for a set of production lines."""
    count = len(items)
    total_capex = sum(item.get('investment') or 0 for item in items)
    if count:
        avg_roi = sum(item.get('roi_timeline') or 0 for item in items) / count
        below_standard = sum(1 for item in items if (item.get('gmp_compliance') or 0) < GMP_STANDARD)
        gmp_gap = below_standard / count * 100
    else:
        avg_roi = 0
        gmp_gap = 0
    return {
        'count': count,
        'total_capex': round_half_up(total_capex, 1),
        'critical_count': sum(1 for item in items if item.get('priority') == 'Critical'),
        'avg_roi': round_half_up(avg_roi, 1),
        'gmp_gap': round_half_up(gmp_gap, 1),
    }


def default_weights():
    return {key: DEFAULT_WEIGHT for key in WEIGHT_KEYS}


def weighted_score(product, weights):
    score = 0
    for key in WEIGHT_KEYS:
        value = product.get(key) or 0
        if key in INVERTED_CRITERIA:
            value = 100 - value
        score += value * weights[key] / 100
    return score


def priority_badge(rank):
    if rank <= 4:
        return 'High Priority'
    if rank <= 8:
        return 'Medium Priority'
    return 'Low Priority'


def rank_products(products, weights=None):
    """Products with weighted_score, rank and priority badge, best first. Ties keep file order."""
    weights = weights or default_weights()
    scored = [dict(product, weighted_score=weighted_score(product, weights)) for product in products]
    scored.sort(key=lambda p: p['weighted_score'], reverse=True)
    for index, product in enumerate(scored, start=1):
        product['weighted_score'] = round_half_up(product['weighted_score'], 1)
        product['rank'] = index
        product['priority_badge'] = priority_badge(index)
    return scored


def normalize_weights(weights, changed):
    """
    Rebalance after one weight changed so the weights total 100.

    The excess (or shortfall) is spread evenly over the other weights, each
    clamped to 0..100. Whatever clamping leaves over goes to the other
    weights in order, as far as each has room.
    """
    weights = dict(weights)
    total = sum(weights.values())
    if total == 100:
        return weights

    others = [key for key in WEIGHT_KEYS if key != changed]
    adjustment = (total - 100) / len(others)
    for key in others:
        weights[key] = max(0, min(100, weights[key] - adjustment))

    remainder = 100 - sum(weights.values())
    for key in others:
        if not remainder:
            break
        if remainder > 0:
            step = min(remainder, 100 - weights[key])
        else:
            step = -min(-remainder, weights[key])
        weights[key] += step
        remainder -= step
    return weights


def scenario_detail(scenarios, key, equipment):
    """A scenario with the production lines it includes."""
    scenario = scenarios.get(key)
    if scenario is None:
        return None
    included = set(scenario.get('lines_included') or [])
    return dict(
        scenario,
        key=key,
        included_lines=[line for line in equipment if line.get('id') in included],
    )
