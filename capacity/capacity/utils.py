"""
Shared helpers for numeric formatting and list pagination
"""
import math
import uuid

from capacity.exceptions import BadRequest


def round_half_up(value, digits=0):
    """
    Round halves towards positive infinity (2.5 -> 3, -2.5 -> -2).
    Returns an int when digits is 0.
    """
    if value is None:
        return None
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    if digits == 0:
        return int(rounded)
    return rounded


def mean(values):
    values = list(values)
    if not values:
        return None
    return sum(values) / len(values)


def parse_uuid(value, field_name='id'):
    """Parse a UUID from a request value, raising a 400 on garbage."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise BadRequest(f'{field_name} must be a valid UUID')


def paginate(queryset, request, default_limit=20, max_limit=100):
    """
    Page/limit pagination driven by the `page` and `limit` query params.

    Returns (items, pagination) where pagination carries page, limit, total
    and total_pages.
    """
    try:
        page = max(int(request.query_params.get('page', 1)), 1)
        limit = int(request.query_params.get('limit', default_limit))
    except (TypeError, ValueError):
        raise BadRequest('page and limit must be integers')
    limit = min(max(limit, 1), max_limit)

    total = queryset.count()
    offset = (page - 1) * limit
    items = list(queryset[offset:offset + limit])
    return items, {
        'page': page,
        'limit': limit,
        'total': total,
        'total_pages': math.ceil(total / limit) if total else 0,
    }
