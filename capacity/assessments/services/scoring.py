"""
Scoring rules for assessment responses and per-area gap computation.

Pure functions, no database access; the assessment service feeds them
model instances or plain values.
"""
from capacity.exceptions import BadRequest

SELF_RATING = 'SELF_RATING'
SELF_RATING_MIN = 1
SELF_RATING_MAX = 5

DEFAULT_TARGET_BENCHMARK = 70

# most severe first
PRIORITY_ORDER = ['CRITICAL', 'HIGH', 'MEDIUM', 'LOW']

PRIORITY_THRESHOLDS = [
    (40, 'CRITICAL'),
    (30, 'HIGH'),
    (15, 'MEDIUM'),
]


def normalize_answer(value):
    return str(value).strip().lower()


def is_correct_answer(response_value, correct_answer):
    """Case-insensitive match; a list of correct answers accepts any member."""
    if correct_answer is None or response_value is None:
        return False
    given = normalize_answer(response_value)
    if isinstance(correct_answer, (list, tuple)):
        return any(given == normalize_answer(answer) for answer in correct_answer)
    return given == normalize_answer(correct_answer)


def parse_self_rating(value):
    """Return the rating as an int in 1..5, raising BadRequest otherwise."""
    if isinstance(value, bool):
        raise BadRequest('Self rating must be an integer between 1 and 5')
    try:
        number = float(str(value).strip())
        if not number.is_integer():
            raise ValueError(value)
        rating = int(number)
    except (TypeError, ValueError, OverflowError):
        raise BadRequest('Self rating must be an integer between 1 and 5')
    if not SELF_RATING_MIN <= rating <= SELF_RATING_MAX:
        raise BadRequest('Self rating must be an integer between 1 and 5')
    return rating


def score_response(question, response_value):
    """
    Score one answer.

    Self ratings score their own value (1-5). Every other question type
    scores its full points on a correct answer and 0 otherwise.
    """
    if question.question_type == SELF_RATING:
        return parse_self_rating(response_value)
    if is_correct_answer(response_value, question.correct_answer):
        return question.points
    return 0


def aggregate_area_scores(responses):
    """
    Aggregate (question_type, score, points) triples of one area.

    Returns (self_rating_score, knowledge_score): the mean self rating and
    the knowledge percentage, each None when the area has no such answers.
    """
    ratings = []
    earned = 0
    max_points = 0
    for question_type, score, points in responses:
        if question_type == SELF_RATING:
            ratings.append(score or 0)
        else:
            earned += score or 0
            max_points += points

    self_rating_score = sum(ratings) / len(ratings) if ratings else None
    knowledge_score = earned / max_points * 100 if max_points > 0 else None
    return self_rating_score, knowledge_score


def compute_gap(target_benchmark, knowledge_score):
    """Shortfall against the benchmark, never negative. A missing score counts as 0."""
    return max(0, target_benchmark - (knowledge_score or 0))


def priority_for_gap(gap_score):
    for threshold, priority in PRIORITY_THRESHOLDS:
        if gap_score > threshold:
            return priority
    return 'LOW'


def priority_index(priority):
    return PRIORITY_ORDER.index(priority)


def select_current_level(levels, knowledge_score):
    """Highest level whose benchmark the score reaches, or None."""
    score = knowledge_score or 0
    reached = [level for level in levels if level.benchmark_score <= score]
    if not reached:
        return None
    return max(reached, key=lambda level: level.benchmark_score)
