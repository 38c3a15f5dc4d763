import math
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from fractions import Fraction

from .enums import Rating
from .schedule import CardSchedule
from ..config import (
    AGAIN_INTERVAL_MINUTES,
    EASE_DELTA,
    EASY_BONUS,
    FIRST_INTERVAL_MINUTES,
    HARD_GROWTH,
    HARD_MIN_INTERVAL_MINUTES,
    MIN_EASE_FACTOR,
)

LATEST_REVIEW_AT = datetime.max.replace(tzinfo=timezone.utc)


def round_half_away(value: float) -> int:
    # round() would give 62 for 62.5; intervals round half away from zero
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def scale(interval: int, *factors: float) -> int:
    """``round_half_away(interval * factors...)`` for non-negative intervals of any size."""
    try:
        value = interval
        for factor in factors:
            value = value * factor
        return round_half_away(value)
    except OverflowError:
        # Past float range: multiply exactly
        exact = Fraction(interval)
        for factor in factors:
            exact *= Fraction(factor)
        return math.floor(exact + Fraction(1, 2))


def review_at(now: datetime, interval: int) -> datetime:
    """``now + interval`` minutes, saturating at the latest representable datetime."""
    try:
        return now + timedelta(minutes=interval)
    except OverflowError:
        return LATEST_REVIEW_AT


def next_interval(rating: Rating, state: CardSchedule, ease_factor: float) -> int:
    """Minutes until the next review; ``ease_factor`` is the already-updated ease."""
    if rating == Rating.AGAIN:
        return AGAIN_INTERVAL_MINUTES

    if state.repetitions == 0:
        return FIRST_INTERVAL_MINUTES[rating]

    interval = state.interval_minutes
    if rating == Rating.HARD:
        return max(HARD_MIN_INTERVAL_MINUTES, scale(interval, HARD_GROWTH))
    if rating == Rating.GOOD:
        return scale(interval, state.ease_factor)
    return scale(interval, ease_factor, EASY_BONUS)


def schedule(state: CardSchedule, rating: Rating, now: datetime) -> CardSchedule:
    """
    Apply one review to ``state``; ``now`` must be timezone-aware (ValueError otherwise).

    Total for every prior state and rating. ``interval_minutes`` is unbounded;
    ``next_review_at`` is ``now + interval_minutes``, or LATEST_REVIEW_AT once
    that sum is past what ``datetime`` can represent.
    """
    if now.tzinfo is None:
        raise ValueError("now must be timezone-aware")

    rating = Rating(rating)
    ease_factor = max(MIN_EASE_FACTOR, state.ease_factor + EASE_DELTA[rating])

    interval = next_interval(rating, state, ease_factor)
    repetitions = 0 if rating == Rating.AGAIN else state.repetitions + 1

    return replace(
        state,
        interval_minutes=interval,
        ease_factor=ease_factor,
        repetitions=repetitions,
        next_review_at=review_at(now, interval),
    )
