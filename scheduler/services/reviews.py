from typing import NamedTuple

from django.db import transaction
from django.utils import timezone
import structlog
from ..data.models import Card
from ..data.repos import (
    fit_for_storage,
    get_card_for_update,
    get_existing_idempotent,
    load_schedule,
    persist_review,
    save_schedule,
)
from ..domain.enums import Rating
from ..domain.logic import schedule
from ..domain.schedule import CardSchedule
from ..exceptions import IdempotencyConflict
from ..utils.time import to_utc_iso

logger = structlog.get_logger()


class ReviewResult(NamedTuple):
    card: Card
    rating: Rating
    schedule: CardSchedule
    idempotent: bool


def _replayed(card, rating, log):
    if log.rating != rating.value:
        raise IdempotencyConflict()
    logger.info("idempotent_reuse",
        card_id=card.pk,
        idempotency_key=log.idempotency_key,
        next_review_utc=to_utc_iso(log.next_review_at),
    )
    recorded = CardSchedule(
        interval_minutes=log.interval_minutes,
        ease_factor=log.ease_factor,
        repetitions=log.repetitions,
        next_review_at=log.next_review_at,
    )
    return ReviewResult(card, rating, recorded, True)


def record_review(user, card_id, rating, idempotency_key=None, now=None):
    """
    Apply ``rating`` to one of ``user``'s cards and persist the new schedule.

    The card row stays locked from read to write, so two sessions reviewing
    the same card are applied one after the other. A repeated
    ``idempotency_key`` returns the result recorded the first time.
    """
    rating = Rating(rating)
    logger.info("review_received",
        user_id=user.pk,
        card_id=card_id,
        rating=rating.value,
        idempotency_key=idempotency_key,
    )

    with transaction.atomic():
        card = get_card_for_update(user, card_id)

        # Fast path: return previous result if same idempotency_key
        existing = get_existing_idempotent(card, idempotency_key)
        if existing:
            return _replayed(card, rating, existing)

        now = now or timezone.now()
        new_schedule = fit_for_storage(schedule(load_schedule(card), rating, now))

        log, was_idempotent = persist_review(card, rating, idempotency_key, new_schedule, now)
        if was_idempotent:
            return _replayed(card, rating, log)

        save_schedule(card, new_schedule)

    logger.info("review_scheduled",
        user_id=user.pk,
        card_id=card.pk,
        rating=rating.value,
        interval_minutes=new_schedule.interval_minutes,
        ease_factor=new_schedule.ease_factor,
        repetitions=new_schedule.repetitions,
        next_review_utc=to_utc_iso(new_schedule.next_review_at),
    )

    return ReviewResult(card, rating, new_schedule, False)
