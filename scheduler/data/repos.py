from dataclasses import replace

from django.db import transaction, IntegrityError
from django.db.models import Count, Q
from django.utils import timezone

from .models import Card, Collection, ReviewLog
from ..config import MAX_STORED_INTERVAL_MINUTES
from ..domain.due import ScheduledCard
from ..domain.schedule import CardSchedule
from ..exceptions import CardNotFound, CollectionNotFound

def collections_for(owner, now=None):
    now = now or timezone.now()
    due = Q(cards__next_review_at__isnull=True) | Q(cards__next_review_at__lte=now)
    return (Collection.objects
            .filter(owner=owner)
            .annotate(card_count=Count("cards"), due_count=Count("cards", filter=due))
            .order_by("-created_at", "-pk"))

def get_collection(owner, collection_id):
    try:
        return Collection.objects.get(pk=collection_id, owner=owner)
    except Collection.DoesNotExist:
        raise CollectionNotFound()

def get_card(owner, card_id):
    try:
        return Card.objects.get(pk=card_id, collection__owner=owner)
    except Card.DoesNotExist:
        raise CardNotFound()

def get_card_for_update(owner, card_id):
    """
    Fetch a card owned by ``owner`` and lock its row until the surrounding
    transaction ends. Must be called inside ``transaction.atomic()``.
    """
    try:
        return (Card.objects
                .select_for_update()
                .get(pk=card_id, collection__owner=owner))
    except Card.DoesNotExist:
        raise CardNotFound()

def load_schedule(card):
    # Columns are NOT NULL with defaults, so a stored card is always complete
    return CardSchedule(
        interval_minutes=card.interval_minutes,
        ease_factor=card.ease_factor,
        repetitions=card.repetitions,
        next_review_at=card.next_review_at,
    )

def fit_for_storage(schedule):
    """Cap the interval at the column maximum; the due date is saturated long before that."""
    if schedule.interval_minutes <= MAX_STORED_INTERVAL_MINUTES:
        return schedule
    return replace(schedule, interval_minutes=MAX_STORED_INTERVAL_MINUTES)

def save_schedule(card, schedule):
    card.interval_minutes = schedule.interval_minutes
    card.ease_factor = schedule.ease_factor
    card.repetitions = schedule.repetitions
    card.next_review_at = schedule.next_review_at
    card.save(update_fields=["interval_minutes", "ease_factor", "repetitions", "next_review_at"])
    return card

def cards_in_creation_order(collection):
    return collection.cards.order_by("created_at", "pk")

def scheduled_cards(collection):
    """(id, next_review_at) pairs of every card in the collection, in creation order."""
    return [
        ScheduledCard(*row)
        for row in cards_in_creation_order(collection).values_list("pk", "next_review_at")
    ]

def get_existing_idempotent(card, idem_key):
    if not idem_key:
        return None
    return ReviewLog.objects.filter(card=card, idempotency_key=idem_key).first()

def persist_review(card, rating, idem_key, schedule, reviewed_at):
    """
    Insert a ReviewLog; if a concurrent duplicate slips in, return the existing one.
    """
    try:
        with transaction.atomic():
            return ReviewLog.objects.create(
                card=card, rating=rating.value, idempotency_key=idem_key or None,
                reviewed_at=reviewed_at,
                interval_minutes=schedule.interval_minutes,
                ease_factor=schedule.ease_factor,
                repetitions=schedule.repetitions,
                next_review_at=schedule.next_review_at,
            ), False
    except IntegrityError:
        # Duplicate idempotency key safeguard
        existing = get_existing_idempotent(card, idem_key)
        if existing is None:
            raise
        return existing, True
