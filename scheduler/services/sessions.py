from typing import List, NamedTuple, Optional
from datetime import datetime

from django.utils import timezone
import structlog
from ..data.models import Card, Collection
from ..data.repos import get_collection, scheduled_cards
from ..domain.due import next_due_at, select_due

logger = structlog.get_logger()


class StudySession(NamedTuple):
    collection: Collection
    now: datetime
    cards: List[Card]
    next_review_at: Optional[datetime]

    @property
    def card_ids(self):
        return [card.pk for card in self.cards]


def build_study_session(user, collection_id, now=None):
    """
    Cards of one collection that are due at ``now``, in study order.

    When nothing is due, ``next_review_at`` tells when the next card will be.
    """
    now = now or timezone.now()
    collection = get_collection(user, collection_id)

    rows = scheduled_cards(collection)
    due_ids = select_due(rows, now)
    by_id = Card.objects.in_bulk(due_ids)
    cards = [by_id[card_id] for card_id in due_ids]

    session = StudySession(collection, now, cards, next_due_at(rows, now))
    logger.info("study_session_built",
        user_id=user.pk,
        collection_id=collection.pk,
        due_count=len(cards),
        total_count=len(rows),
    )
    return session
