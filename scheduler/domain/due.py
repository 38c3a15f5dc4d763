from datetime import datetime
from typing import Hashable, Iterable, List, NamedTuple, Optional


class ScheduledCard(NamedTuple):
    id: Hashable
    next_review_at: Optional[datetime]


def is_due(next_review_at: Optional[datetime], now: datetime) -> bool:
    return next_review_at is None or next_review_at <= now


def select_due(cards: Iterable[ScheduledCard], now: datetime) -> List[Hashable]:
    """
    Ids of the cards eligible for review at ``now``.

    ``cards`` must be given in creation order. Never-reviewed cards come first,
    then ascending ``next_review_at``; the sort is stable so equal times keep
    creation order.
    """
    due = [ScheduledCard(*card) for card in cards if is_due(card[1], now)]
    due.sort(key=lambda card: (card.next_review_at is not None, card.next_review_at or now))
    return [card.id for card in due]


def next_due_at(cards: Iterable[ScheduledCard], now: datetime) -> Optional[datetime]:
    """Earliest review time strictly after ``now``, or None if nothing is pending."""
    upcoming = [card[1] for card in cards if card[1] is not None and card[1] > now]
    return min(upcoming, default=None)
