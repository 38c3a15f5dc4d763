from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..config import DEFAULT_EASE_FACTOR


@dataclass(frozen=True)
class CardSchedule:
    """
    Scheduling state of a single card.

    The field defaults describe a card that has never been reviewed, which is
    immediately due. A stored card is turned into a CardSchedule once, when it
    is loaded, so the rest of the code never has to re-apply defaults.
    """

    interval_minutes: int = 0
    ease_factor: float = DEFAULT_EASE_FACTOR
    repetitions: int = 0
    next_review_at: Optional[datetime] = None

    @property
    def is_new(self) -> bool:
        return self.next_review_at is None
