from .domain.enums import Rating

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3

AGAIN_INTERVAL_MINUTES = 1
FIRST_INTERVAL_MINUTES = {
    Rating.HARD: 5,
    Rating.GOOD: 10,
    Rating.EASY: 4 * 24 * 60,  # 4 days
}
EASE_DELTA = {
    Rating.AGAIN: -0.2,
    Rating.HARD: -0.15,
    Rating.GOOD: 0.0,
    Rating.EASY: 0.15,
}

HARD_GROWTH = 1.2
HARD_MIN_INTERVAL_MINUTES = 5
EASY_BONUS = 1.3

# Largest value a PositiveBigIntegerField column holds
MAX_STORED_INTERVAL_MINUTES = 2**63 - 1
