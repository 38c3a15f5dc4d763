from enum import Enum

class Rating(str, Enum):
    AGAIN = "again"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"

RATING_LABELS = {
    Rating.AGAIN: "Otra vez",
    Rating.HARD: "Difícil",
    Rating.GOOD: "Bien",
    Rating.EASY: "Fácil",
}
