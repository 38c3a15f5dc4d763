from django.conf import settings
from django.db import models
from django.utils import timezone

from ..config import DEFAULT_EASE_FACTOR
from ..domain.enums import Rating

RATING_CHOICES = [(r.value, r.value) for r in Rating]

class Collection(models.Model):
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="collections"
    )
    name = models.CharField(max_length=200)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["owner", "created_at"], name="collection_owner_created_idx"),
        ]

class Card(models.Model):
    collection = models.ForeignKey(
        Collection, on_delete=models.CASCADE, related_name="cards"
    )
    front = models.TextField()
    back = models.TextField()
    # Scheduling state; a NULL next_review_at means never reviewed (due now)
    interval_minutes = models.PositiveBigIntegerField(default=0)
    ease_factor = models.FloatField(default=DEFAULT_EASE_FACTOR)
    repetitions = models.PositiveIntegerField(default=0)
    next_review_at = models.DateTimeField(null=True, blank=True)  # UTC
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["collection", "next_review_at"], name="card_collection_due_idx"),
        ]

class ReviewLog(models.Model):
    card = models.ForeignKey(Card, on_delete=models.CASCADE, related_name="reviews")
    rating = models.CharField(max_length=8, choices=RATING_CHOICES)
    idempotency_key = models.CharField(max_length=64, null=True, blank=True)
    reviewed_at = models.DateTimeField(default=timezone.now)
    interval_minutes = models.PositiveBigIntegerField()
    ease_factor = models.FloatField()
    repetitions = models.PositiveIntegerField()
    next_review_at = models.DateTimeField()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["card", "idempotency_key"], name="unique_review_idempotency_key"
            ),
        ]
        indexes = [
            models.Index(fields=["card", "reviewed_at"], name="reviewlog_card_reviewed_idx"),
        ]
