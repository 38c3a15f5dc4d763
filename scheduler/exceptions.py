from rest_framework import status
from rest_framework.exceptions import APIException, NotFound


class CollectionNotFound(NotFound):
    default_detail = "Collection not found."
    default_code = "collection_not_found"


class CardNotFound(NotFound):
    default_detail = "Card not found."
    default_code = "card_not_found"


class IdempotencyConflict(APIException):
    """The idempotency key was already used for a review with a different rating."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "Idempotency key already used for a different rating."
    default_code = "idempotency_conflict"
