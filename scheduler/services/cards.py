from django.db import transaction
import structlog
from ..data.models import Card, Collection
from ..data.repos import cards_in_creation_order, get_card, get_collection

logger = structlog.get_logger()

def create_collection(user, name):
    collection = Collection.objects.create(owner=user, name=name)
    logger.info("collection_created", user_id=user.pk, collection_id=collection.pk)
    return collection

def update_collection(user, collection_id, name):
    collection = get_collection(user, collection_id)
    collection.name = name
    collection.save(update_fields=["name"])
    logger.info("collection_renamed", user_id=user.pk, collection_id=collection.pk)
    return collection

def delete_collection(user, collection_id):
    collection = get_collection(user, collection_id)
    collection.delete()
    logger.info("collection_deleted", user_id=user.pk, collection_id=collection_id)

def list_cards(user, collection_id):
    collection = get_collection(user, collection_id)
    return collection.cards.order_by("-created_at", "-pk")

def create_card(user, collection_id, front, back):
    collection = get_collection(user, collection_id)
    card = Card.objects.create(collection=collection, front=front, back=back)
    logger.info("card_created", user_id=user.pk, collection_id=collection.pk, card_id=card.pk)
    return card

def create_cards(user, collection_id, pairs):
    """Create one card per ``{"front", "back"}`` mapping; returns the whole collection."""
    collection = get_collection(user, collection_id)
    with transaction.atomic():
        # One at a time so every card gets its own, increasing created_at
        for pair in pairs:
            Card.objects.create(collection=collection, front=pair["front"], back=pair["back"])
    logger.info("cards_created", user_id=user.pk, collection_id=collection.pk, count=len(pairs))
    return list(cards_in_creation_order(collection))

def update_card(user, card_id, **fields):
    card = get_card(user, card_id)
    changed = [name for name in ("front", "back") if name in fields]
    if changed:
        for name in changed:
            setattr(card, name, fields[name])
        card.save(update_fields=changed)
    return card

def delete_card(user, card_id):
    card = get_card(user, card_id)
    card.delete()
    logger.info("card_deleted", user_id=user.pk, card_id=card_id)
