from rest_framework import views, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
import structlog
import uuid
from ..data.repos import collections_for, get_collection
from ..domain.enums import RATING_LABELS
from ..services.cards import (
    create_card,
    create_cards,
    create_collection,
    delete_card,
    delete_collection,
    list_cards,
    update_card,
    update_collection,
)
from ..services.reviews import record_review
from ..services.sessions import build_study_session
from ..utils.time import minutes_until, to_utc_iso
from .serializers import (
    BulkCardsInSerializer,
    CardInSerializer,
    CardSerializer,
    CollectionDetailSerializer,
    CollectionSerializer,
    DueQuerySerializer,
    ReviewInSerializer,
)

base_logger = structlog.get_logger()


def request_logger():
    # Create a unique request_id
    return base_logger.bind(request_id=str(uuid.uuid4()))


class HealthView(views.APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({"status": "ok", "message": "Cardly API is running"})


class CollectionListView(views.APIView):
    def get(self, request):
        collections = collections_for(request.user)
        return Response(CollectionSerializer(collections, many=True).data)

    def post(self, request):
        s = CollectionSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        collection = create_collection(request.user, s.validated_data["name"])
        created = collections_for(request.user).get(pk=collection.pk)
        return Response(CollectionSerializer(created).data, status=status.HTTP_201_CREATED)


class CollectionDetailView(views.APIView):
    def get(self, request, collection_id):
        collection = get_collection(request.user, collection_id)
        return Response(CollectionDetailSerializer(collection).data)

    def put(self, request, collection_id):
        return self._update(request, collection_id, partial=False)

    def patch(self, request, collection_id):
        return self._update(request, collection_id, partial=True)

    def _update(self, request, collection_id, partial):
        s = CollectionSerializer(data=request.data, partial=partial)
        s.is_valid(raise_exception=True)
        if "name" in s.validated_data:
            collection = update_collection(request.user, collection_id, s.validated_data["name"])
        else:
            collection = get_collection(request.user, collection_id)
        return Response(CollectionDetailSerializer(collection).data)

    def delete(self, request, collection_id):
        delete_collection(request.user, collection_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CollectionCardsView(views.APIView):
    def get(self, request, collection_id):
        cards = list_cards(request.user, collection_id)
        return Response(CardSerializer(cards, many=True).data)

    def post(self, request, collection_id):
        s = CardInSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        card = create_card(request.user, collection_id, **s.validated_data)
        return Response(CardSerializer(card).data, status=status.HTTP_201_CREATED)


class BulkCardsView(views.APIView):
    def post(self, request, collection_id):
        s = BulkCardsInSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        pairs = s.validated_data["cards"]
        cards = create_cards(request.user, collection_id, pairs)
        return Response(
            {"count": len(pairs), "cards": CardSerializer(cards, many=True).data},
            status=status.HTTP_201_CREATED,
        )


class CardDetailView(views.APIView):
    def put(self, request, card_id):
        return self._update(request, card_id, partial=False)

    def patch(self, request, card_id):
        return self._update(request, card_id, partial=True)

    def _update(self, request, card_id, partial):
        s = CardInSerializer(data=request.data, partial=partial)
        s.is_valid(raise_exception=True)
        card = update_card(request.user, card_id, **s.validated_data)
        return Response(CardSerializer(card).data)

    def delete(self, request, card_id):
        delete_card(request.user, card_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ReviewView(views.APIView):
    def post(self, request, card_id):
        logger = request_logger()

        s = ReviewInSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        rating = s.validated_data["rating"]
        idem = s.validated_data.get("idempotency_key") or None

        result = record_review(request.user, card_id, rating, idem)
        next_dt = result.schedule.next_review_at
        interval = result.schedule.interval_minutes
        status_code = status.HTTP_200_OK if result.idempotent else status.HTTP_201_CREATED

        # Log with request_id & relevant context
        logger.info(
            "review_api_response",
            user_id=request.user.pk,
            card_id=card_id,
            rating=result.rating.value,
            idempotent=result.idempotent,
            interval_minutes=interval,
            next_review_utc=to_utc_iso(next_dt),
            status=status_code,
        )

        return Response(
            {
                "card": CardSerializer(result.card).data,
                "rating_label": RATING_LABELS[result.rating],
                "next_review_in": interval,
                "next_review_at": to_utc_iso(next_dt),
                "idempotent": result.idempotent,
            },
            status=status_code,
        )


class DueCardsView(views.APIView):
    def get(self, request, collection_id):
        logger = request_logger()

        qs = DueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        until = qs.validated_data.get("until")

        session = build_study_session(request.user, collection_id, now=until)

        logger.info(
            "due_cards_api_response",
            user_id=request.user.pk,
            collection_id=collection_id,
            until_utc=to_utc_iso(session.now),
            card_count=len(session.cards),
        )

        return Response(
            {
                "collection_id": session.collection.pk,
                "until": to_utc_iso(session.now),
                "cards": CardSerializer(session.cards, many=True).data,
                "card_ids": session.card_ids,
                "next_review_at": to_utc_iso(session.next_review_at),
                "next_review_in_minutes": minutes_until(session.next_review_at, session.now),
            }
        )
