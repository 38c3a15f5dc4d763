from rest_framework import serializers

from ..data.models import Card, Collection
from ..domain.enums import Rating

class ReviewInSerializer(serializers.Serializer):
    rating = serializers.ChoiceField(choices=[r.value for r in Rating])
    idempotency_key = serializers.CharField(max_length=64, required=False, allow_blank=True)

class DueQuerySerializer(serializers.Serializer):
    until = serializers.DateTimeField(required=False)  # ISO-8601

class CardSerializer(serializers.ModelSerializer):
    class Meta:
        model = Card
        fields = [
            "id", "collection", "front", "back",
            "interval_minutes", "ease_factor", "repetitions", "next_review_at",
            "created_at",
        ]
        read_only_fields = [
            "id", "collection",
            "interval_minutes", "ease_factor", "repetitions", "next_review_at",
            "created_at",
        ]

class CardInSerializer(serializers.Serializer):
    front = serializers.CharField(min_length=1)
    back = serializers.CharField(min_length=1)

class BulkCardsInSerializer(serializers.Serializer):
    cards = CardInSerializer(many=True, allow_empty=False)

class CollectionSerializer(serializers.ModelSerializer):
    card_count = serializers.IntegerField(read_only=True)
    due_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Collection
        fields = ["id", "name", "created_at", "card_count", "due_count"]
        read_only_fields = ["id", "created_at"]

class CollectionDetailSerializer(serializers.ModelSerializer):
    cards = serializers.SerializerMethodField()

    class Meta:
        model = Collection
        fields = ["id", "name", "created_at", "cards"]

    def get_cards(self, collection):
        cards = collection.cards.order_by("created_at", "pk")
        return CardSerializer(cards, many=True).data
