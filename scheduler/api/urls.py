from django.urls import path
from .views import (
    BulkCardsView,
    CardDetailView,
    CollectionCardsView,
    CollectionDetailView,
    CollectionListView,
    DueCardsView,
    HealthView,
    ReviewView,
)

urlpatterns = [
    path("health", HealthView.as_view(), name="health"),
    path("collections", CollectionListView.as_view(), name="collection-list"),
    path("collections/<int:collection_id>", CollectionDetailView.as_view(), name="collection-detail"),
    path("collections/<int:collection_id>/cards", CollectionCardsView.as_view(), name="collection-cards"),
    path("collections/<int:collection_id>/cards/bulk", BulkCardsView.as_view(), name="collection-cards-bulk"),
    path("collections/<int:collection_id>/due-cards", DueCardsView.as_view(), name="due-cards"),
    path("cards/<int:card_id>", CardDetailView.as_view(), name="card-detail"),
    path("cards/<int:card_id>/review", ReviewView.as_view(), name="review"),
]
