import pytest
import logging
from django.urls import reverse
from django.utils import timezone
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)

USERNAME = "learner"

# Helpers

@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username=USERNAME)


@pytest.fixture
def collection_id(client, user):
    resp = client.post(
        reverse("collection-list"), data={"name": "Biología"},
        content_type="application/json", HTTP_X_USER_NAME=USERNAME,
    )
    assert resp.status_code == 201
    return resp.json()["id"]


def add_card(client, collection_id, front="front", back="back"):
    url = reverse("collection-cards", kwargs={"collection_id": collection_id})
    resp = client.post(
        url, data={"front": front, "back": back},
        content_type="application/json", HTTP_X_USER_NAME=USERNAME,
    )
    assert resp.status_code == 201
    return resp.json()["id"]


def make_review(client, card_id, rating, idem_key=None, username=USERNAME):
    url = reverse("review", kwargs={"card_id": card_id})
    payload = {"rating": rating}
    if idem_key:
        payload["idempotency_key"] = idem_key
    resp = client.post(
        url, data=payload, content_type="application/json", HTTP_X_USER_NAME=username
    )
    data = resp.json()
    logger.info(
        "POST /cards/%s/review rating=%s → status=%s interval=%s idempotent=%s",
        card_id,
        rating,
        resp.status_code,
        data.get("next_review_in"),
        data.get("idempotent"),
    )
    return resp


def get_due_cards(client, collection_id, until=None):
    url = reverse("due-cards", kwargs={"collection_id": collection_id})
    params = {"until": until.isoformat()} if until else {}
    resp = client.get(url, params, HTTP_X_USER_NAME=USERNAME)
    data = resp.json()
    logger.info(
        "GET /due-cards until=%s → status=%s card_count=%s",
        data.get("until"),
        resp.status_code,
        len(data["card_ids"]),
    )
    return resp


# Tests

@pytest.mark.django_db
def test_rating_again_retries_in_one_minute(client, collection_id):
    card_id = add_card(client, collection_id)

    resp = make_review(client, card_id, "again", "idem-0")
    data = resp.json()

    assert resp.status_code == 201
    assert data["next_review_in"] == 1
    assert data["rating_label"] == "Otra vez"
    assert data["card"]["repetitions"] == 0
    assert data["card"]["ease_factor"] == pytest.approx(2.3)
    logger.info("✓ Passed: again scheduled retry in 1 minute")


@pytest.mark.django_db
def test_first_intervals_labels(client, collection_id):
    """First reviews produce the first-repetition intervals and labels."""
    expected = {"hard": (5, "Difícil"), "good": (10, "Bien"), "easy": (5760, "Fácil")}

    for rating, (interval, label) in expected.items():
        card_id = add_card(client, collection_id, front=rating)
        data = make_review(client, card_id, rating).json()
        assert data["next_review_in"] == interval
        assert data["rating_label"] == label
        assert data["card"]["interval_minutes"] == interval
        assert data["card"]["repetitions"] == 1

    logger.info("✓ Passed: hard=5m, good=10m, easy=4d")


@pytest.mark.django_db
def test_review_persists_next_review_at(client, collection_id):
    card_id = add_card(client, collection_id)
    before = timezone.now()

    data = make_review(client, card_id, "good").json()

    next_review = datetime.fromisoformat(data["next_review_at"])
    assert before + timedelta(minutes=10) <= next_review <= timezone.now() + timedelta(minutes=10)
    assert data["card"]["next_review_at"] is not None


@pytest.mark.django_db
def test_growth_multiple_steps(client, collection_id):
    """good, good, good grows by the ease factor after the first 10 minutes."""
    card_id = add_card(client, collection_id)

    intervals = [make_review(client, card_id, "good").json()["next_review_in"] for _ in range(3)]

    assert intervals == [10, 25, 63]
    logger.info("✓ Passed: intervals grew %s", intervals)


@pytest.mark.django_db
def test_many_easy_reviews_stay_schedulable(client, collection_id):
    """Long easy streaks keep growing; the due date stops at the latest datetime."""
    card_id = add_card(client, collection_id)

    responses = [make_review(client, card_id, "easy") for _ in range(15)]

    assert all(resp.status_code == 201 for resp in responses)
    intervals = [resp.json()["next_review_in"] for resp in responses]
    assert all(a < b for a, b in zip(intervals, intervals[1:]))
    assert responses[-1].json()["next_review_at"] == "9999-12-31T23:59:59.999999+00:00"
    logger.info("✓ Passed: 15 easy reviews, last interval %s", intervals[-1])


@pytest.mark.django_db
def test_idempotency_true_and_false(client, collection_id):
    """First request applies the rating, second with same key reuses it."""
    card_id = add_card(client, collection_id)

    first = make_review(client, card_id, "easy", "idem-same")
    d1 = first.json()
    assert first.status_code == 201
    assert d1["idempotent"] is False

    second = make_review(client, card_id, "easy", "idem-same")
    d2 = second.json()
    assert second.status_code == 200
    assert d2["idempotent"] is True
    assert d1["next_review_at"] == d2["next_review_at"]
    assert d2["card"]["repetitions"] == 1

    logger.info("✓ Passed: idempotency handled correctly")


@pytest.mark.django_db
def test_idempotency_key_reused_for_other_rating(client, collection_id):
    card_id = add_card(client, collection_id)
    make_review(client, card_id, "good", "idem-conflict")

    resp = make_review(client, card_id, "again", "idem-conflict")

    assert resp.status_code == 409


@pytest.mark.django_db
def test_invalid_rating_is_rejected_before_scheduling(client, collection_id):
    card_id = add_card(client, collection_id)

    resp = make_review(client, card_id, "perfect")

    assert resp.status_code == 400
    assert "rating" in resp.json()
    card = client.get(
        reverse("collection-detail", kwargs={"collection_id": collection_id}),
        HTTP_X_USER_NAME=USERNAME,
    ).json()["cards"][0]
    assert card["repetitions"] == 0
    assert card["next_review_at"] is None


@pytest.mark.django_db
def test_review_of_someone_elses_card_is_not_found(client, collection_id, django_user_model):
    card_id = add_card(client, collection_id)
    django_user_model.objects.create_user(username="intruder")

    resp = make_review(client, card_id, "good", username="intruder")

    assert resp.status_code == 404


@pytest.mark.django_db
def test_due_cards_includes_and_excludes(client, collection_id):
    """Unreviewed cards come first; cards scheduled later are left out."""
    card_new = add_card(client, collection_id, front="new")
    card_due = add_card(client, collection_id, front="again")
    card_future = add_card(client, collection_id, front="easy")

    make_review(client, card_due, "again")
    make_review(client, card_future, "easy")

    resp_now = get_due_cards(client, collection_id)
    assert resp_now.json()["card_ids"] == [card_new]

    resp_soon = get_due_cards(client, collection_id, timezone.now() + timedelta(minutes=2))
    assert resp_soon.json()["card_ids"] == [card_new, card_due]
    assert [c["front"] for c in resp_soon.json()["cards"]] == ["new", "again"]

    # Never-reviewed cards are due at any time
    resp_past = get_due_cards(client, collection_id, timezone.now() - timedelta(days=1))
    assert resp_past.json()["card_ids"] == [card_new]

    logger.info("✓ Passed: due-cards includes only due items")


@pytest.mark.django_db
def test_due_cards_reports_next_session(client, collection_id):
    card_id = add_card(client, collection_id)
    make_review(client, card_id, "easy")

    data = get_due_cards(client, collection_id).json()

    assert data["card_ids"] == []
    assert data["next_review_in_minutes"] == 5760
    assert data["next_review_at"] is not None


@pytest.mark.django_db
def test_collections_list_counts_due_cards(client, collection_id):
    add_card(client, collection_id)
    reviewed = add_card(client, collection_id)
    make_review(client, reviewed, "good")

    resp = client.get(reverse("collection-list"), HTTP_X_USER_NAME=USERNAME)

    assert resp.status_code == 200
    [collection] = resp.json()
    assert collection["name"] == "Biología"
    assert collection["card_count"] == 2
    assert collection["due_count"] == 1


@pytest.mark.django_db
def test_bulk_create_keeps_creation_order(client, collection_id):
    url = reverse("collection-cards-bulk", kwargs={"collection_id": collection_id})
    payload = {"cards": [{"front": f"q{i}", "back": f"a{i}"} for i in range(3)]}

    resp = client.post(url, data=payload, content_type="application/json",
                       HTTP_X_USER_NAME=USERNAME)

    assert resp.status_code == 201
    assert resp.json()["count"] == 3
    assert [c["front"] for c in resp.json()["cards"]] == ["q0", "q1", "q2"]

    due = get_due_cards(client, collection_id).json()
    assert [c["front"] for c in due["cards"]] == ["q0", "q1", "q2"]


@pytest.mark.django_db
def test_edit_card_keeps_schedule(client, collection_id):
    card_id = add_card(client, collection_id)
    make_review(client, card_id, "good")

    resp = client.patch(
        reverse("card-detail", kwargs={"card_id": card_id}), data={"back": "nuevo"},
        content_type="application/json", HTTP_X_USER_NAME=USERNAME,
    )

    assert resp.status_code == 200
    assert resp.json()["back"] == "nuevo"
    assert resp.json()["front"] == "front"
    assert resp.json()["interval_minutes"] == 10


@pytest.mark.django_db
def test_delete_card(client, collection_id):
    card_id = add_card(client, collection_id)

    resp = client.delete(reverse("card-detail", kwargs={"card_id": card_id}),
                         HTTP_X_USER_NAME=USERNAME)

    assert resp.status_code == 204
    assert make_review(client, card_id, "good").status_code == 404


@pytest.mark.django_db
def test_delete_collection_removes_cards(client, collection_id):
    card_id = add_card(client, collection_id)

    resp = client.delete(reverse("collection-detail", kwargs={"collection_id": collection_id}),
                         HTTP_X_USER_NAME=USERNAME)

    assert resp.status_code == 204
    assert make_review(client, card_id, "good").status_code == 404


@pytest.mark.django_db
def test_rename_collection(client, collection_id):
    url = reverse("collection-detail", kwargs={"collection_id": collection_id})
    add_card(client, collection_id)

    put = client.put(url, data={"name": "Anatomía"},
                     content_type="application/json", HTTP_X_USER_NAME=USERNAME)
    patch = client.patch(url, data={"name": "Botánica"},
                         content_type="application/json", HTTP_X_USER_NAME=USERNAME)

    assert put.status_code == 200
    assert put.json()["name"] == "Anatomía"
    assert patch.status_code == 200
    assert patch.json()["name"] == "Botánica"
    assert len(patch.json()["cards"]) == 1
    resp = client.get(url, HTTP_X_USER_NAME=USERNAME)
    assert resp.json()["name"] == "Botánica"


@pytest.mark.django_db
def test_rename_collection_validation_and_ownership(client, collection_id, django_user_model):
    django_user_model.objects.create_user(username="other")
    url = reverse("collection-detail", kwargs={"collection_id": collection_id})

    empty = client.put(url, data={"name": ""},
                       content_type="application/json", HTTP_X_USER_NAME=USERNAME)
    foreign = client.put(url, data={"name": "Mía"},
                         content_type="application/json", HTTP_X_USER_NAME="other")

    assert empty.status_code == 400
    assert foreign.status_code == 404
    resp = client.get(url, HTTP_X_USER_NAME=USERNAME)
    assert resp.json()["name"] == "Biología"


@pytest.mark.django_db
def test_requests_without_user_are_unauthorized(client, user):
    resp = client.get(reverse("collection-list"))
    assert resp.status_code == 401


@pytest.mark.django_db
def test_health_is_public(client):
    resp = client.get(reverse("health"))
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
