# tests/unit/test_feedback_service.py
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from feedback_api.core.errors import NotFoundError, ValidationError
from feedback_api.schemas.entity import EntityStatus
from feedback_api.schemas.feedback import FeedbackSubmitIn
from feedback_api.schemas.review import ExternalReview, ReviewPlatform
from feedback_api.services import feedback_service


def _submission(**over):
    body = {
        "restaurantId": "r1",
        "foodRating": 5,
        "staffRating": 4,
        "ambienceRating": 3,
        "overallRating": 4,
    }
    body.update(over)
    return FeedbackSubmitIn(**body)


# -------------------------
# list_by_entity
# -------------------------
def test_list_orders_newest_first(memory_store, feedback_factory):
    # created_at = [t1, t3, t2]
    memory_store.append_feedback(feedback_factory("t1", minutes=1))
    memory_store.append_feedback(feedback_factory("t3", minutes=3))
    memory_store.append_feedback(feedback_factory("t2", minutes=2))

    out = feedback_service.list_by_entity(memory_store, "r1")

    assert [r.id for r in out] == ["t3", "t2", "t1"]


def test_list_is_non_increasing_and_ties_keep_store_order(memory_store, feedback_factory):
    for fid, minutes in [("a", 5), ("b", 9), ("c", 5), ("d", 1), ("e", 9)]:
        memory_store.append_feedback(feedback_factory(fid, minutes=minutes))

    out = feedback_service.list_by_entity(memory_store, "r1")

    assert all(a.created_at >= b.created_at for a, b in zip(out, out[1:]))
    assert [r.id for r in out] == ["b", "e", "a", "c", "d"]


def test_list_empty_for_unknown_entity(memory_store):
    assert feedback_service.list_by_entity(memory_store, "nobody") == []


@pytest.mark.parametrize("bad_id", [None, "", "  "])
def test_list_requires_entity_id(memory_store, bad_id):
    with pytest.raises(ValidationError):
        feedback_service.list_by_entity(memory_store, bad_id)


def test_list_returns_a_new_sequence(memory_store, feedback_factory):
    memory_store.append_feedback(feedback_factory("a"))
    out = feedback_service.list_by_entity(memory_store, "r1")
    out.clear()
    assert len(feedback_service.list_by_entity(memory_store, "r1")) == 1


# -------------------------
# submit_feedback
# -------------------------
def test_submit_appends_record(memory_store, entity_factory):
    memory_store.create_entity(entity_factory("r1"))

    rec = feedback_service.submit_feedback(memory_store, _submission(suggestions="More salt"))

    assert rec.id.startswith("feedback_")
    assert rec.entity_id == "r1"
    assert rec.created_at.tzinfo is not None
    assert memory_store.query_feedback("r1") == [rec]


def test_submit_blank_optional_fields_become_none(memory_store, entity_factory):
    memory_store.create_entity(entity_factory("r1"))
    rec = feedback_service.submit_feedback(memory_store, _submission(customerName="", suggestions=""))
    assert rec.customer_name is None
    assert rec.suggestions is None


def test_submit_unknown_entity(memory_store):
    with pytest.raises(NotFoundError):
        feedback_service.submit_feedback(memory_store, _submission())


def test_submit_to_blocked_entity_rejected(memory_store, entity_factory):
    memory_store.create_entity(entity_factory("r1", status=EntityStatus.BLOCKED))

    with pytest.raises(ValidationError) as exc:
        feedback_service.submit_feedback(memory_store, _submission())

    assert str(exc.value) == "Restaurant is not accepting feedback"
    assert memory_store.query_feedback("r1") == []


# -------------------------
# feedback_stats
# -------------------------
def test_stats_empty(memory_store):
    stats = feedback_service.feedback_stats(memory_store, "r1")
    assert stats.total_feedback == 0
    assert stats.average_ratings.overall == 0.0
    assert stats.recent_trend == "stable"
    assert stats.external_reviews_count.google == 0


def test_stats_averages_rounded(memory_store, feedback_factory):
    for i, overall in enumerate([5, 4, 4]):
        memory_store.append_feedback(feedback_factory(f"f{i}", minutes=i, overall=overall))

    stats = feedback_service.feedback_stats(memory_store, "r1")

    assert stats.total_feedback == 3
    assert stats.average_ratings.overall == 4.33
    assert stats.average_ratings.food == 4.0
    assert stats.average_ratings.staff == 5.0
    assert stats.average_ratings.ambience == 3.0


@pytest.mark.parametrize(
    "newest_first, expected",
    [
        ([5, 5, 5, 3, 3, 3], "improving"),
        ([2, 2, 2, 4, 4, 4], "declining"),
        ([4, 4, 4, 4, 4, 4], "stable"),
        ([5, 5, 5, 3, 3], "stable"),  # fewer than six
    ],
)
def test_stats_trend(memory_store, feedback_factory, newest_first, expected):
    n = len(newest_first)
    for i, overall in enumerate(newest_first):
        memory_store.append_feedback(feedback_factory(f"f{i}", minutes=n - i, overall=overall))

    assert feedback_service.feedback_stats(memory_store, "r1").recent_trend == expected


def test_stats_fall_back_to_external_rating(memory_store):
    for i, (platform, rating) in enumerate(
        [(ReviewPlatform.GOOGLE, 4.0), (ReviewPlatform.GOOGLE, 5.0), (ReviewPlatform.FACEBOOK, 3.0)]
    ):
        memory_store.append_external_review(
            ExternalReview(
                id=f"x{i}",
                entity_id="r1",
                platform=platform,
                rating=rating,
                review_date=datetime(2025, 1, 1 + i, tzinfo=timezone.utc),
                synced_at=datetime(2025, 2, 1, tzinfo=timezone.utc),
            )
        )

    stats = feedback_service.feedback_stats(memory_store, "r1")

    assert stats.total_feedback == 0
    assert stats.average_ratings.overall == 4.0
    assert stats.average_ratings.food == 4.0
    assert stats.external_reviews_count.google == 2
    assert stats.external_reviews_count.facebook == 1
    assert stats.external_reviews_count.instagram == 0


def test_stats_requires_entity_id(memory_store):
    with pytest.raises(ValidationError):
        feedback_service.feedback_stats(memory_store, None)
