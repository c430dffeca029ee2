"""Tests for upvoting — range checks, unbounded counts, no deduplication."""

import pytest
from reviewboard.registry.errors import ReviewNotFound
from reviewboard.registry.registry import DEFAULT_POST_FEE
from reviewboard.review.events import ReviewUpvoted


@pytest.fixture()
def first(registry):
    return registry.post_review(author="alice", content="first", payment=DEFAULT_POST_FEE)


@pytest.fixture()
def second(registry, first):
    review = registry.post_review(author="bob", content="second", payment=DEFAULT_POST_FEE)
    registry._events.clear()
    return review


class TestUpvote:
    def test_upvote_increments(self, first):
        assert first.upvote(voter="carol") == 1
        assert first.details()["upvotes"] == 1

    def test_only_target_review_changes(self, first, second):
        second.upvote(voter="carol")
        assert first.upvotes == 0
        assert second.upvotes == 1

    def test_same_voter_can_repeat(self, first):
        counts = [first.upvote(voter="carol") for _ in range(10)]
        assert counts == list(range(1, 11))

    def test_author_can_upvote_own_review(self, first):
        assert first.upvote(voter="alice") == 1

    def test_upvote_does_not_touch_registry(self, registry, first, second):
        balance = registry.balance
        second.upvote(voter="carol")
        assert registry.balance == balance
        assert registry.review_count == 2
        assert registry._events == []


class TestReviewIdRange:
    @pytest.mark.parametrize("review_id", [0, -1, 3, 999, None])
    def test_unknown_id_rejected(self, registry, second, review_id):
        with pytest.raises(ReviewNotFound) as exc:
            registry.check_review_id(review_id)
        assert "Invalid review ID" in str(exc.value.messages)

    @pytest.mark.parametrize("review_id", [1, 2])
    def test_posted_ids_accepted(self, registry, second, review_id):
        registry.check_review_id(review_id)

    def test_empty_registry_has_no_reviews(self, registry):
        with pytest.raises(ReviewNotFound):
            registry.check_review_id(1)


class TestReviewUpvotedEvent:
    def test_event_carries_new_count(self, second):
        second.upvote(voter="carol")
        second.upvote(voter="dave")
        assert len(second._events) == 2
        event = second._events[-1]
        assert isinstance(event, ReviewUpvoted)
        assert event.registry_id == second.registry_id
        assert event.review_id == 2
        assert event.upvotes == 2
        assert str(event.voter) == "dave"


class TestReviewDetails:
    def test_details_of_posted_review(self, second):
        details = second.details()
        assert details["review_id"] == 2
        assert details["content"] == "second"
        assert details["upvotes"] == 0
        assert details["author"] == "bob"
        assert details["posted_at"] is not None
