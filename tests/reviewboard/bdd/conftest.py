"""Shared BDD fixtures and step definitions for the Reviewboard domain."""

import pytest
from pytest_bdd import given, parsers, then, when
from reviewboard.registry.errors import (
    InsufficientPayment,
    ReviewNotFound,
    TransferFailed,
    Unauthorized,
)
from reviewboard.registry.events import (
    FeesWithdrawn,
    PostFeeUpdated,
    RegistryCreated,
    ReviewPosted,
)
from reviewboard.registry.registry import Registry
from reviewboard.review.events import ReviewUpvoted

_EVENT_CLASSES = {
    "RegistryCreated": RegistryCreated,
    "PostFeeUpdated": PostFeeUpdated,
    "ReviewPosted": ReviewPosted,
    "ReviewUpvoted": ReviewUpvoted,
    "FeesWithdrawn": FeesWithdrawn,
}

_ERROR_CLASSES = {
    "Unauthorized": Unauthorized,
    "InsufficientPayment": InsufficientPayment,
    "NotFound": ReviewNotFound,
    "TransferFailed": TransferFailed,
}

_REGISTRY_ERRORS = tuple(_ERROR_CLASSES.values())


@pytest.fixture()
def error():
    """Container for the captured registry error."""
    return {"exc": None}


@pytest.fixture()
def result():
    """Container for the value returned by the last operation."""
    return {"value": None}


@pytest.fixture()
def posted():
    """Reviews posted in the scenario, by review id."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a registry owned by "{owner}" with a posting fee of {fee:d}'),
    target_fixture="board",
)
def registry_with_fee(owner, fee):
    board = Registry.construct(owner=owner, post_fee=fee)
    board._events.clear()
    return board


@given(parsers.cfparse('"{author}" has posted {count:d} reviews'))
def author_has_posted(board, posted, author, count):
    for n in range(count):
        review = board.post_review(author=author, content=f"Review number {n + 1}", payment=board.post_fee)
        posted[review.review_id] = review
    board._events.clear()


@given("the payout gateway rejects transfers")
def payouts_rejected(fake_payouts):
    fake_payouts.configure(should_succeed=False)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{author}" posts the review "{content}" paying {payment:d}'))
def post_review(board, posted, author, content, payment, result, error):
    try:
        review = board.post_review(author=author, content=content, payment=payment)
        posted[review.review_id] = review
        result["value"] = review.review_id
    except _REGISTRY_ERRORS as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the operation fails with {error_name}"))
def operation_fails(error, error_name):
    assert error["exc"] is not None, f"Expected {error_name} but no error was raised"
    assert isinstance(error["exc"], _ERROR_CLASSES[error_name])


@then(parsers.cfparse("the registry balance is {amount:d}"))
def registry_balance_is(board, amount):
    assert board.balance == amount


@then(parsers.cfparse("the registry has {count:d} reviews"))
def registry_review_count(board, posted, count):
    assert board.review_count == count
    assert len(posted) == count


@then(parsers.cfparse("review {review_id:d} has {count:d} upvotes"))
def review_upvotes(posted, review_id, count):
    assert posted[review_id].upvotes == count


@then(parsers.cfparse("the posting fee is {fee:d}"))
def posting_fee_is(board, fee):
    assert board.post_fee == fee


@then(parsers.cfparse("a {event_type} event is raised"))
def event_raised(board, posted, event_type):
    event_cls = _EVENT_CLASSES[event_type]
    events = list(board._events)
    for review in posted.values():
        events.extend(review._events)
    assert any(
        isinstance(e, event_cls) for e in events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in events]}"
