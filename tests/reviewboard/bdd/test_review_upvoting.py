"""BDD tests for upvoting reviews."""

from pytest_bdd import parsers, scenarios, when
from reviewboard.registry.errors import ReviewNotFound

scenarios("features/review_upvoting.feature")


@when(parsers.cfparse('"{voter}" upvotes review {review_id:d}'))
def upvote_review(board, posted, voter, review_id, result, error):
    try:
        board.check_review_id(review_id)
        result["value"] = posted[review_id].upvote(voter=voter)
    except ReviewNotFound as exc:
        error["exc"] = exc
