"""UpvoteReview — add one upvote to a review.

No deduplication: the author may upvote, and the same caller may upvote
repeatedly. The registry is consulted only for the id range check; the
review itself is fetched by key.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from reviewboard.domain import reviewboard
from reviewboard.registry.registry import Registry
from reviewboard.review.review import Review, key_for

logger = structlog.get_logger(__name__)


@reviewboard.command(part_of="Review")
class UpvoteReview:
    registry_id = Identifier(required=True)
    caller = Identifier(required=True)
    review_id = Integer(required=True)


@reviewboard.command_handler(part_of=Review)
class UpvoteReviewHandler:
    @handle(UpvoteReview)
    def upvote_review(self, command):
        registry = current_domain.repository_for(Registry).get(command.registry_id)
        registry.check_review_id(command.review_id)

        repo = current_domain.repository_for(Review)
        review = repo.get(key_for(command.registry_id, command.review_id))

        upvotes = review.upvote(voter=command.caller)

        repo.add(review)
        logger.debug("Review upvoted", review_id=command.review_id, upvotes=upvotes)
        return upvotes
