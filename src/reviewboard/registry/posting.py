"""PostReview — publish a review by paying the posting fee.

The whole attached payment is credited to the registry balance. The updated
registry and the new review are committed in the same unit of work.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain

from reviewboard.domain import reviewboard
from reviewboard.registry.registry import Registry
from reviewboard.review.review import Review

logger = structlog.get_logger(__name__)


@reviewboard.command(part_of="Registry")
class PostReview:
    registry_id = Identifier(required=True)
    caller = Identifier(required=True)
    content = Text(sanitize=False)
    payment = Integer(default=0)


@reviewboard.command_handler(part_of=Registry)
class PostReviewHandler:
    @handle(PostReview)
    def post_review(self, command):
        repo = current_domain.repository_for(Registry)
        registry = repo.get(command.registry_id)

        review = registry.post_review(
            author=command.caller,
            content=command.content,
            payment=command.payment,
        )

        repo.add(registry)
        current_domain.repository_for(Review).add(review)
        logger.info(
            "Review posted",
            registry_id=str(command.registry_id),
            review_id=review.review_id,
            author=str(command.caller),
            payment=command.payment,
        )
        return review.review_id
