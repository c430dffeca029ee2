"""Domain events for the Review aggregate."""

from protean.fields import DateTime, Identifier, Integer

from reviewboard.domain import reviewboard


@reviewboard.event(part_of="Review")
class ReviewUpvoted:
    """A review received one more upvote."""

    __version__ = 1

    registry_id = Identifier(required=True)
    review_id = Integer(required=True)
    upvotes = Integer(required=True)
    voter = Identifier(required=True)
    upvoted_at = DateTime(required=True)
