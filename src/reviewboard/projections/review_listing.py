"""ReviewListing — one row per posted review, kept current by events."""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from reviewboard.domain import reviewboard
from reviewboard.registry.events import ReviewPosted
from reviewboard.registry.registry import Registry
from reviewboard.review.events import ReviewUpvoted
from reviewboard.review.review import Review, key_for


@reviewboard.projection
class ReviewListing:
    listing_id = String(identifier=True, required=True, max_length=100)
    registry_id = Identifier(required=True)
    review_id = Integer(required=True)
    content = Text(sanitize=False)
    author = Identifier(required=True)
    upvotes = Integer(default=0)
    posted_at = DateTime()
    last_upvoted_at = DateTime()


@reviewboard.projector(projector_for=ReviewListing, aggregates=[Registry, Review])
class ReviewListingProjector:
    @on(ReviewPosted)
    def on_review_posted(self, event):
        current_domain.repository_for(ReviewListing).add(
            ReviewListing(
                listing_id=key_for(event.registry_id, event.review_id),
                registry_id=event.registry_id,
                review_id=event.review_id,
                content=event.content,
                author=event.author,
                upvotes=0,
                posted_at=event.posted_at,
            )
        )

    @on(ReviewUpvoted)
    def on_review_upvoted(self, event):
        repo = current_domain.repository_for(ReviewListing)
        try:
            listing = repo.get(key_for(event.registry_id, event.review_id))
        except ObjectNotFoundError:
            return
        # Events may be redelivered; never move the counter backwards
        listing.upvotes = max(listing.upvotes or 0, event.upvotes)
        listing.last_upvoted_at = event.upvoted_at
        repo.add(listing)
