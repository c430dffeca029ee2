"""Review aggregate — one paid review of a registry.

Reviews are stored apart from their Registry so that posting, upvoting and
reading touch a single review regardless of how many the registry holds.
A review is addressed by ``(registry_id, review_id)``; the pair is folded
into the aggregate's identifier by ``key_for``.

Lifecycle:
    nonexistent → posted (upvotes = 0) → upvoted (upvotes = k, k only grows)

Content and author never change after posting.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer, String, Text

from reviewboard.domain import reviewboard
from reviewboard.review.events import ReviewUpvoted


def key_for(registry_id, review_id) -> str:
    return f"{registry_id}:{review_id}"


@reviewboard.aggregate
class Review:
    """A paid, immutable piece of text with an upvote counter."""

    review_key = String(identifier=True, max_length=100)
    registry_id = Identifier(required=True)
    review_id = Integer(required=True, min_value=1)

    # Stored verbatim: arbitrary text, never cleaned or escaped
    content = Text(sanitize=False)
    author = Identifier(required=True)
    posted_at = DateTime(required=True)

    upvotes = Integer(default=0, min_value=0)

    @classmethod
    def publish(cls, registry_id, review_id, content, author, posted_at):
        return cls(
            review_key=key_for(registry_id, review_id),
            registry_id=str(registry_id),
            review_id=review_id,
            content=content,
            author=author,
            posted_at=posted_at,
            upvotes=0,
        )

    def upvote(self, voter):
        """Add one upvote. Anyone may vote, any number of times."""
        self.upvotes = self.upvotes + 1

        self.raise_(
            ReviewUpvoted(
                registry_id=str(self.registry_id),
                review_id=self.review_id,
                upvotes=self.upvotes,
                voter=str(voter),
                upvoted_at=datetime.now(UTC),
            )
        )

        return self.upvotes

    def details(self):
        """Return a plain snapshot of the review."""
        return {
            "review_id": self.review_id,
            "content": self.content or "",
            "upvotes": self.upvotes,
            "author": str(self.author),
            "posted_at": self.posted_at,
        }
