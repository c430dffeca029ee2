"""Read-side queries answered from the Registry and Review aggregates.

The repository only hands out committed state, so a review is never seen
half-created.
"""

from protean.utils.globals import current_domain

from reviewboard.registry.registry import Registry
from reviewboard.review.review import Review, key_for


def get_review(registry_id, review_id) -> dict:
    """Return ``{review_id, content, upvotes, author, posted_at}``.

    Raises ReviewNotFound for ids outside ``[1, review_count]``.
    """
    registry = current_domain.repository_for(Registry).get(registry_id)
    registry.check_review_id(review_id)

    review = current_domain.repository_for(Review).get(key_for(registry_id, review_id))
    return review.details()


def get_registry(registry_id) -> dict:
    """Return the owner, posting fee, review count and balance of a registry."""
    registry = current_domain.repository_for(Registry).get(registry_id)
    return registry.summary()
