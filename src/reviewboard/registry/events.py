"""Domain events for the Registry aggregate.

All events are versioned, immutable facts representing state changes.
Projectors consume them to keep the read models current.
"""

from protean.fields import DateTime, Identifier, Integer, String, Text

from reviewboard.domain import reviewboard


@reviewboard.event(part_of="Registry")
class RegistryCreated:
    """A new review registry was constructed."""

    __version__ = 1

    registry_id = Identifier(required=True)
    owner = Identifier(required=True)
    post_fee = Integer(default=0)
    created_at = DateTime(required=True)


@reviewboard.event(part_of="Registry")
class PostFeeUpdated:
    """The owner changed the posting fee."""

    __version__ = 1

    registry_id = Identifier(required=True)
    previous_fee = Integer(default=0)
    new_fee = Integer(default=0)
    updated_at = DateTime(required=True)


@reviewboard.event(part_of="Registry")
class ReviewPosted:
    """A paid review was published."""

    __version__ = 1

    registry_id = Identifier(required=True)
    review_id = Integer(required=True)
    content = Text(sanitize=False)
    author = Identifier(required=True)
    payment = Integer(default=0)
    posted_at = DateTime(required=True)


@reviewboard.event(part_of="Registry")
class FeesWithdrawn:
    """The owner withdrew the collected fees."""

    __version__ = 1

    registry_id = Identifier(required=True)
    owner = Identifier(required=True)
    amount = Integer(required=True)
    transfer_reference = String(max_length=255)
    withdrawn_at = DateTime(required=True)
