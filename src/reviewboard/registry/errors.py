"""Registry error taxonomy.

Each error subclasses the Protean exception with the closest meaning, so
Protean's FastAPI exception handlers and callers catching the framework
exceptions keep working. Messages use Protean's ``{field: [messages]}`` shape.
"""

from protean.exceptions import (
    InvalidOperationError,
    InvalidStateError,
    ObjectNotFoundError,
    ValidationError,
)


class Unauthorized(InvalidOperationError):
    """The caller lacks the owner role required by the operation."""

    def __init__(self, caller):
        self.messages = {"caller": [f"Caller {caller} is not the registry owner"]}
        super().__init__(self.messages)
        self.caller = caller


class InsufficientPayment(ValidationError):
    """The payment attached to a posting is below the posting fee."""

    def __init__(self, payment, post_fee):
        self.messages = {"payment": [f"Insufficient payment to post review: got {payment}, fee is {post_fee}"]}
        super().__init__(self.messages)
        self.payment = payment
        self.post_fee = post_fee


class ReviewNotFound(ObjectNotFoundError):
    """The review id lies outside ``[1, review_count]``."""

    def __init__(self, review_id):
        self.messages = {"review_id": [f"Invalid review ID: {review_id}"]}
        super().__init__(self.messages)
        self.review_id = review_id


class TransferFailed(InvalidStateError):
    """The payout gateway did not deliver a withdrawal."""

    def __init__(self, amount, reason):
        self.messages = {"transfer": [f"Transfer of {amount} failed: {reason}"]}
        super().__init__(self.messages)
        self.amount = amount
        self.reason = reason
