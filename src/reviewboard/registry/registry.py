"""Registry aggregate (CQRS) — the core of the Reviewboard domain.

A Registry gates posting behind a fee and holds the ledger of fees collected.
It numbers reviews 1, 2, 3, ... in posting order; the number is never reused
and 0 is never a valid review id. The reviews themselves live in their own
aggregate (see ``reviewboard.review``), so no operation here grows with the
number of reviews posted.

Only the owner may change the posting fee or withdraw the balance. Every
precondition is checked before the first mutation so a rejected operation
leaves the aggregate untouched.
"""

from datetime import UTC, datetime

import structlog
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer

from reviewboard.domain import reviewboard
from reviewboard.gateway.port import PayoutGateway
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
from reviewboard.review.review import Review

logger = structlog.get_logger(__name__)

# 0.0001 of a unit with 18 decimals, in base units
DEFAULT_POST_FEE = 10**14


@reviewboard.aggregate
class Registry:
    """A fee-gated review registry administered by its owner."""

    owner = Identifier(required=True)
    post_fee = Integer(default=DEFAULT_POST_FEE, min_value=0)

    # Last assigned review id, which is also the number of reviews
    review_count = Integer(default=0, min_value=0)

    balance = Integer(default=0, min_value=0)
    withdrawal_count = Integer(default=0, min_value=0)

    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def construct(cls, owner, post_fee=None):
        """Create a registry owned by the deploying principal."""
        now = datetime.now(UTC)
        fee = DEFAULT_POST_FEE if post_fee is None else post_fee

        registry = cls(
            owner=owner,
            post_fee=fee,
            review_count=0,
            balance=0,
            withdrawal_count=0,
            created_at=now,
            updated_at=now,
        )

        registry.raise_(
            RegistryCreated(
                registry_id=str(registry.id),
                owner=str(owner),
                post_fee=fee,
                created_at=now,
            )
        )

        return registry

    # -------------------------------------------------------------------
    # Guards
    # -------------------------------------------------------------------
    def _assert_owner(self, caller):
        if str(caller) != str(self.owner):
            raise Unauthorized(caller)

    def check_review_id(self, review_id):
        """Raise ReviewNotFound unless ``1 <= review_id <= review_count``."""
        if review_id is None or not 1 <= review_id <= self.review_count:
            raise ReviewNotFound(review_id)

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def update_post_fee(self, caller, new_fee):
        """Change the posting fee. Owner only."""
        self._assert_owner(caller)
        if new_fee is None or new_fee < 0:
            raise ValidationError({"new_fee": ["Posting fee cannot be negative"]})

        now = datetime.now(UTC)
        previous_fee = self.post_fee
        self.post_fee = new_fee
        self.updated_at = now

        self.raise_(
            PostFeeUpdated(
                registry_id=str(self.id),
                previous_fee=previous_fee,
                new_fee=new_fee,
                updated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Posting
    # -------------------------------------------------------------------
    def post_review(self, author, content, payment) -> Review:
        """Publish a review, capturing the whole payment.

        Overpayment is kept by the registry; no change is returned.
        Returns the new Review, which the caller persists together with
        the registry.
        """
        if payment is None or payment < self.post_fee:
            raise InsufficientPayment(payment, self.post_fee)

        now = datetime.now(UTC)
        review_id = self.review_count + 1

        review = Review.publish(
            registry_id=self.id,
            review_id=review_id,
            content=content,
            author=author,
            posted_at=now,
        )

        self.review_count = review_id
        self.balance = self.balance + payment
        self.updated_at = now

        self.raise_(
            ReviewPosted(
                registry_id=str(self.id),
                review_id=review_id,
                content=content,
                author=str(author),
                payment=payment,
                posted_at=now,
            )
        )

        return review

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def summary(self):
        return {
            "registry_id": str(self.id),
            "owner": str(self.owner),
            "post_fee": self.post_fee,
            "review_count": self.review_count,
            "balance": self.balance,
        }

    # -------------------------------------------------------------------
    # Withdrawal
    # -------------------------------------------------------------------
    def next_withdrawal_key(self) -> str:
        """Idempotency key of the next withdrawal.

        Derived from committed state only, so a withdrawal retried after a
        lost commit presents the same key and the gateway pays it once.
        """
        return f"withdrawal-{self.id}-{self.withdrawal_count + 1}"

    def withdraw_fees(self, caller, gateway: PayoutGateway) -> int:
        """Pay the whole balance out to the owner. Owner only.

        The balance is debited before the transfer is attempted and restored
        if the gateway does not deliver it. A zero balance is a successful
        no-op that never reaches the gateway.
        """
        self._assert_owner(caller)

        amount = self.balance
        if amount == 0:
            return 0

        self.balance = 0
        try:
            result = gateway.transfer(
                recipient=str(self.owner),
                amount=amount,
                idempotency_key=self.next_withdrawal_key(),
            )
        except Exception as exc:
            self.balance = amount
            raise TransferFailed(amount, str(exc)) from exc

        if not result.success:
            self.balance = amount
            logger.warning(
                "Payout rejected",
                registry_id=str(self.id),
                amount=amount,
                reason=result.failure_reason,
            )
            raise TransferFailed(amount, result.failure_reason or "Transfer rejected by recipient")

        now = datetime.now(UTC)
        self.withdrawal_count = self.withdrawal_count + 1
        self.updated_at = now

        self.raise_(
            FeesWithdrawn(
                registry_id=str(self.id),
                owner=str(self.owner),
                amount=amount,
                transfer_reference=result.transfer_reference,
                withdrawn_at=now,
            )
        )

        return amount
