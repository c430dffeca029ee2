"""RegistryLedger — fee collection and withdrawal totals per registry."""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, Integer
from protean.utils.globals import current_domain

from reviewboard.domain import reviewboard
from reviewboard.registry.events import (
    FeesWithdrawn,
    PostFeeUpdated,
    RegistryCreated,
    ReviewPosted,
)
from reviewboard.registry.registry import Registry


@reviewboard.projection
class RegistryLedger:
    registry_id = Identifier(identifier=True, required=True)
    owner = Identifier(required=True)
    post_fee = Integer(default=0)
    review_count = Integer(default=0)
    balance = Integer(default=0)
    total_collected = Integer(default=0)
    total_withdrawn = Integer(default=0)
    withdrawal_count = Integer(default=0)
    created_at = DateTime()
    last_withdrawn_at = DateTime()


@reviewboard.projector(projector_for=RegistryLedger, aggregates=[Registry])
class RegistryLedgerProjector:
    @on(RegistryCreated)
    def on_registry_created(self, event):
        current_domain.repository_for(RegistryLedger).add(
            RegistryLedger(
                registry_id=event.registry_id,
                owner=event.owner,
                post_fee=event.post_fee,
                review_count=0,
                balance=0,
                total_collected=0,
                total_withdrawn=0,
                withdrawal_count=0,
                created_at=event.created_at,
            )
        )

    @on(PostFeeUpdated)
    def on_post_fee_updated(self, event):
        repo = current_domain.repository_for(RegistryLedger)
        try:
            ledger = repo.get(event.registry_id)
        except ObjectNotFoundError:
            return
        ledger.post_fee = event.new_fee
        repo.add(ledger)

    @on(ReviewPosted)
    def on_review_posted(self, event):
        repo = current_domain.repository_for(RegistryLedger)
        try:
            ledger = repo.get(event.registry_id)
        except ObjectNotFoundError:
            return
        ledger.review_count = max(ledger.review_count or 0, event.review_id)
        ledger.balance = (ledger.balance or 0) + event.payment
        ledger.total_collected = (ledger.total_collected or 0) + event.payment
        repo.add(ledger)

    @on(FeesWithdrawn)
    def on_fees_withdrawn(self, event):
        repo = current_domain.repository_for(RegistryLedger)
        try:
            ledger = repo.get(event.registry_id)
        except ObjectNotFoundError:
            return
        ledger.balance = (ledger.balance or 0) - event.amount
        ledger.total_withdrawn = (ledger.total_withdrawn or 0) + event.amount
        ledger.withdrawal_count = (ledger.withdrawal_count or 0) + 1
        ledger.last_withdrawn_at = event.withdrawn_at
        repo.add(ledger)
