"""FastAPI routes for the Reviewboard bounded context.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts). The calling principal arrives
in the ``X-Principal-Id`` header; authenticating it is the job of whatever
sits in front of this API.
"""

import os

from fastapi import APIRouter, Header, HTTPException

from reviewboard.api.schemas import (
    ConfigurePayoutsRequest,
    CreateRegistryRequest,
    PayoutConfigResponse,
    PostReviewRequest,
    RegistryIdResponse,
    RegistryResponse,
    ReviewIdResponse,
    ReviewResponse,
    StatusResponse,
    UpdatePostFeeRequest,
    UpvoteResponse,
    WithdrawalResponse,
)
from reviewboard.gateway import get_gateway
from reviewboard.gateway.fake_adapter import FakePayoutGateway
from reviewboard.registry.creation import CreateRegistry
from reviewboard.registry.dispatch import dispatch
from reviewboard.registry.fee import UpdatePostFee
from reviewboard.registry.posting import PostReview
from reviewboard.registry.queries import get_registry, get_review
from reviewboard.registry.withdrawal import WithdrawFees
from reviewboard.review.voting import UpvoteReview

registry_router = APIRouter(prefix="/registries", tags=["registries"])


# ---------------------------------------------------------------------------
# Payout gateway configuration
# ---------------------------------------------------------------------------
@registry_router.post("/payouts/configure", response_model=PayoutConfigResponse)
async def configure_payouts(body: ConfigurePayoutsRequest) -> PayoutConfigResponse:
    """Configure the FakePayoutGateway behavior (non-production only)."""
    if os.environ.get("PROTEAN_ENV") == "production":
        raise HTTPException(status_code=403, detail="Payout configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakePayoutGateway):
        raise HTTPException(status_code=400, detail="Payout configuration only available for FakePayoutGateway")

    gateway.configure(
        should_succeed=body.should_succeed,
        failure_reason=body.failure_reason,
    )
    return PayoutConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
    )


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------
@registry_router.post("", status_code=201, response_model=RegistryIdResponse)
async def create_registry(
    body: CreateRegistryRequest,
    x_principal_id: str = Header(),
) -> RegistryIdResponse:
    """Construct a registry owned by the caller."""
    command = CreateRegistry(caller=x_principal_id, post_fee=body.post_fee)
    registry_id = dispatch(command)
    return RegistryIdResponse(registry_id=registry_id)


@registry_router.get("/{registry_id}", response_model=RegistryResponse)
async def read_registry(registry_id: str) -> RegistryResponse:
    """Owner, posting fee, review count and balance."""
    return RegistryResponse(**get_registry(registry_id))


@registry_router.put("/{registry_id}/post-fee", response_model=StatusResponse)
async def update_post_fee(
    registry_id: str,
    body: UpdatePostFeeRequest,
    x_principal_id: str = Header(),
) -> StatusResponse:
    """Change the posting fee (owner only)."""
    command = UpdatePostFee(
        registry_id=registry_id,
        caller=x_principal_id,
        new_fee=body.new_fee,
    )
    dispatch(command)
    return StatusResponse()


@registry_router.post("/{registry_id}/withdrawals", response_model=WithdrawalResponse)
async def withdraw_fees(
    registry_id: str,
    x_principal_id: str = Header(),
) -> WithdrawalResponse:
    """Pay the collected balance out to the owner."""
    command = WithdrawFees(registry_id=registry_id, caller=x_principal_id)
    amount = dispatch(command)
    return WithdrawalResponse(amount=amount)


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@registry_router.post("/{registry_id}/reviews", status_code=201, response_model=ReviewIdResponse)
async def post_review(
    registry_id: str,
    body: PostReviewRequest,
    x_principal_id: str = Header(),
) -> ReviewIdResponse:
    """Publish a review, paying at least the posting fee."""
    command = PostReview(
        registry_id=registry_id,
        caller=x_principal_id,
        content=body.content,
        payment=body.payment,
    )
    review_id = dispatch(command)
    return ReviewIdResponse(review_id=review_id)


@registry_router.get("/{registry_id}/reviews/{review_id}", response_model=ReviewResponse)
async def read_review(registry_id: str, review_id: int) -> ReviewResponse:
    """Full data of one review."""
    return ReviewResponse(**get_review(registry_id, review_id))


@registry_router.post(
    "/{registry_id}/reviews/{review_id}/upvotes",
    status_code=201,
    response_model=UpvoteResponse,
)
async def upvote_review(
    registry_id: str,
    review_id: int,
    x_principal_id: str = Header(),
) -> UpvoteResponse:
    """Add one upvote to a review."""
    command = UpvoteReview(
        registry_id=registry_id,
        caller=x_principal_id,
        review_id=review_id,
    )
    upvotes = dispatch(command)
    return UpvoteResponse(review_id=review_id, upvotes=upvotes)
