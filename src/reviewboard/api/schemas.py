"""Pydantic request/response schemas for the Reviewboard API.

These are separate from Protean commands (anti-corruption pattern).
The API layer is the external contract; commands are internal domain concepts.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class CreateRegistryRequest(BaseModel):
    post_fee: int | None = Field(default=None, ge=0)


class UpdatePostFeeRequest(BaseModel):
    new_fee: int = Field(ge=0)


class PostReviewRequest(BaseModel):
    content: str
    payment: int = Field(default=0, ge=0)


class ConfigurePayoutsRequest(BaseModel):
    should_succeed: bool
    failure_reason: str = "Recipient rejected funds"


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class RegistryIdResponse(BaseModel):
    registry_id: str


class RegistryResponse(BaseModel):
    registry_id: str
    owner: str
    post_fee: int
    review_count: int
    balance: int


class ReviewIdResponse(BaseModel):
    review_id: int


class ReviewResponse(BaseModel):
    review_id: int
    content: str
    upvotes: int
    author: str
    posted_at: datetime | None = None


class UpvoteResponse(BaseModel):
    review_id: int
    upvotes: int


class WithdrawalResponse(BaseModel):
    amount: int


class PayoutConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str


class StatusResponse(BaseModel):
    status: str = "ok"
