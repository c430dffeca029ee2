"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that match the exact field names expected
by the API's Pydantic request schemas. Amounts are integer base units.
"""

import random
import uuid

from faker import Faker

fake = Faker()

DEFAULT_POST_FEE = 10**14


def principal_id() -> str:
    """Generate unique caller principals like 'lt-jane-a1b2c3d4'."""
    return f"lt-{fake.first_name().lower()}-{uuid.uuid4().hex[:8]}"


def principal_headers(principal: str) -> dict:
    return {"X-Principal-Id": principal}


def registry_data(post_fee: int | None = None) -> dict:
    """Generate a CreateRegistryRequest payload."""
    return {} if post_fee is None else {"post_fee": post_fee}


def review_data(post_fee: int = DEFAULT_POST_FEE, overpay: bool = False) -> dict:
    """Generate a PostReviewRequest payload that pays at least the fee.

    With ``overpay`` the payment is between one and three times the fee.
    """
    payment = post_fee * random.randint(1, 3) if overpay else post_fee
    return {
        "content": fake.paragraph(nb_sentences=random.randint(1, 5)),
        "payment": payment,
    }


def underpaid_review_data(post_fee: int = DEFAULT_POST_FEE) -> dict:
    """Generate a posting that must be rejected with 402."""
    return {
        "content": fake.sentence(),
        "payment": random.randint(0, max(post_fee - 1, 0)),
    }
