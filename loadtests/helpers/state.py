"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class RegistryState:
    """Tracks state for a single simulated registry lifecycle."""

    registry_id: str | None = None
    owner: str | None = None
    post_fee: int = 0
    review_ids: list[int] = field(default_factory=list)
    expected_balance: int = 0
    withdrawn: int = 0
