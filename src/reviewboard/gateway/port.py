"""Payout gateway port (abstract interface).

Defines the contract every payout adapter implements, so withdrawals can move
funds through a fake gateway in development and tests and a real payment
rail in production without touching domain or application code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class TransferResult:
    """Result of a payout attempt."""

    success: bool
    transfer_reference: str | None = None
    failure_reason: str | None = None


class PayoutGateway(ABC):
    """Abstract payout gateway interface."""

    @abstractmethod
    def transfer(
        self,
        recipient: str,
        amount: int,
        idempotency_key: str,
    ) -> TransferResult:
        """Send ``amount`` base units to ``recipient``."""
        ...
