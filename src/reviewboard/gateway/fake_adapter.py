"""Configurable fake payout gateway for development and testing.

Simulates a payout rail without any external calls. It can be told at
runtime to reject transfers, the way a recipient account might refuse
incoming funds, and it keeps the running total delivered to each recipient.
Like a real rail it honours idempotency keys: a key that already paid out
returns the original result without moving funds again.
"""

from collections import defaultdict
from uuid import uuid4

from reviewboard.gateway.port import PayoutGateway, TransferResult


class FakePayoutGateway(PayoutGateway):
    """Configurable fake payout gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Recipient rejected funds"
        self.calls: list[dict] = []
        self.delivered: dict[str, int] = defaultdict(int)
        self._completed: dict[str, TransferResult] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Recipient rejected funds") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def transfer(
        self,
        recipient: str,
        amount: int,
        idempotency_key: str,
    ) -> TransferResult:
        call = {
            "method": "transfer",
            "recipient": recipient,
            "amount": amount,
            "idempotency_key": idempotency_key,
        }
        self.calls.append(call)

        if idempotency_key in self._completed:
            return self._completed[idempotency_key]

        if self.should_succeed:
            self.delivered[recipient] += amount
            result = TransferResult(
                success=True,
                transfer_reference=f"fake_payout_{uuid4().hex[:12]}",
            )
            self._completed[idempotency_key] = result
            return result
        return TransferResult(
            success=False,
            failure_reason=self.failure_reason,
        )
