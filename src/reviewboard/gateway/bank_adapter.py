"""Bank transfer payout adapter (production stub).

This is a placeholder for the real payout provider integration.
In production, this would call the provider's transfer API with the
idempotency key so a retried withdrawal is never paid twice.
"""

from reviewboard.gateway.port import PayoutGateway, TransferResult


class BankTransferGateway(PayoutGateway):
    """Production payout adapter. Not yet implemented."""

    def __init__(self, api_key: str, account_id: str) -> None:
        self.api_key = api_key
        self.account_id = account_id

    def transfer(
        self,
        recipient: str,
        amount: int,
        idempotency_key: str,
    ) -> TransferResult:
        raise NotImplementedError(
            "BankTransferGateway.transfer() is not yet implemented. Integrate the payout provider's SDK here."
        )
