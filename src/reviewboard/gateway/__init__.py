"""Payout gateway factory.

Provides get_gateway() / set_gateway() to swap implementations. The
FakePayoutGateway is the default for development and testing.
"""

from reviewboard.gateway.fake_adapter import FakePayoutGateway
from reviewboard.gateway.port import PayoutGateway

_current_gateway: PayoutGateway | None = None


def get_gateway() -> PayoutGateway:
    """Return the current payout gateway. Defaults to FakePayoutGateway."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = FakePayoutGateway()
    return _current_gateway


def set_gateway(gateway: PayoutGateway) -> None:
    """Override the active payout gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
