"""WithdrawFees — pay the collected balance out to the owner.

The payout goes through the active payout gateway. A rejected transfer
raises TransferFailed; the unit of work is then discarded and the stored
balance stays as it was.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from reviewboard.domain import reviewboard
from reviewboard.gateway import get_gateway
from reviewboard.registry.registry import Registry

logger = structlog.get_logger(__name__)


@reviewboard.command(part_of="Registry")
class WithdrawFees:
    registry_id = Identifier(required=True)
    caller = Identifier(required=True)


@reviewboard.command_handler(part_of=Registry)
class WithdrawFeesHandler:
    @handle(WithdrawFees)
    def withdraw_fees(self, command):
        repo = current_domain.repository_for(Registry)
        registry = repo.get(command.registry_id)

        amount = registry.withdraw_fees(caller=command.caller, gateway=get_gateway())

        repo.add(registry)
        logger.info("Fees withdrawn", registry_id=str(command.registry_id), amount=amount)
        return amount
