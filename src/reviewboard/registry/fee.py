"""UpdatePostFee — the owner changes the posting fee.

Later postings are validated against the new fee.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from reviewboard.domain import reviewboard
from reviewboard.registry.registry import Registry

logger = structlog.get_logger(__name__)


@reviewboard.command(part_of="Registry")
class UpdatePostFee:
    registry_id = Identifier(required=True)
    caller = Identifier(required=True)
    new_fee = Integer(min_value=0)


@reviewboard.command_handler(part_of=Registry)
class UpdatePostFeeHandler:
    @handle(UpdatePostFee)
    def update_post_fee(self, command):
        repo = current_domain.repository_for(Registry)
        registry = repo.get(command.registry_id)

        registry.update_post_fee(caller=command.caller, new_fee=command.new_fee)

        repo.add(registry)
        logger.info("Posting fee updated", registry_id=str(command.registry_id), new_fee=command.new_fee)
