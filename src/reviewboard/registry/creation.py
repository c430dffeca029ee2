"""CreateRegistry — construct a new review registry.

The calling principal becomes the owner. The returned registry id is the
handle every later operation refers to.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from reviewboard.domain import reviewboard
from reviewboard.registry.registry import Registry

logger = structlog.get_logger(__name__)


@reviewboard.command(part_of="Registry")
class CreateRegistry:
    caller = Identifier(required=True)
    post_fee = Integer(min_value=0)  # Optional: defaults to DEFAULT_POST_FEE


@reviewboard.command_handler(part_of=Registry)
class CreateRegistryHandler:
    @handle(CreateRegistry)
    def create_registry(self, command):
        registry = Registry.construct(owner=command.caller, post_fee=command.post_fee)
        current_domain.repository_for(Registry).add(registry)

        logger.info(
            "Registry created",
            registry_id=str(registry.id),
            owner=str(command.caller),
            post_fee=registry.post_fee,
        )
        return str(registry.id)
