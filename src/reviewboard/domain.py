"""Reviewboard bounded context — fee-gated review registries.

Anyone may publish a review by paying the posting fee and anyone may upvote
an existing review. The registry owner adjusts the fee and withdraws the
collected funds through the payout gateway.
"""

from protean.domain import Domain

from reviewboard.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
reviewboard = Domain(name="reviewboard")
