"""Protean Engine runner for the Reviewboard domain.

Only needed when events are processed asynchronously (the production
overlay): the Engine runs the projectors that keep ReviewListing and
RegistryLedger current.

Usage:
    PROTEAN_ENV=production python src/server.py
"""

import asyncio

from protean.server.engine import Engine


def _get_domain():
    """Import and initialize the Reviewboard domain."""
    from reviewboard.domain import reviewboard

    reviewboard.init()
    return reviewboard


async def run():
    engine = Engine(_get_domain())
    await engine.run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
