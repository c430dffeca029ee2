import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def reviewboard_bed():
    from reviewboard.domain import reviewboard

    bed = DomainFixture(reviewboard)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(reviewboard_bed):
    with reviewboard_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def registry():
    """A freshly constructed registry owned by "owner" with the default fee."""
    from reviewboard.registry.registry import Registry

    registry = Registry.construct(owner="owner")
    registry._events.clear()
    return registry
