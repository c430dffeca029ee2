"""Serialized dispatch — per-registry locking and the command log context."""

import threading
from concurrent.futures import ThreadPoolExecutor

import structlog
from reviewboard.domain import reviewboard
from reviewboard.gateway import set_gateway
from reviewboard.gateway.fake_adapter import FakePayoutGateway
from reviewboard.registry.creation import CreateRegistry
from reviewboard.registry.dispatch import dispatch, lock_for, serialized
from reviewboard.registry.posting import PostReview
from reviewboard.registry.queries import get_registry, get_review
from reviewboard.registry.registry import DEFAULT_POST_FEE
from reviewboard.registry.withdrawal import WithdrawFees
from reviewboard.review.voting import UpvoteReview
from reviewboard.utils.logging import add_service_name


class TestLocks:
    def test_same_registry_shares_lock(self):
        assert lock_for("registry-a") is lock_for("registry-a")

    def test_different_registries_have_different_locks(self):
        assert lock_for("registry-a") is not lock_for("registry-b")

    def test_serialized_excludes_other_threads(self):
        entered = threading.Event()
        acquired_elsewhere = []

        def _contender():
            acquired_elsewhere.append(lock_for("registry-c").acquire(blocking=False))

        with serialized("registry-c"):
            entered.set()
            worker = threading.Thread(target=_contender)
            worker.start()
            worker.join()

        assert entered.is_set()
        assert acquired_elsewhere == [False]

    def test_serialized_is_reentrant(self):
        with serialized("registry-d"):
            with serialized("registry-d"):
                pass


class TestConcurrentCommands:
    def test_parallel_upvotes_are_all_counted(self):
        registry_id = dispatch(CreateRegistry(caller="owner"))
        dispatch(PostReview(registry_id=registry_id, caller="alice", content="popular", payment=DEFAULT_POST_FEE))

        def _upvote(n):
            with reviewboard.domain_context():
                return dispatch(UpvoteReview(registry_id=registry_id, caller=f"voter-{n}", review_id=1))

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(_upvote, range(40)))

        assert sorted(results) == list(range(1, 41))
        assert get_review(registry_id, 1)["upvotes"] == 40

    def test_parallel_postings_get_distinct_ids(self):
        registry_id = dispatch(CreateRegistry(caller="owner"))

        def _post(n):
            with reviewboard.domain_context():
                return dispatch(
                    PostReview(
                        registry_id=registry_id,
                        caller=f"author-{n}",
                        content=f"review {n}",
                        payment=DEFAULT_POST_FEE,
                    )
                )

        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(_post, range(25)))

        assert sorted(ids) == list(range(1, 26))
        summary = get_registry(registry_id)
        assert summary["review_count"] == 25
        assert summary["balance"] == 25 * DEFAULT_POST_FEE


class _ContextRecordingGateway(FakePayoutGateway):
    def transfer(self, recipient, amount, idempotency_key):
        self.seen_context = structlog.contextvars.get_contextvars()
        return super().transfer(recipient, amount, idempotency_key)


class TestCommandLogContext:
    def test_command_and_registry_bound_while_handling(self):
        gateway = _ContextRecordingGateway()
        set_gateway(gateway)

        registry_id = dispatch(CreateRegistry(caller="owner", post_fee=1))
        dispatch(PostReview(registry_id=registry_id, caller="alice", content="paid", payment=1))
        dispatch(WithdrawFees(registry_id=registry_id, caller="owner"))

        assert gateway.seen_context["command"] == "WithdrawFees"
        assert gateway.seen_context["registry_id"] == registry_id

    def test_context_released_after_command(self):
        dispatch(CreateRegistry(caller="owner"))
        context = structlog.contextvars.get_contextvars()
        assert "command" not in context
        assert "registry_id" not in context

    def test_entries_tagged_with_service(self):
        event_dict = add_service_name(None, "info", {"event": "Review posted"})
        assert event_dict["service"] == "reviewboard"
