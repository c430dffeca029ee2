"""Registry load test scenarios.

Stateful SequentialTaskSet journeys covering the owner's administration
cycle and the reviewer's post/upvote/read cycle. Steps execute in order —
each depends on the previous step succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    principal_headers,
    principal_id,
    registry_data,
    review_data,
    underpaid_review_data,
)
from loadtests.helpers.state import RegistryState


class _RegistryJourney(SequentialTaskSet):
    def on_start(self):
        self.state = RegistryState(owner=principal_id())

    def _create_registry(self, post_fee=None):
        with self.client.post(
            "/registries",
            json=registry_data(post_fee),
            headers=principal_headers(self.state.owner),
            catch_response=True,
            name="POST /registries",
        ) as resp:
            if resp.status_code == 201:
                self.state.registry_id = resp.json()["registry_id"]
                self.state.post_fee = post_fee if post_fee is not None else self._read_fee()
            else:
                resp.failure(f"Create registry failed: {resp.status_code}")
                self.interrupt()

    def _read_fee(self):
        resp = self.client.get(
            f"/registries/{self.state.registry_id}",
            name="GET /registries/{id}",
        )
        return resp.json()["post_fee"]

    def _post_review(self, overpay=False):
        payload = review_data(self.state.post_fee, overpay=overpay)
        with self.client.post(
            f"/registries/{self.state.registry_id}/reviews",
            json=payload,
            headers=principal_headers(principal_id()),
            catch_response=True,
            name="POST /registries/{id}/reviews",
        ) as resp:
            if resp.status_code == 201:
                self.state.review_ids.append(resp.json()["review_id"])
                self.state.expected_balance += payload["payment"]
            else:
                resp.failure(f"Post review failed: {resp.status_code}")


class ReviewerJourney(_RegistryJourney):
    """Create Registry -> Post x3 -> Upvote -> Read -> Underpay.

    Generates 5 events: RegistryCreated, ReviewPosted (x3), ReviewUpvoted.
    The final underpaid posting is expected to be refused with 402.
    """

    @task
    def create_registry(self):
        self._create_registry()

    @task
    def post_first_review(self):
        self._post_review()

    @task
    def post_second_review(self):
        self._post_review(overpay=True)

    @task
    def post_third_review(self):
        self._post_review()

    @task
    def upvote_review(self):
        review_id = random.choice(self.state.review_ids)
        with self.client.post(
            f"/registries/{self.state.registry_id}/reviews/{review_id}/upvotes",
            headers=principal_headers(principal_id()),
            catch_response=True,
            name="POST /registries/{id}/reviews/{review_id}/upvotes",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Upvote failed: {resp.status_code}")

    @task
    def read_review(self):
        review_id = random.choice(self.state.review_ids)
        with self.client.get(
            f"/registries/{self.state.registry_id}/reviews/{review_id}",
            catch_response=True,
            name="GET /registries/{id}/reviews/{review_id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Read review failed: {resp.status_code}")

    @task
    def underpay(self):
        with self.client.post(
            f"/registries/{self.state.registry_id}/reviews",
            json=underpaid_review_data(self.state.post_fee),
            headers=principal_headers(principal_id()),
            catch_response=True,
            name="POST /registries/{id}/reviews [underpaid]",
        ) as resp:
            if resp.status_code == 402:
                resp.success()
            else:
                resp.failure(f"Underpaid posting not refused: {resp.status_code}")

    @task
    def stop(self):
        self.interrupt()


class OwnerJourney(_RegistryJourney):
    """Create Registry -> Raise Fee -> Post x2 -> Withdraw -> Verify.

    Generates 5 events: RegistryCreated, PostFeeUpdated, ReviewPosted (x2),
    FeesWithdrawn.
    """

    @task
    def create_registry(self):
        self._create_registry(post_fee=random.randint(1, 1000))

    @task
    def raise_fee(self):
        new_fee = self.state.post_fee * 2
        with self.client.put(
            f"/registries/{self.state.registry_id}/post-fee",
            json={"new_fee": new_fee},
            headers=principal_headers(self.state.owner),
            catch_response=True,
            name="PUT /registries/{id}/post-fee",
        ) as resp:
            if resp.status_code == 200:
                self.state.post_fee = new_fee
            else:
                resp.failure(f"Update fee failed: {resp.status_code}")

    @task
    def post_first_review(self):
        self._post_review()

    @task
    def post_second_review(self):
        self._post_review(overpay=True)

    @task
    def withdraw(self):
        with self.client.post(
            f"/registries/{self.state.registry_id}/withdrawals",
            headers=principal_headers(self.state.owner),
            catch_response=True,
            name="POST /registries/{id}/withdrawals",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Withdraw failed: {resp.status_code}")
                return
            amount = resp.json()["amount"]
            if amount != self.state.expected_balance:
                resp.failure(f"Withdrew {amount}, expected {self.state.expected_balance}")
            self.state.withdrawn += amount
            self.state.expected_balance = 0

    @task
    def verify_empty_balance(self):
        with self.client.get(
            f"/registries/{self.state.registry_id}",
            catch_response=True,
            name="GET /registries/{id}",
        ) as resp:
            if resp.status_code != 200 or resp.json()["balance"] != 0:
                resp.failure("Balance not zero after withdrawal")

    @task
    def stop(self):
        self.interrupt()


class RegistryUser(HttpUser):
    """Locust user running registry journeys.

    Weight distribution: 75% reviewers, 25% owners.
    """

    wait_time = between(0.5, 2.0)
    tasks = {
        ReviewerJourney: 3,
        OwnerJourney: 1,
    }
