"""Stress test scenarios for per-registry serialization.

UpvoteFloodUser hammers a single review with upvotes so every request
contends for the same registry lock. PostingFloodUser creates a fresh
registry per posting to measure throughput without contention.
"""

from locust import HttpUser, constant_pacing, task

from loadtests.data_generators import (
    principal_headers,
    principal_id,
    registry_data,
    review_data,
)


class UpvoteFloodUser(HttpUser):
    """Stress test: maximum contention on one registry.

    Each user sets up its own registry with one review, then upvotes it
    as fast as pacing allows. The final upvote count read back must equal
    the number of successful upvotes.
    """

    wait_time = constant_pacing(0.1)  # ~10 requests/sec per user

    def on_start(self):
        owner = principal_id()
        resp = self.client.post(
            "/registries",
            json=registry_data(post_fee=1),
            headers=principal_headers(owner),
            name="[STRESS] POST /registries",
        )
        self.registry_id = resp.json()["registry_id"]
        self.client.post(
            f"/registries/{self.registry_id}/reviews",
            json=review_data(post_fee=1),
            headers=principal_headers(owner),
            name="[STRESS] POST /registries/{id}/reviews",
        )
        self.upvotes = 0

    @task(10)
    def upvote(self):
        """1 event: ReviewUpvoted."""
        resp = self.client.post(
            f"/registries/{self.registry_id}/reviews/1/upvotes",
            headers=principal_headers(principal_id()),
            name="[STRESS] POST /registries/{id}/reviews/1/upvotes",
        )
        if resp.status_code == 201:
            self.upvotes += 1

    @task(1)
    def verify_count(self):
        with self.client.get(
            f"/registries/{self.registry_id}/reviews/1",
            catch_response=True,
            name="[STRESS] GET /registries/{id}/reviews/1",
        ) as resp:
            if resp.status_code == 200 and resp.json()["upvotes"] < self.upvotes:
                resp.failure(f"Lost upvotes: {resp.json()['upvotes']} < {self.upvotes}")


class PostingFloodUser(HttpUser):
    """Stress test: posting throughput across independent registries."""

    wait_time = constant_pacing(0.2)

    @task
    def create_and_post(self):
        """2 events: RegistryCreated, ReviewPosted."""
        owner = principal_id()
        resp = self.client.post(
            "/registries",
            json=registry_data(post_fee=1),
            headers=principal_headers(owner),
            name="[STRESS] POST /registries",
        )
        if resp.status_code != 201:
            return
        self.client.post(
            f"/registries/{resp.json()['registry_id']}/reviews",
            json=review_data(post_fee=1),
            headers=principal_headers(principal_id()),
            name="[STRESS] POST /registries/{id}/reviews",
        )
