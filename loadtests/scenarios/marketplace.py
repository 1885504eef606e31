"""Marketplace load test scenarios.

A stateful SequentialTaskSet that walks one exchange from registration to
review, plus a read-heavy browsing user. Steps execute in order — each
depends on the previous step succeeding.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import member_data, post_data, review_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ExchangeState


def _as(member_id: str) -> dict:
    return {"X-Member-Id": member_id}


class ExchangeJourney(SequentialTaskSet):
    """Register x2 -> Create Post -> Interest -> Select -> Complete -> Review.

    Generates MemberRegistered (x2), PostCreated, InterestExpressed,
    MemberSelected, PostCompleted, ExchangeCredited, ReviewSubmitted and
    RatingRecalculated.
    """

    def on_start(self):
        self.state = ExchangeState()

    def _register(self):
        with self.client.post("/members", json=member_data(), catch_response=True, name="POST /members") as resp:
            if resp.status_code == 201:
                return resp.json()["member_id"]
            resp.failure(f"Registration failed: {resp.status_code} — {extract_error_detail(resp)}")
            self.interrupt()

    @task
    def register_members(self):
        self.state.author_id = self._register()
        self.state.helper_id = self._register()

    @task
    def create_post(self):
        with self.client.post(
            "/posts",
            json=post_data(),
            headers=_as(self.state.author_id),
            catch_response=True,
            name="POST /posts",
        ) as resp:
            if resp.status_code == 201:
                self.state.post_id = resp.json()["post_id"]
            else:
                resp.failure(f"Create post failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def express_interest(self):
        with self.client.post(
            f"/posts/{self.state.post_id}/interests",
            json={"message": "I can help with this"},
            headers=_as(self.state.helper_id),
            catch_response=True,
            name="POST /posts/{id}/interests",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Express interest failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def select_helper(self):
        with self.client.put(
            f"/posts/{self.state.post_id}/selection",
            json={"selected_member_id": self.state.helper_id},
            headers=_as(self.state.author_id),
            catch_response=True,
            name="PUT /posts/{id}/selection",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "in_progress"
            else:
                resp.failure(f"Selection failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def complete(self):
        with self.client.put(
            f"/posts/{self.state.post_id}/complete",
            headers=_as(self.state.author_id),
            catch_response=True,
            name="PUT /posts/{id}/complete",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "completed"
            else:
                resp.failure(f"Completion failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def review_helper(self):
        with self.client.post(
            "/reviews",
            json=review_data(self.state.post_id, self.state.helper_id),
            headers=_as(self.state.author_id),
            catch_response=True,
            name="POST /reviews",
        ) as resp:
            if resp.status_code == 201:
                self.state.review_id = resp.json()["review_id"]
            else:
                resp.failure(f"Review failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def check_reputation(self):
        self.client.get(f"/members/{self.state.helper_id}", name="GET /members/{id}")
        self.client.get(f"/members/{self.state.helper_id}/review-stats", name="GET /members/{id}/review-stats")

    @task
    def done(self):
        self.interrupt()


class BrowseJourney(SequentialTaskSet):
    """Create one post, then read it and its suggestions repeatedly."""

    def on_start(self):
        self.state = ExchangeState()
        resp = self.client.post("/members", json=member_data(), name="POST /members")
        self.state.author_id = resp.json().get("member_id") if resp.status_code == 201 else None
        if self.state.author_id:
            resp = self.client.post("/posts", json=post_data(), headers=_as(self.state.author_id), name="POST /posts")
            self.state.post_id = resp.json().get("post_id") if resp.status_code == 201 else None

    @task
    def read_post(self):
        if not self.state.post_id:
            self.interrupt()
        self.client.get(f"/posts/{self.state.post_id}", name="GET /posts/{id}")

    @task
    def read_suggestions(self):
        self.client.get(f"/posts/{self.state.post_id}/suggestions", name="GET /posts/{id}/suggestions")

    @task
    def done(self):
        self.interrupt()


class ExchangeUser(HttpUser):
    """Full exchange journeys with reviews."""

    wait_time = between(1, 3)
    tasks = [ExchangeJourney]


class BrowsingUser(HttpUser):
    """Read-heavy traffic against posts and suggestions."""

    wait_time = between(0.5, 2)
    tasks = [BrowseJourney]
