"""Integration tests for Member API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from marketplace.api import member_router, post_router, register_error_handlers, review_router


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(member_router)
    app.include_router(post_router)
    app.include_router(review_router)
    register_error_handlers(app)
    return TestClient(app)


def _register(client, **overrides):
    payload = {
        "name": "Kabir Shah",
        "email": "kabir@example.com",
        "skills": ["Photography"],
        "location": "Mumbai",
    }
    payload.update(overrides)
    response = client.post("/members", json=payload)
    assert response.status_code == 201
    return response.json()["member_id"]


class TestRegisterMemberAPI:
    def test_register_returns_201(self, client):
        response = client.post(
            "/members",
            json={"name": "Kabir Shah", "email": "kabir@example.com", "skills": ["Photography"]},
        )
        assert response.status_code == 201
        assert "member_id" in response.json()

    def test_duplicate_email_returns_409(self, client):
        _register(client)
        response = client.post("/members", json={"name": "Other", "email": "KABIR@example.com"})
        assert response.status_code == 409
        assert response.json()["error"]["kind"] == "conflict"

    def test_invalid_email_returns_400(self, client):
        response = client.post("/members", json={"name": "Kabir", "email": "not-an-email"})
        assert response.status_code == 400
        body = response.json()["error"]
        assert body["kind"] == "validation"
        assert "email" in body["messages"]


class TestGetMemberAPI:
    def test_profile_includes_reputation(self, client):
        member_id = _register(client)
        response = client.get(f"/members/{member_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "kabir@example.com"
        assert data["rating"] == 0.0
        assert data["total_ratings"] == 0
        assert data["completed_exchanges"] == 0
        assert data["badges"] == ["newbie"]

    def test_unknown_member_returns_404(self, client):
        response = client.get("/members/nobody")
        assert response.status_code == 404
        assert response.json()["error"]["kind"] == "not_found"

    def test_review_stats_default_to_empty(self, client):
        member_id = _register(client)
        response = client.get(f"/members/{member_id}/review-stats")
        assert response.status_code == 200
        data = response.json()
        assert data["total_reviews"] == 0
        assert data["rating_distribution"] == {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0}

    def test_activity_stats_for_new_member(self, client):
        member_id = _register(client)
        response = client.get(f"/members/{member_id}/stats")
        assert response.status_code == 200
        data = response.json()
        assert data["posts_created"] == 0
        assert data["posts_completed"] == 0
        assert data["completion_rate"] == 0
        assert data["average_rating"] == 0.0

    def test_activity_stats_count_completed_exchange(self, client, register, complete_exchange):
        author = register()
        helper = register()
        complete_exchange(author, helper)

        data = client.get(f"/members/{author}/stats").json()
        assert data["posts_created"] == 1
        assert data["posts_completed"] == 0

        data = client.get(f"/members/{helper}/stats").json()
        assert data["posts_completed"] == 1

    def test_activity_stats_unknown_member_returns_404(self, client):
        response = client.get("/members/nobody/stats")
        assert response.status_code == 404

    def test_reviews_list_empty(self, client):
        member_id = _register(client)
        response = client.get(f"/members/{member_id}/reviews")
        assert response.status_code == 200
        assert response.json()["reviews"] == []
        assert response.json()["total"] == 0

    def test_reviews_list_rejects_bad_page(self, client):
        member_id = _register(client)
        response = client.get(f"/members/{member_id}/reviews", params={"page": 0})
        assert response.status_code == 400
