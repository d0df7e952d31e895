"""Tests for the /api/profile endpoints."""

from modules.profiles.models import NewProfile
from tests.factories import bearer, create_test_token


class TestClaim:
    def test_claims_shadow(self, client, store, auth_headers):
        shadow = store.insert(NewProfile(email="test@example.com", is_premium=True))

        response = client.post("/api/profile/claim", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "claimed": True}
        assert store.get_by_id(shadow.id).auth_user_id == "test-user-123"

    def test_nothing_to_claim(self, client, auth_headers):
        response = client.post("/api/profile/claim", headers=auth_headers)
        assert response.json() == {"success": True, "claimed": False}

    def test_token_without_email(self, client):
        response = client.post("/api/profile/claim", headers=bearer(create_test_token(email=None)))
        assert response.status_code == 401
        assert response.json()["error"] == "MISSING_IDENTITY_EMAIL"

    def test_unconfirmed_email(self, client, store):
        store.insert(NewProfile(email="test@example.com"))
        response = client.post(
            "/api/profile/claim",
            headers=bearer(create_test_token(email_verified=False)),
        )
        assert response.status_code == 401
        assert response.json()["error"] == "EMAIL_NOT_CONFIRMED"
        assert store.profiles[0].is_shadow

    def test_preflight(self, client):
        response = client.options("/api/profile/claim")
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"


class TestRegister:
    def test_creates_profile(self, client, store, auth_headers):
        response = client.post("/api/profile", json={"full_name": "Reader"}, headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["outcome"] == "created"
        assert body["created"] is True
        assert body["claimed"] is False
        assert body["profile"]["full_name"] == "Reader"

    def test_without_body(self, client, auth_headers):
        response = client.post("/api/profile", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["outcome"] == "created"

    def test_claims_purchase_profile(self, client, store, auth_headers):
        store.insert(NewProfile(email="test@example.com", is_premium=True))
        body = client.post("/api/profile", json={}, headers=auth_headers).json()
        assert body["claimed"] is True
        assert body["profile"]["is_premium"] is True
        assert len(store.profiles) == 1


class TestMe:
    def test_free_profile(self, client, store, auth_headers):
        store.insert(NewProfile(auth_user_id="test-user-123", email="test@example.com"))
        body = client.get("/api/profile/me", headers=auth_headers).json()
        assert body["entitlement"]["entitled"] is False
        assert body["entitlement"]["reason"] == "free"
        assert body["degraded"] is False

    def test_admin_allowlist(self, client, store):
        token = create_test_token(user_id="admin-1", email="admin@example.com")
        store.insert(NewProfile(auth_user_id="admin-1", email="admin@example.com"))
        body = client.get("/api/profile/me", headers=bearer(token)).json()
        assert body["entitlement"]["reason"] == "admin"
        assert body["entitlement"]["entitled"] is True
