"""Tests for the Supabase-backed profile store, against a mocked client."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import httpx
import pytest
from postgrest.exceptions import APIError

from modules.profiles.exceptions import DuplicateProfileError
from modules.profiles.models import NewProfile, PremiumGrant
from modules.profiles.repository import SupabaseProfileStore
from shared.exceptions import StoreError

ROW = {
    "id": "p1",
    "auth_user_id": None,
    "email": "a@example.com",
    "is_premium": True,
    "premium_expires_at": "2030-01-01T00:00:00+00:00",
}


@pytest.fixture
def db():
    return MagicMock()


@pytest.fixture
def table(db):
    table = MagicMock()
    db.table.return_value = table
    return table


@pytest.fixture
def store(db):
    return SupabaseProfileStore(db, table="profiles")


class TestReads:
    def test_get_by_auth_user_id(self, store, db, table):
        query = table.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value.data = [{**ROW, "auth_user_id": "u1"}]

        profile = store.get_by_auth_user_id("u1")

        db.table.assert_called_with("profiles")
        table.select.return_value.eq.assert_called_once_with("auth_user_id", "u1")
        assert profile.auth_user_id == "u1"

    def test_get_by_auth_user_id_missing(self, store, table):
        table.select.return_value.eq.return_value.limit.return_value.execute.return_value.data = []
        assert store.get_by_auth_user_id("u1") is None

    def test_find_shadow_filters_null_link(self, store, table):
        eq = table.select.return_value.eq.return_value
        eq.is_.return_value.limit.return_value.execute.return_value.data = [ROW]

        profile = store.find_shadow_by_email("a@example.com")

        eq.is_.assert_called_once_with("auth_user_id", "null")
        assert profile.is_shadow

    def test_unreachable_database_is_store_error(self, store, table):
        query = table.select.return_value.eq.return_value.limit.return_value
        query.execute.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(StoreError) as exc_info:
            store.get_by_auth_user_id("u1")
        assert exc_info.value.operation == "get_by_auth_user_id"


class TestWrites:
    def test_insert_duplicate_maps_to_domain_error(self, store, table):
        table.insert.return_value.execute.side_effect = APIError(
            {"message": "duplicate key value violates unique constraint", "code": "23505"}
        )
        with pytest.raises(DuplicateProfileError):
            store.insert(NewProfile(email="a@example.com"))

    def test_insert_other_failure_is_store_error(self, store, table):
        table.insert.return_value.execute.side_effect = APIError(
            {"message": "relation does not exist", "code": "42P01"}
        )
        with pytest.raises(StoreError):
            store.insert(NewProfile(email="a@example.com"))

    def test_grant_by_email_updates_every_match(self, store, table):
        table.update.return_value.eq.return_value.execute.return_value.data = [
            ROW,
            {**ROW, "id": "p2", "auth_user_id": "u2"},
        ]
        grant = PremiumGrant(
            license_key="KEY",
            premium_expires_at=datetime(2030, 1, 1, tzinfo=timezone.utc),
        )

        updated = store.grant_premium_by_email("a@example.com", grant)

        data = table.update.call_args.args[0]
        assert data["is_premium"] is True
        assert data["license_key"] == "KEY"
        table.update.return_value.eq.assert_called_once_with("email", "a@example.com")
        assert [p.id for p in updated] == ["p1", "p2"]

    def test_claim_succeeds_when_one_row_matched(self, store, table):
        update = table.update.return_value.eq.return_value
        update.is_.return_value.execute.return_value.data = [{**ROW, "auth_user_id": "u1"}]

        assert store.claim_shadow("p1", "u1") is True
        table.update.return_value.eq.assert_called_once_with("id", "p1")
        update.is_.assert_called_once_with("auth_user_id", "null")

    def test_claim_fails_when_row_already_linked(self, store, table):
        table.update.return_value.eq.return_value.is_.return_value.execute.return_value.data = []
        assert store.claim_shadow("p1", "u1") is False
