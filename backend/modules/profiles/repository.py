"""
Profile repository for database access.

Encapsulates all Supabase queries against the profiles table. Email
uniqueness and the shadow-claim compare-and-swap are enforced by the
database (see migrations/001_profiles.sql); this class only issues the
conditional statements and maps rows to Profile models.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from supabase import Client

from shared.exceptions import StoreError
from shared.repository import BaseRepository
from .exceptions import DuplicateProfileError
from .models import NewProfile, PremiumGrant, Profile

logger = logging.getLogger(__name__)


class SupabaseProfileStore(BaseRepository[Profile]):
    """
    Profile store backed by a Supabase (PostgREST) table.

    Note: This repository does NOT perform authorization checks.
    The service layer decides whose profile may be touched.
    """

    def __init__(self, db: Client, table: str = "profiles") -> None:
        super().__init__(db)
        self._table = table

    def _query(self):
        return self._db.table(self._table)

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_by_auth_user_id(self, auth_user_id: str) -> Optional[Profile]:
        result = self._execute(
            "get_by_auth_user_id",
            lambda: self._query()
            .select("*")
            .eq("auth_user_id", auth_user_id)
            .limit(1)
            .execute(),
        )
        if not result.data:
            return None
        return Profile.from_row(result.data[0])

    def list_by_email(self, email: str) -> list[Profile]:
        result = self._execute(
            "list_by_email",
            lambda: self._query().select("*").eq("email", email).execute(),
        )
        return [Profile.from_row(row) for row in result.data]

    def find_shadow_by_email(self, email: str) -> Optional[Profile]:
        result = self._execute(
            "find_shadow_by_email",
            lambda: self._query()
            .select("*")
            .eq("email", email)
            .is_("auth_user_id", "null")
            .limit(1)
            .execute(),
        )
        if not result.data:
            return None
        return Profile.from_row(result.data[0])

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(self, profile: NewProfile) -> Profile:
        try:
            result = self._execute(
                "insert",
                lambda: self._query().insert(profile.to_row()).execute(),
            )
        except StoreError as e:
            if self.is_unique_violation(e):
                raise DuplicateProfileError(profile.email) from e
            raise
        return Profile.from_row(result.data[0])

    def grant_premium_by_email(self, email: str, grant: PremiumGrant) -> list[Profile]:
        data = {**grant.to_row(), "updated_at": self._now()}
        result = self._execute(
            "grant_premium_by_email",
            lambda: self._query().update(data).eq("email", email).execute(),
        )
        return [Profile.from_row(row) for row in result.data]

    def grant_premium_by_auth_user_id(
        self,
        auth_user_id: str,
        grant: PremiumGrant,
    ) -> Optional[Profile]:
        data = {**grant.to_row(), "updated_at": self._now()}
        result = self._execute(
            "grant_premium_by_auth_user_id",
            lambda: self._query().update(data).eq("auth_user_id", auth_user_id).execute(),
        )
        if not result.data:
            return None
        return Profile.from_row(result.data[0])

    def claim_shadow(self, profile_id: str, auth_user_id: str) -> bool:
        # The IS NULL filter is evaluated by the database at write time, so
        # two concurrent claims cannot both match the row.
        result = self._execute(
            "claim_shadow",
            lambda: self._query()
            .update({"auth_user_id": auth_user_id, "updated_at": self._now()})
            .eq("id", profile_id)
            .is_("auth_user_id", "null")
            .execute(),
        )
        claimed = len(result.data) == 1
        if not claimed:
            logger.debug(f"Claim of profile {profile_id} matched no unclaimed row")
        return claimed
