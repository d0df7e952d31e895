"""
In-memory profile store.

For tests and local development. Enforces the same rules the database
does: one profile per email, one profile per identity, and an atomic
compare-and-swap for claims.
"""

import threading
import uuid
from datetime import datetime, timezone
from typing import Optional

from .exceptions import DuplicateProfileError
from .models import NewProfile, PremiumGrant, Profile


class InMemoryProfileStore:
    """Thread-safe dict-backed implementation of IProfileStore."""

    def __init__(self, profiles: Optional[list[Profile]] = None):
        self._lock = threading.Lock()
        self._rows: dict[str, Profile] = {}
        for profile in profiles or []:
            self._rows[profile.id] = profile

    @property
    def profiles(self) -> list[Profile]:
        """Snapshot of every stored profile."""
        with self._lock:
            return list(self._rows.values())

    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        with self._lock:
            return self._rows.get(profile_id)

    def get_by_auth_user_id(self, auth_user_id: str) -> Optional[Profile]:
        with self._lock:
            for profile in self._rows.values():
                if profile.auth_user_id == auth_user_id:
                    return profile
        return None

    def list_by_email(self, email: str) -> list[Profile]:
        with self._lock:
            return [p for p in self._rows.values() if p.email == email]

    def find_shadow_by_email(self, email: str) -> Optional[Profile]:
        with self._lock:
            for profile in self._rows.values():
                if profile.email == email and profile.is_shadow:
                    return profile
        return None

    def insert(self, profile: NewProfile) -> Profile:
        now = datetime.now(timezone.utc)
        with self._lock:
            for existing in self._rows.values():
                if existing.email == profile.email:
                    raise DuplicateProfileError(profile.email)
                if profile.auth_user_id and existing.auth_user_id == profile.auth_user_id:
                    raise DuplicateProfileError(profile.email)
            row = Profile(
                id=str(uuid.uuid4()),
                created_at=now,
                updated_at=now,
                **profile.model_dump(),
            )
            self._rows[row.id] = row
            return row

    def grant_premium_by_email(self, email: str, grant: PremiumGrant) -> list[Profile]:
        update = {
            "is_premium": True,
            "license_key": grant.license_key,
            "premium_expires_at": grant.premium_expires_at,
            "updated_at": datetime.now(timezone.utc),
        }
        with self._lock:
            updated = []
            for profile_id, profile in self._rows.items():
                if profile.email == email:
                    self._rows[profile_id] = profile.model_copy(update=update)
                    updated.append(self._rows[profile_id])
            return updated

    def grant_premium_by_auth_user_id(
        self,
        auth_user_id: str,
        grant: PremiumGrant,
    ) -> Optional[Profile]:
        update = {
            "is_premium": True,
            "license_key": grant.license_key,
            "premium_expires_at": grant.premium_expires_at,
            "updated_at": datetime.now(timezone.utc),
        }
        with self._lock:
            for profile_id, profile in self._rows.items():
                if profile.auth_user_id == auth_user_id:
                    self._rows[profile_id] = profile.model_copy(update=update)
                    return self._rows[profile_id]
        return None

    def claim_shadow(self, profile_id: str, auth_user_id: str) -> bool:
        with self._lock:
            profile = self._rows.get(profile_id)
            if profile is None or not profile.is_shadow:
                return False
            self._rows[profile_id] = profile.model_copy(
                update={
                    "auth_user_id": auth_user_id,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            return True
