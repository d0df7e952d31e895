"""
Profile store interface.

The store is the only synchronization point for profile mutations: the
claim is a compare-and-swap on auth_user_id IS NULL, and email uniqueness
is enforced by the store itself, not by application-level check-then-act.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import NewProfile, PremiumGrant, Profile


@runtime_checkable
class IProfileStore(Protocol):
    """Key-based read/update/insert access to profile records."""

    def get_by_auth_user_id(self, auth_user_id: str) -> Optional[Profile]:
        """Get the profile linked to an authenticated identity."""
        ...

    def list_by_email(self, email: str) -> list[Profile]:
        """Get every profile (claimed or shadow) with a normalized email."""
        ...

    def find_shadow_by_email(self, email: str) -> Optional[Profile]:
        """Get the unclaimed profile for a normalized email, if any."""
        ...

    def insert(self, profile: NewProfile) -> Profile:
        """
        Insert a profile.

        Raises:
            DuplicateProfileError: If the store's uniqueness rules reject it
            StoreError: On any other persistence failure
        """
        ...

    def grant_premium_by_email(self, email: str, grant: PremiumGrant) -> list[Profile]:
        """
        Apply a premium grant to every profile with the email.

        Returns:
            The updated profiles (empty when none matched)
        """
        ...

    def grant_premium_by_auth_user_id(
        self,
        auth_user_id: str,
        grant: PremiumGrant,
    ) -> Optional[Profile]:
        """Apply a premium grant to the caller's own linked profile."""
        ...

    def claim_shadow(self, profile_id: str, auth_user_id: str) -> bool:
        """
        Link a shadow profile to an identity, only if still unclaimed.

        Returns:
            True if this call set auth_user_id, False if zero rows matched
            (already claimed, or the profile is gone)
        """
        ...

