"""
Identity module interface.

Linking a purchase to an account is a two-step protocol that callers can
drive (and tests can exercise) step by step:

1. resolve_identity: is a profile already linked to this identity?
2. claim_shadow: if not, link the shadow profile for the verified email
   (compare-and-swap on auth_user_id IS NULL), then re-read.

resolve_profile runs both steps.
"""

from typing import Protocol, Optional, runtime_checkable

from modules.profiles.models import Profile
from shared.models import AuthenticatedUser
from .models import ClaimResult, RegistrationResult, ResolvedSession


@runtime_checkable
class IIdentityService(Protocol):
    """Identity reconciliation between purchases and accounts."""

    async def resolve_identity(self, user: AuthenticatedUser) -> Optional[Profile]:
        """Get the profile already linked to the caller, if any."""
        ...

    async def claim_shadow(self, user: AuthenticatedUser) -> ClaimResult:
        """
        Link the shadow profile matching the caller's verified email.

        Raises:
            MissingIdentityEmailError: If the credential carries no email
            UnverifiedEmailError: If confirmation is required and missing
            StoreError: On persistence failure
        """
        ...

    async def resolve_profile(self, user: AuthenticatedUser) -> Optional[Profile]:
        """Resolve, claiming a shadow profile when nothing is linked yet."""
        ...

    async def register_profile(
        self,
        user: AuthenticatedUser,
        full_name: Optional[str] = None,
    ) -> RegistrationResult:
        """Ensure the caller has a linked profile, preferring a claim to an insert."""
        ...

    async def resolve_entitlement(
        self,
        user: Optional[AuthenticatedUser],
    ) -> ResolvedSession:
        """
        Resolve the caller's profile and entitlement within a bounded time.

        Never raises for store slowness or failure; degrades to anonymous.
        """
        ...
