"""
Identity reconciliation service.

Links shadow profiles (created by purchase pings before the buyer had an
account) to authenticated identities. The match key is always the email
from the validated credential, never anything the client sends.
"""

import asyncio
import logging
from typing import Optional

from modules.entitlements.service import EntitlementEngine
from modules.profiles.exceptions import DuplicateProfileError
from modules.profiles.interfaces import IProfileStore
from modules.profiles.models import NewProfile, Profile
from shared.exceptions import StoreError
from shared.models import AuthenticatedUser
from shared.repository import run_blocking

from .exceptions import MissingIdentityEmailError, UnverifiedEmailError
from .models import (
    ClaimResult,
    RegistrationOutcome,
    RegistrationResult,
    ResolvedSession,
)

logger = logging.getLogger(__name__)


class IdentityService:
    """
    Implementation of IIdentityService over an IProfileStore.

    Holds no locks: the store's conditional update on auth_user_id IS NULL
    decides every race.
    """

    def __init__(
        self,
        store: IProfileStore,
        engine: EntitlementEngine,
        require_confirmed_email: bool = True,
        resolve_timeout_seconds: float = 5.0,
    ):
        self._store = store
        self._engine = engine
        self._require_confirmed_email = require_confirmed_email
        self._resolve_timeout = resolve_timeout_seconds

    def _identity_email(self, user: AuthenticatedUser) -> str:
        email = user.normalized_email
        if not email:
            raise MissingIdentityEmailError()
        if self._require_confirmed_email and not user.email_verified:
            raise UnverifiedEmailError(user.id)
        return email

    def _can_claim(self, user: AuthenticatedUser) -> bool:
        if not user.normalized_email:
            return False
        return user.email_verified or not self._require_confirmed_email

    async def resolve_identity(self, user: AuthenticatedUser) -> Optional[Profile]:
        return await run_blocking(self._store.get_by_auth_user_id, user.id)

    async def claim_shadow(self, user: AuthenticatedUser) -> ClaimResult:
        email = self._identity_email(user)

        existing = await self.resolve_identity(user)
        if existing is not None:
            return ClaimResult(claimed=False, profile=existing)

        return await self._claim(user, email)

    async def _claim(self, user: AuthenticatedUser, email: str) -> ClaimResult:
        shadow = await run_blocking(self._store.find_shadow_by_email, email)
        if shadow is None:
            return ClaimResult(claimed=False)

        if not await run_blocking(self._store.claim_shadow, shadow.id, user.id):
            # Another identity won the compare-and-swap
            logger.info(f"Shadow profile {shadow.id} was claimed concurrently; skipping")
            return ClaimResult(claimed=False)

        logger.info(f"Linked shadow profile {shadow.id} to user {user.id}")
        return ClaimResult(claimed=True, profile=await self.resolve_identity(user))

    async def resolve_profile(self, user: AuthenticatedUser) -> Optional[Profile]:
        profile = await self.resolve_identity(user)
        if profile is not None:
            return profile

        if not self._can_claim(user):
            return None

        result = await self._claim(user, user.normalized_email)
        return result.profile if result.claimed else None

    async def register_profile(
        self,
        user: AuthenticatedUser,
        full_name: Optional[str] = None,
    ) -> RegistrationResult:
        email = self._identity_email(user)

        existing = await self.resolve_identity(user)
        if existing is not None:
            return RegistrationResult(outcome=RegistrationOutcome.EXISTING, profile=existing)

        claim = await self._claim(user, email)
        if claim.claimed:
            return RegistrationResult(outcome=RegistrationOutcome.CLAIMED, profile=claim.profile)

        # A concurrent request from the same caller may have won the claim
        linked = await self.resolve_identity(user)
        if linked is not None:
            return RegistrationResult(outcome=RegistrationOutcome.EXISTING, profile=linked)

        if await run_blocking(self._store.list_by_email, email):
            logger.warning(f"Email for user {user.id} already belongs to another identity")
            return RegistrationResult(outcome=RegistrationOutcome.CONFLICT)

        try:
            profile = await run_blocking(
                self._store.insert,
                NewProfile(auth_user_id=user.id, email=email, full_name=full_name),
            )
        except DuplicateProfileError:
            # A purchase ping inserted a shadow row between our read and insert
            logger.info(f"Profile insert for user {user.id} lost a race; deferring to claim")
            return RegistrationResult(outcome=RegistrationOutcome.DEFERRED)

        logger.info(f"Created profile {profile.id} for user {user.id}")
        return RegistrationResult(outcome=RegistrationOutcome.CREATED, profile=profile)

    async def resolve_entitlement(
        self,
        user: Optional[AuthenticatedUser],
    ) -> ResolvedSession:
        if user is None:
            return ResolvedSession.anonymous()

        try:
            profile = await asyncio.wait_for(
                self.resolve_profile(user),
                timeout=self._resolve_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Resolving entitlement for user {user.id} exceeded "
                f"{self._resolve_timeout}s; serving anonymous state"
            )
            return ResolvedSession.anonymous(user_id=user.id, degraded=True)
        except StoreError as e:
            logger.error(f"Store failure resolving user {user.id}: {e.message}")
            return ResolvedSession.anonymous(user_id=user.id, degraded=True)

        return ResolvedSession(
            user_id=user.id,
            profile=profile,
            entitlement=self._engine.evaluate(profile),
        )
