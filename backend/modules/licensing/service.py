"""
License activation service.

Self-service flow: the caller presents a key, the key is verified with the
authority, and the caller's own profile (looked up by identity, never by
email) gets a fresh premium window. Every successful activation re-arms the
same flat window regardless of the purchase's own terms.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from modules.entitlements.models import PREMIUM_WINDOW
from modules.identity.interfaces import IIdentityService
from modules.profiles.exceptions import ProfileNotFoundError
from modules.profiles.interfaces import IProfileStore
from modules.profiles.models import PremiumGrant
from shared.models import AuthenticatedUser
from shared.repository import run_blocking

from .exceptions import (
    LicenseInvalidError,
    LicenseRevokedError,
    MissingLicenseKeyError,
)
from .interfaces import ILicenseAuthority
from .models import ActivationResult, VerificationStatus, mask_license_key

logger = logging.getLogger(__name__)


class LicenseActivationService:
    """Implementation of ILicenseActivationService."""

    def __init__(
        self,
        authority: ILicenseAuthority,
        store: IProfileStore,
        identity: IIdentityService,
        product_id: str,
        premium_window: timedelta = PREMIUM_WINDOW,
    ):
        self._authority = authority
        self._store = store
        self._identity = identity
        self._product_id = product_id
        self._premium_window = premium_window

    async def activate(
        self,
        user: AuthenticatedUser,
        license_key: Optional[str],
        now: Optional[datetime] = None,
    ) -> ActivationResult:
        key = (license_key or "").strip()
        if not key:
            raise MissingLicenseKeyError()

        # AuthorityUnavailableError propagates untouched
        result = await self._authority.verify(self._product_id, key)

        if result.status == VerificationStatus.INVALID:
            logger.info(f"Activation by {user.id} with unknown key {mask_license_key(key)}")
            raise LicenseInvalidError(result.message)
        if result.status == VerificationStatus.REVOKED:
            logger.info(f"Activation by {user.id} with revoked key {mask_license_key(key)}")
            raise LicenseRevokedError(result.sale.sale_id if result.sale else None)

        premium_expires_at = (now or datetime.now(timezone.utc)) + self._premium_window
        grant = PremiumGrant(license_key=key, premium_expires_at=premium_expires_at)

        profile = await run_blocking(self._store.grant_premium_by_auth_user_id, user.id, grant)
        if profile is None:
            # Purchase may have created a shadow profile the caller never claimed
            if await self._identity.resolve_profile(user) is not None:
                profile = await run_blocking(
                    self._store.grant_premium_by_auth_user_id, user.id, grant
                )
        if profile is None:
            raise ProfileNotFoundError(user.id)

        logger.info(
            f"Activated license {mask_license_key(key)} for user {user.id} "
            f"until {premium_expires_at.isoformat()}"
        )
        return ActivationResult(premium_expires_at=premium_expires_at, profile=profile)
