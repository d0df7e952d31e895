"""
Licensing module interfaces.

The activation flow depends on ILicenseAuthority, not on the Gumroad client.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser
from .models import ActivationResult, VerificationResult


@runtime_checkable
class ILicenseAuthority(Protocol):
    """External license verification service."""

    async def verify(self, product_id: str, license_key: str) -> VerificationResult:
        """
        Verify a license key without consuming an activation.

        Args:
            product_id: Storefront product identifier
            license_key: Key as entered by the user (trimmed before sending)

        Returns:
            VerificationResult with VALID, INVALID or REVOKED status

        Raises:
            AuthorityUnavailableError: On timeout, transport failure or a
                malformed response
        """
        ...


@runtime_checkable
class ILicenseActivationService(Protocol):
    """User-initiated license activation."""

    async def activate(
        self,
        user: AuthenticatedUser,
        license_key: Optional[str],
        now: Optional[datetime] = None,
    ) -> ActivationResult:
        """
        Verify a key and grant the caller's own profile a premium window.

        Raises:
            MissingLicenseKeyError: If no key was supplied
            LicenseInvalidError: If the authority does not know the key
            LicenseRevokedError: If the sale was refunded/disputed
            AuthorityUnavailableError: If the key could not be checked
            ProfileNotFoundError: If the caller has no profile to upgrade
        """
        ...
