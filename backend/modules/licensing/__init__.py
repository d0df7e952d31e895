"""
Licensing module.

License authority client (Gumroad) and the user-initiated activation flow.

Public API:
- ILicenseAuthority: Interface for license verification
- ILicenseActivationService: Interface for activation
- VerificationResult, VerificationStatus, SaleMetadata: Authority answers
- Licensing exceptions: LicenseInvalidError, LicenseRevokedError, etc.
"""

from .interfaces import ILicenseActivationService, ILicenseAuthority
from .models import (
    ActivationResult,
    SaleMetadata,
    VerificationResult,
    VerificationStatus,
    mask_license_key,
)
from .exceptions import (
    AuthorityUnavailableError,
    EntitlementDeniedError,
    LicenseInvalidError,
    LicenseRevokedError,
    MissingLicenseKeyError,
)

__all__ = [
    # Interfaces
    "ILicenseAuthority",
    "ILicenseActivationService",
    # Models
    "ActivationResult",
    "SaleMetadata",
    "VerificationResult",
    "VerificationStatus",
    "mask_license_key",
    # Exceptions
    "AuthorityUnavailableError",
    "EntitlementDeniedError",
    "LicenseInvalidError",
    "LicenseRevokedError",
    "MissingLicenseKeyError",
]
