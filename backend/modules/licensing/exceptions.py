"""
Licensing module exceptions.

EntitlementDeniedError means the authority answered and said no; the user
can act on it and it is never retried automatically.
AuthorityUnavailableError means nobody answered; it is safe to retry and
must never be reported to the user as a bad key.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError, HifzError, ValidationError


class EntitlementDeniedError(HifzError):
    """Base exception for licenses the authority rejected."""

    pass


class LicenseInvalidError(EntitlementDeniedError):
    """Raised when the authority does not recognize the key."""

    def __init__(self, authority_message: Optional[str] = None):
        super().__init__(
            "Invalid or expired license key",
            code="LICENSE_INVALID",
            details={"authority_message": authority_message} if authority_message else {},
        )


class LicenseRevokedError(EntitlementDeniedError):
    """Raised when the sale behind the key was refunded, disputed or charged back."""

    def __init__(self, sale_id: Optional[str] = None):
        super().__init__(
            "License has been refunded or disputed",
            code="LICENSE_REVOKED",
            details={"sale_id": sale_id} if sale_id else {},
        )


class AuthorityUnavailableError(ExternalServiceError):
    """Raised when the license authority could not be reached or answered garbage."""

    retryable = True

    def __init__(self, reason: str, service: str = "gumroad"):
        super().__init__(
            "Could not verify the license right now, please retry later",
            service=service,
            code="AUTHORITY_UNAVAILABLE",
        )
        # Logged, never sent to the client
        self.reason = reason


class MissingLicenseKeyError(ValidationError):
    """Raised when no license key was supplied."""

    def __init__(self):
        super().__init__("license_key is required", code="MISSING_LICENSE_KEY")
