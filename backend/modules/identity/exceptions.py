"""
Identity module exceptions.

Both are authentication failures: the credential is valid but does not
carry an identity email this backend is willing to match purchases on.
"""

from shared.exceptions import AuthenticationError


class MissingIdentityEmailError(AuthenticationError):
    """Raised when the validated credential carries no email."""

    def __init__(self):
        super().__init__(
            "Not authenticated or missing email",
            code="MISSING_IDENTITY_EMAIL",
        )


class UnverifiedEmailError(AuthenticationError):
    """Raised when the identity provider has not confirmed the caller's email."""

    def __init__(self, user_id: str):
        super().__init__(
            "Email address has not been confirmed",
            code="EMAIL_NOT_CONFIRMED",
            details={"user_id": user_id},
        )
