"""
Profile module exceptions.
"""

from shared.exceptions import HifzError, NotFoundError


class ProfileNotFoundError(NotFoundError):
    """Raised when the caller has no profile to act on."""

    def __init__(self, auth_user_id: str):
        super().__init__(
            "No profile is linked to this account",
            code="PROFILE_NOT_FOUND",
            details={"auth_user_id": auth_user_id},
        )


class DuplicateProfileError(HifzError):
    """
    Raised when the store rejects an insert because a profile with the same
    email (or identity) already exists.

    Callers resolve this by falling back to an update or a claim.
    """

    def __init__(self, email: str):
        super().__init__(
            f"A profile already exists for {email}",
            code="DUPLICATE_PROFILE",
            details={"email": email},
        )
