"""
Identity module data models.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from modules.entitlements.models import EntitlementStatus
from modules.profiles.models import Profile


class ClaimResult(BaseModel):
    """Outcome of a shadow-profile claim attempt."""

    claimed: bool = Field(..., description="Whether this call linked a shadow profile")
    profile: Optional[Profile] = Field(
        None,
        description="The caller's linked profile as re-read from the store",
    )


class RegistrationOutcome(str, Enum):
    """What registering a caller's profile did."""

    EXISTING = "existing"    # Caller already had a linked profile
    CLAIMED = "claimed"      # A shadow profile from a purchase was linked
    CREATED = "created"      # A fresh linked profile was inserted
    DEFERRED = "deferred"    # Lost an insert race; the next resolve claims it
    CONFLICT = "conflict"    # The email belongs to another identity's profile


class RegistrationResult(BaseModel):
    outcome: RegistrationOutcome
    profile: Optional[Profile] = None


class ResolvedSession(BaseModel):
    """
    The caller's profile and entitlement for one read.

    degraded is True when the store was slow or failing and the caller
    was given the anonymous state instead; such a read is not
    authoritative and should be retried later.
    """

    user_id: Optional[str] = None
    profile: Optional[Profile] = None
    entitlement: EntitlementStatus
    degraded: bool = False

    @classmethod
    def anonymous(cls, user_id: Optional[str] = None, degraded: bool = False) -> "ResolvedSession":
        return cls(
            user_id=user_id,
            entitlement=EntitlementStatus.anonymous(),
            degraded=degraded,
        )


class ClaimResponse(BaseModel):
    """API response for the claim endpoint."""

    success: bool = True
    claimed: bool


class RegisterProfileRequest(BaseModel):
    """Request body for profile registration."""

    full_name: Optional[str] = Field(None, max_length=200)


class RegisterProfileResponse(BaseModel):
    """API response for profile registration."""

    outcome: RegistrationOutcome
    created: bool = False
    claimed: bool = False
    profile: Optional[Profile] = None

    @classmethod
    def from_result(cls, result: RegistrationResult) -> "RegisterProfileResponse":
        return cls(
            outcome=result.outcome,
            created=result.outcome == RegistrationOutcome.CREATED,
            claimed=result.outcome == RegistrationOutcome.CLAIMED,
            profile=result.profile,
        )
