"""
Entitlement module data models.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# Business-policy constant: every purchase ping and every license activation
# grants this flat window from the moment it is processed, regardless of the
# purchase's own terms.
PREMIUM_WINDOW = timedelta(days=30)


class EntitlementReason(str, Enum):
    """Why a caller is (or is not) entitled."""

    ADMIN = "admin"          # Store flag or configured allowlist
    PREMIUM = "premium"      # Premium flag with a live (or open-ended) expiry
    EXPIRED = "expired"      # Premium flag set but the window has passed
    FREE = "free"            # Known profile, never premium
    ANONYMOUS = "anonymous"  # No profile could be resolved


class EntitlementStatus(BaseModel):
    """
    Derived entitlement for one profile at one instant.

    Recomputed on every read; never persisted.
    """

    model_config = {"frozen": True}

    entitled: bool = Field(..., description="Whether premium features are unlocked")
    reason: EntitlementReason
    premium_expires_at: Optional[datetime] = Field(
        None,
        description="Stored expiry; null with PREMIUM means it never expires",
    )
    days_remaining: Optional[int] = Field(
        None,
        description="Whole days left in the premium window, if one applies",
    )

    @classmethod
    def anonymous(cls) -> "EntitlementStatus":
        """The non-premium state used when no profile can be resolved."""
        return cls(entitled=False, reason=EntitlementReason.ANONYMOUS)
