"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


def normalize_email(email: str) -> str:
    """Lower-case and trim an email so it can be used as a join key."""
    return email.strip().lower()


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated caller.

    Populated from validated JWT claims and made available to route
    handlers via dependency injection. The email here comes from the
    identity provider, never from the request body, so it is the only
    value trusted for matching purchases to accounts.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: str = Field(default="", description="Email from the identity provider")
    email_verified: bool = Field(default=False, description="Whether email is verified")

    # Timestamps (optional for backward compatibility)
    created_at: Optional[datetime] = Field(None, description="Account creation time")
    last_sign_in: Optional[datetime] = Field(None, description="Last sign-in time")

    role: str = Field(default="user", description="User role")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }

    @property
    def normalized_email(self) -> str:
        return normalize_email(self.email)
