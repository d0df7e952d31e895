"""
Authentication module data models.
"""

from typing import Optional
from pydantic import BaseModel, Field


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    model_config = {"extra": "ignore"}

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    email_confirmed_at: Optional[str] = Field(None, description="When the email was confirmed")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)

    @property
    def email_verified(self) -> bool:
        """
        Whether the identity provider vouches for the email.

        Supabase access tokens normally carry only
        user_metadata.email_verified; email_confirmed_at is honoured when a
        custom access-token hook adds it. With require_confirmed_email=True,
        a token carrying neither claim can never claim a shadow profile.
        """
        if self.email_confirmed_at:
            return True
        return self.user_metadata.get("email_verified") is True
