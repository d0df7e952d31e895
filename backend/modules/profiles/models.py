"""
Profile module data models.

A profile is the durable entitlement record. It may exist before any
account does (a shadow profile created from a purchase ping) and is linked
to an authenticated identity exactly once.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from shared.models import normalize_email


_PROGRESSION_DEFAULTS = {
    "level": lambda: 1,
    "xp": lambda: 0,
    "streak": lambda: 0,
    "badges": list,
}


class Profile(BaseModel):
    """
    A row of the profiles table.

    The raw is_premium flag is never enough to decide entitlement; use
    modules.entitlements for that.
    """

    model_config = {"frozen": True, "extra": "ignore"}

    id: str = Field(..., description="Store-assigned profile ID")
    auth_user_id: Optional[str] = Field(
        None,
        description="Linked identity; null while the profile is a shadow",
    )
    email: str = Field(..., description="Normalized email, the purchase join key")
    full_name: Optional[str] = None

    is_premium: bool = False
    license_key: Optional[str] = None
    premium_expires_at: Optional[datetime] = Field(
        None,
        description="Null means premium never expires",
    )
    is_admin: bool = False

    # Progression, carried along untouched by entitlement logic
    level: int = 1
    xp: int = 0
    streak: int = 0
    badges: list[str] = Field(default_factory=list)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("level", "xp", "streak", "badges", mode="before")
    @classmethod
    def _null_progression(cls, value: Any, info: ValidationInfo) -> Any:
        # Older rows store NULL progression
        if value is None:
            return _PROGRESSION_DEFAULTS[info.field_name]()
        return value

    @property
    def is_shadow(self) -> bool:
        """True while no authenticated identity has claimed this profile."""
        return self.auth_user_id is None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Profile":
        return cls.model_validate(row)


class NewProfile(BaseModel):
    """Fields for inserting a profile. The store assigns id and timestamps."""

    auth_user_id: Optional[str] = None
    email: str
    full_name: Optional[str] = None
    is_premium: bool = False
    license_key: Optional[str] = None
    premium_expires_at: Optional[datetime] = None
    level: int = 1
    xp: int = 0
    streak: int = 0

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return normalize_email(value)

    def to_row(self) -> dict[str, Any]:
        row = self.model_dump()
        if self.premium_expires_at is not None:
            row["premium_expires_at"] = self.premium_expires_at.isoformat()
        return row


class PremiumGrant(BaseModel):
    """The premium fields written by a purchase ping or license activation."""

    model_config = {"frozen": True}

    license_key: Optional[str] = None
    premium_expires_at: datetime

    def to_row(self) -> dict[str, Any]:
        return {
            "is_premium": True,
            "license_key": self.license_key,
            "premium_expires_at": self.premium_expires_at.isoformat(),
        }
