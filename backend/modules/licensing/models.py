"""
Licensing module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from modules.profiles.models import Profile


def mask_license_key(license_key: Optional[str]) -> str:
    """Render a license key safe for logs (last four characters only)."""
    if not license_key:
        return "<none>"
    key = license_key.strip()
    if len(key) <= 4:
        return "****"
    return f"****{key[-4:]}"


class VerificationStatus(str, Enum):
    """Normalized answer from the license authority."""

    VALID = "valid"
    INVALID = "invalid"   # Unknown key, or wrong product
    REVOKED = "revoked"   # Sale refunded, disputed or charged back


class SaleMetadata(BaseModel):
    """The subset of the authority's purchase object this backend uses."""

    model_config = {"frozen": True, "extra": "ignore"}

    sale_id: Optional[str] = None
    product_id: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[str] = None
    refunded: bool = False
    disputed: bool = False
    chargebacked: bool = False
    uses: Optional[int] = Field(None, description="Activation count reported by the authority")

    @property
    def is_revoked(self) -> bool:
        return self.refunded or self.disputed or self.chargebacked

    @classmethod
    def from_purchase(cls, purchase: dict[str, Any], uses: Optional[int] = None) -> "SaleMetadata":
        return cls.model_validate(
            {
                **purchase,
                # Flags may be absent or null in older responses
                "refunded": bool(purchase.get("refunded")),
                "disputed": bool(purchase.get("disputed")),
                "chargebacked": bool(purchase.get("chargebacked")),
                "uses": uses,
            }
        )


class VerificationResult(BaseModel):
    """Outcome of a license verification that reached the authority."""

    model_config = {"frozen": True}

    status: VerificationStatus
    sale: Optional[SaleMetadata] = None
    message: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.status == VerificationStatus.VALID

    @classmethod
    def valid(cls, sale: SaleMetadata) -> "VerificationResult":
        return cls(status=VerificationStatus.VALID, sale=sale)

    @classmethod
    def invalid(cls, message: Optional[str] = None) -> "VerificationResult":
        return cls(status=VerificationStatus.INVALID, message=message)

    @classmethod
    def revoked(cls, sale: SaleMetadata) -> "VerificationResult":
        return cls(status=VerificationStatus.REVOKED, sale=sale)


class ActivationResult(BaseModel):
    """Result of a successful license activation."""

    premium_expires_at: datetime
    profile: Profile


class ActivationRequest(BaseModel):
    """Request body for license activation."""

    license_key: Optional[str] = Field(None, description="License key from the purchase receipt")


class ActivationResponse(BaseModel):
    """API response for a successful activation."""

    success: bool = True
    premium_expires_at: datetime
