"""
Purchases module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from modules.profiles.models import Profile


class PurchasePing(BaseModel):
    """
    A purchase notification from the storefront.

    Gumroad sends far more fields (price, variants, referrer...); only
    these are used.
    """

    email: Optional[str] = Field(None, description="Buyer email as sent by the storefront")
    product_id: Optional[str] = Field(None, description="Storefront product identifier")
    license_key: Optional[str] = Field(None, description="License key issued for the sale")
    sale_id: Optional[str] = Field(None, description="Storefront sale identifier (logging only)")


class WebhookOutcome(str, Enum):
    """What processing a purchase ping did. All are successes for the sender."""

    UPGRADED = "upgraded"              # Existing profile(s) re-granted premium
    SHADOW_CREATED = "shadow_created"  # No account yet; shadow profile inserted
    IGNORED_PRODUCT = "ignored_product"  # Ping was for another product


class WebhookResult(BaseModel):
    outcome: WebhookOutcome
    premium_expires_at: Optional[datetime] = None
    profiles: list[Profile] = Field(default_factory=list)

    @property
    def message(self) -> str:
        if self.outcome == WebhookOutcome.IGNORED_PRODUCT:
            return "Ignoring ping for different product"
        if self.outcome == WebhookOutcome.SHADOW_CREATED:
            return "OK, no account yet - premium reserved for this email"
        return "Success - User upgraded to Premium"


class WebhookResponse(BaseModel):
    """API response acknowledging a purchase ping."""

    success: bool = True
    outcome: WebhookOutcome
    message: str

    @classmethod
    def from_result(cls, result: WebhookResult) -> "WebhookResponse":
        return cls(outcome=result.outcome, message=result.message)
