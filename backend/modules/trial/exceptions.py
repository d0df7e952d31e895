"""
Trial module exceptions.
"""

from shared.exceptions import AuthorizationError

from .models import PaywallReason


class PaywallRequiredError(AuthorizationError):
    """Raised when a non-entitled caller has used up a gated action."""

    def __init__(self, reason: PaywallReason):
        super().__init__(
            f"Free {reason.value} sessions used up; upgrade to continue",
            code="PAYWALL_REQUIRED",
            details={"paywall_reason": reason.value},
        )
        self.reason = reason
