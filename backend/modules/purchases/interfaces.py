"""
Purchases module interface.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from .models import PurchasePing, WebhookResult


@runtime_checkable
class IPurchaseWebhookService(Protocol):
    """Handles asynchronous purchase notifications."""

    async def handle_ping(
        self,
        ping: PurchasePing,
        now: Optional[datetime] = None,
    ) -> WebhookResult:
        """
        Grant premium to the buyer's email, creating a shadow profile when
        no account exists yet.

        Idempotent with refresh semantics: redelivery re-arms the window
        from the time of delivery rather than extending it.

        Raises:
            MissingPurchaseEmailError: If the ping has no email
            StoreError: On persistence failure
        """
        ...
