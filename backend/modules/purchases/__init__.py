"""
Purchases module.

Handles purchase pings from the storefront (Gumroad), upgrading existing
profiles or creating shadow profiles for buyers without an account.

Public API:
- IPurchaseWebhookService: Interface for ping processing
- PurchasePing, WebhookOutcome, WebhookResult: Data models
- MissingPurchaseEmailError
"""

from .interfaces import IPurchaseWebhookService
from .models import PurchasePing, WebhookOutcome, WebhookResult
from .exceptions import MissingPurchaseEmailError

__all__ = [
    "IPurchaseWebhookService",
    "PurchasePing",
    "WebhookOutcome",
    "WebhookResult",
    "MissingPurchaseEmailError",
]
