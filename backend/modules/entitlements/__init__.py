"""
Entitlements module.

Computes whether a profile currently has premium access. Pure, no I/O.

Public API:
- is_entitled: The entitlement predicate
- EntitlementEngine: Predicate bound to the admin allowlist, with explanations
- EntitlementStatus, EntitlementReason: Evaluation result
"""

from .models import PREMIUM_WINDOW, EntitlementReason, EntitlementStatus
from .service import EntitlementEngine, is_entitled

__all__ = [
    "PREMIUM_WINDOW",
    "is_entitled",
    "EntitlementEngine",
    "EntitlementStatus",
    "EntitlementReason",
]
