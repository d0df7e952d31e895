"""
Entitlement engine.

Pure functions over Profile: no I/O, deterministic given `now`.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

from modules.profiles.models import Profile
from shared.models import normalize_email

from .models import EntitlementReason, EntitlementStatus


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_entitled(
    profile: Profile,
    now: Optional[datetime] = None,
    admin_emails: frozenset[str] = frozenset(),
) -> bool:
    """
    Decide whether a profile currently has premium access.

    Admins (store flag or allowlist) are always entitled. Otherwise the
    premium flag counts only while premium_expires_at is null or in the
    future.
    """
    if profile.is_admin or profile.email in admin_emails:
        return True
    if not profile.is_premium:
        return False
    if profile.premium_expires_at is None:
        return True
    now = _as_utc(now or datetime.now(timezone.utc))
    return _as_utc(profile.premium_expires_at) > now


class EntitlementEngine:
    """
    Entitlement evaluation bound to the configured admin allowlist.

    The allowlist is read once at construction and never changes.
    """

    def __init__(self, admin_emails: Iterable[str] = ()):
        self._admin_emails = frozenset(normalize_email(e) for e in admin_emails)

    @property
    def admin_emails(self) -> frozenset[str]:
        return self._admin_emails

    def is_entitled(self, profile: Profile, now: Optional[datetime] = None) -> bool:
        return is_entitled(profile, now, self._admin_emails)

    def evaluate(
        self,
        profile: Optional[Profile],
        now: Optional[datetime] = None,
    ) -> EntitlementStatus:
        """Explain the entitlement decision for a profile (or its absence)."""
        if profile is None:
            return EntitlementStatus.anonymous()

        now = _as_utc(now or datetime.now(timezone.utc))
        expires_at = profile.premium_expires_at
        days_remaining = None
        if profile.is_premium and expires_at is not None:
            days_remaining = max((_as_utc(expires_at) - now).days, 0)

        if profile.is_admin or profile.email in self._admin_emails:
            reason = EntitlementReason.ADMIN
        elif not profile.is_premium:
            reason = EntitlementReason.FREE
        elif is_entitled(profile, now):
            reason = EntitlementReason.PREMIUM
        else:
            reason = EntitlementReason.EXPIRED

        return EntitlementStatus(
            entitled=reason in (EntitlementReason.ADMIN, EntitlementReason.PREMIUM),
            reason=reason,
            premium_expires_at=expires_at,
            days_remaining=days_remaining,
        )
