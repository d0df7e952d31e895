"""
Purchase webhook service.

Runs without an authenticated session: the buyer's email from the
storefront is the only key. Deliveries may repeat, so every step is an
upsert keyed by normalized email.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from modules.entitlements.models import PREMIUM_WINDOW
from modules.licensing.models import mask_license_key
from modules.profiles.exceptions import DuplicateProfileError
from modules.profiles.interfaces import IProfileStore
from modules.profiles.models import NewProfile, PremiumGrant
from shared.models import normalize_email
from shared.repository import run_blocking

from .exceptions import MissingPurchaseEmailError
from .models import PurchasePing, WebhookOutcome, WebhookResult

logger = logging.getLogger(__name__)


class PurchaseWebhookService:
    """Implementation of IPurchaseWebhookService."""

    def __init__(
        self,
        store: IProfileStore,
        product_id: str,
        premium_window: timedelta = PREMIUM_WINDOW,
    ):
        self._store = store
        self._product_id = product_id
        self._premium_window = premium_window

    async def handle_ping(
        self,
        ping: PurchasePing,
        now: Optional[datetime] = None,
    ) -> WebhookResult:
        if not self._product_id or ping.product_id != self._product_id:
            logger.info(f"Ignoring purchase ping for product {ping.product_id!r}")
            return WebhookResult(outcome=WebhookOutcome.IGNORED_PRODUCT)

        email = normalize_email(ping.email or "")
        if not email:
            raise MissingPurchaseEmailError()

        license_key = (ping.license_key or "").strip() or None
        premium_expires_at = (now or datetime.now(timezone.utc)) + self._premium_window
        grant = PremiumGrant(license_key=license_key, premium_expires_at=premium_expires_at)

        updated = await run_blocking(self._store.grant_premium_by_email, email, grant)
        if updated:
            logger.info(
                f"Upgraded {len(updated)} profile(s) for {email} to premium "
                f"(sale {ping.sale_id}, key {mask_license_key(license_key)})"
            )
            return WebhookResult(
                outcome=WebhookOutcome.UPGRADED,
                premium_expires_at=premium_expires_at,
                profiles=updated,
            )

        shadow = NewProfile(
            auth_user_id=None,
            email=email,
            is_premium=True,
            license_key=license_key,
            premium_expires_at=premium_expires_at,
        )
        try:
            profile = await run_blocking(self._store.insert, shadow)
        except DuplicateProfileError:
            # A concurrent delivery or registration inserted the row first
            updated = await run_blocking(self._store.grant_premium_by_email, email, grant)
            logger.info(f"Shadow insert for {email} raced; applied grant in place instead")
            return WebhookResult(
                outcome=WebhookOutcome.UPGRADED,
                premium_expires_at=premium_expires_at,
                profiles=updated,
            )

        logger.info(
            f"Purchase ping for {email} has no account yet; "
            f"created shadow profile {profile.id}"
        )
        return WebhookResult(
            outcome=WebhookOutcome.SHADOW_CREATED,
            premium_expires_at=premium_expires_at,
            profiles=[profile],
        )
