"""
Purchase webhook endpoint.

Called by the storefront with a form-encoded ping. There is no session;
anything other than POST is answered 405 by the router.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form

from api.dependencies import get_webhook_service

from .interfaces import IPurchaseWebhookService
from .models import PurchasePing, WebhookResponse

router = APIRouter()


@router.post("/purchase", response_model=WebhookResponse)
async def purchase_ping(
    email: Optional[str] = Form(default=None),
    product_id: Optional[str] = Form(default=None),
    license_key: Optional[str] = Form(default=None),
    sale_id: Optional[str] = Form(default=None),
    service: IPurchaseWebhookService = Depends(get_webhook_service),
) -> WebhookResponse:
    """
    Record a purchase.

    Upgrades every profile with the buyer's email, or reserves premium in
    a shadow profile when no account exists yet. Pings for other products
    are acknowledged and ignored.
    """
    ping = PurchasePing(
        email=email,
        product_id=product_id,
        license_key=license_key,
        sale_id=sale_id,
    )
    result = await service.handle_ping(ping)
    return WebhookResponse.from_result(result)
