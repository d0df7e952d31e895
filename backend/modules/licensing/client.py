"""
Gumroad license verification client.

API Endpoint: https://api.gumroad.com/v2/licenses/verify
Request is form-encoded product_id + license_key. We always send
increment_uses_count=false so verification can be repeated (every login,
every re-activation) without burning the key's activation count.

Response: {"success": true, "uses": 3, "purchase": {..., "refunded": false,
"disputed": false, "chargebacked": false}} or {"success": false,
"message": "..."} (HTTP 404) for unknown keys.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx
import pydantic

from .exceptions import AuthorityUnavailableError
from .models import SaleMetadata, VerificationResult, mask_license_key

logger = logging.getLogger(__name__)


class GumroadLicenseClient:
    """
    License authority client for Gumroad.

    Never reports a transport problem as an invalid key: anything other
    than a well-formed answer from Gumroad raises AuthorityUnavailableError.
    """

    DEFAULT_VERIFY_URL = "https://api.gumroad.com/v2/licenses/verify"

    def __init__(
        self,
        verify_url: str = DEFAULT_VERIFY_URL,
        timeout_seconds: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            verify_url: Verification endpoint
            timeout_seconds: Overall bound on a single verification call,
                connect through response body
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._verify_url = verify_url
        self._timeout_seconds = timeout_seconds
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport

    async def verify(self, product_id: str, license_key: str) -> VerificationResult:
        """Verify a license key for a product."""
        payload = {
            "product_id": product_id,
            "license_key": license_key.strip(),
            "increment_uses_count": "false",
        }
        body = await self._post(payload)

        if not body["success"]:
            logger.info(f"License {mask_license_key(license_key)} rejected by Gumroad")
            return VerificationResult.invalid(message=body.get("message"))

        purchase = body.get("purchase")
        if not isinstance(purchase, dict):
            raise AuthorityUnavailableError("response is missing the purchase object")

        try:
            sale = SaleMetadata.from_purchase(purchase, uses=body.get("uses"))
        except pydantic.ValidationError as e:
            raise AuthorityUnavailableError(f"malformed purchase object: {e}") from e

        if sale.is_revoked:
            logger.info(
                f"License {mask_license_key(license_key)} belongs to revoked sale {sale.sale_id}"
            )
            return VerificationResult.revoked(sale)

        return VerificationResult.valid(sale)

    async def _send(self, payload: dict[str, str]) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            return await client.post(
                self._verify_url,
                data=payload,
                headers={"Accept": "application/json"},
            )

    async def _post(self, payload: dict[str, str]) -> dict[str, Any]:
        # httpx.Timeout bounds each phase separately; wait_for caps the whole call
        try:
            response = await asyncio.wait_for(self._send(payload), timeout=self._timeout_seconds)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"Gumroad verification timed out after {self._timeout_seconds}s")
            raise AuthorityUnavailableError("request timed out") from e
        except httpx.HTTPError as e:
            logger.warning(f"Gumroad verification transport error: {e}")
            raise AuthorityUnavailableError(str(e) or e.__class__.__name__) from e

        if response.status_code >= 500 or response.status_code == 429:
            raise AuthorityUnavailableError(f"authority returned HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise AuthorityUnavailableError(
                f"non-JSON response (HTTP {response.status_code})"
            ) from e

        if not isinstance(body, dict) or not isinstance(body.get("success"), bool):
            raise AuthorityUnavailableError(
                f"unexpected response shape (HTTP {response.status_code})"
            )
        return body
