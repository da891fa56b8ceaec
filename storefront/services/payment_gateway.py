"""
HTTP Client for the Razorpay payment gateway
"""
import hashlib
import hmac
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional

import httpx

from storefront.config import Settings
from storefront.errors import GatewayError
from storefront.services.http import upstream_retry, error_details

logger = logging.getLogger(__name__)


def to_minor_units(amount: float) -> int:
    """Convert a major-unit amount (rupees) to minor units (paise), rounding half up"""
    minor = (Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(minor)


def compute_signature(secret: str, gateway_order_id: str, gateway_payment_id: str) -> str:
    """HMAC-SHA256 hex digest over `order_id|payment_id`"""
    message = f"{gateway_order_id}|{gateway_payment_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


class RazorpayClient:
    """Client for issuing gateway orders and verifying payment signatures"""

    def __init__(self, config: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = config.RAZORPAY_API_URL.rstrip("/")
        self.key_id = config.RAZORPAY_KEY_ID
        self.key_secret = config.RAZORPAY_KEY_SECRET
        self.timeout = config.UPSTREAM_TIMEOUT
        self._transport = transport
        self._post_order = upstream_retry(config)(self._post_order)

    def _require_credentials(self):
        if not self.key_id or not self.key_secret:
            raise GatewayError("Razorpay credentials are not configured")

    async def _post_order(self, payload: Dict) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            return await client.post(
                f"{self.base_url}/orders",
                json=payload,
                auth=(self.key_id, self.key_secret)
            )

    async def create_order(self, amount: float, currency: str = "INR", receipt: Optional[str] = None) -> Dict:
        """
        Create a gateway order for the client-side checkout widget

        Args:
            amount: Charge amount in major currency units
            currency: ISO currency code
            receipt: Merchant receipt identifier

        Returns:
            Gateway order object as returned by Razorpay

        Raises:
            GatewayError: If the gateway call fails
        """
        self._require_credentials()
        payload = {
            "amount": to_minor_units(amount),
            "currency": currency,
        }
        if receipt:
            payload["receipt"] = receipt

        try:
            response = await self._post_order(payload)
        except httpx.HTTPError as e:
            logger.error(f"Razorpay order request failed: {e}")
            raise GatewayError("Failed to create Razorpay order", details=str(e))

        if response.status_code >= 400:
            details = error_details(response)
            logger.error(f"Razorpay rejected order (status {response.status_code}): {details}")
            raise GatewayError("Failed to create Razorpay order", details=details)

        order = response.json()
        logger.info(f"Razorpay order {order.get('id')} created for {payload['amount']} {currency}")
        return order

    def verify_signature(self, gateway_order_id: str, gateway_payment_id: str, signature: str) -> bool:
        """Check a payment confirmation signature in constant time"""
        if not self.key_secret:
            raise GatewayError("Razorpay secret is not configured")
        expected = compute_signature(self.key_secret, gateway_order_id, gateway_payment_id)
        return hmac.compare_digest(expected.encode(), (signature or "").encode())
