"""
HTTP Client for the Shiprocket shipping API
"""
import logging
from datetime import date
from typing import Dict, Optional

import httpx

from storefront.config import Settings
from storefront.errors import UpstreamError
from storefront.schemas.shipping import ShippingOrderRequest
from storefront.services.http import upstream_retry, error_details

logger = logging.getLogger(__name__)

PACKAGE_DIMENSIONS = {"length": 10, "breadth": 10, "height": 10, "weight": 1}


def compute_subtotal(order: ShippingOrderRequest) -> float:
    """Sum of price x quantity over the submitted line items"""
    return sum(item.price * item.quantity for item in order.items)


def build_shipment_payload(order: ShippingOrderRequest, pickup_location: str = "Primary",
                           order_date: Optional[date] = None) -> Dict:
    """Translate an order into a Shiprocket adhoc order payload"""
    order_date = order_date or date.today()
    payload = {
        "order_id": order.id,
        "order_date": order_date.isoformat(),
        "pickup_location": pickup_location,
        "billing_customer_name": order.customer_name,
        "billing_last_name": "",
        "billing_address": order.address,
        "billing_city": order.city,
        "billing_pincode": order.pincode,
        "billing_state": order.state,
        "billing_country": "India",
        "billing_email": order.email,
        "billing_phone": order.phone,
        "shipping_is_billing": True,
        "order_items": [
            {
                "name": item.name,
                "sku": item.sku or item.id,
                "units": item.quantity,
                "selling_price": item.price,
            }
            for item in order.items
        ],
        "payment_method": order.payment_method or "Prepaid",
        # The stored order total is not trusted here
        "sub_total": compute_subtotal(order),
    }
    payload.update(PACKAGE_DIMENSIONS)
    return payload


class ShiprocketClient:
    """Client for handing orders over to Shiprocket"""

    def __init__(self, config: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = config.SHIPROCKET_API_URL.rstrip("/")
        self.email = config.SHIPROCKET_EMAIL
        self.password = config.SHIPROCKET_PASSWORD
        self.pickup_location = config.SHIPROCKET_PICKUP_LOCATION
        self.timeout = config.UPSTREAM_TIMEOUT
        self._transport = transport
        self._post = upstream_retry(config)(self._post)

    async def _post(self, client: httpx.AsyncClient, path: str, payload: Dict,
                    token: Optional[str] = None) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        return await client.post(f"{self.base_url}{path}", json=payload, headers=headers)

    async def authenticate(self, client: httpx.AsyncClient) -> str:
        """Exchange account credentials for a bearer token"""
        response = await self._post(client, "/auth/login", {
            "email": self.email,
            "password": self.password,
        })
        try:
            data = response.json()
        except ValueError:
            data = {}
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise UpstreamError("Shiprocket authentication failed", details=data or response.text)
        return token

    async def create_order(self, order: ShippingOrderRequest) -> Dict:
        """
        Create a shipping order for an internal order

        Authenticates on every call; the token is not cached.

        Args:
            order: Order fields needed for shipment

        Returns:
            Shiprocket response body

        Raises:
            UpstreamError: If authentication or order creation fails
        """
        payload = build_shipment_payload(order, self.pickup_location)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                token = await self.authenticate(client)
                response = await self._post(client, "/orders/create/adhoc", payload, token=token)
        except httpx.HTTPError as e:
            logger.error(f"Shiprocket request failed for order {order.id}: {e}")
            raise UpstreamError(f"Shiprocket request failed: {e}")

        body = error_details(response)
        if response.status_code >= 400:
            logger.error(f"Shiprocket rejected order {order.id} (status {response.status_code}): {body}")
            raise UpstreamError("Shiprocket order creation failed", details=body)

        logger.info(f"Shiprocket order created for {order.id} (sub_total {payload['sub_total']:.2f})")
        return body
