"""
Shipping handoff endpoint
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from storefront.dependencies import get_shipping_client
from storefront.errors import UpstreamError
from storefront.schemas.shipping import ShippingOrderRequest
from storefront.services.shipping_client import ShiprocketClient

router = APIRouter(prefix="/api", tags=["shipping"])


@router.post("/shiprocket-order", summary="Create shipping-provider order")
async def create_shipping_order(
    order: ShippingOrderRequest,
    client: ShiprocketClient = Depends(get_shipping_client)
):
    """
    Hand an order over to Shiprocket

    Authenticates on every call. No retry or queuing: a failed handoff
    leaves the order as it is.
    """
    try:
        shiprocket = await client.create_order(order)
    except UpstreamError as e:
        return JSONResponse(status_code=500, content={"success": False, "error": e.message})
    return {"success": True, "shiprocket": shiprocket}
