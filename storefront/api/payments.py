"""
Payment API endpoints
"""
from fastapi import APIRouter, Depends

from storefront.dependencies import get_notifier, get_order_service, get_payment_gateway
from storefront.errors import ValidationError
from storefront.schemas.payment import (
    PaymentIntentRequest,
    PaymentVerificationRequest,
    FinalizeResponse,
    PaymentMailRequest
)
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService
from storefront.services.payment_gateway import RazorpayClient

router = APIRouter(prefix="/api", tags=["payments"])


@router.post("/razorpay-order", summary="Create payment-gateway order")
async def create_payment_intent(
    payload: PaymentIntentRequest,
    gateway: RazorpayClient = Depends(get_payment_gateway)
):
    """
    Request a gateway order token for the client-side checkout widget

    - **amount**: Amount in major currency units (converted to minor units)
    - **currency**: ISO currency code (default: INR)
    - **receipt**: Merchant receipt identifier
    """
    return await gateway.create_order(payload.amount, payload.currency, payload.receipt)


@router.post("/razorpay-verify", response_model=FinalizeResponse, summary="Verify payment and place order")
async def verify_payment(
    payload: PaymentVerificationRequest,
    service: OrderService = Depends(get_order_service)
):
    """
    Verify the gateway signature, persist the order and notify

    Replaying an already-finalized payment returns the original order id.
    Notification failures do not affect the response.
    """
    result = await service.finalize_payment(payload)
    return FinalizeResponse(order_id=result.order.id)


@router.post("/razorpay-mail", summary="Send payment confirmation email")
def send_payment_mail(
    payload: PaymentMailRequest,
    notifier: NotificationService = Depends(get_notifier)
):
    if not payload.user_email or not payload.payment_details:
        raise ValidationError("Missing userEmail or paymentDetails")
    notifier.send_payment_confirmation(payload.user_email, payload.payment_details)
    return {"success": True}
