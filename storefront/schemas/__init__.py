"""
Schemas package
"""
from storefront.schemas.order import (
    OrderItem,
    OrderData,
    OrderStatusUpdate,
    OrderResponse,
    OrderListResponse,
)
from storefront.schemas.payment import (
    PaymentIntentRequest,
    PaymentVerificationRequest,
    FinalizeResponse,
    PaymentMailRequest,
)
from storefront.schemas.shipping import ShippingItem, ShippingOrderRequest
from storefront.schemas.admin import AdminTokenRequest, AdminVerification
from storefront.schemas.cart import CartItem, CartPayload, WishlistPayload

__all__ = [
    "OrderItem",
    "OrderData",
    "OrderStatusUpdate",
    "OrderResponse",
    "OrderListResponse",
    "PaymentIntentRequest",
    "PaymentVerificationRequest",
    "FinalizeResponse",
    "PaymentMailRequest",
    "ShippingItem",
    "ShippingOrderRequest",
    "AdminTokenRequest",
    "AdminVerification",
    "CartItem",
    "CartPayload",
    "WishlistPayload",
]
