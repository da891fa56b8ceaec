"""
Services package
"""
from storefront.services.order_service import OrderService, FinalizeResult
from storefront.services.payment_gateway import RazorpayClient
from storefront.services.shipping_client import ShiprocketClient
from storefront.services.notification_service import NotificationService, NotificationOutcome
from storefront.services.admin_auth import AdminVerifier

__all__ = [
    "OrderService",
    "FinalizeResult",
    "RazorpayClient",
    "ShiprocketClient",
    "NotificationService",
    "NotificationOutcome",
    "AdminVerifier",
]
