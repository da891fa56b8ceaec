"""
FastAPI dependency providers

Upstream clients are built once per process and held on `app.state`;
handlers receive them through these providers.
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.errors import ForbiddenError
from storefront.schemas.admin import AdminVerification
from storefront.services.admin_auth import AdminVerifier
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService
from storefront.services.payment_gateway import RazorpayClient
from storefront.services.shipping_client import ShiprocketClient

ADMIN_TOKEN_COOKIE = "token"


def get_payment_gateway(request: Request) -> RazorpayClient:
    return request.app.state.payment_gateway


def get_shipping_client(request: Request) -> ShiprocketClient:
    return request.app.state.shipping_client


def get_notifier(request: Request) -> NotificationService:
    return request.app.state.notifier


def get_admin_verifier(request: Request) -> AdminVerifier:
    return request.app.state.admin_verifier


def get_order_service(
    db: Session = Depends(get_db),
    payment_gateway: RazorpayClient = Depends(get_payment_gateway),
    notifier: NotificationService = Depends(get_notifier)
) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(db, payment_gateway, notifier)


def require_admin(
    request: Request,
    verifier: AdminVerifier = Depends(get_admin_verifier)
) -> AdminVerification:
    """Authoritative admin check on the session cookie token"""
    result = verifier.verify(request.cookies.get(ADMIN_TOKEN_COOKIE))
    if not result.is_valid:
        raise ForbiddenError("Admin access required")
    return result
