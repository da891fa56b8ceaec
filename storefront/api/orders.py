"""
Order API endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, EmailStr, Field

from storefront.dependencies import get_notifier, get_order_service, require_admin
from storefront.errors import ValidationError
from storefront.schemas.order import OrderStatusUpdate, OrderResponse, OrderListResponse
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api", tags=["orders"])

admin_router = APIRouter(
    prefix="/admin/api/orders",
    tags=["admin"],
    dependencies=[Depends(require_admin)]
)


class OrderMailRequest(BaseModel):
    user_email: Optional[EmailStr] = Field(None, alias="userEmail")
    order_details: Optional[Dict[str, Any]] = Field(None, alias="orderDetails")


# ---------- Customer endpoints ----------

@router.get("/orders/user/{user_id}", response_model=List[OrderResponse], summary="Get orders by user")
def get_user_orders(
    user_id: str,
    service: OrderService = Depends(get_order_service)
):
    """
    Get all orders for a user, newest first

    - **user_id**: Owning account ID
    """
    return service.get_orders_by_user(user_id)


@router.get("/orders/{order_id}", response_model=OrderResponse, summary="Get order by ID")
def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service)
):
    return service.get_order_by_id(order_id)


@router.post("/order-mail", summary="Send order confirmation email")
def send_order_mail(
    payload: OrderMailRequest,
    notifier: NotificationService = Depends(get_notifier)
):
    if not payload.user_email or not (payload.order_details or {}).get("id"):
        raise ValidationError("Invalid payload")
    notifier.send_order_confirmation(payload.user_email, payload.order_details)
    return {"ok": True}


@router.post("/admin-order-notification", summary="Send admin order notification email")
def send_admin_notification(
    payload: OrderMailRequest,
    notifier: NotificationService = Depends(get_notifier)
):
    if not (payload.order_details or {}).get("id"):
        raise ValidationError("Invalid payload")
    notifier.send_admin_order_notification(payload.order_details)
    return {"ok": True}


# ---------- Admin console endpoints ----------

@admin_router.get("", response_model=OrderListResponse, summary="Get all orders")
def get_orders(
    skip: int = Query(0, ge=0, description="Number of orders to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of orders to return"),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve all orders with pagination

    - **skip**: Number of orders to skip (default: 0)
    - **limit**: Maximum number of orders to return (default: 100, max: 1000)
    """
    return service.get_all_orders(skip=skip, limit=limit)


@admin_router.get("/{order_id}", response_model=OrderResponse, summary="Get order by ID (admin)")
def get_order_admin(
    order_id: str,
    service: OrderService = Depends(get_order_service)
):
    return service.get_order_by_id(order_id)


@admin_router.patch("/{order_id}/status", response_model=OrderResponse, summary="Update order status")
def update_order_status(
    order_id: str,
    status_data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service)
):
    """
    Update order status

    - **order_id**: Order ID
    - **status**: New status (pending, processing, shipped, delivered, cancelled)
    """
    return service.update_order_status(order_id, status_data.status)


@admin_router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete order")
def delete_order(
    order_id: str,
    service: OrderService = Depends(get_order_service)
):
    service.delete_order(order_id)
    return None
