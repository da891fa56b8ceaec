"""
Order Service - Business Logic Layer
"""
import logging
from dataclasses import dataclass, field
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.errors import NotFoundError, UpstreamError, VerificationError
from storefront.repositories.order_repository import OrderRepository
from storefront.schemas.order import OrderResponse, OrderListResponse
from storefront.schemas.payment import PaymentVerificationRequest
from storefront.services.notification_service import NotificationOutcome, NotificationService
from storefront.services.payment_gateway import RazorpayClient

logger = logging.getLogger(__name__)

TOTAL_TOLERANCE = 0.005


@dataclass
class FinalizeResult:
    """Outcome of a finalize call; `warnings` is internal only"""
    order: OrderResponse
    created: bool
    notifications: List[NotificationOutcome] = field(default_factory=list)

    @property
    def warnings(self) -> List[str]:
        return [f"{o.channel}: {o.error}" for o in self.notifications if not o.ok]


class OrderService:
    """Service layer for order business logic"""

    def __init__(self, db: Session, payment_gateway: RazorpayClient, notifier: NotificationService):
        self.repository = OrderRepository(db)
        self.payment_gateway = payment_gateway
        self.notifier = notifier

    def get_all_orders(self, skip: int = 0, limit: int = 100) -> OrderListResponse:
        """Get all orders with pagination"""
        orders = self.repository.get_all(skip=skip, limit=limit)
        total = self.repository.count()

        return OrderListResponse(
            orders=[OrderResponse.model_validate(o) for o in orders],
            total=total
        )

    def get_order_by_id(self, order_id: str) -> OrderResponse:
        order = self.repository.get_by_id(order_id)
        if not order:
            raise NotFoundError(f"Order with id={order_id} not found")
        return OrderResponse.model_validate(order)

    def get_orders_by_user(self, user_id: str) -> List[OrderResponse]:
        orders = self.repository.get_by_user(user_id)
        return [OrderResponse.model_validate(o) for o in orders]

    async def finalize_payment(self, request: PaymentVerificationRequest) -> FinalizeResult:
        """
        Turn a completed client-side payment into a persisted order

        Steps:
        1. Verify the gateway signature
        2. Return the existing order if this payment was already finalized
        3. Save the order
        4. Fan out customer and admin notifications (best effort)

        Raises:
            VerificationError: If the signature does not match
            UpstreamError: If the order cannot be persisted
        """
        # Step 1: signature check, nothing is written on mismatch
        if not self.payment_gateway.verify_signature(
            request.razorpay_order_id,
            request.razorpay_payment_id,
            request.razorpay_signature
        ):
            logger.warning(f"Payment verification failed for payment {request.razorpay_payment_id}")
            raise VerificationError("Payment verification failed")

        # Step 2: one order per payment id
        existing = self.repository.get_by_payment_id(request.razorpay_payment_id)
        if existing:
            logger.info(f"Payment {request.razorpay_payment_id} already finalized as order {existing.id}")
            return FinalizeResult(order=OrderResponse.model_validate(existing), created=False)

        # Step 3: persist
        order_data = request.order_data
        if abs(order_data.items_subtotal - order_data.total) > TOTAL_TOLERANCE:
            logger.warning(
                f"Client total {order_data.total:.2f} differs from line items "
                f"{order_data.items_subtotal:.2f} for payment {request.razorpay_payment_id}"
            )

        order_dict = {
            'user_id': order_data.user_id,
            'items': [item.model_dump(by_alias=True) for item in order_data.items],
            'total': order_data.total,
            'status': order_data.status,
            'address': order_data.address,
            'user_email': order_data.user_email,
            'user_name': order_data.user_name,
            'phone': order_data.phone,
            'payment_method': order_data.payment_method,
            'payment_id': request.razorpay_payment_id,
            'gateway_order_id': request.razorpay_order_id,
            'extra_fields': dict(order_data.model_extra) if order_data.model_extra else None,
        }

        try:
            order = self.repository.create(order_dict)
        except IntegrityError:
            # Concurrent finalize of the same payment won the insert
            existing = self.repository.get_by_payment_id(request.razorpay_payment_id)
            if existing is None:
                raise UpstreamError("Order placement failed")
            return FinalizeResult(order=OrderResponse.model_validate(existing), created=False)
        except SQLAlchemyError as e:
            logger.exception(
                f"Order placement failed after payment {request.razorpay_payment_id} "
                f"(gateway order {request.razorpay_order_id}) was verified: {e}"
            )
            raise UpstreamError("Order placement failed")

        result = OrderResponse.model_validate(order)
        logger.info(f"Order {result.id} placed for payment {request.razorpay_payment_id}")

        # Step 4: notifications never affect the outcome
        payment = {
            'id': request.razorpay_payment_id,
            'razorpay_order_id': request.razorpay_order_id,
            'razorpay_payment_id': request.razorpay_payment_id,
            'orderData': order_data.model_dump(by_alias=True),
        }
        outcomes = await self.notifier.dispatch_order_notifications(
            result.model_dump(by_alias=True), payment
        )
        finalized = FinalizeResult(order=result, created=True, notifications=outcomes)
        for warning in finalized.warnings:
            logger.warning(f"Order {result.id} notification warning: {warning}")

        return finalized

    def update_order_status(self, order_id: str, new_status: str) -> OrderResponse:
        """
        Update order status

        Last write wins; no transition rules are enforced.
        """
        order = self.repository.update_status(order_id, new_status.lower())
        if not order:
            raise NotFoundError(f"Order with id={order_id} not found")
        logger.info(f"Order {order_id} status set to {order.status}")
        return OrderResponse.model_validate(order)

    def delete_order(self, order_id: str):
        if not self.repository.delete(order_id):
            raise NotFoundError(f"Order with id={order_id} not found")
        logger.info(f"Order {order_id} deleted")
