"""
Order Repository - Data Access Layer
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc

from storefront.models.order import Order


class OrderRepository:
    """Repository for Order CRUD operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self, skip: int = 0, limit: int = 100) -> List[Order]:
        """Get all orders with pagination, newest first"""
        return self.db.query(Order).order_by(
            desc(Order.created_at)
        ).offset(skip).limit(limit).all()

    def get_by_id(self, order_id: str) -> Optional[Order]:
        """Get order by ID"""
        return self.db.query(Order).filter(Order.id == order_id).first()

    def get_by_payment_id(self, payment_id: str) -> Optional[Order]:
        """Get the order created for a captured payment"""
        return self.db.query(Order).filter(Order.payment_id == payment_id).first()

    def get_by_user(self, user_id: str) -> List[Order]:
        """Get orders by owning user"""
        return self.db.query(Order).filter(
            Order.user_id == user_id
        ).order_by(desc(Order.created_at)).all()

    def create(self, order_data: dict) -> Order:
        """
        Create new order

        Args:
            order_data: Dictionary with order fields

        Returns:
            Created order
        """
        order = Order(**order_data)
        self.db.add(order)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(order)
        return order

    def update_status(self, order_id: str, new_status: str) -> Optional[Order]:
        """Update order status"""
        order = self.get_by_id(order_id)
        if not order:
            return None

        order.status = new_status
        self.db.commit()
        self.db.refresh(order)
        return order

    def delete(self, order_id: str) -> bool:
        """Delete order"""
        order = self.get_by_id(order_id)
        if not order:
            return False

        self.db.delete(order)
        self.db.commit()
        return True

    def count(self) -> int:
        """Get total count of orders"""
        return self.db.query(Order).count()
