"""
SQLAlchemy Order model
"""
import uuid

from sqlalchemy import Column, String, Float, DateTime, JSON, Text, CheckConstraint
from sqlalchemy.sql import func
from storefront.database import Base

ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled")


def generate_order_id() -> str:
    return uuid.uuid4().hex


class Order(Base):
    """Order database model"""

    __tablename__ = "orders"

    id = Column(String(32), primary_key=True, default=generate_order_id)
    user_id = Column(String(128), nullable=False, index=True)
    items = Column(JSON, nullable=False, default=list)
    total = Column(Float, nullable=False)
    status = Column(String(50), nullable=False, default='pending', index=True)
    address = Column(Text, nullable=True)
    user_email = Column(String(255), nullable=True, index=True)
    user_name = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    payment_method = Column(String(50), nullable=True)
    # One order per captured payment
    payment_id = Column(String(128), nullable=True, unique=True, index=True)
    gateway_order_id = Column(String(128), nullable=True)
    # Client keys with no dedicated column
    extra_fields = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint('total >= 0', name='check_total_non_negative'),
        CheckConstraint(
            "status IN ({})".format(", ".join(f"'{s}'" for s in ORDER_STATUSES)),
            name='check_status_valid'
        ),
    )

    def __repr__(self):
        return f"<Order(id={self.id}, user_id={self.user_id}, total={self.total}, status='{self.status}')>"
