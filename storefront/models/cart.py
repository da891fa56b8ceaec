"""
SQLAlchemy models for per-user cart and wishlist documents
"""
from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.sql import func
from storefront.database import Base


class Cart(Base):
    """Cart document keyed by user id"""

    __tablename__ = "carts"

    user_id = Column(String(128), primary_key=True)
    cart_items = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Cart(user_id='{self.user_id}', items={len(self.cart_items or [])})>"


class Wishlist(Base):
    """Wishlist document keyed by user id"""

    __tablename__ = "wishlists"

    user_id = Column(String(128), primary_key=True)
    wishlist_items = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Wishlist(user_id='{self.user_id}', items={len(self.wishlist_items or [])})>"
