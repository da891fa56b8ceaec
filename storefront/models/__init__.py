"""
Models package
"""
from storefront.models.order import Order, ORDER_STATUSES
from storefront.models.cart import Cart, Wishlist

__all__ = ["Order", "ORDER_STATUSES", "Cart", "Wishlist"]
