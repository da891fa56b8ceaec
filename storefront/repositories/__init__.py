"""
Repositories package
"""
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.cart_repository import CartRepository, WishlistRepository

__all__ = ["OrderRepository", "CartRepository", "WishlistRepository"]
