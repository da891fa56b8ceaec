"""
Cart and Wishlist Repositories - Data Access Layer
"""
from typing import List
from sqlalchemy.orm import Session

from storefront.models.cart import Cart, Wishlist


class CartRepository:
    """Repository for per-user cart documents"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> List[dict]:
        cart = self.db.get(Cart, user_id)
        if not cart:
            return []
        return cart.cart_items or []

    def save(self, user_id: str, cart_items: List[dict]) -> List[dict]:
        """Replace the user's cart with the given items"""
        cart = self.db.get(Cart, user_id)
        if cart is None:
            cart = Cart(user_id=user_id, cart_items=cart_items)
            self.db.add(cart)
        else:
            cart.cart_items = cart_items
        self.db.commit()
        self.db.refresh(cart)
        return cart.cart_items

    def clear(self, user_id: str) -> bool:
        cart = self.db.get(Cart, user_id)
        if not cart:
            return False
        self.db.delete(cart)
        self.db.commit()
        return True


class WishlistRepository:
    """Repository for per-user wishlist documents"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> List[dict]:
        wishlist = self.db.get(Wishlist, user_id)
        if not wishlist:
            return []
        return wishlist.wishlist_items or []

    def save(self, user_id: str, wishlist_items: List[dict]) -> List[dict]:
        """Replace the user's wishlist with the given items"""
        wishlist = self.db.get(Wishlist, user_id)
        if wishlist is None:
            wishlist = Wishlist(user_id=user_id, wishlist_items=wishlist_items)
            self.db.add(wishlist)
        else:
            wishlist.wishlist_items = wishlist_items
        self.db.commit()
        self.db.refresh(wishlist)
        return wishlist.wishlist_items

    def clear(self, user_id: str) -> bool:
        wishlist = self.db.get(Wishlist, user_id)
        if not wishlist:
            return False
        self.db.delete(wishlist)
        self.db.commit()
        return True
