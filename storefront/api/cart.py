"""
Cart and wishlist endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storefront.database import get_db
from storefront.repositories.cart_repository import CartRepository, WishlistRepository
from storefront.schemas.cart import CartPayload, WishlistPayload

router = APIRouter(prefix="/api", tags=["cart"])


@router.get("/cart/{user_id}", response_model=CartPayload, summary="Get cart")
def get_cart(user_id: str, db: Session = Depends(get_db)):
    return CartPayload(cartItems=CartRepository(db).get(user_id))


@router.put("/cart/{user_id}", response_model=CartPayload, summary="Replace cart")
def save_cart(user_id: str, payload: CartPayload, db: Session = Depends(get_db)):
    """Replace the stored cart with the submitted items"""
    items = [item.model_dump() for item in payload.cartItems]
    return CartPayload(cartItems=CartRepository(db).save(user_id, items))


@router.delete("/cart/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Clear cart")
def clear_cart(user_id: str, db: Session = Depends(get_db)):
    CartRepository(db).clear(user_id)
    return None


@router.get("/wishlist/{user_id}", response_model=WishlistPayload, summary="Get wishlist")
def get_wishlist(user_id: str, db: Session = Depends(get_db)):
    return WishlistPayload(wishlistItems=WishlistRepository(db).get(user_id))


@router.put("/wishlist/{user_id}", response_model=WishlistPayload, summary="Replace wishlist")
def save_wishlist(user_id: str, payload: WishlistPayload, db: Session = Depends(get_db)):
    return WishlistPayload(wishlistItems=WishlistRepository(db).save(user_id, payload.wishlistItems))


@router.delete("/wishlist/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Clear wishlist")
def clear_wishlist(user_id: str, db: Session = Depends(get_db)):
    WishlistRepository(db).clear(user_id)
    return None
