"""
Pydantic schemas for cart and wishlist documents
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List


class CartItem(BaseModel):
    product: Dict[str, Any]
    quantity: int = Field(..., ge=1)


class CartPayload(BaseModel):
    cartItems: List[CartItem] = Field(default_factory=list)


class WishlistPayload(BaseModel):
    wishlistItems: List[Dict[str, Any]] = Field(default_factory=list)
