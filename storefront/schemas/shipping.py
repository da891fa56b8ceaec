"""
Pydantic schemas for shipping-provider handoff
"""
from pydantic import EmailStr, Field
from typing import List, Optional

from storefront.schemas.order import CamelModel


class ShippingItem(CamelModel):
    """Line item as submitted for shipment"""
    id: str
    name: str
    sku: Optional[str] = None
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)


class ShippingOrderRequest(CamelModel):
    """Order fields needed by the shipping provider"""
    id: str = Field(..., min_length=1)
    customer_name: str
    address: str
    city: str
    pincode: str
    state: str
    email: EmailStr
    phone: str
    items: List[ShippingItem] = Field(..., min_length=1)
    payment_method: Optional[str] = None
    total: Optional[float] = None
