"""
Pydantic schemas for order request/response validation
"""
from pydantic import BaseModel, Field, ConfigDict, model_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional, Literal, get_args
from datetime import datetime


OrderStatus = Literal['pending', 'processing', 'shipped', 'delivered', 'cancelled']


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)


class OrderItem(CamelModel):
    """Single order line: product reference, quantity and unit price"""
    product_id: str = Field(..., min_length=1, description="Product ID")
    name: str = Field("Product", description="Product name at time of purchase")
    quantity: int = Field(..., ge=1, description="Units ordered")
    price: float = Field(..., ge=0, description="Unit price in major currency units")
    sku: Optional[str] = None
    image: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def flatten_cart_item(cls, data: Any) -> Any:
        """Accept the cart shape `{product: {...}, quantity}` as well as flat lines"""
        if not isinstance(data, dict) or not isinstance(data.get("product"), dict):
            return data
        product = data["product"]
        flat = {k: v for k, v in data.items() if k != "product"}
        if product.get("id") is not None:
            flat.setdefault("productId", str(product["id"]))
        flat.setdefault("name", product.get("name", "Product"))
        price = product.get("discountPrice")
        if price is None:
            price = product.get("price", 0)
        flat.setdefault("price", price)
        images = product.get("images") or []
        if images:
            flat.setdefault("image", images[0])
        return flat

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class OrderData(CamelModel):
    """Client-supplied order payload submitted at checkout completion"""
    model_config = ConfigDict(extra="allow")

    user_id: str = Field(..., min_length=1)
    items: List[OrderItem] = Field(..., min_length=1)
    total: float = Field(..., ge=0, description="Order total as computed by the client")
    address: str = Field(..., min_length=1)
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    phone: Optional[str] = None
    payment_method: str = "online"
    status: OrderStatus = "pending"

    @property
    def items_subtotal(self) -> float:
        return sum(item.line_total for item in self.items)


class OrderStatusUpdate(BaseModel):
    """Schema for updating order status"""
    status: str = Field(..., description="New order status")

    @model_validator(mode="after")
    def normalize_status(self):
        self.status = self.status.strip().lower()
        if self.status not in get_args(OrderStatus):
            raise ValueError(f"status must be one of {', '.join(get_args(OrderStatus))}")
        return self


class OrderResponse(CamelModel):
    """Schema for order response"""
    id: str
    user_id: str
    items: List[OrderItem]
    total: float
    status: str
    address: Optional[str] = None
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    phone: Optional[str] = None
    payment_method: Optional[str] = None
    payment_id: Optional[str] = None
    extra_fields: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class OrderListResponse(BaseModel):
    """Schema for list of orders response"""
    orders: list[OrderResponse]
    total: int
