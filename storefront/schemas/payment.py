"""
Pydantic schemas for payment-gateway requests
"""
from pydantic import BaseModel, EmailStr, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any, Dict, Optional

from storefront.schemas.order import OrderData


class PaymentIntentRequest(BaseModel):
    """Request for a gateway order token"""
    amount: float = Field(..., gt=0, description="Charge amount in major currency units")
    currency: str = Field("INR", min_length=3, max_length=3)
    receipt: Optional[str] = Field(None, max_length=40)


class PaymentVerificationRequest(BaseModel):
    """Completed client-side payment plus the order to persist"""
    razorpay_order_id: str = Field(..., min_length=1)
    razorpay_payment_id: str = Field(..., min_length=1)
    razorpay_signature: str = Field(..., min_length=1)
    order_data: OrderData = Field(..., alias="orderData")

    model_config = ConfigDict(populate_by_name=True)


class FinalizeResponse(BaseModel):
    """Successful finalize result"""
    success: bool = True
    order_id: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaymentMailRequest(BaseModel):
    """Stand-alone payment confirmation mail request"""
    user_email: Optional[EmailStr] = Field(None, alias="userEmail")
    payment_details: Optional[Dict[str, Any]] = Field(None, alias="paymentDetails")
