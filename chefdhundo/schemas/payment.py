"""
Pydantic schemas for payment endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class CreateOrderRequest(BaseModel):
    """Request to start a checkout for a plan."""
    amount: float = Field(..., ge=1, description="Price in major currency units (e.g. rupees)")
    plan_id: str = Field(..., min_length=1, description="Plan identifier")
    plan_name: str = Field(..., min_length=1, description="Plan display name")
    plan_duration_days: int = Field(30, ge=1, le=3660, description="Subscription length in days")

    class Config:
        json_schema_extra = {
            "example": {
                "amount": 499,
                "plan_id": "pro_monthly",
                "plan_name": "Pro Monthly",
                "plan_duration_days": 30
            }
        }


class CreateOrderResponse(BaseModel):
    success: bool = True
    order_id: str = Field(..., description="Internal order ID")
    checkout_url: str = Field(..., description="Hosted checkout URL to redirect to")
    gateway_order_id: str = Field(..., description="Stripe checkout session ID")
    amount: float
    currency: str


class VerifyPaymentRequest(BaseModel):
    order_id: str = Field(..., min_length=1, description="Internal order ID")


class PaymentResponse(BaseModel):
    id: int
    order_id: str
    gateway_order_id: Optional[str] = None
    gateway_payment_id: Optional[str] = None
    plan_id: str
    plan_name: str
    amount: float
    currency: str
    status: str
    payment_method: Optional[str] = None
    payment_time: Optional[datetime] = None
    error_message: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PaymentStatusResponse(BaseModel):
    success: bool = True
    status: str = Field(..., description="PENDING | SUCCESS | FAILED | CANCELLED")
    payment: PaymentResponse


class SubscriptionResponse(BaseModel):
    id: int
    plan_id: str
    plan_name: str
    plan_duration_days: int
    start_date: datetime
    end_date: datetime
    status: str
    auto_renew: bool

    class Config:
        from_attributes = True


class SubscriptionEnvelope(BaseModel):
    success: bool = True
    data: Optional[SubscriptionResponse] = None
    message: Optional[str] = None
