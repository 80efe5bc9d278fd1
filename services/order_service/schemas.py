from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

PaymentMethod = Literal["card", "upi", "netbanking", "cod"]


class OrderItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(..., ge=1)


class ShippingAddress(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = "India"
    phone: Optional[str] = None

    class Config:
        str_strip_whitespace = True


class OrderCreate(BaseModel):
    # Omitted items means "check out the current cart"
    items: Optional[List[OrderItemCreate]] = None
    shipping_address: ShippingAddress
    payment_method: PaymentMethod = "card"
    discount: float = Field(0, ge=0)
    notes: Optional[str] = Field(None, max_length=1000)


class OrderCancel(BaseModel):
    reason: Optional[str] = Field(None, max_length=500)


class OrderItemResponse(BaseModel):
    product_id: int
    title: str
    price: float
    image: Optional[str] = None
    quantity: int

    class Config:
        from_attributes = True


class OrderPricing(BaseModel):
    subtotal: float
    shipping: float
    tax: float
    discount: float
    total: float


class OrderResponse(BaseModel):
    id: str
    status: str
    payment_method: str
    payment_status: str
    items: List[OrderItemResponse]
    shipping_address: ShippingAddress
    pricing: OrderPricing
    tracking_number: Optional[str] = None
    estimated_delivery: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancel_reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OrderSummary(BaseModel):
    id: str
    status: str
    total: float
    item_count: int
    created_at: datetime

    class Config:
        from_attributes = True
