from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class CartItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(1, ge=1)


class CartItemUpdate(BaseModel):
    quantity: int = Field(..., ge=1)


class CartMerge(BaseModel):
    items: List[CartItemCreate] = []


class CartItemResponse(BaseModel):
    product_id: int
    title: str
    price: float
    image: Optional[str] = None
    quantity: int

    class Config:
        from_attributes = True


class CartTotals(BaseModel):
    subtotal: float
    item_count: int
    shipping: float
    tax: float
    total: float


class CartResponse(BaseModel):
    items: List[CartItemResponse] = []
    saved_for_later: List[CartItemResponse] = []
    totals: CartTotals
    updated_at: Optional[datetime] = None
