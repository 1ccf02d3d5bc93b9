from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class CustomerInfo(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=20)
    address: str = Field(..., min_length=1)
    note: Optional[str] = None


class OrderCreate(BaseModel):
    customer: CustomerInfo
    items: List[dict[str, Any]]  # stored as-is
    total: int = Field(..., ge=0)
    order_date: datetime = Field(..., alias="orderDate")

    class Config:
        populate_by_name = True


class OrderResponse(BaseModel):
    id: int
    customer_name: str
    customer_phone: str
    customer_address: str
    note: Optional[str]
    items: List[dict[str, Any]]
    total: int
    order_date: datetime
    status: str
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class OrderPlacedResponse(BaseModel):
    message: str
    order: OrderResponse
