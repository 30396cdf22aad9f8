from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from painel.models.order import OrderStatus
from painel.schemas.common import TenantSelection


class OrderItem(BaseModel):
    """Line item as sent by the bot; extra keys are kept as-is"""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1)
    price: float = Field(..., ge=0)


class OrderCreate(TenantSelection):
    """Schema for the order intake webhook"""

    customer_phone: str = Field(..., min_length=1, max_length=32)
    customer_name: Optional[str] = Field(None, max_length=255)
    customer_address: Optional[str] = Field(None, max_length=500)
    customer_district: Optional[str] = Field(None, max_length=255)
    items: list[OrderItem] = Field(..., min_length=1)
    subtotal: float = Field(..., ge=0)
    delivery_fee: float = Field(default=0, ge=0)
    discount: float = Field(default=0, ge=0)
    total: float = Field(..., ge=0)
    payment_method: Optional[str] = Field(None, max_length=50)
    change_for: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=1000)


class OrderStatusUpdate(BaseModel):
    """Schema for changing order status"""

    status: OrderStatus
    note: Optional[str] = Field(None, max_length=1000)


class OrderHistoryResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    previous_status: Optional[OrderStatus]
    new_status: OrderStatus
    note: Optional[str]
    user_id: Optional[int]
    created_at: datetime


class OrderResponse(BaseModel):
    """Schema for order response"""

    model_config = {"from_attributes": True}

    id: int
    tenant_id: int
    customer_phone: str
    customer_name: Optional[str]
    customer_address: Optional[str]
    customer_district: Optional[str]
    items: list[dict]
    subtotal: float
    delivery_fee: float
    discount: float
    total: float
    payment_method: Optional[str]
    change_for: Optional[float]
    notes: Optional[str]
    status: OrderStatus
    printed: bool
    printed_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class OrderDetailResponse(OrderResponse):
    """Order with its status history (newest first)"""

    history: list[OrderHistoryResponse]


class OrderListResponse(BaseModel):
    """Schema for list of orders"""

    orders: list[OrderResponse]
    total: int
