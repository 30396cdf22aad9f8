from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional
from painel.schemas.common import TenantSelection


class AlertCreate(TenantSelection):
    """Schema for broadcasting an alert to a company's staff"""

    type: str = Field(..., min_length=1, max_length=50)
    title: str = Field(..., min_length=1, max_length=255)
    message: Optional[str] = Field(None, max_length=2000)
    link: Optional[str] = Field(None, max_length=500)


class AlertResponse(BaseModel):
    """Schema for alert response"""

    model_config = {"from_attributes": True}

    id: int
    tenant_id: int
    user_id: int
    type: str
    title: str
    message: Optional[str]
    link: Optional[str]
    read: bool
    created_at: datetime


class AlertListResponse(BaseModel):
    alerts: list[AlertResponse]
    total: int


class AlertCountResponse(BaseModel):
    """Number of alerts (unread count or broadcast recipients)"""

    total: int
