from datetime import datetime
from pydantic import BaseModel, Field
from painel.schemas.common import TenantSelection


class ProductCreate(TenantSelection):
    """Schema for creating a new product"""

    category_id: int | None = Field(None, gt=0)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    price: float = Field(..., gt=0)
    available: bool = True
    position: int = Field(default=0, ge=0)


class ProductUpdate(BaseModel):
    """Schema for updating a product (only provided fields change)"""

    category_id: int | None = Field(None, gt=0)
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    price: float | None = Field(None, gt=0)
    available: bool | None = None
    position: int | None = Field(None, ge=0)


class ProductResponse(BaseModel):
    """Schema for product response"""

    model_config = {"from_attributes": True}

    id: int
    tenant_id: int
    category_id: int | None
    category_name: str | None = None
    name: str
    description: str | None
    price: float
    available: bool
    position: int
    created_at: datetime
    updated_at: datetime


class ProductListResponse(BaseModel):
    """Schema for list of products"""

    products: list[ProductResponse]
    total: int
