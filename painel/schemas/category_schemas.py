from datetime import datetime
from pydantic import BaseModel, Field
from painel.schemas.common import TenantSelection


class CategoryCreate(TenantSelection):
    """Schema for creating a new category"""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    position: int = Field(default=0, ge=0)


class CategoryUpdate(BaseModel):
    """Schema for updating a category (only provided fields change)"""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    position: int | None = Field(None, ge=0)
    active: bool | None = None


class CategoryResponse(BaseModel):
    """Schema for category response"""

    model_config = {"from_attributes": True}

    id: int
    tenant_id: int
    name: str
    description: str | None
    position: int
    active: bool
    created_at: datetime
    updated_at: datetime


class CategoryListResponse(BaseModel):
    """Schema for list of categories"""

    categories: list[CategoryResponse]
    total: int
