from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from painel.database import get_db
from painel.dependencies import get_current_principal
from painel.models.tenant_context import Principal
from painel.services.category_service import CategoryService
from painel.schemas.category_schemas import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryListResponse,
)

router = APIRouter()


@router.get("", response_model=CategoryListResponse)
def list_categories(
    tenant_id: Optional[int] = Query(None, alias="empresa_id", gt=0, description="Company (admins only)"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    List categories of a company ordered by position.

    - Managers always see their own company
    - Admins must pass empresa_id
    """
    service = CategoryService(db)
    categories = service.list_categories(principal, tenant_id)
    return CategoryListResponse(categories=categories, total=len(categories))


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Get specific category details"""
    service = CategoryService(db)
    return service.get_category(category_id, principal)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    data: CategoryCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Create a category (admins pass empresa_id in the body)"""
    service = CategoryService(db)
    return service.create_category(data, principal)


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    data: CategoryUpdate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Update category details (only provided fields change)"""
    service = CategoryService(db)
    return service.update_category(category_id, data, principal)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    Delete a category.

    - Returns 400 while products are still linked to it
    """
    service = CategoryService(db)
    service.delete_category(category_id, principal)
