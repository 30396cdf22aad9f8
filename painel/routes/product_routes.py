from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from painel.database import get_db
from painel.dependencies import get_current_principal
from painel.models.tenant_context import Principal
from painel.services.product_service import ProductService
from painel.schemas.product_schemas import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse,
)

router = APIRouter()


@router.get("", response_model=ProductListResponse)
def list_products(
    tenant_id: Optional[int] = Query(None, alias="empresa_id", gt=0, description="Company (admins only)"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    List the menu of a company.

    - Sorted by category position, then product position
    - Admins must pass empresa_id
    """
    service = ProductService(db)
    products = service.list_products(principal, tenant_id)
    return ProductListResponse(products=products, total=len(products))


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    Get a specific product by ID.

    - 404 if no product has this ID, 403 if it belongs to another company
    """
    service = ProductService(db)
    return service.get_product(product_id, principal)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    data: ProductCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    Create a product.

    - name and price are required
    - category_id, if given, must belong to the same company
    """
    service = ProductService(db)
    return service.create_product(data, principal)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    data: ProductUpdate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Update product details (only provided fields change)"""
    service = ProductService(db)
    return service.update_product(product_id, data, principal)


@router.patch("/{product_id}/toggle", response_model=ProductResponse)
def toggle_product(
    product_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Switch a product between available and unavailable"""
    service = ProductService(db)
    return service.toggle_availability(product_id, principal)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Delete a product"""
    service = ProductService(db)
    service.delete_product(product_id, principal)
