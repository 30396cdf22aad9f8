from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from painel.database import get_db
from painel.dependencies import get_current_principal
from painel.models.order import OrderStatus
from painel.models.tenant_context import Principal
from painel.services.order_service import OrderService
from painel.schemas.order_schemas import (
    OrderCreate,
    OrderStatusUpdate,
    OrderResponse,
    OrderDetailResponse,
    OrderListResponse,
)

router = APIRouter()


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    order_data: OrderCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    Register a confirmed order (called by the bot webhook).

    - Status starts as confirmed and a history entry is written
    - Every active user of the company and every admin receives an alert
    """
    service = OrderService(db)
    return service.create_order(order_data, principal)


@router.get("", response_model=OrderListResponse)
def list_orders(
    tenant_id: Optional[int] = Query(None, alias="empresa_id", gt=0, description="Company (admins only)"),
    order_status: Optional[OrderStatus] = Query(None, alias="status", description="Filter by status"),
    start_date: Optional[datetime] = Query(None, description="Created at or after"),
    end_date: Optional[datetime] = Query(None, description="Created at or before"),
    limit: int = Query(50, ge=1, le=500, description="Max results"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    List orders with optional filters.

    - Results sorted by creation time (newest first)
    - Admins must pass empresa_id
    """
    service = OrderService(db)
    orders = service.get_orders(
        principal=principal,
        explicit_tenant_id=tenant_id,
        status=order_status,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
    )
    return OrderListResponse(orders=orders, total=len(orders))


@router.get("/{order_id}", response_model=OrderDetailResponse)
def get_order(
    order_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    Get a specific order with its status history.

    - 404 if no order has this ID, 403 if it belongs to another company
    """
    service = OrderService(db)
    return service.get_order(order_id, principal)


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Change order status; the change is recorded in the order history"""
    service = OrderService(db)
    return service.update_status(order_id, data, principal)


@router.patch("/{order_id}/print", response_model=OrderResponse)
def mark_order_printed(
    order_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Mark an order as printed"""
    service = OrderService(db)
    return service.mark_printed(order_id, principal)
