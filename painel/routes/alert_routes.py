from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from painel.database import get_db
from painel.dependencies import get_current_principal
from painel.models.tenant_context import Principal
from painel.services.alert_service import AlertService
from painel.schemas.alert_schemas import (
    AlertCreate,
    AlertResponse,
    AlertListResponse,
    AlertCountResponse,
)

router = APIRouter()


@router.get("", response_model=AlertListResponse)
def list_alerts(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Get the 50 most recent alerts addressed to the authenticated user"""
    service = AlertService(db)
    alerts = service.list_alerts(principal)
    return AlertListResponse(alerts=alerts, total=len(alerts))


@router.get("/unread", response_model=AlertCountResponse)
def count_unread_alerts(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Count unread alerts of the authenticated user"""
    service = AlertService(db)
    return AlertCountResponse(total=service.count_unread(principal))


@router.patch("/{alert_id}/read", response_model=AlertResponse)
def mark_alert_read(
    alert_id: int,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    Mark an alert as read.

    - 403 if the alert is addressed to another user
    """
    service = AlertService(db)
    return service.mark_read(alert_id, principal)


@router.post("", response_model=AlertCountResponse, status_code=status.HTTP_201_CREATED)
def broadcast_alert(
    data: AlertCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    Send an alert to a company's staff and to all admins (webhook/internal use).

    Returns the number of recipients.
    """
    service = AlertService(db)
    alerts = service.broadcast(data, principal)
    return AlertCountResponse(total=len(alerts))
