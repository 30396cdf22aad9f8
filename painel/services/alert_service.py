from typing import Optional
from loguru import logger
from sqlalchemy.orm import Session

from painel.models.alert import Alert
from painel.models.tenant_context import Principal
from painel.repositories.alert_repository import AlertRepository
from painel.repositories.user_repository import UserRepository
from painel.schemas.alert_schemas import AlertCreate
from painel.services.tenant_service import TenantService
from painel.core.exceptions import NotFoundException, ForbiddenException

RECENT_ALERTS_LIMIT = 50


class AlertService:
    """Service layer for staff alerts"""

    def __init__(self, db: Session):
        self.db = db
        self.alert_repo = AlertRepository(db)
        self.user_repo = UserRepository(db)
        self.tenants = TenantService(db)

    def list_alerts(self, principal: Principal) -> list[Alert]:
        """Most recent alerts addressed to the authenticated user"""
        return self.alert_repo.get_by_user(principal.id, limit=RECENT_ALERTS_LIMIT)

    def count_unread(self, principal: Principal) -> int:
        return self.alert_repo.count_unread(principal.id)

    def mark_read(self, alert_id: int, principal: Principal) -> Alert:
        """
        Mark an alert as read.

        Raises:
            NotFoundException: If alert does not exist
            ForbiddenException: If alert is addressed to another user
        """
        alert = self.alert_repo.get_by_id(alert_id)
        if not alert:
            raise NotFoundException("Alert not found")
        if alert.user_id != principal.id:
            raise ForbiddenException("Access denied. This alert belongs to another user.")

        alert.read = True
        return self.alert_repo.update(alert)

    def broadcast(self, data: AlertCreate, principal: Principal) -> list[Alert]:
        """
        Create an alert for every recipient of the target company.

        Returns:
            Created alerts (one per recipient)
        """
        tenant_id = self.tenants.write_target(principal, data.tenant_id)
        return self.fan_out(tenant_id, data.type, data.title, data.message, data.link)

    def fan_out(
        self,
        tenant_id: int,
        alert_type: str,
        title: str,
        message: Optional[str] = None,
        link: Optional[str] = None,
    ) -> list[Alert]:
        """
        Write one alert per active company user and per active admin.

        Each alert is committed on its own; a failure midway leaves the
        alerts written so far in place.
        """
        recipients = self.user_repo.get_alert_recipients(tenant_id)

        alerts = []
        for user in recipients:
            alert = Alert(
                tenant_id=tenant_id,
                user_id=user.id,
                type=alert_type,
                title=title,
                message=message,
                link=link,
            )
            alerts.append(self.alert_repo.create(alert))

        logger.info(
            "Alert '{}' sent to {} recipients of company {}", alert_type, len(alerts), tenant_id
        )
        return alerts
