from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from painel.models.alert import Alert


class AlertRepository:
    """Repository for Alert data access"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, alert_id: int) -> Optional[Alert]:
        """Get alert by ID"""
        return self.db.query(Alert).filter(Alert.id == alert_id).first()

    def get_by_user(self, user_id: int, limit: int = 50) -> list[Alert]:
        """Get the most recent alerts addressed to a user"""
        return (
            self.db.query(Alert)
            .filter(Alert.user_id == user_id)
            .order_by(Alert.created_at.desc(), Alert.id.desc())
            .limit(limit)
            .all()
        )

    def count_unread(self, user_id: int) -> int:
        """Count unread alerts for a user"""
        return (
            self.db.query(func.count(Alert.id))
            .filter(Alert.user_id == user_id, Alert.read.is_(False))
            .scalar()
        )

    def create(self, alert: Alert) -> Alert:
        """Create a single alert"""
        self.db.add(alert)
        self.db.commit()
        self.db.refresh(alert)
        return alert

    def update(self, alert: Alert) -> Alert:
        """Update an alert"""
        self.db.commit()
        self.db.refresh(alert)
        return alert
