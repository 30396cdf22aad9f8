from datetime import datetime, UTC

from sqlalchemy import or_
from sqlalchemy.orm import Session
from painel.models.user import User
from painel.models.role import UserRole


class UserRepository:
    """Repository for User model operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        """Get user by internal ID"""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_active_by_email(self, email: str) -> User | None:
        """Get an active user by email (login lookup)"""
        return (
            self.db.query(User)
            .filter(User.email == email, User.active.is_(True))
            .first()
        )

    def get_alert_recipients(self, tenant_id: int) -> list[User]:
        """
        Get every active user who should be notified about a company event.

        Recipients are the company's own staff plus all platform admins.

        Args:
            tenant_id: Company ID the event belongs to

        Returns:
            List of active User objects
        """
        return (
            self.db.query(User)
            .filter(
                or_(User.tenant_id == tenant_id, User.role == UserRole.ADMIN),
                User.active.is_(True),
            )
            .order_by(User.id)
            .all()
        )

    def touch_last_login(self, user: User) -> User:
        """Record a successful login"""
        user.last_login = datetime.now(UTC)
        self.db.commit()
        self.db.refresh(user)
        return user

    def create(self, user: User) -> User:
        """Create new user"""
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
