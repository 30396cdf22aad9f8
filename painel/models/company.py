"""Company model, the tenant isolation boundary."""

from sqlalchemy import String, Integer, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING

from painel.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from painel.models.user import User


class Company(Base, TimestampMixin):
    """
    Multi-tenant isolation boundary.

    A company is one restaurant operation. Every product, category, order,
    conversation and alert belongs to exactly one company through its
    tenant_id column. Managers belong to one company; admins to none.
    """

    __tablename__ = "companies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    users: Mapped[list["User"]] = relationship("User", back_populates="company")

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name='{self.name}')>"
