from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import (
    String,
    Integer,
    Numeric,
    Boolean,
    DateTime,
    Text,
    JSON,
    ForeignKey,
    Enum,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from painel.models.base import Base, TimestampMixin, utcnow


class OrderStatus(str, PyEnum):
    """Order lifecycle status"""

    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


_status_enum = Enum(
    OrderStatus, native_enum=False, values_callable=lambda x: [e.value for e in x]
)


class Order(Base, TimestampMixin):
    """
    Customer order received from the chat bot webhook.

    Items are stored as a JSON snapshot (name, quantity, price) so later
    menu edits do not rewrite past orders.
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    customer_phone: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    customer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    customer_district: Mapped[str | None] = mapped_column(String(255), nullable=True)
    items: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    subtotal: Mapped[float] = mapped_column(Numeric(precision=10, scale=2), nullable=False)
    delivery_fee: Mapped[float] = mapped_column(
        Numeric(precision=10, scale=2), nullable=False, default=0
    )
    discount: Mapped[float] = mapped_column(Numeric(precision=10, scale=2), nullable=False, default=0)
    total: Mapped[float] = mapped_column(Numeric(precision=10, scale=2), nullable=False)
    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)
    change_for: Mapped[float | None] = mapped_column(Numeric(precision=10, scale=2), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[OrderStatus] = mapped_column(
        _status_enum, nullable=False, default=OrderStatus.CONFIRMED, index=True
    )
    printed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    printed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # Relationships
    history: Mapped[list["OrderHistory"]] = relationship(
        "OrderHistory",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderHistory.id.desc()",
    )

    __table_args__ = (Index("ix_orders_tenant_created", "tenant_id", "created_at"),)


class OrderHistory(Base):
    """Append-only log of order status transitions."""

    __tablename__ = "order_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    previous_status: Mapped[OrderStatus | None] = mapped_column(_status_enum, nullable=True)
    new_status: Mapped[OrderStatus] = mapped_column(_status_enum, nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    # NULL when the change came from the webhook rather than a staff member
    user_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    # Relationships
    order: Mapped["Order"] = relationship("Order", back_populates="history")
