from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import String, Integer, Boolean, DateTime, Text, ForeignKey, Enum, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing import TYPE_CHECKING, Optional
from painel.models.base import Base, TimestampMixin, utcnow

if TYPE_CHECKING:
    from painel.models.user import User


class ConversationMode(str, PyEnum):
    """Who is answering the customer"""

    BOT = "bot"
    MANUAL = "manual"


class ConversationStatus(str, PyEnum):
    ACTIVE = "active"
    CLOSED = "closed"


class Conversation(Base, TimestampMixin):
    """
    WhatsApp conversation with a customer, keyed by phone within a company.

    A staff member can take over a conversation (mode=manual), which stops
    the bot from answering until it is released back (mode=bot).
    """

    __tablename__ = "conversations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    customer_phone: Mapped[str] = mapped_column(String(32), nullable=False)
    mode: Mapped[ConversationMode] = mapped_column(
        Enum(ConversationMode, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=ConversationMode.BOT,
    )
    status: Mapped[ConversationStatus] = mapped_column(
        Enum(ConversationStatus, native_enum=False, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=ConversationStatus.ACTIVE,
    )
    attendant_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    taken_over_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    last_message_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    # Relationships
    attendant: Mapped[Optional["User"]] = relationship("User")

    __table_args__ = (
        UniqueConstraint("tenant_id", "customer_phone", name="uq_conversation_tenant_phone"),
    )


class Message(Base):
    """Single chat message; written by the bot integration, read here only for counts."""

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )
    customer_phone: Mapped[str] = mapped_column(String(32), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    from_customer: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (Index("ix_messages_tenant_phone", "tenant_id", "customer_phone"),)
