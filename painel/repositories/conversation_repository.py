from typing import Optional
from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from painel.models.conversation import Conversation, ConversationStatus, Message
from painel.models.user import User


class ConversationRepository:
    """Repository for Conversation data access"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_phone(self, tenant_id: int, customer_phone: str) -> Optional[Conversation]:
        """
        Get a company's conversation with a customer.

        Phone numbers are only unique within a company, so this lookup is
        always tenant-filtered.
        """
        return (
            self.db.query(Conversation)
            .filter(
                Conversation.tenant_id == tenant_id,
                Conversation.customer_phone == customer_phone,
            )
            .first()
        )

    def get_active_with_stats(self, tenant_id: int) -> list[tuple[Conversation, Optional[str], int]]:
        """
        Get active conversations of a company.

        Returns:
            Tuples of (conversation, attendant name, message count), most
            recent message first
        """
        return (
            self.db.query(Conversation, User.name, func.count(Message.id))
            .outerjoin(User, Conversation.attendant_id == User.id)
            .outerjoin(
                Message,
                and_(
                    Message.customer_phone == Conversation.customer_phone,
                    Message.tenant_id == Conversation.tenant_id,
                ),
            )
            .filter(
                Conversation.tenant_id == tenant_id,
                Conversation.status == ConversationStatus.ACTIVE,
            )
            .group_by(Conversation.id, User.name)
            .order_by(Conversation.last_message_at.desc(), Conversation.id.desc())
            .all()
        )

    def create(self, conversation: Conversation) -> Conversation:
        """Create a new conversation"""
        self.db.add(conversation)
        self.db.commit()
        self.db.refresh(conversation)
        return conversation

    def update(self, conversation: Conversation) -> Conversation:
        """Update a conversation"""
        self.db.commit()
        self.db.refresh(conversation)
        return conversation

    def count_messages(self, tenant_id: int, customer_phone: str) -> int:
        """Count messages exchanged with a customer"""
        return (
            self.db.query(func.count(Message.id))
            .filter(Message.tenant_id == tenant_id, Message.customer_phone == customer_phone)
            .scalar()
        )
