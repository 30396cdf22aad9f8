from datetime import datetime, UTC
from typing import Optional
from loguru import logger
from sqlalchemy.orm import Session

from painel.models.conversation import Conversation, ConversationMode
from painel.models.tenant_context import Principal
from painel.repositories.conversation_repository import ConversationRepository
from painel.services.access_control import ensure_mutate, resolve_scope
from painel.services.tenant_service import TenantService
from painel.core.exceptions import NotFoundException


class ConversationService:
    """Service layer for customer conversations (bot vs. human handling)"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ConversationRepository(db)
        self.tenants = TenantService(db)

    def list_active(self, principal: Principal, explicit_tenant_id: Optional[int]) -> list[dict]:
        """
        List active conversations of the company in scope.

        Returns:
            Conversations enriched with attendant name and message count
        """
        tenant_id = self.tenants.read_scope(principal, explicit_tenant_id)
        rows = self.repo.get_active_with_stats(tenant_id)
        return [
            self._to_dict(conversation, attendant_name, total)
            for conversation, attendant_name, total in rows
        ]

    def take_over(
        self, customer_phone: str, principal: Principal, explicit_tenant_id: Optional[int]
    ) -> dict:
        """
        Hand a conversation to the authenticated user (mode=manual).

        Creates the conversation if the company has none with this phone.
        """
        tenant_id = self.tenants.write_target(principal, explicit_tenant_id)
        now = datetime.now(UTC)

        conversation = self.repo.get_by_phone(tenant_id, customer_phone)
        if conversation:
            ensure_mutate(principal, conversation.tenant_id)
            conversation.mode = ConversationMode.MANUAL
            conversation.attendant_id = principal.id
            conversation.taken_over_at = now
            conversation = self.repo.update(conversation)
        else:
            conversation = self.repo.create(
                Conversation(
                    tenant_id=tenant_id,
                    customer_phone=customer_phone,
                    mode=ConversationMode.MANUAL,
                    attendant_id=principal.id,
                    taken_over_at=now,
                )
            )

        logger.info(
            "Conversation {} of company {} taken over by user {}",
            customer_phone,
            tenant_id,
            principal.id,
        )
        return self._with_stats(conversation)

    def release(
        self, customer_phone: str, principal: Principal, explicit_tenant_id: Optional[int]
    ) -> dict:
        """
        Give a conversation back to the bot.

        Raises:
            TenantRequiredException: If an admin did not supply empresa_id
            NotFoundException: If the company has no conversation with this phone
        """
        tenant_id = self.tenants.read_scope(principal, explicit_tenant_id)

        conversation = self.repo.get_by_phone(tenant_id, customer_phone)
        if not conversation:
            raise NotFoundException("Conversation not found")
        ensure_mutate(principal, conversation.tenant_id)

        conversation.mode = ConversationMode.BOT
        conversation.attendant_id = None
        conversation = self.repo.update(conversation)

        logger.info("Conversation {} of company {} released to bot", customer_phone, tenant_id)
        return self._with_stats(conversation)

    def bot_status(self, principal: Principal, explicit_tenant_id: Optional[int]) -> dict:
        """Bot status of the company in scope; the bot is always on for now"""
        scope = resolve_scope(principal, explicit_tenant_id)
        return {"bot_active": True, "tenant_id": scope.tenant_id}

    def _with_stats(self, conversation: Conversation) -> dict:
        attendant_name = conversation.attendant.name if conversation.attendant else None
        total = self.repo.count_messages(conversation.tenant_id, conversation.customer_phone)
        return self._to_dict(conversation, attendant_name, total)

    @staticmethod
    def _to_dict(conversation: Conversation, attendant_name: Optional[str], total: int) -> dict:
        return {
            "id": conversation.id,
            "tenant_id": conversation.tenant_id,
            "customer_phone": conversation.customer_phone,
            "mode": conversation.mode,
            "status": conversation.status,
            "attendant_id": conversation.attendant_id,
            "attendant_name": attendant_name,
            "total_messages": total,
            "taken_over_at": conversation.taken_over_at,
            "last_message_at": conversation.last_message_at,
            "created_at": conversation.created_at,
            "updated_at": conversation.updated_at,
        }
