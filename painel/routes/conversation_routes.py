from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from painel.database import get_db
from painel.dependencies import get_current_principal
from painel.models.tenant_context import Principal
from painel.services.conversation_service import ConversationService
from painel.schemas.conversation_schemas import (
    BotStatusResponse,
    ConversationAction,
    ConversationListResponse,
    ConversationResponse,
)

router = APIRouter()


@router.get("", response_model=ConversationListResponse)
def list_conversations(
    tenant_id: Optional[int] = Query(None, alias="empresa_id", gt=0, description="Company (admins only)"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    List active conversations, most recent message first.

    - Includes attendant name and message count
    - Admins must pass empresa_id
    """
    service = ConversationService(db)
    conversations = service.list_active(principal, tenant_id)
    return ConversationListResponse(conversations=conversations, total=len(conversations))


@router.get("/config/bot-status", response_model=BotStatusResponse)
def get_bot_status(
    tenant_id: Optional[int] = Query(None, alias="empresa_id", gt=0, description="Company (admins only)"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Whether the bot is answering customers"""
    service = ConversationService(db)
    return service.bot_status(principal, tenant_id)


@router.patch("/{customer_phone}/take-over", response_model=ConversationResponse)
def take_over_conversation(
    customer_phone: str,
    data: Optional[ConversationAction] = None,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    Take over a conversation from the bot.

    - The authenticated user becomes the attendant
    - The conversation is created if it does not exist yet
    """
    service = ConversationService(db)
    return service.take_over(customer_phone, principal, data.tenant_id if data else None)


@router.patch("/{customer_phone}/release", response_model=ConversationResponse)
def release_conversation(
    customer_phone: str,
    data: Optional[ConversationAction] = None,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """
    Hand a conversation back to the bot.

    - Returns 404 if the company has no conversation with this phone
    """
    service = ConversationService(db)
    return service.release(customer_phone, principal, data.tenant_id if data else None)
