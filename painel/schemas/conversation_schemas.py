from datetime import datetime
from pydantic import BaseModel
from typing import Optional
from painel.models.conversation import ConversationMode, ConversationStatus
from painel.schemas.common import TenantSelection


class ConversationAction(TenantSelection):
    """Optional body for take-over/release; admins pass empresa_id here"""

    pass


class ConversationResponse(BaseModel):
    """Schema for conversation response"""

    model_config = {"from_attributes": True}

    id: int
    tenant_id: int
    customer_phone: str
    mode: ConversationMode
    status: ConversationStatus
    attendant_id: Optional[int]
    attendant_name: Optional[str] = None
    total_messages: int = 0
    taken_over_at: Optional[datetime]
    last_message_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class ConversationListResponse(BaseModel):
    conversations: list[ConversationResponse]
    total: int


class BotStatusResponse(BaseModel):
    bot_active: bool
    tenant_id: Optional[int]
