"""ORM models. Importing this package registers every table on Base.metadata."""

from painel.models.base import Base
from painel.models.company import Company
from painel.models.user import User
from painel.models.category import Category
from painel.models.product import Product
from painel.models.order import Order, OrderHistory, OrderStatus
from painel.models.conversation import Conversation, ConversationMode, ConversationStatus, Message
from painel.models.alert import Alert

__all__ = [
    "Base",
    "Company",
    "User",
    "Category",
    "Product",
    "Order",
    "OrderHistory",
    "OrderStatus",
    "Conversation",
    "ConversationMode",
    "ConversationStatus",
    "Message",
    "Alert",
]
