from datetime import datetime, UTC
from typing import Optional
from loguru import logger
from sqlalchemy.orm import Session

from painel.models.order import Order, OrderHistory, OrderStatus
from painel.models.tenant_context import Principal
from painel.repositories.order_repository import OrderRepository
from painel.schemas.order_schemas import OrderCreate, OrderStatusUpdate
from painel.services.access_control import ensure_read, ensure_mutate
from painel.services.alert_service import AlertService
from painel.services.tenant_service import TenantService
from painel.core.exceptions import NotFoundException

ORDER_CONFIRMED_ALERT = "order_confirmed"


class OrderService:
    """Service layer for order business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.order_repo = OrderRepository(db)
        self.alerts = AlertService(db)
        self.tenants = TenantService(db)

    def create_order(self, data: OrderCreate, principal: Principal) -> Order:
        """
        Register an order coming from the bot webhook.

        Steps (each committed separately, not atomic):
        1. Insert the order with status CONFIRMED
        2. Append the initial history entry
        3. Alert the company's staff and the admins

        Raises:
            TenantRequiredException: If an admin did not supply empresa_id
            ForbiddenException: If the principal may not write into that company
        """
        tenant_id = self.tenants.write_target(principal, data.tenant_id)

        order = Order(
            tenant_id=tenant_id,
            customer_phone=data.customer_phone,
            customer_name=data.customer_name,
            customer_address=data.customer_address,
            customer_district=data.customer_district,
            items=[item.model_dump() for item in data.items],
            subtotal=data.subtotal,
            delivery_fee=data.delivery_fee,
            discount=data.discount,
            total=data.total,
            payment_method=data.payment_method,
            change_for=data.change_for,
            notes=data.notes,
            status=OrderStatus.CONFIRMED,
        )
        order = self.order_repo.create(order)

        self.order_repo.add_history(
            OrderHistory(order_id=order.id, new_status=OrderStatus.CONFIRMED)
        )

        customer = data.customer_name or data.customer_phone
        self.alerts.fan_out(
            tenant_id,
            ORDER_CONFIRMED_ALERT,
            "New order confirmed!",
            f"Customer {customer} confirmed an order of R$ {data.total:.2f}",
            f"orders.html?id={order.id}",
        )

        logger.info("Order {} created for company {}", order.id, tenant_id)
        return order

    def get_orders(
        self,
        principal: Principal,
        explicit_tenant_id: Optional[int] = None,
        status: Optional[OrderStatus] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 50,
    ) -> list[Order]:
        """List orders of the company in scope, newest first"""
        tenant_id = self.tenants.read_scope(principal, explicit_tenant_id)
        return self.order_repo.get_with_filters(
            tenant_id=tenant_id,
            status=status,
            start_date=start_date,
            end_date=end_date,
            limit=limit,
        )

    def get_order(self, order_id: int, principal: Principal) -> Order:
        """
        Get order by ID with ownership verification.

        Raises:
            NotFoundException: If order does not exist
            ForbiddenException: If order belongs to another company
        """
        order = self.order_repo.get_by_id(order_id)
        if not order:
            raise NotFoundException("Order not found")
        ensure_read(principal, order.tenant_id)
        return order

    def update_status(
        self, order_id: int, data: OrderStatusUpdate, principal: Principal
    ) -> Order:
        """Change order status and record who did it"""
        order = self._get_for_mutation(order_id, principal)

        previous = order.status
        order.status = data.status
        order = self.order_repo.update(order)

        self.order_repo.add_history(
            OrderHistory(
                order_id=order.id,
                previous_status=previous,
                new_status=data.status,
                note=data.note,
                user_id=principal.id,
            )
        )
        logger.info(
            "Order {} status {} -> {} by user {}",
            order.id,
            previous.value,
            data.status.value,
            principal.id,
        )
        return order

    def mark_printed(self, order_id: int, principal: Principal) -> Order:
        """Flag the order as printed in the kitchen"""
        order = self._get_for_mutation(order_id, principal)
        order.printed = True
        order.printed_at = datetime.now(UTC)
        return self.order_repo.update(order)

    def _get_for_mutation(self, order_id: int, principal: Principal) -> Order:
        order = self.order_repo.get_by_id(order_id)
        if not order:
            raise NotFoundException("Order not found")
        ensure_mutate(principal, order.tenant_id)
        return order
