from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from painel.models.order import Order, OrderHistory, OrderStatus


class OrderRepository:
    """Repository for Order data access"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, order: Order) -> Order:
        """Create a new order"""
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def get_by_id(self, order_id: int) -> Optional[Order]:
        """
        Get order by ID across all companies.

        Ownership is checked by the caller so that an unknown ID and a
        foreign ID can be told apart.
        """
        return self.db.query(Order).filter(Order.id == order_id).first()

    def get_with_filters(
        self,
        tenant_id: int,
        status: Optional[OrderStatus] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 50,
    ) -> list[Order]:
        """
        Get orders of a company with optional filters.

        Args:
            tenant_id: Company ID for isolation
            status: Optional status filter
            start_date: Optional lower bound on created_at (inclusive)
            end_date: Optional upper bound on created_at (inclusive)
            limit: Maximum number of results

        Returns:
            Orders newest first
        """
        query = self.db.query(Order).filter(Order.tenant_id == tenant_id)

        if status is not None:
            query = query.filter(Order.status == status)

        if start_date is not None:
            query = query.filter(Order.created_at >= start_date)

        if end_date is not None:
            query = query.filter(Order.created_at <= end_date)

        return query.order_by(Order.created_at.desc(), Order.id.desc()).limit(limit).all()

    def update(self, order: Order) -> Order:
        """Update an order"""
        self.db.commit()
        self.db.refresh(order)
        return order

    def add_history(self, entry: OrderHistory) -> OrderHistory:
        """Append a status history entry"""
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry
