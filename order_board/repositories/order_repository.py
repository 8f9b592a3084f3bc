"""
Order Repository - Data Access Layer
"""
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from sqlalchemy import desc, update

from order_board.models.order import Order, OrderLine, epoch_ms
from order_board.schemas.order import OrderStatus


class OrderRepository:
    """Repository for Order persistence

    Orders are never deleted here, and after creation only ``status`` and
    ``updated_at`` are ever written.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, order_id: str) -> Optional[Order]:
        """Get order by ID"""
        return self.db.query(Order).filter(Order.id == order_id).first()

    def list(
        self,
        statuses: Sequence[OrderStatus] = (),
        table_identifier: Optional[str] = None
    ) -> List[Order]:
        """Get orders matching the filter, newest first"""
        query = self.db.query(Order)
        if statuses:
            query = query.filter(Order.status.in_(list(statuses)))
        if table_identifier:
            query = query.filter(Order.table_identifier == table_identifier)
        return query.order_by(desc(Order.created_at), desc(Order.id)).all()

    def create(self, order_data: dict, lines: List[dict]) -> Order:
        """
        Create new order together with its lines in a single commit

        Args:
            order_data: Dictionary with order fields
            lines: Dictionaries with line fields, in display order

        Returns:
            Created order
        """
        now = epoch_ms()
        order = Order(created_at=now, updated_at=now, **order_data)
        order.items = [
            OrderLine(position=position, **line)
            for position, line in enumerate(lines)
        ]
        self.db.add(order)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(order)
        return order

    def update_status(
        self,
        order_id: str,
        new_status: OrderStatus,
        expected_status: Optional[OrderStatus] = None
    ) -> Optional[Order]:
        """
        Write a new status as one guarded UPDATE

        Legality is not checked here. When ``expected_status`` is given the
        row is only written while it still holds that status.

        Returns:
            Updated order, or None if no row matched
        """
        stmt = update(Order).where(Order.id == order_id)
        if expected_status is not None:
            stmt = stmt.where(Order.status == expected_status)
        stmt = stmt.values(status=new_status, updated_at=epoch_ms())

        result = self.db.execute(stmt)
        self.db.commit()
        if result.rowcount == 0:
            return None

        order = self.get_by_id(order_id)
        self.db.refresh(order)
        return order

    def count(self) -> int:
        """Get total count of orders"""
        return self.db.query(Order).count()

    def count_by_status(self, status: OrderStatus) -> int:
        """Get count of orders by status"""
        return self.db.query(Order).filter(Order.status == status).count()
